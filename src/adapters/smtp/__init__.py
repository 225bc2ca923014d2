"""Notifier adapters - OTP delivery implementations."""

from .console import ConsoleOtpNotifier
from .smtp import SmtpOtpNotifier

__all__ = ["ConsoleOtpNotifier", "SmtpOtpNotifier"]
