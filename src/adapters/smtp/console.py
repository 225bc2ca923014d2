"""
Console OTP notifier adapter - Implements OtpNotifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging verification codes for local development.
"""

import logging

from src.domain.ports import NotifyResult

logger = logging.getLogger(__name__)


class ConsoleOtpNotifier:
    """
    Implements OtpNotifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints verification codes to the log.
    """

    def send_otp(self, to_email: str, code: str, label: str) -> NotifyResult:
        """
        Log verification code to console (simulates email delivery).

        The code is logged at INFO level to be visible in container logs.

        Args:
            to_email: Recipient email address (normalized by domain layer)
            code: 6-digit verification code
            label: Triggering flow, e.g. "Signup"

        Returns:
            NotifyResult(sent=True); logging cannot fail delivery
        """
        logger.info("[VERIFICATION] Email: %s Label: %s Code: %s", to_email, label, code)
        return NotifyResult(sent=True)
