"""
SMTP OTP notifier adapter - Implements OtpNotifier protocol.

Delivers verification codes over SMTP using the standard library
client. Failures never propagate: an unconfigured transport or any
delivery error is reported in-band through NotifyResult so the
domain can fall back to logging the code.
"""

import html
import logging
import smtplib
from email.message import EmailMessage

from src.domain.ports import NotifyResult

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "SMTP not configured"


class SmtpOtpNotifier:
    """
    Implements OtpNotifier protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str | None,
        password: str | None,
        sender: str,
        app_name: str = "Svift",
        secure: bool = False,
        timeout: float = 20.0,
        expiry_minutes: int = 10,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender
        self._app_name = app_name
        self._secure = secure
        self._timeout = timeout
        self._expiry_minutes = expiry_minutes

    @property
    def configured(self) -> bool:
        return bool(self._username and self._password)

    def send_otp(self, to_email: str, code: str, label: str) -> NotifyResult:
        """
        Send the code to the recipient.

        Args:
            to_email: Recipient email address
            code: 6-digit verification code
            label: Triggering flow, shown in the message heading

        Returns:
            NotifyResult with sent=False and an error on any failure
        """
        if not self.configured:
            logger.warning("SMTP not configured (smtp_user/smtp_pass). OTP logged only.")
            return NotifyResult(sent=False, error=NOT_CONFIGURED)

        message = self.build_message(to_email, code, label)

        try:
            self._deliver(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send OTP email: %s", e)
            return NotifyResult(sent=False, error=str(e))
        except Exception as e:
            logger.exception("Unexpected error sending OTP email")
            return NotifyResult(sent=False, error=str(e))

        return NotifyResult(sent=True)

    def build_message(self, to_email: str, code: str, label: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = to_email
        message["Subject"] = f"{self._app_name} – Your verification code is {code}"

        message.set_content(
            f"{self._app_name} – Your verification code is: {code}. "
            f"It expires in {self._expiry_minutes} minutes."
        )
        message.add_alternative(
            f"""\
<div style="font-family: sans-serif; max-width: 400px; margin: 0 auto;">
  <h2 style="color: #111;">{html.escape(label)} – Verification code</h2>
  <p>Use this code to verify your email:</p>
  <p style="font-size: 24px; font-weight: bold; letter-spacing: 4px; color: #111;">{code}</p>
  <p style="color: #666; font-size: 14px;">This code expires in {self._expiry_minutes} minutes. \
If you didn't request it, you can ignore this email.</p>
  <p style="color: #666; font-size: 14px;">– {self._app_name}</p>
</div>
""",
            subtype="html",
        )
        return message

    def _deliver(self, message: EmailMessage) -> None:
        if self._secure:
            with smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout) as server:
                server.login(self._username, self._password)
                server.send_message(message)
            return

        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            server.ehlo()
            server.starttls()
            server.ehlo()
            server.login(self._username, self._password)
            server.send_message(message)
