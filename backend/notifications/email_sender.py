"""
Email sending via Resend API for the monthly status email.
"""

from typing import Any

import resend

from config.mail_config import MailConfig
from models import RenderedMessage


class ResendMailTransport:
    """MailTransport that hands rendered messages to Resend."""

    def __init__(self, config: MailConfig):
        self.config = config
        if config.resend_api_key:
            resend.api_key = config.resend_api_key
        self.last_error: str | None = None
        self.last_email_id: str | None = None

    def _build_params(self, message: RenderedMessage) -> dict[str, Any]:
        params: dict[str, Any] = {
            "from": self.config.sender,
            "to": message.to,
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }
        if message.headers:
            params["headers"] = dict(message.headers)
        return params

    def send(self, message: RenderedMessage) -> bool:
        """
        Send one rendered message.

        Returns:
            True if Resend accepted the message. On failure the error text is
            kept in last_error and False is returned.
        """
        self.last_error = None
        self.last_email_id = None
        try:
            response = resend.Emails.send(self._build_params(message))
        except Exception as e:
            self.last_error = str(e)
            return False

        self.last_email_id = response.get("id") if response else None
        return True
