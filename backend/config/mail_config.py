"""
Mail configuration for the monthly status email.

Values come from the environment (optionally a .env file) and are validated
into an explicit MailConfig that is passed to the renderer, the transport
and the unsubscribe link builder.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

DEFAULT_FROM_EMAIL = "monthly-status@example.com"
DEFAULT_INSTANCE_NAME = "Groupware"
DEFAULT_BASE_URL = "https://cloud.example.com"


class MailConfig(BaseModel):
    """Process-wide mail settings."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    from_email: str = Field(DEFAULT_FROM_EMAIL, pattern=r"^[^@]+@[^@]+\.[^@]+$")
    instance_name: str = Field(DEFAULT_INSTANCE_NAME, min_length=1)
    base_url: str = DEFAULT_BASE_URL
    resend_api_key: str | None = None

    @property
    def sender(self) -> str:
        """Formatted From header."""
        return f"{self.instance_name} <{self.from_email}>"

    @property
    def files_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/apps/files"


def load_mail_config() -> MailConfig:
    """
    Build MailConfig from environment variables.

    Reads NOTIFICATION_FROM_EMAIL, INSTANCE_NAME, FRONTEND_BASE_URL and
    RESEND_API_KEY. Unset variables fall back to the defaults above.

    Returns:
        Validated MailConfig

    Raises:
        pydantic.ValidationError: If a provided value is malformed
    """
    return MailConfig(
        from_email=os.getenv("NOTIFICATION_FROM_EMAIL", DEFAULT_FROM_EMAIL),
        instance_name=os.getenv("INSTANCE_NAME", DEFAULT_INSTANCE_NAME),
        base_url=os.getenv("FRONTEND_BASE_URL", DEFAULT_BASE_URL),
        resend_api_key=os.getenv("RESEND_API_KEY"),
    )
