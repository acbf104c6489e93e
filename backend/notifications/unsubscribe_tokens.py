"""
Secret tokens and signed one-click unsubscribe links.

Every tracked user owns a random secret token, generated once and stored on
their TrackedNotification. Unsubscribe links carry that token signed with
UNSUBSCRIBE_SECRET_KEY, so a link cannot be forged from a user ID alone and
expires after 90 days.
"""

import os
import hashlib
import secrets
from typing import Optional
from urllib.parse import urlencode
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config.mail_config import MailConfig
from models.types import SecretToken

UNSUBSCRIBE_SALT = "monthly-status-unsubscribe"
UNSUBSCRIBE_PATH = "/apps/monthly_status_email/unsubscribe"
SECRET_TOKEN_BYTES = 32


def _get_serializer() -> URLSafeTimedSerializer:
    """
    Get configured serializer for token signing and validation.

    Raises:
        ValueError: If UNSUBSCRIBE_SECRET_KEY environment variable not set
    """
    secret_key = os.getenv("UNSUBSCRIBE_SECRET_KEY")
    if not secret_key:
        raise ValueError("UNSUBSCRIBE_SECRET_KEY environment variable must be set.")

    return URLSafeTimedSerializer(
        secret_key,
        salt=UNSUBSCRIBE_SALT,
        signer_kwargs={"digest_method": hashlib.sha256},
    )


def require_unsubscribe_secret() -> None:
    """
    Check that unsubscribe links can be signed.

    Raises:
        ValueError: If UNSUBSCRIBE_SECRET_KEY environment variable not set
    """
    _get_serializer()


def generate_secret_token() -> SecretToken:
    """Random URL-safe secret token for a new TrackedNotification."""
    return SecretToken(secrets.token_urlsafe(SECRET_TOKEN_BYTES))


def generate_unsubscribe_token(secret_token: str) -> str:
    """
    Sign a user's secret token for use in an unsubscribe link.

    Args:
        secret_token: The TrackedNotification's secret token

    Returns:
        URL-safe token string (format: payload.timestamp.signature)

    Raises:
        ValueError: If UNSUBSCRIBE_SECRET_KEY not configured
    """
    return _get_serializer().dumps(secret_token)


def validate_unsubscribe_token(
    token: str, max_age_days: int = 90
) -> Optional[SecretToken]:
    """
    Validate a signed unsubscribe token and extract the secret token.

    Never raises - returns None for any invalid, tampered or expired token.

    Examples:
        >>> signed = generate_unsubscribe_token("s3cr3t")
        >>> validate_unsubscribe_token(signed)
        's3cr3t'
        >>> validate_unsubscribe_token("invalid-token") is None
        True
    """
    try:
        serializer = _get_serializer()
        max_age_seconds = max_age_days * 24 * 60 * 60
        secret_token = serializer.loads(
            token, max_age=max_age_seconds, salt=UNSUBSCRIBE_SALT
        )
    except (BadSignature, SignatureExpired, ValueError, TypeError):
        return None
    if not isinstance(secret_token, str) or not secret_token:
        return None
    return SecretToken(secret_token)


def build_unsubscribe_url(secret_token: str, config: MailConfig) -> str:
    """Absolute unsubscribe URL embedding the signed secret token."""
    query = urlencode({"token": generate_unsubscribe_token(secret_token)})
    return f"{config.base_url.rstrip('/')}{UNSUBSCRIBE_PATH}?{query}"
