"""Pydantic models for data validation and type checking."""

from models.message import EmailButton, EmailTemplate, RenderedMessage
from models.notification import (
    Decision,
    MessageVariant,
    SendStatus,
    StorageInfo,
    TrackedNotification,
)

__all__ = [
    "TrackedNotification",
    "StorageInfo",
    "MessageVariant",
    "Decision",
    "SendStatus",
    "EmailButton",
    "EmailTemplate",
    "RenderedMessage",
]
