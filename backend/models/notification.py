"""Pydantic models for the monthly status notification system."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from models.types import Percentage, SecretToken, UserID


class TrackedNotification(BaseModel):
    """Per-user notification state, one record per user."""

    model_config = ConfigDict(validate_assignment=True)

    user_id: UserID = Field(..., min_length=1)
    opted_out: bool = False
    secret_token: SecretToken = Field(..., min_length=1)
    last_send_notification: datetime | None = None
    first_time_sent: bool = True


class StorageInfo(BaseModel):
    """Storage quota usage reported by the host platform."""

    quota: int
    used: int = Field(..., ge=0)
    relative: Percentage = Field(..., ge=0, le=100)


class MessageVariant(str, Enum):
    """Message content category chosen for one send attempt."""

    STORAGE_FULL = "StorageFull"
    STORAGE_WARNING = "StorageWarning"
    NO_FILE_UPLOAD = "StorageSpaceLeft+NoFileUpload"
    SHARE_ACTIVITY = "StorageSpaceLeft+ShareActivity"
    GENERIC = "StorageSpaceLeft+Generic"


class Decision(BaseModel):
    """Outcome of the decision rules for one user."""

    variant: MessageVariant | None = None
    should_send: bool = False


class SendStatus(str, Enum):
    """Result of one monthly mail run for a user."""

    SENT = "sent"
    FAILED = "failed"
    OPTED_OUT = "opted_out"
