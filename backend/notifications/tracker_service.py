"""
Persistence of per-user notification state.

One TrackedNotification row per user in the notification_tracker table.
Rows are created on first contact and never deleted here; removing them is
part of the host platform's user lifecycle.
"""

from typing import Any

from models import TrackedNotification
from models.types import SecretToken, UserID
from notifications.unsubscribe_tokens import (
    generate_secret_token,
    validate_unsubscribe_token,
)
from shared.db import first_row, get_supabase_client

# Owned by this add-on, keyed by user_id
TRACKER_TABLE = "notification_tracker"


class NotificationTrackerService:
    """Get-or-create, save and opt-out operations on TrackedNotification."""

    def __init__(self, supabase: Any = None):
        self.supabase = supabase or get_supabase_client()

    def _select_one(self, column: str, value: str) -> TrackedNotification | None:
        response = (
            self.supabase.table(TRACKER_TABLE)
            .select("*")
            .eq(column, value)
            .limit(1)
            .execute()
        )
        row = first_row(response)
        if row is None:
            return None
        return TrackedNotification.model_validate(row)

    def find(self, user_id: UserID) -> TrackedNotification:
        """
        Get the user's record, creating a default one on first contact.

        Args:
            user_id: Host platform user identifier

        Returns:
            Existing record, or a new one with opted_out=False,
            first_time_sent=True and a fresh secret token
        """
        tracked = self._select_one("user_id", user_id)
        if tracked is not None:
            return tracked

        tracked = TrackedNotification(
            user_id=user_id,
            secret_token=generate_secret_token(),
        )
        self.supabase.table(TRACKER_TABLE).insert(
            tracked.model_dump(mode="json"), returning="minimal"
        ).execute()
        return tracked

    def find_by_secret_token(
        self, secret_token: SecretToken
    ) -> TrackedNotification | None:
        return self._select_one("secret_token", secret_token)

    def save(self, tracked: TrackedNotification) -> None:
        """Write back a mutated record (user_id is the key)."""
        payload = tracked.model_dump(mode="json", exclude={"user_id"})
        self.supabase.table(TRACKER_TABLE).update(payload).eq(
            "user_id", tracked.user_id
        ).execute()

    def opt_out(self, tracked: TrackedNotification) -> TrackedNotification:
        tracked.opted_out = True
        self.save(tracked)
        return tracked

    def opt_out_by_unsubscribe_token(
        self, signed_token: str
    ) -> TrackedNotification | None:
        """
        Opt a user out from a signed unsubscribe link token.

        Returns:
            The updated record, or None if the token is invalid, expired
            or no longer matches any record
        """
        secret_token = validate_unsubscribe_token(signed_token)
        if secret_token is None:
            return None

        tracked = self.find_by_secret_token(secret_token)
        if tracked is None:
            return None

        return self.opt_out(tracked)
