"""
Supabase-backed host platform collaborators.

Read-only views over the host's user, storage, share and file tables.
"""

from typing import Any, Iterator

from models import StorageInfo
from models.types import EmailAddress, ShareList, UserID
from shared.db import first_row, get_supabase_client

# Host platform tables read by this add-on
USERS_TABLE = "user_profiles"
STORAGE_TABLE = "user_storage"
SHARES_TABLE = "shares"
FILES_TABLE = "files"


def compute_relative_usage(quota: int, used: int) -> float:
    """
    Percentage of quota used, clamped to 0-100.

    A non-positive quota means the user has no limit, so nothing is used
    relative to it.
    """
    if quota <= 0:
        return 0.0
    relative = round(used / quota * 100, 2)
    return max(0.0, min(100.0, relative))


class SupabaseUserDirectory:
    """User lookups against the host's user_profiles table."""

    def __init__(self, supabase: Any = None):
        self.supabase = supabase or get_supabase_client()

    def iter_known_users(self) -> Iterator[UserID]:
        response = self.supabase.table(USERS_TABLE).select("id").execute()
        for row in response.data or []:
            yield UserID(row["id"])

    def _get_profile(self, user_id: UserID) -> dict[str, Any] | None:
        response = (
            self.supabase.table(USERS_TABLE)
            .select("id, email, display_name")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        return first_row(response)

    def user_exists(self, user_id: UserID) -> bool:
        return self._get_profile(user_id) is not None

    def resolve_email(self, user_id: UserID) -> EmailAddress | None:
        profile = self._get_profile(user_id)
        if not profile:
            return None
        # Empty strings count as missing
        return profile.get("email") or None

    def get_display_name(self, user_id: UserID) -> str | None:
        profile = self._get_profile(user_id)
        if not profile:
            return None
        return profile.get("display_name") or None


class SupabaseStorageInfoProvider:
    """Storage usage from the host's user_storage table."""

    def __init__(self, supabase: Any = None):
        self.supabase = supabase or get_supabase_client()

    def get_storage_info(self, user_id: UserID) -> StorageInfo:
        response = (
            self.supabase.table(STORAGE_TABLE)
            .select("quota, used")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        row = first_row(response)
        if row is None:
            # No accounting row yet: nothing stored, no quota
            return StorageInfo(quota=0, used=0, relative=0)

        quota = int(row.get("quota") or 0)
        used = int(row.get("used") or 0)
        return StorageInfo(
            quota=quota, used=used, relative=compute_relative_usage(quota, used)
        )


class SupabaseShareInspector:
    """Shares created by a user, from the host's shares table."""

    def __init__(self, supabase: Any = None):
        self.supabase = supabase or get_supabase_client()

    def get_shares_by(self, user_id: UserID) -> ShareList:
        response = (
            self.supabase.table(SHARES_TABLE)
            .select("id")
            .eq("owner_id", user_id)
            .execute()
        )
        return list(response.data or [])


class SupabaseUploadActivityDetector:
    """Detects accounts that never uploaded a file."""

    def __init__(self, supabase: Any = None):
        self.supabase = supabase or get_supabase_client()

    def has_not_uploaded_files(self, user_id: UserID) -> bool:
        response = (
            self.supabase.table(FILES_TABLE)
            .select("id")
            .eq("owner_id", user_id)
            .limit(1)
            .execute()
        )
        return not response.data
