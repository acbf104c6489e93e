"""
Capabilities the monthly status email consumes from the host platform.

Each collaborator is a narrow Protocol; any object with matching methods
can be injected (the Supabase-backed defaults live in host_platform.py).
"""

from typing import Any, Iterable, Protocol

from models import EmailTemplate, MessageVariant, RenderedMessage, StorageInfo
from models.types import EmailAddress, ShareList, UserID


class UserDirectory(Protocol):
    def iter_known_users(self) -> Iterable[UserID]: ...

    def user_exists(self, user_id: UserID) -> bool: ...

    def resolve_email(self, user_id: UserID) -> EmailAddress | None: ...

    def get_display_name(self, user_id: UserID) -> str | None: ...


class StorageInfoProvider(Protocol):
    def get_storage_info(self, user_id: UserID) -> StorageInfo: ...


class ShareInspector(Protocol):
    def get_shares_by(self, user_id: UserID) -> ShareList: ...


class UploadActivityDetector(Protocol):
    def has_not_uploaded_files(self, user_id: UserID) -> bool: ...


class MailTransport(Protocol):
    def send(self, message: RenderedMessage) -> bool: ...


class TemplateRenderer(Protocol):
    def create_template(self) -> EmailTemplate: ...

    def populate(
        self, template: EmailTemplate, variant: MessageVariant, context: dict[str, Any]
    ) -> None: ...

    def render(self, template: EmailTemplate, to: EmailAddress) -> RenderedMessage: ...
