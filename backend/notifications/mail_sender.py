"""
Decision engine for the monthly status email.

decide() picks the message variant from a user's tracked state and the
signals gathered from the host platform. MailSender gathers those signals,
renders the chosen variant and hands it to the mail transport.
"""

from typing import Any

from config.mail_config import MailConfig
from models import Decision, MessageVariant, SendStatus, StorageInfo, TrackedNotification
from models.types import ShareList
from notifications.collaborators import (
    MailTransport,
    ShareInspector,
    StorageInfoProvider,
    TemplateRenderer,
    UploadActivityDetector,
    UserDirectory,
)
from notifications.exceptions import MissingAddressError, ask_collaborator
from notifications.tracker_service import NotificationTrackerService
from notifications.unsubscribe_tokens import build_unsubscribe_url
from shared.utils import utc_now

# Storage usage in percent of quota
STORAGE_FULL_THRESHOLD = 100
STORAGE_WARNING_THRESHOLD = 90


def decide(
    tracked: TrackedNotification,
    storage_info: StorageInfo,
    shares: ShareList,
    has_not_uploaded: bool,
) -> Decision:
    """
    Choose the message variant for one user.

    Rules are evaluated in order and the first match wins:
    opted out, storage full, storage warning, then (space left) no upload,
    share activity, generic.

    Args:
        tracked: The user's tracked notification record
        storage_info: Current storage usage
        shares: Shares created by the user (only emptiness matters)
        has_not_uploaded: True if the user never uploaded a file

    Returns:
        Decision with the variant, or no variant and should_send=False for
        opted-out users
    """
    if tracked.opted_out:
        return Decision(variant=None, should_send=False)

    if storage_info.relative >= STORAGE_FULL_THRESHOLD:
        variant = MessageVariant.STORAGE_FULL
    elif storage_info.relative >= STORAGE_WARNING_THRESHOLD:
        variant = MessageVariant.STORAGE_WARNING
    elif has_not_uploaded:
        variant = MessageVariant.NO_FILE_UPLOAD
    elif shares:
        variant = MessageVariant.SHARE_ACTIVITY
    else:
        variant = MessageVariant.GENERIC

    return Decision(variant=variant, should_send=True)


class MailSender:
    """Sends the monthly status email to one user at a time."""

    def __init__(
        self,
        tracker_service: NotificationTrackerService,
        user_directory: UserDirectory,
        storage_info_provider: StorageInfoProvider,
        share_inspector: ShareInspector,
        upload_detector: UploadActivityDetector,
        renderer: TemplateRenderer,
        transport: MailTransport,
        config: MailConfig,
    ):
        self.tracker_service = tracker_service
        self.user_directory = user_directory
        self.storage_info_provider = storage_info_provider
        self.share_inspector = share_inspector
        self.upload_detector = upload_detector
        self.renderer = renderer
        self.transport = transport
        self.config = config
        self.last_error: str | None = None

    def send_monthly_mail_to(self, tracked: TrackedNotification) -> SendStatus:
        """
        Decide, render and send the monthly email for one tracked user.

        The tracked record is only updated after the transport confirms the
        send, so a failed attempt is retried on the next run.
        A transport that raises counts as a failed send; the error text is
        kept in last_error.

        Returns:
            SendStatus.OPTED_OUT, SendStatus.SENT or SendStatus.FAILED

        Raises:
            MissingAddressError: If the user has no email address
            CollaboratorUnavailableError: If a host collaborator or the
                tracker store fails
        """
        # Opted-out users never reach the providers or the transport
        if tracked.opted_out:
            return SendStatus.OPTED_OUT

        self.last_error = None
        user_id = tracked.user_id
        to = ask_collaborator(
            "UserDirectory", user_id, lambda: self.user_directory.resolve_email(user_id)
        )
        if not to:
            raise MissingAddressError(user_id)

        storage_info = ask_collaborator(
            "StorageInfoProvider",
            user_id,
            lambda: self.storage_info_provider.get_storage_info(user_id),
        )
        shares = ask_collaborator(
            "ShareInspector",
            user_id,
            lambda: self.share_inspector.get_shares_by(user_id),
        )
        has_not_uploaded = ask_collaborator(
            "UploadActivityDetector",
            user_id,
            lambda: self.upload_detector.has_not_uploaded_files(user_id),
        )

        decision = decide(tracked, storage_info, shares, has_not_uploaded)

        display_name = ask_collaborator(
            "UserDirectory",
            user_id,
            lambda: self.user_directory.get_display_name(user_id),
        )
        context: dict[str, Any] = {
            "display_name": display_name or user_id,
            "storage_info": storage_info,
            "share_count": len(shares),
            "first_time_sent": tracked.first_time_sent,
            "unsubscribe_url": build_unsubscribe_url(tracked.secret_token, self.config),
        }

        template = self.renderer.create_template()
        self.renderer.populate(template, decision.variant, context)
        message = self.renderer.render(template, to)

        try:
            accepted = self.transport.send(message)
        except Exception as e:
            self.last_error = str(e)
            return SendStatus.FAILED
        if not accepted:
            self.last_error = getattr(self.transport, "last_error", None)
            return SendStatus.FAILED

        # Persist a copy so a failed save leaves the caller's record untouched
        updated = tracked.model_copy(
            update={"last_send_notification": utc_now(), "first_time_sent": False}
        )
        ask_collaborator(
            "NotificationTracker", user_id, lambda: self.tracker_service.save(updated)
        )
        tracked.last_send_notification = updated.last_send_notification
        tracked.first_time_sent = False
        return SendStatus.SENT
