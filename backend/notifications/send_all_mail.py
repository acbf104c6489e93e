"""
CLI script for sending the monthly status email.

Usage:
    # Send the monthly status email to every known user
    uv run python -m notifications.send_all_mail

    # Send it to a single user
    uv run python -m notifications.send_all_mail --user-id alice
"""

import argparse
import sys

from config.mail_config import load_mail_config
from models import SendStatus
from models.types import UserID
from notifications.collaborators import UserDirectory
from notifications.email_sender import ResendMailTransport
from notifications.error_logger import log_notification_error
from notifications.exceptions import (
    CollaboratorUnavailableError,
    MissingAddressError,
    ask_collaborator,
)
from notifications.host_platform import (
    SupabaseShareInspector,
    SupabaseStorageInfoProvider,
    SupabaseUploadActivityDetector,
    SupabaseUserDirectory,
)
from notifications.mail_sender import MailSender
from notifications.message_provider import MessageProvider
from notifications.tracker_service import NotificationTrackerService
from notifications.unsubscribe_tokens import require_unsubscribe_secret
from shared.db import get_supabase_client
from shared.utils import print_summary

EXIT_OK = 0
EXIT_UNKNOWN_USER = 1
EXIT_INTERRUPTED = 130


def process_user(
    user_id: UserID,
    user_directory: UserDirectory,
    tracker_service: NotificationTrackerService,
    mail_sender: MailSender,
) -> str:
    """
    Send the monthly email to one user and print the outcome.

    Returns:
        Stats bucket for the outcome: 'sent', 'failed' or 'skipped'
    """
    try:
        tracked = ask_collaborator(
            "NotificationTracker", user_id, lambda: tracker_service.find(user_id)
        )
        name = ask_collaborator(
            "UserDirectory", user_id, lambda: user_directory.get_display_name(user_id)
        ) or user_id
        status = mail_sender.send_monthly_mail_to(tracked)
    except MissingAddressError:
        print(f"✗ User doesn't have an email address ({user_id})")
        return "skipped"
    except CollaboratorUnavailableError as e:
        cause = e.__cause__
        error_file = log_notification_error(
            error_type="collaborator",
            user_id=user_id,
            error_message=str(e),
            context={"collaborator": e.collaborator, "cause": repr(cause)},
        )
        print(f"✗ Failure sending email to {user_id}: {e}")
        print(f"    Error details logged to: {error_file}")
        return "failed"

    if status == SendStatus.OPTED_OUT:
        print(f"⊘ Skipping {name}: opted out")
        return "skipped"

    if status == SendStatus.SENT:
        print(f"Email sent to {name}")
        return "sent"

    print(f"Failure sending email to {name}")
    error_message = mail_sender.last_error
    error_file = log_notification_error(
        error_type="sending",
        user_id=user_id,
        error_message=error_message or "Mail transport rejected the message",
    )
    print(f"    Error details logged to: {error_file}")
    return "failed"


def send_all_mail(
    user_directory: UserDirectory,
    tracker_service: NotificationTrackerService,
    mail_sender: MailSender,
) -> int:
    """
    Send the monthly status email to every known user, one at a time.

    A failure for one user never stops the sweep; outcomes are reported per
    user and summarized at the end.

    Returns:
        0 once every user has been processed, 130 if interrupted
    """
    stats = {"sent": 0, "failed": 0, "skipped": 0}
    exit_code = EXIT_OK

    try:
        for user_id in user_directory.iter_known_users():
            bucket = process_user(user_id, user_directory, tracker_service, mail_sender)
            stats[bucket] += 1
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted, stopping before the next user")
        exit_code = EXIT_INTERRUPTED

    print_summary(stats["sent"], stats["failed"], stats["skipped"])
    return exit_code


def send_mail_to_user(
    user_id: UserID,
    user_directory: UserDirectory,
    tracker_service: NotificationTrackerService,
    mail_sender: MailSender,
) -> int:
    """
    Send the monthly status email to a single user.

    Returns:
        0 when the user exists (whatever the outcome), 1 for unknown users
    """
    if not user_directory.user_exists(user_id):
        print(f"✗ Unknown user: {user_id}")
        return EXIT_UNKNOWN_USER

    process_user(user_id, user_directory, tracker_service, mail_sender)
    return EXIT_OK


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Send the monthly status email to all users"
    )

    parser.add_argument(
        "--user-id",
        type=str,
        help="Only send the email to this user",
    )

    args = parser.parse_args()

    # Fail before any user is processed
    require_unsubscribe_secret()
    config = load_mail_config()
    supabase = get_supabase_client()
    user_directory = SupabaseUserDirectory(supabase)
    tracker_service = NotificationTrackerService(supabase)
    mail_sender = MailSender(
        tracker_service=tracker_service,
        user_directory=user_directory,
        storage_info_provider=SupabaseStorageInfoProvider(supabase),
        share_inspector=SupabaseShareInspector(supabase),
        upload_detector=SupabaseUploadActivityDetector(supabase),
        renderer=MessageProvider(config),
        transport=ResendMailTransport(config),
        config=config,
    )

    if args.user_id:
        exit_code = send_mail_to_user(
            UserID(args.user_id), user_directory, tracker_service, mail_sender
        )
    else:
        exit_code = send_all_mail(user_directory, tracker_service, mail_sender)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
