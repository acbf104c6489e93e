"""
Monthly status email add-on.

This module handles:
- Tracking per-user notification state (opt-out, secret token, last send)
- Choosing the message variant from storage, share and upload signals
- Sending the monthly status email via Resend
- Sweeping all known users once (send_all_mail CLI)
"""

from .mail_sender import MailSender, decide
from .send_all_mail import send_all_mail, send_mail_to_user
from .tracker_service import NotificationTrackerService

__all__ = [
    'decide',
    'MailSender',
    'NotificationTrackerService',
    'send_all_mail',
    'send_mail_to_user',
]
