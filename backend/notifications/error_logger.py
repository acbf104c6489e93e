"""
Error reports for the monthly status email.

Each per-user failure is written to its own timestamped file so operators
can inspect it after the sweep.
"""

import os
from datetime import datetime
from typing import Any

LOG_DIR = os.path.join(os.path.dirname(__file__), "logs")


def log_notification_error(
    error_type: str,
    user_id: str,
    error_message: str,
    context: dict[str, Any] | None = None,
    log_dir: str | None = None,
) -> str:
    """
    Write an error report for one user.

    Args:
        error_type: 'collaborator' or 'sending'
        user_id: User the failure belongs to
        error_message: The error message
        context: Optional extra details (variant, collaborator, cause...)
        log_dir: Override the report directory (defaults to notifications/logs)

    Returns:
        Path to the report file created
    """
    log_dir = log_dir or LOG_DIR
    os.makedirs(log_dir, exist_ok=True)

    # Microseconds keep reports from one sweep apart
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    filename = os.path.join(log_dir, f"monthly_status_error_{timestamp}.txt")

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Monthly Status Email Error Report - {datetime.now()}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"User ID: {user_id}\n")
        f.write(f"Error Message: {error_message}\n\n")

        if context:
            f.write("Context:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename
