"""
Error logging utility for the partner digest jobs.

Writes a timestamped report file per failure so an operator can see which
partner was left pending and why.
"""

import os
from datetime import datetime
from typing import Any

DEFAULT_LOG_DIR = os.path.join(os.path.dirname(__file__), "logs")


def log_notification_error(
    error_type: str,
    error_message: str,
    context: dict[str, Any] | None = None,
    log_dir: str | None = None,
) -> str:
    """
    Log a notification error to a timestamped file.

    Args:
        error_type: Type of error (e.g., 'directory', 'sending')
        error_message: The error message
        context: Optional dictionary with additional context (partner_id, submission ids, etc.)
        log_dir: Directory for report files. Defaults to NOTIFICATION_LOG_DIR or ./logs

    Returns:
        Path to the log file created
    """
    log_dir = log_dir or os.getenv("NOTIFICATION_LOG_DIR") or DEFAULT_LOG_DIR
    os.makedirs(log_dir, exist_ok=True)

    # Microseconds keep reports from the same run apart
    now = datetime.now()
    timestamp = now.strftime("%Y%m%d_%H%M%S_%f")
    filename = os.path.join(log_dir, f"{error_type}_error_{timestamp}.txt")

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Partner Digest Error Report - {now}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"Error Message: {error_message}\n\n")

        if context:
            f.write("Context:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename
