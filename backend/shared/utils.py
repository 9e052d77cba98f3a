import uuid
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def is_valid_uuid(value: object) -> bool:
    """True if value is a string holding a UUID (the id format of every table)."""
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def print_summary(title: str, sent: int, skipped: int, failed: int) -> None:
    """Print processing summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] {title}")
    print(f"{'=' * 60}")
    print(f"✓ Sent:    {sent}")
    print(f"⊘ Skipped: {skipped}")
    print(f"✗ Failed:  {failed}")
    print(f"{'=' * 60}\n")
