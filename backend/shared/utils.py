from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def print_summary(sent: int, failed: int, skipped: int) -> None:
    """Print batch summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] Monthly Status Email Complete!")
    print(f"{'=' * 60}")
    print(f"✓ Sent: {sent}")
    print(f"⊘ Skipped (opted out / no address): {skipped}")
    print(f"✗ Failed: {failed}")
    print(f"{'=' * 60}\n")
