"""Date parsing for API records.

All datetimes handled by the domain are naive and in UTC: offsets on incoming
timestamps are applied and then dropped.
"""

from datetime import UTC, datetime


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def parse_datetime(raw: object) -> datetime:
    """Parse an ISO timestamp from the API, accepting a trailing ``Z``."""
    if isinstance(raw, datetime):
        return to_naive_utc(raw)
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"Invalid date value: {raw!r}")
    text = raw.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    if " " in text and "T" not in text:
        text = text.replace(" ", "T", 1)
    return to_naive_utc(datetime.fromisoformat(text))
