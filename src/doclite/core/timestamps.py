"""Timestamp formatting shared by storage and filters.

Document timestamps are stored as ISO-8601 UTC text with microsecond
precision, so lexical comparison in SQL matches chronological order.
"""

from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

# Column default used when a row is written without explicit timestamps
SQL_NOW = "(strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))"


def format_timestamp(value: datetime) -> str:
    """Format a datetime in storage form, converting aware values to UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


def utc_now() -> str:
    """Current time in storage form."""
    return format_timestamp(datetime.now(timezone.utc))


def normalize_timestamp(value: str) -> str:
    """Bring a client supplied timestamp into storage form.

    Accepts anything ``datetime.fromisoformat`` understands (dates, a space
    or ``T`` separator, a ``Z`` or numeric offset). Naive values are taken
    as UTC. Values that do not parse are returned unchanged and compared
    as plain text.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return value
    return format_timestamp(parsed)
