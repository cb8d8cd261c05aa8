"""UTC time helpers.

All timestamps stored or returned by the service are ISO 8601 strings in UTC
with a trailing "Z". Token claims use integer unix seconds instead, so both
representations are produced here.
"""

from datetime import datetime, UTC

def now_utc() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)

def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(now_utc())

def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")

def from_unix(seconds: int | float) -> datetime:
    """Convert unix seconds to an aware UTC datetime."""
    return datetime.fromtimestamp(seconds, UTC)
