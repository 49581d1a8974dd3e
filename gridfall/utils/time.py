"""Time utilities: ISO-8601 formatting and parsing of instants.

Instants cross the wire in the millisecond UTC form JavaScript's
toISOString() produces, e.g. 2023-09-11T03:00:00.000Z.
"""
from datetime import datetime, timezone


def to_iso(dt: datetime) -> str:
    """Serialize an aware datetime as a UTC ISO-8601 string with milliseconds."""
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_iso(s: str) -> datetime:
    """Parse an ISO-8601 string into an aware datetime.

    Naive strings are read as UTC. Raises ValueError on malformed input.
    """
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
