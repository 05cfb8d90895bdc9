import re
from datetime import datetime, timedelta, timezone

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC3339 timestamp into an aware datetime.

    Raises ValueError when the string is not RFC3339 or names an
    impossible date, time or offset.
    """
    match = _RFC3339.match(value)
    if not match:
        raise ValueError(f"invalid RFC3339 timestamp: {value!r}")

    year, month, day, hour, minute, second, fraction, offset = match.groups()
    # Sub-microsecond digits are dropped
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))

    if offset == "Z":
        tz = timezone.utc
    else:
        sign = 1 if offset[0] == "+" else -1
        delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
        tz = timezone(sign * delta)

    return datetime(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second),
        microsecond, tzinfo=tz,
    )


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC3339 in UTC with whole seconds.

    Naive values are taken to be UTC already, which is how SQLite hands
    back timezone-aware columns.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
