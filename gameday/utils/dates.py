from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo

SECONDS_PER_DAY = 86400


@lru_cache(maxsize=None)
def _zone_by_name(name):
    return ZoneInfo(name)


def get_zone(tz):
    """Accept a zone name ("America/New_York") or a tzinfo and return a tzinfo."""
    if isinstance(tz, str):
        return _zone_by_name(tz)
    return tz


def parse_iso(value):
    """
    Parse an ISO-8601 string (trailing "Z" allowed) or pass through a datetime.
    Naive values are taken as UTC. Returns None for anything unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt_obj = value
    elif isinstance(value, str):
        try:
            dt_obj = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=timezone.utc)
    return dt_obj


def to_iso(instant):
    """Render an instant as UTC ISO-8601 with a "Z" suffix, or None."""
    dt_obj = parse_iso(instant)
    if dt_obj is None:
        return None
    return dt_obj.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def localize(year, month, day, hour, minute, tz, second=0):
    """Build an aware datetime from wall-clock parts in the given civil zone."""
    return datetime(year, month, day, hour, minute, second, tzinfo=get_zone(tz))


def local_calendar_date(instant, tz):
    """Return (year, month, day) of the instant on the zone's wall clock."""
    dt_obj = parse_iso(instant)
    if dt_obj is None:
        raise ValueError(f"Not a valid instant: {instant!r}")
    local = dt_obj.astimezone(get_zone(tz))
    return (local.year, local.month, local.day)


def local_date_key(instant, tz):
    """YYYY-MM-DD of the instant in the zone, or None if the instant is unknown."""
    if parse_iso(instant) is None:
        return None
    year, month, day = local_calendar_date(instant, tz)
    return f"{year:04d}-{month:02d}-{day:02d}"


def local_today(now, tz):
    """Local calendar date for "now" as a date object."""
    return date(*local_calendar_date(now, tz))


def is_same_local_date(instant_a, instant_b, tz):
    return local_calendar_date(instant_a, tz) == local_calendar_date(instant_b, tz)


def human_time(instant, tz):
    """Format as "7:05 PM ET". Returns an empty string on bad input."""
    try:
        local = parse_iso(instant).astimezone(get_zone(tz))
    except (AttributeError, ValueError, OverflowError):
        return ""
    hour = local.hour % 12 or 12
    period = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {period} ET"


def human_date(instant, tz, long_month=False):
    """Format as "Oct 25" (or "October 25"). Returns an empty string on bad input."""
    try:
        local = parse_iso(instant).astimezone(get_zone(tz))
    except (AttributeError, ValueError, OverflowError):
        return ""
    month = local.strftime("%B" if long_month else "%b")
    return f"{month} {local.day}"


def days_between_local_dates(instant_a, instant_b, tz):
    """
    Whole days from instant_a's local date to instant_b's local date.
    Both are first truncated to the midnight-UTC equivalent of their local
    calendar date, so DST transitions never shift the result.
    Returns None if either instant is invalid.
    """
    try:
        day_a = datetime(*local_calendar_date(instant_a, tz), tzinfo=timezone.utc)
        day_b = datetime(*local_calendar_date(instant_b, tz), tzinfo=timezone.utc)
    except ValueError:
        return None
    return round((day_b - day_a).total_seconds() / SECONDS_PER_DAY)


def format_in_days(n):
    if n is None:
        return ""
    if n <= 0:
        return "today"
    if n == 1:
        return "in 1 day"
    return f"in {n} days"


def add_days(day, days):
    return day + timedelta(days=days)


def normalize_time(time_str):
    """
    Normalize time strings to consistent HH:MM 24-hour format.
    Handles: "7:00 PM", "8:30pm", "20:00:00", "19:00", "12:00am"
    """
    if not time_str:
        return None

    time_str = time_str.strip().lower()

    if time_str.count(":") == 2:
        time_str = ":".join(time_str.split(":")[:2])

    is_pm = "pm" in time_str
    is_am = "am" in time_str
    time_str = time_str.replace("pm", "").replace("am", "").strip()

    parts = time_str.split(":")
    if len(parts) != 2:
        return None

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None

    if is_pm and hours < 12:
        hours += 12
    elif is_am and hours == 12:
        hours = 0

    if hours > 23 or minutes > 59:
        return None

    return f"{hours:02d}:{minutes:02d}"


def minutes_since_midnight(time_str):
    normalized = normalize_time(time_str)
    if not normalized:
        return None
    hours, minutes = normalized.split(":")
    return int(hours) * 60 + int(minutes)
