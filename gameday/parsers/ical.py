import re
from datetime import date, datetime

from icalendar import Calendar

from gameday.utils.dates import get_zone
from gameday.utils.events import RawEvent

# DTSTART/DTEND carrying a UTC "Z" designator, e.g. "DTSTART:20251025T190000Z".
MISLABELED_UTC_RE = re.compile(
    r"^((?:DTSTART|DTEND)(?:;[^:\r\n]*)?:\d{8}T\d{6})Z(?=[ \t]*\r?$)",
    re.MULTILINE,
)


def correct_mislabeled_utc(ics_text):
    """
    Some feeds write the venue's local wall-clock time but append "Z".
    Strip the designator from DTSTART/DTEND so the value becomes a floating
    local time; floating times are read in the venue timezone below.
    """
    return MISLABELED_UTC_RE.sub(r"\1", ics_text)


def to_instant(value, tz):
    """
    Turn a decoded DTSTART/DTEND value into an aware datetime.
    Date-only values mean local midnight; floating times mean local wall clock.
    """
    zone = get_zone(tz)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=zone)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=zone)
    return None


def _first(component, name):
    prop = component.get(name)
    if isinstance(prop, list):
        prop = prop[0] if prop else None
    return prop


def _decode_datetime(component, name, tz):
    prop = _first(component, name)
    if prop is None:
        return None
    try:
        return to_instant(getattr(prop, "dt", None), tz)
    except (TypeError, ValueError, OverflowError):
        return None


def parse_ics(ics_text, tz, mislabeled_utc=False):
    """
    Parse iCalendar text into RawEvents (title, start, end).
    Events without a usable DTSTART are dropped. A document that cannot be
    parsed at all is reported and yields an empty list.
    """
    if isinstance(ics_text, bytes):
        ics_text = ics_text.decode("utf-8", errors="replace")

    if mislabeled_utc:
        ics_text = correct_mislabeled_utc(ics_text)

    try:
        calendar = Calendar.from_ical(ics_text)
    except Exception as e:
        print(f"    iCalendar: could not parse feed - {e}")
        return []

    events = []
    dropped = 0
    for component in calendar.walk("VEVENT"):
        start = _decode_datetime(component, "DTSTART", tz)
        if start is None:
            dropped += 1
            continue

        summary = _first(component, "SUMMARY")
        events.append(RawEvent(
            title=str(summary) if summary is not None else "",
            start=start,
            end=_decode_datetime(component, "DTEND", tz),
        ))

    if dropped:
        print(f"    iCalendar: skipped {dropped} events without a start time")
    return events
