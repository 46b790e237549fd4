import re
from datetime import datetime, timezone

from bs4 import BeautifulSoup

from gameday import config
from gameday.parsers.ical import parse_ics
from gameday.pipeline.fetch import fetch_text
from gameday.pipeline.normalize import build_snapshot
from gameday.utils.dates import get_zone, human_date, human_time, minutes_since_midnight, parse_iso

TIME_TOLERANCE_MINUTES = 1


def scrape_audi_field(now=None):
    """Audi Field events from the venue's iCal feed."""
    now = now or datetime.now(timezone.utc)
    text = fetch_text(config.AUDI_ICS_URL)
    events = parse_ics(text, config.TIMEZONE, mislabeled_utc=config.AUDI_ICS_MISLABELED_UTC)
    print(f"    Audi Field: {len(events)} events")
    return build_snapshot(events, now, config.TIMEZONE, include_end=True)


def parse_website_times(html):
    """
    Read title, date and start/end times from the Audi Field list view.
    The start span reads like "October 4 @ 2:30 pm" and the end span "4:00 pm".
    """
    soup = BeautifulSoup(html, "html.parser")
    events = []

    for article in soup.select("article"):
        start_el = article.select_one("span.tribe-event-date-start")
        end_el = article.select_one("span.tribe-event-time")
        title_el = article.select_one("h3.tribe-events-calendar-list__event-title a")
        if not (start_el and end_el and title_el):
            continue

        match = re.match(r"^(.+?)\s*@\s*(.+)$", start_el.get_text(strip=True))
        if not match:
            continue

        title = title_el.get("title") or title_el.get_text(strip=True)
        events.append({
            "title": title.strip(),
            "date": match.group(1).strip(),
            "start_time": match.group(2).strip(),
            "end_time": end_el.get_text(strip=True),
        })

    return events


def _local_minutes(iso_value, tz):
    instant = parse_iso(iso_value)
    if instant is None:
        return None
    local = instant.astimezone(get_zone(tz))
    return local.hour * 60 + local.minute


def _times_match(a, b):
    if a is None or b is None:
        return a == b
    return abs(a - b) <= TIME_TOLERANCE_MINUTES


def _find_website_event(title, website_events):
    title = title.lower()
    for event in website_events:
        other = event["title"].lower()
        if title in other or other in title:
            return event
    return None


def compare_times(snapshot, website_events, now, tz):
    """
    Compare today's snapshot events with today's website listing.
    Returns (lines, problems): a printable report and the list of mismatches.
    """
    today_str = human_date(now, tz, long_month=True)
    todays_website = [e for e in website_events if e["date"] == today_str]
    snapshot_events = snapshot.get("eventsToday") or []

    lines = []
    problems = []

    if len(todays_website) != len(snapshot_events):
        problems.append(
            f"Event count mismatch: website {len(todays_website)}, snapshot {len(snapshot_events)}"
        )
        lines.append(problems[-1])

    for event in snapshot_events:
        start_iso, end_iso = event.get("startISO"), event.get("endISO")
        lines.append(f"{event['title']}")
        lines.append(f"   Snapshot: {human_time(start_iso, tz)} - {human_time(end_iso, tz)}")

        website_event = _find_website_event(event["title"], todays_website)
        if not website_event:
            problems.append(f"No matching website event for {event['title']!r}")
            lines.append("   No matching event found on website")
            continue

        lines.append(f"   Website:  {website_event['start_time']} - {website_event['end_time']}")
        start_ok = _times_match(
            _local_minutes(start_iso, tz), minutes_since_midnight(website_event["start_time"])
        )
        end_ok = end_iso is None or _times_match(
            _local_minutes(end_iso, tz), minutes_since_midnight(website_event["end_time"])
        )
        if start_ok and end_ok:
            lines.append("   Times match")
        else:
            problems.append(f"Time mismatch for {event['title']!r}")
            lines.append("   TIME MISMATCH")

    return lines, problems
