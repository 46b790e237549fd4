from datetime import datetime, timezone

from gameday import config
from gameday.parsers.listing import parse_listing
from gameday.pipeline.fetch import fetch_text
from gameday.pipeline.normalize import build_snapshot


def scrape_nationals_park(now=None):
    """Non-MLB events at Nationals Park (concerts, festivals) from the team's events page."""
    now = now or datetime.now(timezone.utc)
    html = fetch_text(config.NATSPARK_EVENTS_URL)
    events = parse_listing(html, config.NATSPARK_BASE, config.TIMEZONE)

    undated = sum(1 for e in events if e.start is None)
    if undated:
        print(f"    Nationals Park: {undated} events with an unreadable date")
    print(f"    Nationals Park: {len(events)} events")

    return build_snapshot(events, now, config.TIMEZONE)
