#!/usr/bin/env python3
"""
Check that today's times in data/audi.json match the Audi Field website.
The iCal feed has shipped wrong times before; this catches it.

Exit code 0: times match
Exit code 1: times don't match, or the check could not run
"""

import sys
from datetime import datetime, timezone

from gameday import config
from gameday.pipeline.fetch import TransportError, fetch_text
from gameday.pipeline.io import load_snapshot
from gameday.venues.audi_field import compare_times, parse_website_times


def main(now=None):
    now = now or datetime.now(timezone.utc)
    print("Validating Audi Field event times...\n")

    snapshot = load_snapshot(config.AUDI_PATH)
    if snapshot is None:
        print(f"ERROR: {config.AUDI_PATH} not found or unreadable")
        return 1

    try:
        website_events = parse_website_times(fetch_text(config.AUDI_EVENTS_URL))
    except TransportError as e:
        print(f"ERROR: fetching website failed: {e}")
        return 1

    print(f"Found {len(website_events)} events on website")
    print(f"Found {len(snapshot.get('eventsToday') or [])} events in audi.json for today\n")
    print("Today's events comparison:")
    print("-" * 60)

    lines, problems = compare_times(snapshot, website_events, now, config.TIMEZONE)
    for line in lines:
        print(line)
    print("-" * 60)

    if problems:
        print("\nVALIDATION FAILED: mismatches detected")
        print("Re-run `python scrape.py audi` to update the data")
        return 1

    print("\nVALIDATION PASSED: all times match")
    return 0


if __name__ == "__main__":
    sys.exit(main())
