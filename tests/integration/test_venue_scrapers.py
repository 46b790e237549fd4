import json
from pathlib import Path

import pytest

responses = pytest.importorskip("responses")
freeze_time = pytest.importorskip("freezegun").freeze_time

from gameday import config
from gameday.pipeline.fetch import TransportError
from gameday.venues.audi_field import scrape_audi_field
from gameday.venues.nationals import scrape_nationals, schedule_window
from gameday.venues.nationals_park import scrape_nationals_park

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


@freeze_time("2025-06-01T12:00:00Z")
def test_scrape_nationals_next_home_game_today():
    body = json.loads((FIXTURES / "mlb_schedule.json").read_text())

    with responses.RequestsMock() as rsps:
        rsps.add(rsps.GET, config.MLB_SCHEDULE_URL, json=body, status=200)
        snapshot = scrape_nationals()
        request_url = rsps.calls[0].request.url

    assert "teamId=120" in request_url
    assert "startDate=2025-06-01" in request_url
    assert "endDate=2025-07-31" in request_url
    assert snapshot == {
        "lastUpdated": "2025-06-01T12:00:00Z",
        "nextEvent": {
            "isToday": True,
            "isHome": True,
            "opponent": "New York Mets",
            "venue": "Nationals Park",
            "dateISO": "2025-06-01T17:35:00Z",
        },
    }


@freeze_time("2025-06-01T12:00:00Z")
def test_scrape_nationals_empty_window():
    with responses.RequestsMock() as rsps:
        rsps.add(rsps.GET, config.MLB_SCHEDULE_URL, json={"dates": []}, status=200)
        snapshot = scrape_nationals()

    assert snapshot["nextEvent"] is None


@freeze_time("2025-06-01T12:00:00Z")
@pytest.mark.parametrize("kwargs", [
    {"body": "<html>maintenance</html>"},
    {"json": {"dates": "soon"}},
    {"json": [1, 2, 3]},
])
def test_scrape_nationals_unparseable_schedule_gives_empty_snapshot(kwargs):
    with responses.RequestsMock() as rsps:
        rsps.add(rsps.GET, config.MLB_SCHEDULE_URL, status=200, **kwargs)
        snapshot = scrape_nationals()

    assert snapshot == {"lastUpdated": "2025-06-01T12:00:00Z", "nextEvent": None}


def test_schedule_window_uses_local_dates():
    from datetime import datetime, timezone

    now = datetime(2025, 6, 1, 3, 0, tzinfo=timezone.utc)  # still May 31 in Washington
    assert schedule_window(now, "America/New_York") == ("2025-05-31", "2025-07-30")


@freeze_time("2025-10-25T14:00:00Z")
def test_scrape_audi_field_corrects_feed_times():
    with responses.RequestsMock() as rsps:
        rsps.add(rsps.GET, config.AUDI_ICS_URL, body=(FIXTURES / "audi.ics").read_text(), status=200)
        snapshot = scrape_audi_field()

    assert snapshot == {
        "lastUpdated": "2025-10-25T14:00:00Z",
        "eventsToday": [
            {
                "title": "Navy Yard Morning 5K",
                "startISO": "2025-10-25T12:00:00Z",
                "endISO": "2025-10-25T14:00:00Z",
            },
            {
                "title": "D.C. United vs. Orlando City SC",
                "startISO": "2025-10-25T23:30:00Z",
                "endISO": "2025-10-26T01:30:00Z",
            },
        ],
        "nextEvent": {
            "title": "D.C. United vs. Orlando City SC",
            "startISO": "2025-10-25T23:30:00Z",
            "endISO": "2025-10-26T01:30:00Z",
            "isToday": True,
        },
    }


@freeze_time("2025-10-25T14:00:00Z")
def test_scrape_audi_field_unparseable_feed_gives_empty_snapshot():
    with responses.RequestsMock() as rsps:
        rsps.add(rsps.GET, config.AUDI_ICS_URL, body="<html>maintenance</html>", status=200)
        snapshot = scrape_audi_field()

    assert snapshot == {"lastUpdated": "2025-10-25T14:00:00Z", "eventsToday": [], "nextEvent": None}


@freeze_time("2025-10-25T16:00:00Z")
def test_scrape_nationals_park_fixture():
    html = (FIXTURES / "natspark_events.html").read_text()

    with responses.RequestsMock() as rsps:
        rsps.add(rsps.GET, config.NATSPARK_EVENTS_URL, body=html, status=200)
        snapshot = scrape_nationals_park()

    assert [e["title"] for e in snapshot["eventsToday"]] == ["Concert Night"]
    assert snapshot["nextEvent"]["title"] == "Concert Night"
    assert snapshot["nextEvent"]["isToday"] is True
    assert snapshot["nextEvent"]["url"] == "https://www.mlb.com/nationals/tickets/events/concert-night"


@freeze_time("2025-10-27T12:00:00Z")
def test_scrape_nationals_park_next_event_on_a_later_day():
    html = (FIXTURES / "natspark_events.html").read_text()

    with responses.RequestsMock() as rsps:
        rsps.add(rsps.GET, config.NATSPARK_EVENTS_URL, body=html, status=200)
        snapshot = scrape_nationals_park()

    assert snapshot["eventsToday"] == []
    assert snapshot["nextEvent"]["title"] == "Holiday Market & Lights"
    assert snapshot["nextEvent"]["isToday"] is False


@pytest.mark.parametrize(
    "scraper, url",
    [
        (scrape_nationals, config.MLB_SCHEDULE_URL),
        (scrape_audi_field, config.AUDI_ICS_URL),
        (scrape_nationals_park, config.NATSPARK_EVENTS_URL),
    ],
)
def test_non_2xx_is_transport_error(scraper, url):
    with responses.RequestsMock() as rsps:
        rsps.add(rsps.GET, url, body="Service Unavailable", status=503)
        with pytest.raises(TransportError):
            scraper()


def test_network_failure_is_transport_error():
    import requests

    with responses.RequestsMock() as rsps:
        rsps.add(rsps.GET, config.AUDI_ICS_URL, body=requests.exceptions.ConnectionError("refused"))
        with pytest.raises(TransportError):
            scrape_audi_field()
