from pathlib import Path

from gameday.parsers.listing import (
    find_date_anchors,
    find_more_info_url,
    find_time,
    find_title,
    parse_listing,
)
from gameday.utils.dates import to_iso

ET = "America/New_York"
BASE = "https://www.mlb.com"
FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


def test_heading_before_date_with_relative_link():
    html = """
    <div class="event">
      <h3>Concert Night</h3>
      <p>Saturday, October 25, 2025</p>
      <a href="/events/123">More Information</a>
    </div>
    """
    events = parse_listing(html, BASE, ET)

    assert len(events) == 1
    assert events[0].title == "Concert Night"
    # no time on the page: local noon
    assert to_iso(events[0].start) == "2025-10-25T16:00:00Z"
    assert events[0].url == "https://www.mlb.com/events/123"
    assert events[0].to_dict() == {
        "title": "Concert Night",
        "startISO": "2025-10-25T16:00:00Z",
        "url": "https://www.mlb.com/events/123",
    }


def test_duplicate_date_and_title_collapse():
    block = """
    <div class="event">
      <h3>Fireworks Night</h3>
      <p>Friday, July 4, 2025</p>
    </div>
    """
    events = parse_listing(block + block, BASE, ET)

    assert len(events) == 1
    assert events[0].title == "Fireworks Night"


def test_calls_to_action_and_date_lines_are_not_titles():
    html = """
    <div class="event">
      <h3>Concert Night</h3>
      <a href="/tickets">Buy Tickets</a>
      <span>October</span>
      <span>Learn More</span>
      <p>Saturday, October 25, 2025</p>
    </div>
    """
    assert parse_listing(html, BASE, ET)[0].title == "Concert Night"


def test_title_falls_back_to_text_after_the_date():
    html = "<div><p>Saturday, October 25, 2025</p><h4>Details</h4><h4>Harvest Festival</h4></div>"
    index = find_date_anchors(html)[0].index
    assert find_title(html, index) == "Harvest Festival"


def test_title_defaults_to_event():
    html = "<p>Saturday, October 25, 2025</p>"
    events = parse_listing(html, BASE, ET)
    assert events[0].title == "Event"
    assert events[0].url is None


def test_entities_and_nested_whitespace_in_titles():
    html = "<h3>Rock &amp;   Roll\n Revue</h3><p>Saturday, October 25, 2025</p>"
    assert parse_listing(html, BASE, ET)[0].title == "Rock & Roll Revue"


def test_time_near_the_date_is_local_wall_clock():
    html = "<h3>Concert Night</h3><p>Saturday, October 25, 2025</p><p>Doors 7:05 pm</p>"
    index = find_date_anchors(html)[0].index
    assert find_time(html, index) == "19:05"
    assert to_iso(parse_listing(html, BASE, ET)[0].start) == "2025-10-25T23:05:00Z"


def test_winter_dates_use_standard_time():
    html = "<h3>Holiday Market</h3><p>Friday, December 5, 2025</p><p>6:00 PM</p>"
    assert to_iso(parse_listing(html, BASE, ET)[0].start) == "2025-12-05T23:00:00Z"


def test_impossible_date_keeps_record_with_unknown_start():
    html = "<h3>Leap Party</h3><p>Sunday, February 30, 2025</p>"
    events = parse_listing(html, BASE, ET)
    assert len(events) == 1
    assert events[0].title == "Leap Party"
    assert events[0].start is None


def test_unknown_month_is_not_an_anchor():
    assert find_date_anchors("<p>Saturday, Octember 25, 2025</p>") == []
    assert parse_listing("<p>No events scheduled</p>", BASE, ET) == []
    assert parse_listing("", BASE, ET) == []


def test_nearest_more_information_link_wins():
    html = (
        '<a href="/far">More Information</a>'
        + "<p>filler</p>" * 20
        + "<h3>Concert Night</h3><p>Saturday, October 25, 2025</p>"
        + '<a href="/tickets">Buy Tickets</a>'
        + '<a href="events/near"><span>More</span> <span>Information</span></a>'
    )
    index = find_date_anchors(html)[0].index
    assert find_more_info_url(html, index, BASE) == "https://www.mlb.com/events/near"


def test_link_forms_resolve_to_absolute_urls():
    for href, expected in [
        ("https://tickets.example.com/x", "https://tickets.example.com/x"),
        ("//www.mlb.com/nationals/a", "https://www.mlb.com/nationals/a"),
        ("/nationals/b", "https://www.mlb.com/nationals/b"),
        ("./nationals/c", "https://www.mlb.com/nationals/c"),
        ("nationals/d", "https://www.mlb.com/nationals/d"),
    ]:
        html = f'<h3>Show</h3><p>Saturday, October 25, 2025</p><a href="{href}">More Information</a>'
        assert parse_listing(html, BASE, ET)[0].url == expected


def test_nationals_park_fixture():
    html = (FIXTURES / "natspark_events.html").read_text()
    events = parse_listing(html, BASE, ET)

    assert [e.to_dict() for e in events] == [
        {
            "title": "Concert Night",
            "startISO": "2025-10-25T23:30:00Z",
            "url": "https://www.mlb.com/nationals/tickets/events/concert-night",
        },
        {
            "title": "Oktoberfest at the Park",
            "startISO": "2025-10-26T15:00:00Z",
            "url": "https://www.mlb.com/nationals/tickets/events/oktoberfest",
        },
        {
            "title": "Holiday Market & Lights",
            "startISO": "2025-12-05T17:00:00Z",
            "url": "https://www.mlb.com/nationals/tickets/events/holiday-market",
        },
    ]
