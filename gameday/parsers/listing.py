"""
Best-effort extraction of events from a marketing-style events listing page.

The markup on these pages changes without notice, so there is no grammar
here. Each event is anchored on a full calendar date ("Saturday, October 25,
2025") and the remaining fields are recovered by separate passes over the
text around that anchor:

    date anchors -> nearby title -> nearby time -> nearby link -> dedupe

A pass that finds nothing falls back to a default; it never aborts the page.
"""
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup

from gameday.utils.dates import localize, normalize_time
from gameday.utils.events import DEFAULT_TITLE, RawEvent, dedupe_by_day_and_title, resolve_url

WEEKDAYS = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]
MONTHS = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]

DATE_RE = re.compile(
    r"(Sunday|Monday|Tuesday|Wednesday|Thursday|Friday|Saturday)\s*,\s*([A-Za-z]+)\s+(\d{1,2})\s*,\s*(\d{4})"
)
TAG_TEXT_RE = re.compile(r">([^<]{3,160}?)</(?:strong|h[1-6]|span|p|div|a)>", re.IGNORECASE)
TIME_RE = re.compile(r"(\d{1,2}:\d{2}\s*(?:AM|PM))", re.IGNORECASE)
ANCHOR_RE = re.compile(r"<a\b[^>]*>[\s\S]*?</a>", re.IGNORECASE)
CTA_RE = re.compile(r"(more\s*information|learn\s*more|buy\s*tickets|details)", re.IGNORECASE)
MORE_INFO_RE = re.compile(r"more\s*information", re.IGNORECASE)
WEEKDAY_PREFIX_RE = re.compile(r"^(%s)\b" % "|".join(WEEKDAYS), re.IGNORECASE)
MONTH_PREFIX_RE = re.compile(r"^(%s)\b" % "|".join(MONTHS), re.IGNORECASE)

TITLE_LOOKBEHIND = 1200
TITLE_LOOKAHEAD = 800
TIME_LOOKBEHIND = 200
TIME_LOOKAHEAD = 1200
LINK_WINDOW = 8000
DEFAULT_HOUR = 12


@dataclass
class DateAnchor:
    index: int
    year: int
    month: int
    day: int


def month_number(name):
    try:
        return MONTHS.index(str(name or "").strip().lower()) + 1
    except ValueError:
        return None


def fragment_text(raw):
    """Decode entities and collapse whitespace in an HTML fragment."""
    text = BeautifulSoup(raw, "html.parser").get_text(" ", strip=True)
    return re.sub(r"\s+", " ", text).strip()


def is_title_candidate(text):
    if not text:
        return False
    if CTA_RE.search(text):
        return False
    if WEEKDAY_PREFIX_RE.match(text) or MONTH_PREFIX_RE.match(text):
        return False
    return True


def find_date_anchors(html):
    anchors = []
    for match in DATE_RE.finditer(html):
        month = month_number(match.group(2))
        if not month:
            continue
        anchors.append(DateAnchor(
            index=match.start(),
            year=int(match.group(4)),
            month=month,
            day=int(match.group(3)),
        ))
    return anchors


def find_title(html, index):
    """Nearest qualifying text fragment before the date, else the first one after it."""
    lookbehind = html[max(0, index - TITLE_LOOKBEHIND):index]
    title = None
    for match in TAG_TEXT_RE.finditer(lookbehind):
        text = fragment_text(match.group(1))
        if is_title_candidate(text):
            title = text

    if title:
        return title

    lookahead = html[index:index + TITLE_LOOKAHEAD]
    for match in TAG_TEXT_RE.finditer(lookahead):
        text = fragment_text(match.group(1))
        if is_title_candidate(text):
            return text

    return DEFAULT_TITLE


def find_time(html, index):
    """Clock time near the date as "HH:MM" (24h), or None."""
    lookaround = html[max(0, index - TIME_LOOKBEHIND):index + TIME_LOOKAHEAD]
    match = TIME_RE.search(lookaround)
    if not match:
        return None
    return normalize_time(match.group(1))


def find_more_info_url(html, index, base):
    """The "More Information" link whose anchor starts closest to the date."""
    start = max(0, index - LINK_WINDOW)
    window = html[start:index + LINK_WINDOW]

    best_href = None
    best_dist = None
    for match in ANCHOR_RE.finditer(window):
        anchor = BeautifulSoup(match.group(0), "html.parser").find("a")
        if anchor is None or not anchor.get("href"):
            continue
        if not MORE_INFO_RE.search(anchor.get_text(" ", strip=True)):
            continue
        dist = abs(start + match.start() - index)
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best_href = anchor["href"]

    return resolve_url(best_href, base)


def build_start(anchor, time_str, tz):
    """Venue-local wall clock for the anchor's date; local noon when no time is known."""
    hour, minute = DEFAULT_HOUR, 0
    if time_str:
        hour, minute = (int(part) for part in time_str.split(":"))
    try:
        return localize(anchor.year, anchor.month, anchor.day, hour, minute, tz)
    except ValueError:
        return None


def parse_listing(html, base, tz):
    """Extract RawEvents from listing HTML. Never raises for missing fields."""
    if not html:
        return []

    events = []
    for anchor in find_date_anchors(html):
        events.append(RawEvent(
            title=find_title(html, anchor.index),
            start=build_start(anchor, find_time(html, anchor.index), tz),
            url=find_more_info_url(html, anchor.index, base),
        ))

    return dedupe_by_day_and_title(events, tz)
