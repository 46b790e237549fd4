import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from urllib.parse import urljoin

from gameday.utils.dates import local_date_key, to_iso

DEFAULT_TITLE = "Event"


@dataclass
class RawEvent:
    """A candidate event as produced by an extractor, before today/next resolution."""
    title: str = DEFAULT_TITLE
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    url: Optional[str] = None

    def __post_init__(self):
        self.title = clean_title(self.title)

    def to_dict(self, include_end=False):
        """Snapshot form. include_end emits endISO even when the end is unknown."""
        data = {"title": self.title, "startISO": to_iso(self.start)}
        if include_end or self.end is not None:
            data["endISO"] = to_iso(self.end)
        if self.url:
            data["url"] = self.url
        return data


def clean_title(title):
    title = re.sub(r"\s+", " ", title or "").strip()
    return title or DEFAULT_TITLE


def resolve_url(href, base):
    """
    Resolve an href against the site's origin.
    Handles absolute, scheme-relative ("//host/x"), root-relative ("/x") and
    relative ("x", "./x") forms. Returns None for an empty href.
    """
    if not href:
        return None
    href = href.strip()
    if not href:
        return None
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("//"):
        return "https:" + href
    return urljoin(base.rstrip("/") + "/", href)


def dedupe_by_day_and_title(events, tz):
    """Collapse events sharing (local calendar date, title). First occurrence wins."""
    seen = set()
    unique = []
    for event in events:
        key = (local_date_key(event.start, tz), event.title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(event)
    return unique
