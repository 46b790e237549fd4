from gameday.utils.dates import is_same_local_date, local_calendar_date, parse_iso, to_iso


def _sort_key(event):
    # Unknown starts sort after every known instant.
    if event.start is None:
        return (1, 0.0)
    return (0, event.start.timestamp())


def events_today(events, now, tz):
    """Events on today's local calendar date, chronological, ties in input order."""
    today = local_calendar_date(now, tz)
    todays = [
        event for event in events
        if event.start is not None and local_calendar_date(event.start, tz) == today
    ]
    return sorted(todays, key=_sort_key)


def next_event(events, now):
    """
    The earliest event starting at or after now. An event with an unknown
    start still qualifies but only after everything with a known start.
    """
    now = parse_iso(now)
    for event in sorted(events, key=_sort_key):
        if event.start is None or event.start >= now:
            return event
    return None


def normalize(events, now, tz, include_end=False):
    """
    Resolve "what's on today" and "what's next" for one venue.
    Pure function: identical inputs give identical output.
    include_end: always emit endISO, for sources that carry end times.
    """
    nxt = next_event(events, now)
    next_data = None
    if nxt is not None:
        next_data = nxt.to_dict(include_end)
        next_data["isToday"] = nxt.start is not None and is_same_local_date(nxt.start, now, tz)

    return {
        "eventsToday": [event.to_dict(include_end) for event in events_today(events, now, tz)],
        "nextEvent": next_data,
    }


def build_snapshot(events, now, tz, include_end=False):
    return {"lastUpdated": to_iso(now), **normalize(events, now, tz, include_end)}


def pick_next_game(games, team_id, now, tz, home_venue=""):
    """
    Pick the earliest game from an MLB schedule window and describe it from
    the team's point of view. Returns None when the window has no games.
    """
    dated = [(parse_iso(game.get("gameDate")), i, game) for i, game in enumerate(games)]
    dated = [item for item in dated if item[0] is not None]
    if not dated:
        return None

    game_date, _, game = min(dated, key=lambda item: (item[0], item[1]))
    teams = game.get("teams") or {}
    home_id = ((teams.get("home") or {}).get("team") or {}).get("id")
    is_home = home_id == team_id
    other_side = "away" if is_home else "home"
    opponent = ((teams.get(other_side) or {}).get("team") or {}).get("name")
    venue = (game.get("venue") or {}).get("name") or (home_venue if is_home else "")

    return {
        "isToday": is_same_local_date(game_date, now, tz),
        "isHome": bool(is_home),
        "opponent": opponent or "Opponent",
        "venue": venue,
        "dateISO": to_iso(game_date),
    }
