from datetime import datetime, timezone

from gameday import config
from gameday.pipeline.fetch import fetch_json
from gameday.pipeline.normalize import pick_next_game
from gameday.utils.dates import add_days, local_today, to_iso


def schedule_window(now, tz, days=config.MLB_SEARCH_DAYS):
    """Local start and end dates (YYYY-MM-DD) for the forward schedule search."""
    today = local_today(now, tz)
    return today.isoformat(), add_days(today, days).isoformat()


def collect_games(data):
    """
    Flatten the schedule's dates into one list of games.
    Raises ValueError when the payload is not shaped like a schedule.
    """
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    dates = data.get("dates") or []
    if not isinstance(dates, list):
        raise ValueError("'dates' is not a list")

    games = []
    for day in dates:
        if not isinstance(day, dict):
            raise ValueError("schedule date is not an object")
        day_games = day.get("games") or []
        if not isinstance(day_games, list):
            raise ValueError("'games' is not a list")
        games.extend(game for game in day_games if isinstance(game, dict))
    return games


def scrape_nationals(now=None):
    """Next Nationals game (home or away) from the MLB Stats API schedule."""
    now = now or datetime.now(timezone.utc)
    tz = config.TIMEZONE
    start_date, end_date = schedule_window(now, tz)

    params = {
        "sportId": 1,
        "teamId": config.NATS_TEAM_ID,
        "startDate": start_date,
        "endDate": end_date,
    }
    snapshot = {"lastUpdated": to_iso(now), "nextEvent": None}

    try:
        games = collect_games(fetch_json(config.MLB_SCHEDULE_URL, params=params))
    except ValueError as e:
        print(f"    Nationals: could not parse schedule - {e}")
        return snapshot

    print(f"    Nationals: {len(games)} games between {start_date} and {end_date}")
    snapshot["nextEvent"] = pick_next_game(
        games, config.NATS_TEAM_ID, now, tz, home_venue=config.NATS_HOME_VENUE
    )
    return snapshot
