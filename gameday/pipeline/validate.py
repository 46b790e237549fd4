from gameday import config


class SnapshotError(Exception):
    """A built snapshot is missing fields the dashboard relies on."""


def validate_event(event):
    """Check that a venue event has all required fields."""
    if not isinstance(event, dict):
        return False
    for field in config.EVENT_FIELDS:
        if field not in event:
            return False
    return bool(event.get("title"))


def validate_snapshot(snapshot, game=False):
    """
    Raise SnapshotError unless the snapshot matches the shape the dashboard
    reads. game=True checks the ballpark shape instead of the venue shape.
    """
    for field in config.SNAPSHOT_FIELDS:
        if field not in snapshot:
            raise SnapshotError(f"Snapshot is missing {field!r}")

    nxt = snapshot["nextEvent"]
    if game:
        if nxt is not None and any(f not in nxt for f in config.GAME_FIELDS):
            raise SnapshotError("nextEvent is missing game fields")
        return snapshot

    if not isinstance(snapshot.get("eventsToday"), list):
        raise SnapshotError("eventsToday must be a list")
    if not all(validate_event(e) for e in snapshot["eventsToday"]):
        raise SnapshotError("eventsToday contains an invalid event")
    if nxt is not None and (not validate_event(nxt) or "isToday" not in nxt):
        raise SnapshotError("nextEvent is invalid")
    return snapshot
