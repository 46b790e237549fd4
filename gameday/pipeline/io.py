import json
import os
import re
import tempfile
from datetime import datetime, timedelta, timezone

from gameday import config


class PersistenceError(Exception):
    """A snapshot (or other output file) could not be written."""


def write_snapshot(snapshot, destination):
    """
    Replace the file at destination with the snapshot as JSON.
    Missing parent directories are created. The write goes to a temp file in
    the same directory first so readers never see a half-written snapshot.
    """
    tmp_path = None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w") as f:
            json.dump(snapshot, f, indent=2)
            f.write("\n")
        os.replace(tmp_path, destination)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise PersistenceError(f"Could not write {destination}: {e}") from e


def load_snapshot(path):
    """Load a previously written snapshot, or None if missing or unreadable."""
    try:
        if path.exists():
            with open(path, "r") as f:
                return json.load(f)
    except (OSError, ValueError):
        pass
    return None


def load_existing_status(path=None):
    """Load existing scrape status file if available."""
    status = load_snapshot(path or config.STATUS_PATH)
    if not isinstance(status, dict):
        return {"jobs": {}}
    status.setdefault("jobs", {})
    return status


def save_status(status, path=None):
    write_snapshot(status, path or config.STATUS_PATH)


def trim_log_by_time(log_path, retention_days=14, now=None):
    """
    Remove log entries older than retention_days.
    Returns list of lines to keep.
    """
    if not log_path.exists():
        return []

    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=retention_days)
    cutoff_str = cutoff.strftime("%Y-%m-%d %H:%M:%S")

    kept_lines = []
    current_entry_recent = False

    with open(log_path, "r") as f:
        for line in f:
            match = re.match(r"\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]", line)
            if match:
                current_entry_recent = match.group(1) >= cutoff_str

            if current_entry_recent:
                kept_lines.append(line)

    return kept_lines


def save_log(log_lines, log_path=None, retention_days=None):
    """Append this run's log lines to the log file, dropping expired entries."""
    log_path = log_path or config.LOG_PATH
    retention_days = retention_days or config.LOG_RETENTION_DAYS
    existing_log = trim_log_by_time(log_path, retention_days=retention_days)
    log_content = existing_log + ["\n--- New Run ---\n"] + [line + "\n" for line in log_lines]

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(log_path, "w") as f:
            f.writelines(log_content)
    except OSError as e:
        raise PersistenceError(f"Could not write {log_path}: {e}") from e
