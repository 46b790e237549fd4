#!/usr/bin/env python3
"""
Scrape venue schedules around the Navy Yard and save dashboard snapshots.
Currently supports:
- Washington Nationals games (MLB Stats API)       -> data/nats.json
- Audi Field events (iCal feed)                    -> data/audi.json
- Nationals Park non-MLB events (events web page)  -> data/natspark.json

Usage:
    python scrape.py                 # run every job
    python scrape.py audi natspark   # run selected jobs
    python scrape.py --upload        # also publish data files to R2
"""

import argparse
import sys
import time
import traceback
from datetime import datetime, timezone

from gameday import config
from gameday.pipeline.io import load_existing_status, save_log, save_status, write_snapshot
from gameday.pipeline.metrics import JobMetrics
from gameday.pipeline.r2 import r2_configured, upload_to_r2
from gameday.pipeline.validate import validate_snapshot
from gameday.registry import get_jobs
from gameday.utils.dates import (
    days_between_local_dates,
    format_in_days,
    human_date,
    human_time,
)


def describe_next_event(snapshot, now, tz):
    """One-line summary of a snapshot's next event for the run log."""
    nxt = snapshot.get("nextEvent")
    if not nxt:
        return "No upcoming events"

    if "opponent" in nxt:
        label = f"{'vs' if nxt.get('isHome') else 'at'} {nxt['opponent']}"
        iso = nxt.get("dateISO")
    else:
        label = nxt.get("title") or "Event"
        iso = nxt.get("startISO")

    if not iso:
        return f"Next: {label} (date unknown)"

    when = f"{human_date(iso, tz)} · {human_time(iso, tz)}"
    return f"Next: {label}, {when} ({format_in_days(days_between_local_dates(now, iso, tz))})"


def count_events_today(snapshot):
    if "eventsToday" in snapshot:
        return len(snapshot["eventsToday"])
    # Ballpark snapshots only carry the next game.
    nxt = snapshot.get("nextEvent") or {}
    return 1 if nxt.get("isToday") else 0


def parse_args(argv, job_names):
    parser = argparse.ArgumentParser(description="Scrape venue schedules into JSON snapshots.")
    parser.add_argument(
        "jobs",
        nargs="*",
        metavar="JOB",
        help=f"jobs to run ({', '.join(job_names)}); default: all",
    )
    parser.add_argument("--upload", action="store_true", help="upload data files to R2 afterwards")
    args = parser.parse_args(argv)

    unknown = [name for name in args.jobs if name not in job_names]
    if unknown:
        parser.error(f"unknown job(s): {', '.join(unknown)}")
    return args


def main(argv=None):
    jobs = get_jobs()
    args = parse_args(argv, list(jobs))
    selected = args.jobs or list(jobs)

    now = datetime.now(timezone.utc)
    run_timestamp = now.isoformat().replace("+00:00", "Z")
    tz = config.TIMEZONE
    log_lines = []

    def log(message, level="INFO"):
        """Log a message to both console and log buffer."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        log_entry = f"[{timestamp}] [{level}] {message}"
        print(message)
        log_lines.append(log_entry)

    log(f"Starting scrape run at {run_timestamp}")

    existing_status = load_existing_status(config.STATUS_PATH)
    job_statuses = dict(existing_status.get("jobs", {}))
    job_metrics = {}
    written = []

    for key in selected:
        job = jobs[key]
        log(f"Scraping {job.name}...")
        metrics = JobMetrics(name=job.name)
        start_time = time.time()

        job_status = {
            "last_run": run_timestamp,
            "success": False,
            "event_count": 0,
            "error": None,
        }

        existing_job = existing_status.get("jobs", {}).get(key, {})
        if existing_job.get("last_success"):
            job_status["last_success"] = existing_job["last_success"]
            job_status["last_success_count"] = existing_job.get("last_success_count", 0)

        try:
            snapshot = validate_snapshot(job.scraper(now=now), game=job.is_game)
            metrics.events_today = count_events_today(snapshot)
            summary = describe_next_event(snapshot, now, tz)

            write_snapshot(snapshot, job.output_path)
            written.append(job.output_path)

            metrics.duration_ms = (time.time() - start_time) * 1000
            log(f"  {metrics.events_today} events today")
            log(f"  {summary}")
            log(f"  Saved to {job.output_path}")

            job_status["success"] = True
            job_status["event_count"] = metrics.events_today
            job_status["last_success"] = run_timestamp
            job_status["last_success_count"] = metrics.events_today

        except Exception as e:
            error_msg = str(e)
            error_trace = traceback.format_exc()
            metrics.errors = 1
            metrics.error_messages.append(error_msg)
            metrics.duration_ms = (time.time() - start_time) * 1000
            log(f"  ERROR: Failed to scrape {job.name}: {error_msg}", "ERROR")
            log(f"  Traceback:\n{error_trace}", "ERROR")

            job_status["error"] = error_msg
            job_status["error_trace"] = error_trace

        job_statuses[key] = job_status
        job_metrics[key] = metrics

    log("")
    log("=" * 60)
    log("JOB SUMMARY")
    log("=" * 60)
    log(f"{'Job':<24} {'Today':>7} {'Errors':>7} {'Time':>10}")
    log("-" * 60)
    for key in selected:
        m = job_metrics[key]
        time_str = f"{m.duration_ms:.0f}ms"
        log(f"{m.name:<24} {m.events_today:>7} {m.errors:>7} {time_str:>10}")
    log("=" * 60)

    failed = [jobs[key].name for key in selected if not job_statuses[key]["success"]]
    if failed:
        log(f"WARNING: Failed to scrape: {', '.join(failed)}", "ERROR")

    exit_code = 1 if failed else 0

    try:
        save_status({
            "last_run": run_timestamp,
            "all_success": not failed,
            "jobs": job_statuses,
        }, config.STATUS_PATH)
        log(f"Status saved to {config.STATUS_PATH}")
    except Exception as e:
        log(f"ERROR: {e}", "ERROR")
        exit_code = 1

    if args.upload or r2_configured():
        upload_to_r2(written + [config.STATUS_PATH], log_func=log)

    try:
        save_log(log_lines, config.LOG_PATH)
        print(f"Log saved to {config.LOG_PATH}")
    except Exception as e:
        print(f"ERROR: {e}")
        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
