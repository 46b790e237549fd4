from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from gameday import config
from gameday.venues.audi_field import scrape_audi_field
from gameday.venues.nationals import scrape_nationals
from gameday.venues.nationals_park import scrape_nationals_park


@dataclass
class Job:
    name: str
    scraper: Callable
    output_path: Path
    is_game: bool = False


def get_jobs():
    """Build the job registry, keyed by the name used on the command line."""
    return {
        "nats": Job("Nationals", scrape_nationals, config.NATS_PATH, is_game=True),
        "audi": Job("Audi Field", scrape_audi_field, config.AUDI_PATH),
        "natspark": Job("Nationals Park", scrape_nationals_park, config.NATSPARK_PATH),
    }
