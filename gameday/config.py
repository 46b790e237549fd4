import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

REPO_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = Path(os.environ.get("GAMEDAY_DATA_DIR", REPO_ROOT / "data"))
NATS_PATH = DATA_DIR / "nats.json"
AUDI_PATH = DATA_DIR / "audi.json"
NATSPARK_PATH = DATA_DIR / "natspark.json"
STATUS_PATH = DATA_DIR / "scrape-status.json"
LOG_PATH = DATA_DIR / "scrape-log.txt"

LOG_RETENTION_DAYS = 14

# Civil timezone for every "today" decision.
TIMEZONE = os.environ.get("GAMEDAY_TIMEZONE", "America/New_York")

REQUEST_TIMEOUT = 30
REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

NATS_TEAM_ID = int(os.environ.get("NATS_TEAM_ID", "120"))
NATS_HOME_VENUE = "Nationals Park"
MLB_SCHEDULE_URL = "https://statsapi.mlb.com/api/v1/schedule"
MLB_SEARCH_DAYS = 60

AUDI_ICS_URL = "https://audifield.com/events/?ical=1"
AUDI_EVENTS_URL = "https://audifield.com/events/"
# The Audi Field feed stamps local wall-clock times with a UTC "Z".
AUDI_ICS_MISLABELED_UTC = True

NATSPARK_BASE = "https://www.mlb.com"
NATSPARK_EVENTS_URL = NATSPARK_BASE + "/nationals/tickets/events"

R2_ACCOUNT_ID = os.environ.get("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.environ.get("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.environ.get("R2_SECRET_ACCESS_KEY")
R2_BUCKET_NAME = os.environ.get("R2_BUCKET_NAME", "navy-yard-gameday")

SNAPSHOT_FIELDS = ["lastUpdated", "nextEvent"]
EVENT_FIELDS = ["title", "startISO"]
GAME_FIELDS = ["isToday", "isHome", "opponent", "venue", "dateISO"]
