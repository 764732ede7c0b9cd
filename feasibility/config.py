import os
from pathlib import Path

# Paths
PACKAGE_ROOT = Path(__file__).resolve().parent          # .../feasibility
REPO_ROOT = PACKAGE_ROOT.parent
DATA_DIR = PACKAGE_ROOT / "data"
STATE_FILE = Path(os.environ.get("FEASIBILITY_STATE_FILE", DATA_DIR / "campaigns.json"))


# App
APP_TITLE = "Fizibilite Master API"
APP_VERSION = "0.2.0"

# Reward tiers (milestone campaigns)
MIN_REWARD_TIERS = 1
MAX_REWARD_TIERS = 5
DEFAULT_REWARD_TIERS = 3

# Rates above this magnitude are read as whole percentages
RATE_PERCENT_THRESHOLD = 0.1

# Locale (tr-TR): "1.234,56"
GROUPING_MARK = "."
DECIMAL_MARK = ","
PERCENT_DIGITS = 4

DEFAULT_TITLES = {
    "oneshot":   "One Shot Campaign",
    "milestone": "Milestone Campaign",
}

ALLOW_ORIGINS = [
    "http://localhost",
    "http://localhost:5173",
    "http://127.0.0.1:8000",
]
