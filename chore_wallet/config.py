import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = BASE_DIR / "data"
DB_PATH = DATA_DIR / "chore_wallet.sqlite3"

DATABASE_URL = os.getenv("CHORE_WALLET_DATABASE_URL", f"sqlite:///{DB_PATH}")

DEFAULT_USERNAME = os.getenv("CHORE_WALLET_DEFAULT_USERNAME", "kid")
DEFAULT_PASSWORD = os.getenv("CHORE_WALLET_DEFAULT_PASSWORD", "password123")

UNDO_WINDOW_HOURS = int(os.getenv("CHORE_WALLET_UNDO_WINDOW_HOURS", "24"))
TRANSACTION_LIMIT = int(os.getenv("CHORE_WALLET_TRANSACTION_LIMIT", "10"))
MAX_TRANSACTION_LIMIT = 100

DEFAULT_CHORE_ICON = "broom"
CHORE_ICONS = [
    {"value": "broom", "label": "Cleaning"},
    {"value": "car", "label": "Car Wash"},
    {"value": "dog", "label": "Pet Care"},
    {"value": "utensils", "label": "Kitchen"},
    {"value": "music", "label": "Music Practice"},
    {"value": "laundry", "label": "Laundry"},
    {"value": "plants", "label": "Plant Care"},
    {"value": "study", "label": "Study Time"},
    {"value": "house", "label": "House Cleaning"},
    {"value": "babysit", "label": "Babysitting"},
    {"value": "coffee", "label": "Dishwashing"},
    {"value": "vacuum", "label": "Vacuuming"},
]

ALLOWED_ORIGINS = [
    origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "").split(",") if origin.strip()
]
