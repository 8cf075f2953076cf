import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent
BASE_DIR = PACKAGE_DIR.parent


def _flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() not in {"", "0", "false", "no"}


# Store
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'db.sqlite3'}")
RESET_DB = _flag("RESET_DB")
DATASET_PATH = Path(os.getenv("DATASET_PATH", str(PACKAGE_DIR / "data" / "top-music.json")))

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
TRACKS_PAGE_LIMIT = int(os.getenv("TRACKS_PAGE_LIMIT", "10"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # text | json
