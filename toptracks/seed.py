"""
One-shot seeding of the track collection from the bundled dataset.

Runs on startup when RESET_DB is set, or explicitly:

    python -m toptracks.seed
"""
import json
import logging
from pathlib import Path

from toptracks import config
from toptracks.logging_config import setup_logging
from toptracks.store import TrackStore

logger = logging.getLogger(__name__)


def load_dataset(path: Path) -> list[dict]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of tracks")
    return data


def seed_database(store: TrackStore, path: Path | None = None) -> int:
    path = path or config.DATASET_PATH
    # Clear first so restarts don't duplicate the catalog
    inserted = store.replace_all(load_dataset(path))
    logger.info("Seeded %d tracks from %s", inserted, path)
    return inserted


if __name__ == "__main__":
    setup_logging(config.LOG_LEVEL, config.LOG_FORMAT)
    store = TrackStore.from_url(config.DATABASE_URL)
    if not store.connect():
        raise SystemExit("Database is not reachable")
    seed_database(store)
