#!/usr/bin/env python3
"""
Load check-in documents from a JSON file into MongoDB.

Usage:
    python scripts/seed_checkins.py                       # data/sample_checkins.json
    python scripts/seed_checkins.py path/to/checkins.json
    python scripts/seed_checkins.py --replace             # drop existing check-ins first
"""

import sys
import json
import logging
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pymongo.errors import PyMongoError

from app.exceptions import AttendanceError

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("seed_checkins")

DEFAULT_FILE = Path(__file__).parent.parent / "data" / "sample_checkins.json"


def load_checkins(path: Path):
    """Read and validate check-in documents from a JSON array file."""
    from domain.schemas.attendance_schemas import CheckInRecord

    with open(path, "r", encoding="utf-8") as f:
        documents = json.load(f)
    return [CheckInRecord.model_validate(doc) for doc in documents]


def seed(path: Path, replace: bool = False) -> int:
    """Insert the file's check-ins, returning how many were written."""
    from adapters import mongo_adapter
    from app.config import settings
    from repositories.checkin_repository import CheckInRepository

    records = load_checkins(path)
    logger.info(f"Loaded {len(records)} check-ins from {path}")

    mongo_adapter.connect(settings.mongo_uri, settings.mongo_db_name)
    try:
        collection = mongo_adapter.get_collection(settings.mongo_collection)
        if replace:
            deleted = collection.delete_many({}).deleted_count
            logger.info(f"Removed {deleted} existing check-ins")

        repository = CheckInRepository(collection)
        inserted = repository.insert_many(records)
        repository.ensure_indexes()
        logger.info(f"Inserted {inserted} check-ins into '{settings.mongo_collection}'")
        return inserted
    finally:
        mongo_adapter.close()


def main():
    parser = argparse.ArgumentParser(description="Seed MongoDB with check-in documents")
    parser.add_argument("file", nargs="?", type=Path, default=DEFAULT_FILE)
    parser.add_argument(
        "--replace", action="store_true", help="Delete existing check-ins before inserting"
    )
    args = parser.parse_args()

    if not args.file.exists():
        logger.error(f"Check-in file not found: {args.file}")
        sys.exit(1)

    try:
        seed(args.file, replace=args.replace)
    except (PyMongoError, AttendanceError) as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
