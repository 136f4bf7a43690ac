"""
Seed Loader - Fill the campus fact tables from a JSON file.

The file holds one list per table:

    {"staff": [...], "fees": [...], "rooms": [...], "knowledge": [...]}

Keys use the API's camelCase names (programName, roomCode, ...).
A table that already has rows is skipped, so seeding is safe to
repeat on every startup.

Run with: python -m src.database.seed [path/to/file.json]
"""
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.core.logging_config import get_logger
from src.database.connection import DatabaseConnection, get_database
from src.database.models import Staff, Fee, Room, Knowledge, STAFF_ACTIVE

logger = get_logger(__name__)

DEFAULT_SEED_FILE = Path(__file__).parent / "data" / "campus_seed.json"


def _staff(row: Dict[str, Any]) -> Staff:
    return Staff(
        name=row["name"],
        department=row["department"],
        designation=row["designation"],
        status=row.get("status", STAFF_ACTIVE),
        email=row.get("email"),
    )


def _fee(row: Dict[str, Any]) -> Fee:
    return Fee(
        program_name=row["programName"],
        academic_year=row["academicYear"],
        category=row["category"],
        amount=row["amount"],
    )


def _room(row: Dict[str, Any]) -> Room:
    return Room(
        room_code=row["roomCode"],
        building_name=row["buildingName"],
        floor=row["floor"],
        text_directions=row.get("textDirections"),
    )


def _knowledge(row: Dict[str, Any]) -> Knowledge:
    return Knowledge(name=row["name"], source=row["source"], text=row["text"])


# JSON key -> (model, row builder)
SEED_TABLES = {
    "staff": (Staff, _staff),
    "fees": (Fee, _fee),
    "rooms": (Room, _room),
    "knowledge": (Knowledge, _knowledge),
}


def load_seed_file(data_file: Optional[Path] = None) -> Dict[str, List[Dict[str, Any]]]:
    """Read and shape-check a seed file."""
    data_file = Path(data_file or DEFAULT_SEED_FILE)

    if not data_file.exists():
        raise FileNotFoundError(f"Seed file not found: {data_file}")

    with data_file.open(encoding="utf-8") as fh:
        payload = json.load(fh)

    if not isinstance(payload, dict):
        raise ValueError(f"Seed file must contain a JSON object: {data_file}")

    unknown = set(payload) - set(SEED_TABLES)
    if unknown:
        raise ValueError(f"Unknown seed sections: {sorted(unknown)}")

    return payload


def seed_database(
    data_file: Optional[Path] = None,
    db: Optional[DatabaseConnection] = None
) -> Dict[str, int]:
    """
    Insert seed rows into empty campus tables.

    Args:
        data_file: JSON seed file (defaults to the bundled sample)
        db: Database connection (defaults to the process-wide one)

    Returns:
        Rows inserted per section; 0 for skipped sections
    """
    payload = load_seed_file(data_file)
    db = db or get_database()
    inserted: Dict[str, int] = {}

    with db.get_session() as session:
        for section, (model, build) in SEED_TABLES.items():
            rows = payload.get(section, [])

            if session.query(model).count() > 0:
                logger.info(f"Seed: '{section}' already populated, skipping")
                inserted[section] = 0
                continue

            session.add_all(build(row) for row in rows)
            inserted[section] = len(rows)
            logger.info(f"Seed: inserted {len(rows)} rows into '{section}'")

    return inserted


if __name__ == "__main__":
    from src.core.config import get_settings
    from src.core.logging_config import setup_logging
    from src.database.init_db import init_tables

    setup_logging(get_settings().log_level)
    init_tables()
    counts = seed_database(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
    print(f"Seeded: {counts}")
