"""SQLite schema management and sample data for the task database."""

import logging
from typing import Any

from hausgeist.core.db_client import DBClient
from hausgeist.domain.task import DocumentStatus, InventoryStatus, ItemType


logger = logging.getLogger(__name__)


ITEMS_COLLECTION = "items"

# Central list of all collections in the schema
COLLECTIONS = [ITEMS_COLLECTION]

_ITEMS_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {ITEMS_COLLECTION} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL CHECK (length(title) > 0),
    type TEXT NOT NULL DEFAULT 'chore' CHECK (type IN ('chore', 'inventory', 'document')),
    status TEXT NOT NULL DEFAULT 'todo',
    owner TEXT NOT NULL DEFAULT 'Family',
    due_date TEXT,
    points INTEGER,
    recurring INTEGER NOT NULL DEFAULT 0,
    frequency TEXT CHECK (frequency IS NULL OR frequency IN ('daily', 'weekly', 'monthly')),
    category TEXT,
    size TEXT,
    price REAL,
    store TEXT,
    notes TEXT,
    expiry_date TEXT,
    archived INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_items_type_status ON {ITEMS_COLLECTION} (type, status);
CREATE INDEX IF NOT EXISTS idx_items_owner ON {ITEMS_COLLECTION} (owner);
CREATE INDEX IF NOT EXISTS idx_items_due_date ON {ITEMS_COLLECTION} (due_date);
"""


SAMPLE_ITEMS: list[dict[str, Any]] = [
    # Chores
    {"title": "Brush teeth (morning)", "owner": "Ira", "recurring": True, "frequency": "daily", "points": 1},
    {"title": "Tidy toys", "owner": "Ira", "recurring": True, "frequency": "daily", "points": 2},
    {"title": "Help set table", "owner": "Ira", "recurring": True, "frequency": "daily", "points": 2},
    # Inventory
    {
        "title": "Winter jacket",
        "owner": "Ira",
        "type": ItemType.INVENTORY,
        "status": InventoryStatus.HAVE,
        "size": "104",
        "category": "clothes",
    },
    {
        "title": "Sneakers",
        "owner": "Ira",
        "type": ItemType.INVENTORY,
        "status": InventoryStatus.HAVE,
        "size": "26",
        "category": "shoes",
    },
    {"title": "Wooden blocks", "owner": "Ira", "type": ItemType.INVENTORY, "status": InventoryStatus.HAVE, "category": "toys"},
    # Documents
    {
        "title": "Ira's passport",
        "owner": "Ira",
        "type": ItemType.DOCUMENT,
        "status": DocumentStatus.VALID,
        "category": "passport",
        "due_date": "2028-05-15",
    },
]


async def init_db(db: DBClient) -> None:
    """Create all tables and indexes if they do not exist yet."""
    await db.execute_script(_ITEMS_SCHEMA)
    logger.info("Database schema initialized", extra={"db_path": db.db_path, "collections": COLLECTIONS})


async def seed_sample_data(db: DBClient) -> int:
    """Insert the sample chores, inventory and documents.

    Returns:
        Number of items created
    """
    count = 0
    for item in SAMPLE_ITEMS:
        await db.create_record(collection=ITEMS_COLLECTION, data=item)
        logger.info("Added sample item", extra={"title": item["title"], "type": item.get("type", "chore")})
        count += 1

    logger.info("Sample data created", extra={"count": count})
    return count
