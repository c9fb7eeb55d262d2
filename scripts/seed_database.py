#!/usr/bin/env python3
"""
Database seeding script for the Vailovent store API.

Reads transactions (with their items) from a JSON file and inserts them
using the IngestionService.

Usage:
    python -m scripts.seed_database [path/to/transactions.json]
    # or
    python scripts/seed_database.py
"""

import asyncio
import json
import sys
from pathlib import Path

# Add the project root to the path so we can import app modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.config import settings
from app.database import Base, build_engine, build_session_factory
from app.models import Transaction, TransactionItem  # noqa: F401
from app.services.ingestion import IngestionService
from app.schemas.transaction import TransactionCreate


DEFAULT_DATA_FILE = project_root / "data" / "transactions.json"


def load_json_file(file_path: Path) -> list[dict]:
    """Load transaction records from a JSON file."""
    if not file_path.exists():
        print(f"Warning: File not found: {file_path}")
        return []

    with open(file_path, "r") as f:
        data = json.load(f)

    # Handle both list format and dict with key format
    if isinstance(data, list):
        return data
    elif isinstance(data, dict):
        for key in ["transactions", "data"]:
            if key in data:
                return data[key]
        return []

    return []


def parse_transactions(data: list[dict]) -> list[TransactionCreate]:
    """Parse raw records into TransactionCreate schemas, skipping invalid ones."""
    transactions = []
    for item in data:
        try:
            transactions.append(TransactionCreate(**item))
        except Exception as e:
            print(f"Warning: Skipping invalid transaction {item.get('id', '?')}: {e}")
    return transactions


async def seed_database(data_file: Path = DEFAULT_DATA_FILE) -> None:
    """Create tables and ingest the transactions found in ``data_file``."""
    print("=" * 60)
    print("VAILOVENT DATABASE SEEDING")
    print("=" * 60)
    print()
    print(f"Database: {settings.DATABASE_URL}")
    print(f"Data file: {data_file}")
    print()

    engine = build_engine(settings.DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    transactions = parse_transactions(load_json_file(data_file))
    item_count = sum(len(txn.items) for txn in transactions)

    session_factory = build_session_factory(engine)
    async with session_factory() as session:
        ingestion_service = IngestionService(session)
        print(f"Ingesting {len(transactions)} transactions ({item_count} items)...")
        txn_count, txn_errors = await ingestion_service.ingest_transactions(transactions)

    print(f"  - Ingested: {txn_count}")
    if txn_errors:
        print(f"  - Errors: {len(txn_errors)}")
        for err in txn_errors[:5]:  # Show first 5 errors
            print(f"    - {err}")
        if len(txn_errors) > 5:
            print(f"    - ... and {len(txn_errors) - 5} more errors")

    print()
    if not txn_errors:
        print("Database seeding completed successfully!")
    else:
        print(f"Database seeding completed with {len(txn_errors)} error(s).")

    await engine.dispose()


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DATA_FILE
    asyncio.run(seed_database(path))
