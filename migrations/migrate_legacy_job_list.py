#!/usr/bin/env python3
"""Migration script to rewrite a legacy job list as the current document shape.

The first releases stored the ledger as a bare JSON list of jobs. Current
releases store an object:

    {"jobs": [...], "companies": [...]}

Loading already accepts both shapes; this script rewrites the stored
document once so other tools reading the store see the current shape.
Documents that are absent, already current, or unreadable are left alone.

Usage:
    python migrations/migrate_legacy_job_list.py [--db-path PATH] [--key KEY]
"""

import json
import sys
from pathlib import Path

# Add src to path so we can import jobledger modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jobledger.storage.base import KeyValueStore
from jobledger.storage.factories import create_sqlite_store
from jobledger.storage.repository import LedgerRepository, STORAGE_KEY, decode_legacy


def migrate_store(store: KeyValueStore, key: str = STORAGE_KEY) -> str:
    """Rewrite a legacy document under `key` in place.

    Args:
        store: Store holding the document
        key: Storage key of the document

    Returns:
        One of "absent", "current", "unreadable" or "migrated"

    Raises:
        Exception: If the migrated document cannot be written
    """
    raw = store.get(key)
    if raw is None:
        return "absent"

    try:
        document = json.loads(raw)
    except (ValueError, RecursionError):
        return "unreadable"

    if not isinstance(document, list):
        return "current"

    data = decode_legacy(document)
    if not LedgerRepository(store, key=key).save(data):
        raise Exception(f"Could not write migrated document under '{key}'")
    print(f"  Rewrote {len(data.jobs)} job(s) into the current document shape")
    return "migrated"


def migrate_database(database_path: str | None = None, key: str = STORAGE_KEY) -> None:
    """Migrate the document stored in a SQLite database.

    Args:
        database_path: Path to database file. If None, uses default location.
        key: Storage key of the document
    """
    store = create_sqlite_store(database_path=database_path)
    store.connect()

    try:
        print(f"Checking document '{key}'...")
        result = migrate_store(store, key)
        if result == "absent":
            print("Nothing to migrate: no document stored")
        elif result == "current":
            print("Migration already applied: document has the current shape")
        elif result == "unreadable":
            print("Skipped: stored document is not valid JSON")
        else:
            print("Migration completed successfully!")
    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        store.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Rewrite a legacy job list document into the current shape"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides JOBLEDGER_DB_PATH environment variable)",
    )
    parser.add_argument(
        "--key",
        type=str,
        default=STORAGE_KEY,
        help=f"Storage key of the document (default: {STORAGE_KEY})",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path, key=args.key)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
