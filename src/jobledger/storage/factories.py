"""Store construction and database location."""

import os
from pathlib import Path
from typing import Optional

from jobledger.storage.sqlalchemy_store import SQLAlchemyKeyValueStore

DB_PATH_ENV = "JOBLEDGER_DB_PATH"
DEFAULT_DB_PATH = Path("~/.jobledger/jobledger.db")


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the ledger database file.

    Precedence: explicit path, then $JOBLEDGER_DB_PATH, then
    ~/.jobledger/jobledger.db. `~` is expanded and the parent directory is
    created so SQLite can open the file.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV) or DEFAULT_DB_PATH
    path = Path(chosen).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyKeyValueStore:
    """Create a store backed by a SQLite file (see resolve_database_path)."""
    return SQLAlchemyKeyValueStore(f"sqlite:///{resolve_database_path(database_path)}")
