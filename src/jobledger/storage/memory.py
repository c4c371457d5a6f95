"""In-memory key-value store."""

from typing import Optional

from jobledger.storage.base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; contents are lost when the process exits."""

    def __init__(self, entries: Optional[dict[str, str]] = None):
        self.entries: dict[str, str] = dict(entries or {})

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def initialize_schema(self) -> None:
        pass

    def get(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def set(self, key: str, text: str) -> bool:
        self.entries[key] = text
        return True
