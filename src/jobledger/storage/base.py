"""Abstract key-value store interface."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Durable text store addressed by key."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize store schema (create tables)."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the text stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, text: str) -> bool:
        """Store text under key, replacing any previous value.

        Returns:
            True if the write succeeded, False otherwise
        """
        pass
