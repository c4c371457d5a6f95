"""Persistence adapter for the ledger document.

The whole aggregate (jobs and companies) is stored as one JSON document
under a single key. Two document shapes are accepted on load:

    legacy:  [job, ...]
    current: {"jobs": [job, ...], "companies": [company, ...]}

Saving always writes the current shape. Neither load nor save raises:
load falls back to an empty aggregate and save reports failure by
returning False.
"""

import json
import logging
from typing import Any, Callable

from jobledger.domain.entities import AppData
from jobledger.storage.base import KeyValueStore
from jobledger.storage.mappers import app_data_to_dict, companies_from_list, jobs_from_list

logger = logging.getLogger(__name__)

STORAGE_KEY = "joblist-erp-jobs"


class DocumentShapeError(ValueError):
    """Stored document matches none of the supported shapes."""


def decode_current(document: Any) -> AppData:
    """Decode the {"jobs", "companies"} shape.

    A missing or non-list companies value counts as no companies, so the
    jobs are still loaded.

    Raises:
        DocumentShapeError: If the document is not an object with a jobs list
    """
    if not isinstance(document, dict) or not isinstance(document.get("jobs"), list):
        raise DocumentShapeError("expected an object with a 'jobs' list")

    companies = document.get("companies")
    if not isinstance(companies, list):
        if companies is not None:
            logger.warning("Ignoring non-list 'companies' value of type %s", type(companies).__name__)
        companies = []

    return AppData(jobs=jobs_from_list(document["jobs"]), companies=companies_from_list(companies))


def decode_legacy(document: Any) -> AppData:
    """Decode the original bare job list shape.

    Raises:
        DocumentShapeError: If the document is not a list
    """
    if not isinstance(document, list):
        raise DocumentShapeError("expected a list of jobs")
    return AppData(jobs=jobs_from_list(document), companies=())


# Tried in order; the first decoder that accepts the document wins
DECODERS: tuple[tuple[str, Callable[[Any], AppData]], ...] = (
    ("current", decode_current),
    ("legacy", decode_legacy),
)


def decode_document(document: Any) -> AppData:
    """Decode a parsed document of any supported shape.

    Raises:
        DocumentShapeError: If no decoder accepts the document
    """
    for shape, decoder in DECODERS:
        try:
            data = decoder(document)
        except DocumentShapeError:
            continue
        logger.debug("Decoded %s document: %d jobs, %d companies", shape, len(data.jobs), len(data.companies))
        return data
    raise DocumentShapeError(f"unsupported document of type {type(document).__name__}")


def encode_document(data: AppData) -> str:
    """Serialize the aggregate in the current shape."""
    return json.dumps(app_data_to_dict(data), ensure_ascii=False)


class LedgerRepository:
    """Loads and saves the ledger document through a key-value store."""

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY):
        """Initialize repository.

        Args:
            store: Durable key-value store
            key: Key the document is stored under
        """
        self.store = store
        self.key = key

    def read_document(self) -> Any:
        """Read and parse the raw stored document.

        Returns:
            Parsed JSON value, or None if absent, unreadable or malformed
        """
        try:
            raw = self.store.get(self.key)
        except Exception:
            logger.warning("Could not read storage key %r", self.key, exc_info=True)
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except (TypeError, ValueError, RecursionError):
            logger.warning("Stored document under %r is not valid JSON; ignoring it", self.key)
            return None

    def load(self) -> AppData:
        """Load the aggregate.

        Fails safe: an absent, unreadable or malformed document gives an
        empty aggregate.
        """
        document = self.read_document()
        if document is None:
            return AppData()

        try:
            return decode_document(document)
        except (TypeError, ValueError, RecursionError):
            logger.warning("Stored document under %r has an unsupported shape; ignoring it", self.key)
            return AppData()

    def save(self, data: AppData) -> bool:
        """Save the aggregate, replacing the previous document.

        Fails safe: write errors are logged and reported as False. The
        caller's in-memory state stays authoritative; nothing is retried.
        """
        try:
            written = self.store.set(self.key, encode_document(data))
        except Exception:
            logger.warning("Could not write storage key %r", self.key, exc_info=True)
            return False

        if not written:
            logger.warning("Store rejected write to %r", self.key)
            return False

        logger.debug("Saved %d jobs, %d companies under %r", len(data.jobs), len(data.companies), self.key)
        return True
