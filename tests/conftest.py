"""Shared pytest fixtures for jobledger tests."""

import tempfile
import os
from datetime import datetime, UTC
import pytest

from jobledger.domain.company import CompanyService
from jobledger.domain.job import JobService
from jobledger.domain.ledger import Ledger
from jobledger.storage.factories import create_sqlite_store
from jobledger.storage.memory import InMemoryKeyValueStore
from jobledger.storage.repository import LedgerRepository

FIXED_NOW = datetime(2025, 9, 5, 15, 30, tzinfo=UTC)


@pytest.fixture
def temp_store():
    """Create a temporary SQLite store for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(memory_store):
    """Create a LedgerRepository over the in-memory store."""
    return LedgerRepository(memory_store)


@pytest.fixture
def ledger(repository):
    """Create a Ledger persisted to the in-memory store."""
    return Ledger(repository)


@pytest.fixture
def id_factory():
    """Deterministic ID source: id-1, id-2, ..."""
    counter = iter(range(1, 10_000))
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def job_service(ledger, id_factory):
    """Create a JobService with a fixed clock."""
    return JobService(ledger, clock=lambda: FIXED_NOW, id_factory=id_factory)


@pytest.fixture
def company_service(ledger, id_factory):
    """Create a CompanyService sharing the job service's ID source."""
    return CompanyService(ledger, id_factory=id_factory)


@pytest.fixture
def sample_job(job_service):
    """Create a sample job with a 1.000.000 quote."""
    job_id = job_service.add_job(
        name="Electrical installation",
        quote=1000000,
        quote_date="2025-09-05T04:00:00.000Z",
        due_date="2025-10-05T03:00:00.000Z",
    )
    return job_service.get_job(job_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
