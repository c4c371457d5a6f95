"""Tests for JobService jobs and expenses."""

from decimal import Decimal

import pytest

from jobledger.domain.errors import ValidationError
from jobledger.domain.job import JobService
from jobledger.domain.ledger import Ledger

QUOTE_DATE = "2025-09-05T04:00:00.000Z"


def _add(job_service, name, quote=1000):
    return job_service.add_job(name=name, quote=quote, quote_date=QUOTE_DATE)


def test_add_job_prepends(job_service):
    """Test that new jobs go to the front of the list."""
    first = _add(job_service, "First")
    second = _add(job_service, "Second")

    assert [job.id for job in job_service.list_jobs()] == [second, first]


def test_add_job_defaults(job_service):
    """Test defaults for a freshly created job."""
    job = job_service.get_job(_add(job_service, "Roof", quote="850.000"))

    assert job.quote == Decimal("850000")
    assert job.paid is False
    assert job.expenses == ()
    assert job.invoices is None
    assert job.due_date is None
    assert job.company_id is None


def test_add_job_paid_none_is_invoiced(job_service):
    """Test that an unset paid flag is stored as not paid."""
    job_id = job_service.add_job(name="Roof", quote=10, quote_date=QUOTE_DATE, paid=None)
    assert job_service.get_job(job_id).paid is False


def test_get_job_unknown(job_service):
    """Test getting a job that does not exist."""
    assert job_service.get_job("missing") is None


def test_search_jobs(job_service):
    """Test case-insensitive name search."""
    _add(job_service, "Roof repair")
    _add(job_service, "Electrical installation")

    assert [job.name for job in job_service.search_jobs("ROOF")] == ["Roof repair"]
    assert len(job_service.search_jobs("  ")) == 2
    assert len(job_service.search_jobs(None)) == 2
    assert job_service.search_jobs("plumbing") == []


def test_update_job_merges_fields(job_service, sample_job):
    """Test updating some fields leaves the others alone."""
    updated = job_service.update_job(sample_job.id, name="Renamed", quote="2.000.000")

    assert updated.name == "Renamed"
    assert updated.quote == Decimal("2000000")
    assert updated.quote_date == sample_job.quote_date
    assert job_service.get_job(sample_job.id) == updated


def test_update_job_ignores_id(job_service, sample_job):
    """Test that the job ID cannot be changed."""
    updated = job_service.update_job(sample_job.id, id="other", name="Renamed")

    assert updated.id == sample_job.id
    assert job_service.get_job("other") is None


def test_update_job_unknown_field(job_service, sample_job):
    """Test that unknown fields are rejected."""
    with pytest.raises(ValidationError, match="has no field 'colour'"):
        job_service.update_job(sample_job.id, colour="red")


def test_update_job_blank_optional_clears(job_service, sample_job):
    """Test that a blank due date or company is stored as unset."""
    updated = job_service.update_job(sample_job.id, due_date="", company_id="")
    assert updated.due_date is None
    assert updated.company_id is None


def test_update_unknown_job(job_service, ledger):
    """Test updating a missing job does not commit anything."""
    before = ledger.data
    assert job_service.update_job("missing", name="x") is None
    assert ledger.data is before


def test_toggle_paid(job_service, sample_job):
    """Test flipping between Invoiced and Paid."""
    assert job_service.toggle_paid(sample_job.id).paid is True
    assert job_service.toggle_paid(sample_job.id).paid is False
    assert job_service.toggle_paid("missing") is None


def test_delete_job(job_service, sample_job):
    """Test deleting a job and its expenses."""
    job_service.add_expense(sample_job.id, "Cables", 1000)

    assert job_service.delete_job(sample_job.id) is True
    assert job_service.list_jobs() == []
    assert job_service.delete_job(sample_job.id) is False


def test_add_expense(job_service, sample_job):
    """Test recording an expense."""
    expense_id = job_service.add_expense(sample_job.id, "Cables", "35.000,75")
    expense = job_service.get_job(sample_job.id).expenses[0]

    assert expense.id == expense_id
    assert expense.job_id == sample_job.id
    assert expense.amount == Decimal("35000.75")
    assert expense.created_at == "2025-09-05T15:30:00.000Z"
    assert expense.invoice_id is None


def test_add_expense_prepends(job_service, sample_job):
    """Test that new expenses go to the front."""
    job_service.add_expense(sample_job.id, "First", 1)
    job_service.add_expense(sample_job.id, "Second", 2)

    descriptions = [e.description for e in job_service.get_job(sample_job.id).expenses]
    assert descriptions == ["Second", "First"]


def test_add_expense_unknown_job(job_service, ledger):
    """Test adding an expense to a missing job is a no-op."""
    before = ledger.data
    assert job_service.add_expense("missing", "Cables", 10) is None
    assert ledger.data is before


def test_add_expense_leaves_other_jobs(job_service, sample_job):
    """Test that only the target job changes."""
    other_id = _add(job_service, "Other")
    other = job_service.get_job(other_id)

    job_service.add_expense(sample_job.id, "Cables", 10)

    assert job_service.get_job(other_id) is other


def test_update_expense(job_service, sample_job):
    """Test editing an expense keeps its identity and creation time."""
    expense_id = job_service.add_expense(sample_job.id, "Cables", 10)
    original = job_service.get_job(sample_job.id).expenses[0]

    updated = job_service.update_expense(
        sample_job.id, expense_id, description="Wire", amount="20", created_at="2000-01-01T00:00:00.000Z"
    )

    assert updated.description == "Wire"
    assert updated.amount == Decimal("20")
    assert updated.created_at == original.created_at
    assert updated.job_id == sample_job.id


def test_update_missing_expense(job_service, sample_job):
    """Test updating an unknown expense."""
    assert job_service.update_expense(sample_job.id, "missing", description="x") is None
    assert job_service.update_expense("missing", "missing", description="x") is None


def test_delete_expense(job_service, sample_job):
    """Test removing an expense."""
    keep = job_service.add_expense(sample_job.id, "Keep", 1)
    drop = job_service.add_expense(sample_job.id, "Drop", 2)

    assert job_service.delete_expense(sample_job.id, drop) is True
    assert [e.id for e in job_service.get_job(sample_job.id).expenses] == [keep]


def test_delete_missing_expense_keeps_list(job_service, sample_job):
    """Test that deleting an unknown expense leaves the list unchanged."""
    job_service.add_expense(sample_job.id, "Keep", 1)
    before = job_service.get_job(sample_job.id).expenses

    assert job_service.delete_expense(sample_job.id, "missing") is False
    assert job_service.get_job(sample_job.id).expenses == before


def test_each_mutation_commits_once(id_factory):
    """Test that every successful change is one commit."""
    ledger = Ledger()
    commits = []
    ledger.subscribe(commits.append)
    service = JobService(ledger, id_factory=id_factory)

    job_id = service.add_job(name="Roof", quote=10, quote_date=QUOTE_DATE)
    expense_id = service.add_expense(job_id, "Tiles", 5)
    service.update_expense(job_id, expense_id, amount=6)
    service.delete_expense(job_id, expense_id)
    service.delete_job(job_id)

    assert len(commits) == 5
    assert commits[-1].jobs == ()


def test_previous_snapshot_unchanged(job_service, ledger, sample_job):
    """Test that commits never mutate earlier snapshots."""
    before = ledger.data
    job_service.add_expense(sample_job.id, "Cables", 10)

    assert before.jobs[0].expenses == ()
    assert ledger.data is not before
