"""Job domain service: jobs and the expenses and invoices they own."""

from dataclasses import fields, replace
from datetime import datetime, UTC
from typing import Any, Callable, Optional

from jobledger.domain import errors
from jobledger.domain.entities import (
    Expense as ExpenseEntity,
    Invoice as InvoiceEntity,
    Job as JobEntity,
)
from jobledger.domain.errors import ValidationError
from jobledger.domain.ledger import Ledger
from jobledger.utils.amount_parser import parse_number
from jobledger.utils.date_parser import to_iso
from jobledger.utils.ids import new_id

# Fields callers may change through the update operations
_JOB_FIELDS = {f.name for f in fields(JobEntity)} - {"id"}
_EXPENSE_FIELDS = {f.name for f in fields(ExpenseEntity)} - {"id", "job_id", "created_at"}
_INVOICE_FIELDS = {f.name for f in fields(InvoiceEntity)} - {"id", "job_id"}

_AMOUNT_FIELDS = {"quote", "amount", "net", "vat", "total"}
_IMMUTABLE_FIELDS = {"id", "job_id", "created_at"}

# Optional fields where a blank value means "unset"
_JOB_OPTIONAL = {"due_date", "company_id"}
_EXPENSE_OPTIONAL = {"invoice_id"}
_INVOICE_OPTIONAL = {"company_id"}


def _normalize_changes(
    entity: str, allowed: set[str], optional: set[str], changes: dict[str, Any]
) -> dict[str, Any]:
    """Coerce update values to their stored types.

    Immutable keys (IDs, owner, creation time) are silently dropped.

    Raises:
        ValidationError: If a key is not a field of the entity
    """
    normalized = {}
    for name, value in changes.items():
        if name in _IMMUTABLE_FIELDS:
            continue
        if name not in allowed:
            raise ValidationError(errors.unknown_field(entity, name))

        if name in _AMOUNT_FIELDS:
            value = parse_number(value)
        elif name == "paid":
            value = bool(value)
        elif name in ("expenses", "invoices") and value is not None:
            value = tuple(value)
        elif name in optional and not value:
            value = None
        normalized[name] = value
    return normalized


class JobService:
    """Service for managing jobs, their expenses and their invoices.

    Every change builds a new snapshot and commits it to the ledger once.
    Operations on an unknown job, expense or invoice ID do nothing and
    return None (or False for deletes).
    """

    def __init__(
        self,
        ledger: Ledger,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Callable[[], str] = new_id,
    ):
        """Initialize job service.

        Args:
            ledger: Ledger holding the current state
            clock: Returns the current time (defaults to UTC now)
            id_factory: Source of new entity IDs
        """
        self.ledger = ledger
        self.clock = clock or (lambda: datetime.now(UTC))
        self.id_factory = id_factory

    # Queries

    def list_jobs(self) -> list[JobEntity]:
        """List all jobs, newest first."""
        return list(self.ledger.data.jobs)

    def get_job(self, job_id: str) -> Optional[JobEntity]:
        """Get job by ID, or None if not found."""
        for job in self.ledger.data.jobs:
            if job.id == job_id:
                return job
        return None

    def search_jobs(self, query: Optional[str]) -> list[JobEntity]:
        """List jobs whose name contains `query`, ignoring case.

        A blank query returns every job.
        """
        needle = (query or "").strip().casefold()
        if not needle:
            return self.list_jobs()
        return [job for job in self.ledger.data.jobs if needle in job.name.casefold()]

    def list_invoices(self, job_id: str) -> list[InvoiceEntity]:
        """List a job's invoices, newest first. Empty if the job is unknown."""
        job = self.get_job(job_id)
        if job is None:
            return []
        return list(job.invoices or ())

    # Jobs

    def add_job(
        self,
        name: str,
        quote: Any,
        quote_date: str,
        due_date: Optional[str] = None,
        paid: Optional[bool] = None,
        company_id: Optional[str] = None,
    ) -> str:
        """Create a job at the front of the job list.

        Args:
            name: Job name
            quote: Quoted amount (number or localized text)
            quote_date: ISO date of the quote
            due_date: Optional ISO payment due date
            paid: Paid flag; None counts as not paid ("Invoiced")
            company_id: Optional company ID

        Returns:
            New job ID
        """
        job = JobEntity(
            id=self.id_factory(),
            name=name,
            quote=parse_number(quote),
            quote_date=quote_date,
            due_date=due_date or None,
            paid=bool(paid),
            company_id=company_id or None,
            expenses=(),
        )
        data = self.ledger.data
        self.ledger.commit(replace(data, jobs=(job, *data.jobs)))
        return job.id

    def update_job(self, job_id: str, **changes: Any) -> Optional[JobEntity]:
        """Merge field changes into a job.

        The ID never changes. Expenses and invoices change only when passed
        explicitly.

        Returns:
            Updated job, or None if not found

        Raises:
            ValidationError: If a change names an unknown field
        """
        normalized = _normalize_changes("Job", _JOB_FIELDS, _JOB_OPTIONAL, changes)
        job = self.get_job(job_id)
        if job is None:
            return None
        updated = replace(job, **normalized)
        self._commit_job(updated)
        return updated

    def toggle_paid(self, job_id: str) -> Optional[JobEntity]:
        """Flip a job between "Invoiced" and "Paid"."""
        job = self.get_job(job_id)
        if job is None:
            return None
        return self.update_job(job_id, paid=not job.paid)

    def delete_job(self, job_id: str) -> bool:
        """Delete a job together with its expenses and invoices.

        Returns:
            True if a job was removed
        """
        data = self.ledger.data
        jobs = tuple(job for job in data.jobs if job.id != job_id)
        if len(jobs) == len(data.jobs):
            return False
        self.ledger.commit(replace(data, jobs=jobs))
        return True

    # Expenses

    def add_expense(
        self,
        job_id: str,
        description: str,
        amount: Any,
        invoice_id: Optional[str] = None,
    ) -> Optional[str]:
        """Record an expense at the front of a job's expense list.

        Args:
            job_id: Owning job ID
            description: What the money was spent on
            amount: Amount (number or localized text)
            invoice_id: Optional invoice the expense belongs to

        Returns:
            New expense ID, or None if the job was not found
        """
        job = self.get_job(job_id)
        if job is None:
            return None

        expense = ExpenseEntity(
            id=self.id_factory(),
            job_id=job_id,
            description=description,
            amount=parse_number(amount),
            created_at=to_iso(self.clock()),
            invoice_id=invoice_id or None,
        )
        self._commit_job(replace(job, expenses=(expense, *job.expenses)))
        return expense.id

    def update_expense(self, job_id: str, expense_id: str, **changes: Any) -> Optional[ExpenseEntity]:
        """Merge field changes into an expense.

        ID, owning job and creation time never change.

        Returns:
            Updated expense, or None if the job or expense was not found

        Raises:
            ValidationError: If a change names an unknown field
        """
        normalized = _normalize_changes("Expense", _EXPENSE_FIELDS, _EXPENSE_OPTIONAL, changes)
        job = self.get_job(job_id)
        if job is None:
            return None

        updated = None
        expenses = []
        for expense in job.expenses:
            if expense.id == expense_id:
                expense = updated = replace(expense, **normalized)
            expenses.append(expense)
        if updated is None:
            return None

        self._commit_job(replace(job, expenses=tuple(expenses)))
        return updated

    def delete_expense(self, job_id: str, expense_id: str) -> bool:
        """Remove an expense from a job.

        Returns:
            True if an expense was removed
        """
        job = self.get_job(job_id)
        if job is None:
            return False
        expenses = tuple(e for e in job.expenses if e.id != expense_id)
        if len(expenses) == len(job.expenses):
            return False
        self._commit_job(replace(job, expenses=expenses))
        return True

    # Invoices

    def add_invoice(
        self,
        job_id: str,
        number: str,
        issue_date: str,
        due_date: str,
        net: Any,
        vat: Any,
        total: Any = None,
        paid: bool = False,
        company_id: Optional[str] = None,
    ) -> Optional[str]:
        """Issue an invoice at the front of a job's invoice list.

        Args:
            job_id: Owning job ID
            number: Invoice number
            issue_date: ISO issue date
            due_date: ISO due date
            net: Net amount
            vat: VAT amount
            total: Total; defaults to net + VAT. A given total is stored
                as entered, even if it differs from net + VAT.
            paid: Whether the invoice is paid
            company_id: Billed company; defaults to the job's company

        Returns:
            New invoice ID, or None if the job was not found
        """
        job = self.get_job(job_id)
        if job is None:
            return None

        net_value = parse_number(net)
        vat_value = parse_number(vat)
        invoice = InvoiceEntity(
            id=self.id_factory(),
            job_id=job_id,
            number=number,
            issue_date=issue_date,
            due_date=due_date,
            net=net_value,
            vat=vat_value,
            total=net_value + vat_value if total is None else parse_number(total),
            paid=bool(paid),
            company_id=company_id or job.company_id,
        )
        self._commit_job(replace(job, invoices=(invoice, *(job.invoices or ()))))
        return invoice.id

    def update_invoice(self, job_id: str, invoice_id: str, **changes: Any) -> Optional[InvoiceEntity]:
        """Merge field changes into an invoice.

        Returns:
            Updated invoice, or None if the job or invoice was not found

        Raises:
            ValidationError: If a change names an unknown field
        """
        normalized = _normalize_changes("Invoice", _INVOICE_FIELDS, _INVOICE_OPTIONAL, changes)
        job = self.get_job(job_id)
        if job is None:
            return None

        updated = None
        invoices = []
        for invoice in job.invoices or ():
            if invoice.id == invoice_id:
                invoice = updated = replace(invoice, **normalized)
            invoices.append(invoice)
        if updated is None:
            return None

        self._commit_job(replace(job, invoices=tuple(invoices)))
        return updated

    def delete_invoice(self, job_id: str, invoice_id: str) -> bool:
        """Remove an invoice from a job.

        Expenses attributed to the invoice become general expenses.

        Returns:
            True if an invoice was removed
        """
        job = self.get_job(job_id)
        if job is None or not job.invoices:
            return False
        invoices = tuple(i for i in job.invoices if i.id != invoice_id)
        if len(invoices) == len(job.invoices):
            return False

        expenses = tuple(
            replace(e, invoice_id=None) if e.invoice_id == invoice_id else e
            for e in job.expenses
        )
        self._commit_job(replace(job, invoices=invoices, expenses=expenses))
        return True

    def _commit_job(self, updated: JobEntity) -> None:
        """Swap one job in the current snapshot and commit."""
        data = self.ledger.data
        jobs = tuple(updated if job.id == updated.id else job for job in data.jobs)
        self.ledger.commit(replace(data, jobs=jobs))
