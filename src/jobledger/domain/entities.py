"""Domain model entities for jobledger.

Entities are frozen dataclasses and collections are tuples, so every change
produces a new object. The ledger swaps whole snapshots instead of mutating
them in place.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Company:
    """Client or counterparty a job is billed to."""

    id: str
    name: str
    rut: Optional[str] = None


@dataclass(frozen=True)
class Invoice:
    """Billing document issued against a job."""

    id: str
    job_id: str
    number: str
    issue_date: str
    due_date: str
    net: Decimal
    vat: Decimal
    total: Decimal
    paid: bool = False
    company_id: Optional[str] = None


@dataclass(frozen=True)
class Expense:
    """Cost recorded against a job.

    `invoice_id` of None means a general expense not tied to any invoice.
    """

    id: str
    job_id: str
    description: str
    amount: Decimal
    created_at: str
    invoice_id: Optional[str] = None


@dataclass(frozen=True)
class Job:
    """Quoted unit of work.

    `paid` False means "Invoiced", True means "Paid". Expenses and invoices
    are ordered newest first. `invoices` is None for jobs that never had the
    field stored.
    """

    id: str
    name: str
    quote: Decimal
    quote_date: str
    due_date: Optional[str] = None
    paid: bool = False
    company_id: Optional[str] = None
    invoices: Optional[tuple[Invoice, ...]] = None
    expenses: tuple[Expense, ...] = ()


@dataclass(frozen=True)
class AppData:
    """Aggregate root: everything persisted as one document."""

    jobs: tuple[Job, ...] = ()
    companies: tuple[Company, ...] = ()


@dataclass(frozen=True)
class JobTotals:
    """Financial summary of a job."""

    quote: Decimal
    total_expenses: Decimal
    profit: Decimal
    margin: Decimal


class DueState(str, Enum):
    """Urgency of a job's due date."""

    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    NORMAL = "normal"
    PAID = "paid"


@dataclass(frozen=True)
class DueStatus:
    """Due-date standing of a job.

    `days` is negative when overdue. Paid jobs are always PAID, whatever
    the day count.
    """

    state: DueState
    days: int
    due_date: str
