"""Financial aggregation and due-date standing for jobs."""

from datetime import date
from decimal import Decimal
from typing import Optional

from jobledger.domain.entities import Job, JobTotals, DueState, DueStatus
from jobledger.utils.amount_parser import parse_number
from jobledger.utils.date_parser import days_until, iso_to_dmy

# Jobs due within this many days are flagged as due soon
DUE_SOON_DAYS = 7


def compute_totals(job: Job) -> JobTotals:
    """Compute quote, expenses, profit and margin for a job.

    Margin is profit divided by quote, or zero when the quote is zero or
    negative. Pure function of the job.

    Args:
        job: Job entity

    Returns:
        JobTotals for the job
    """
    quote = parse_number(job.quote)
    total_expenses = sum((parse_number(e.amount) for e in job.expenses), Decimal("0"))
    profit = quote - total_expenses
    margin = profit / quote if quote > 0 else Decimal("0")
    return JobTotals(
        quote=quote,
        total_expenses=total_expenses,
        profit=profit,
        margin=margin,
    )


def due_status(job: Job, today: Optional[date] = None) -> Optional[DueStatus]:
    """Classify a job's due date.

    Args:
        job: Job entity
        today: Reference date (defaults to the local current date)

    Returns:
        DueStatus, or None when the job has no (readable) due date
    """
    if not job.due_date:
        return None

    days = days_until(job.due_date, today=today)
    if days is None:
        return None

    if job.paid:
        state = DueState.PAID
    elif days < 0:
        state = DueState.OVERDUE
    elif days <= DUE_SOON_DAYS:
        state = DueState.DUE_SOON
    else:
        state = DueState.NORMAL

    return DueStatus(state=state, days=days, due_date=job.due_date)


def _plural_days(count: int) -> str:
    return f"{count} day{'s' if count != 1 else ''}"


def describe_due_status(status: DueStatus) -> str:
    """Human-readable text for a due status."""
    if status.state == DueState.PAID:
        return f"Payment received on {iso_to_dmy(status.due_date)}"
    if status.state == DueState.OVERDUE:
        return f"Overdue by {_plural_days(abs(status.days))}"
    return f"Due in {_plural_days(status.days)}"
