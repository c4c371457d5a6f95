"""Text rendering of jobs for the CLI."""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional

from jobledger.domain.entities import Job, JobTotals
from jobledger.domain.totals import compute_totals, describe_due_status, due_status
from jobledger.utils.amount_parser import currency_format


def paid_label(paid: bool) -> str:
    """Two-state job status."""
    return "Paid" if paid else "Invoiced"


def format_margin(totals: JobTotals) -> Optional[str]:
    """Margin as a whole percentage, or None for unquoted jobs."""
    if totals.quote <= 0:
        return None
    percent = totals.margin * 100
    with localcontext() as context:
        context.prec = max(28, percent.adjusted() + 2)
        percent = percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{percent}%"


def format_job_line(job: Job, company_name: str = "") -> str:
    """One-line summary used by `job list`."""
    totals = compute_totals(job)
    profit = currency_format(totals.profit)
    margin = format_margin(totals)
    if margin is not None:
        profit = f"{profit} ({margin})"

    parts = [
        job.id[:8],
        f"{job.name:24s}",
        f"{paid_label(job.paid):8s}",
        f"Quote: {currency_format(totals.quote)}",
        f"Profit: {profit}",
    ]
    status = due_status(job)
    if status is not None:
        parts.append(describe_due_status(status))
    if company_name:
        parts.append(company_name)
    return " | ".join(parts)
