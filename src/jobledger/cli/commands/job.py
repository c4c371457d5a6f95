"""Job management commands."""

import click
from jobledger.cli.date_options import parse_date_option
from jobledger.cli.error_handling import handle_domain_error
from jobledger.cli.formatting import format_job_line, format_margin, paid_label
from jobledger.cli.job_resolution import resolve_job_or_exit
from jobledger.domain import errors
from jobledger.domain.company import CompanyService
from jobledger.domain.errors import DomainError, ValidationError
from jobledger.domain.job import JobService
from jobledger.domain.totals import compute_totals, describe_due_status, due_status
from jobledger.domain.validation import validate_job_input
from jobledger.utils.amount_parser import currency_format, parse_number
from jobledger.utils.date_parser import add_months, iso_to_dmy, now_iso


@click.group()
def job_group():
    """Manage jobs."""
    pass


@job_group.command("add")
@click.argument("name", metavar="JOB_NAME")
@click.option("--quote", required=True, help="Quoted amount (e.g., 1.500.000 or 35.000,75)")
@click.option("--quote-date", help="Quote date as dd/mm/yyyy (defaults to today)")
@click.option("--due-date", help="Payment due date as dd/mm/yyyy (defaults to one month after the quote)")
@click.option("--paid", is_flag=True, help="Mark the job as paid")
@click.option("--company", help="Company name (created if it does not exist)")
@click.pass_context
def add_job(
    ctx,
    name: str,
    quote: str,
    quote_date: str | None,
    due_date: str | None,
    paid: bool,
    company: str | None,
):
    """Add a job.

    Examples:
        jobledger job add "Electrical installation" --quote 1.500.000
        jobledger job add "Roof repair" --quote 850.000 --quote-date 05/09/2025 --company "Acme"
    """
    ledger = ctx.obj["ledger"]
    job_service = JobService(ledger)
    company_service = CompanyService(ledger)

    quote_iso = parse_date_option(ctx, quote_date, "quote date") or now_iso()
    due_iso = parse_date_option(ctx, due_date, "due date") or add_months(quote_iso, 1)

    try:
        name, quote_value = validate_job_input(name, quote, quote_iso, due_iso)
    except ValidationError as e:
        handle_domain_error(ctx, e)

    company_id = company_service.upsert_company_by_name(company)
    job_id = job_service.add_job(
        name=name,
        quote=quote_value,
        quote_date=quote_iso,
        due_date=due_iso,
        paid=paid,
        company_id=company_id,
    )
    click.echo(f"Created job '{name}' (ID: {job_id})")
    click.echo(f"  Quote: {currency_format(quote_value)}")
    click.echo(f"  Due: {iso_to_dmy(due_iso)}")
    if company_id:
        click.echo(f"  Company: {company_service.get_company_name(company_id)}")


@job_group.command("list")
@click.option("--search", help="Only show jobs whose name contains this text")
@click.pass_context
def list_jobs(ctx, search: str | None):
    """List jobs, newest first."""
    ledger = ctx.obj["ledger"]
    job_service = JobService(ledger)
    company_service = CompanyService(ledger)

    jobs = job_service.search_jobs(search)
    if not jobs:
        click.echo("No jobs found.")
        return

    click.echo("\nJobs:")
    click.echo("-" * 80)
    for job in jobs:
        click.echo(format_job_line(job, company_service.get_company_name(job.company_id)))


@job_group.command("show")
@click.argument("job", metavar="JOB")
@click.pass_context
def show_job(ctx, job: str):
    """Show a job with its totals, expenses and invoices.

    JOB can be a job ID, the start of one, or a job name.
    """
    ledger = ctx.obj["ledger"]
    job_service = JobService(ledger)
    company_service = CompanyService(ledger)

    job_id = resolve_job_or_exit(ctx, job_service, job)
    job_obj = job_service.get_job(job_id)
    totals = compute_totals(job_obj)

    click.echo(f"\n{job_obj.name} ({job_obj.id})")
    click.echo("-" * 60)
    company_name = company_service.get_company_name(job_obj.company_id)
    if company_name:
        click.echo(f"Company:    {company_name}")
    click.echo(f"Status:     {paid_label(job_obj.paid)}")
    click.echo(f"Quote date: {iso_to_dmy(job_obj.quote_date)}")
    status = due_status(job_obj)
    if status is not None:
        click.echo(f"Due date:   {iso_to_dmy(job_obj.due_date)} ({describe_due_status(status)})")
    click.echo(f"Quote:      {currency_format(totals.quote)}")
    click.echo(f"Expenses:   {currency_format(totals.total_expenses)}")
    margin = format_margin(totals)
    click.echo(f"Profit:     {currency_format(totals.profit)}" + (f" ({margin})" if margin else ""))

    click.echo("\nExpenses:")
    if not job_obj.expenses:
        click.echo("  No expenses yet.")
    for expense in job_obj.expenses:
        line = (
            f"  {expense.id[:8]} | {iso_to_dmy(expense.created_at)} | "
            f"{expense.description:30s} | {currency_format(expense.amount)}"
        )
        if expense.invoice_id:
            line += f" | Invoice: {expense.invoice_id[:8]}"
        click.echo(line)

    if job_obj.invoices:
        click.echo("\nInvoices:")
        for invoice in job_obj.invoices:
            click.echo(
                f"  {invoice.id[:8]} | No. {invoice.number} | Due {iso_to_dmy(invoice.due_date)} | "
                f"{currency_format(invoice.total)} | {'Paid' if invoice.paid else 'Pending'}"
            )


@job_group.command("edit")
@click.argument("job", metavar="JOB")
@click.option("--name", help="New job name")
@click.option("--quote", help="New quoted amount")
@click.option("--quote-date", help="New quote date as dd/mm/yyyy")
@click.option("--due-date", help="New due date as dd/mm/yyyy")
@click.option("--company", help="Company name, or empty string to clear")
@click.option("--paid/--invoiced", default=None, help="Set the payment status")
@click.pass_context
def edit_job(
    ctx,
    job: str,
    name: str | None,
    quote: str | None,
    quote_date: str | None,
    due_date: str | None,
    company: str | None,
    paid: bool | None,
) -> None:
    """Edit a job.

    Updates only the fields that are provided.

    Examples:
        jobledger job edit "Roof repair" --quote 900.000
        jobledger job edit 3f2a --company ""  # Clear company
    """
    ledger = ctx.obj["ledger"]
    job_service = JobService(ledger)
    company_service = CompanyService(ledger)

    job_id = resolve_job_or_exit(ctx, job_service, job)

    changes = {}
    try:
        if name is not None:
            if not name.strip():
                raise ValidationError(errors.JOB_NAME_REQUIRED)
            changes["name"] = name.strip()
        if quote is not None:
            if parse_number(quote) <= 0:
                raise ValidationError(errors.QUOTE_NOT_POSITIVE)
            changes["quote"] = quote
    except ValidationError as e:
        handle_domain_error(ctx, e)

    if quote_date is not None:
        changes["quote_date"] = parse_date_option(ctx, quote_date, "quote date")
    if due_date is not None:
        changes["due_date"] = parse_date_option(ctx, due_date, "due date")
    if company is not None:
        changes["company_id"] = company_service.upsert_company_by_name(company)
    if paid is not None:
        changes["paid"] = paid

    if not changes:
        click.echo("Nothing to update.")
        return

    try:
        updated = job_service.update_job(job_id, **changes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated job '{updated.name}'")


@job_group.command("toggle-paid")
@click.argument("job", metavar="JOB")
@click.pass_context
def toggle_paid(ctx, job: str) -> None:
    """Switch a job between Invoiced and Paid."""
    ledger = ctx.obj["ledger"]
    job_service = JobService(ledger)

    job_id = resolve_job_or_exit(ctx, job_service, job)
    updated = job_service.toggle_paid(job_id)
    click.echo(f"Job '{updated.name}' is now {paid_label(updated.paid)}")


@job_group.command("delete")
@click.argument("job", metavar="JOB")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_job(ctx, job: str, yes: bool) -> None:
    """Delete a job and all its expenses and invoices.

    Examples:
        jobledger job delete "Roof repair"
        jobledger job delete 3f2a --yes
    """
    ledger = ctx.obj["ledger"]
    job_service = JobService(ledger)

    job_id = resolve_job_or_exit(ctx, job_service, job)
    job_obj = job_service.get_job(job_id)

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete job '{job_obj.name}' and its {len(job_obj.expenses)} expenses?"
    ):
        click.echo("Deletion cancelled.")
        return

    job_service.delete_job(job_id)
    click.echo(f"Deleted job '{job_obj.name}'")


def register_commands(cli):
    """Register job commands with main CLI."""
    cli.add_command(job_group, name="job")
