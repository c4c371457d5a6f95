"""Invoice management commands."""

import click
from jobledger.cli.date_options import parse_date_option
from jobledger.cli.error_handling import handle_domain_error
from jobledger.cli.job_resolution import resolve_job_or_exit
from jobledger.domain import errors
from jobledger.domain.errors import NotFoundError, ValidationError
from jobledger.domain.job import JobService
from jobledger.domain.validation import validate_invoice_input
from jobledger.utils.amount_parser import currency_format
from jobledger.utils.date_parser import add_months, iso_to_dmy, now_iso


@click.group()
def invoice_group():
    """Manage job invoices."""
    pass


@invoice_group.command("add")
@click.argument("job", metavar="JOB")
@click.option("--number", required=True, help="Invoice number")
@click.option("--issue-date", help="Issue date as dd/mm/yyyy (defaults to today)")
@click.option("--due-date", help="Due date as dd/mm/yyyy (defaults to one month after issue)")
@click.option("--net", required=True, help="Net amount")
@click.option("--vat", default="0", show_default=True, help="VAT amount")
@click.option("--total", help="Total amount (defaults to net + VAT)")
@click.option("--paid", is_flag=True, help="Mark the invoice as paid")
@click.pass_context
def add_invoice(
    ctx,
    job: str,
    number: str,
    issue_date: str | None,
    due_date: str | None,
    net: str,
    vat: str,
    total: str | None,
    paid: bool,
):
    """Issue an invoice for a job.

    Examples:
        jobledger invoice add "Roof repair" --number 1042 --net 714.286 --vat 135.714
    """
    job_service = JobService(ctx.obj["ledger"])
    job_id = resolve_job_or_exit(ctx, job_service, job)

    issue_iso = parse_date_option(ctx, issue_date, "issue date") or now_iso()
    due_iso = parse_date_option(ctx, due_date, "due date") or add_months(issue_iso, 1)

    try:
        number, net_value, vat_value = validate_invoice_input(number, issue_iso, due_iso, net, vat, total)
    except ValidationError as e:
        handle_domain_error(ctx, e)

    invoice_id = job_service.add_invoice(
        job_id,
        number=number,
        issue_date=issue_iso,
        due_date=due_iso,
        net=net_value,
        vat=vat_value,
        total=total,
        paid=paid,
    )
    invoice = next(i for i in job_service.list_invoices(job_id) if i.id == invoice_id)
    click.echo(f"Created invoice {number} (ID: {invoice_id})")
    click.echo(f"  Total: {currency_format(invoice.total)}")
    click.echo(f"  Due: {iso_to_dmy(due_iso)}")


@invoice_group.command("list")
@click.argument("job", metavar="JOB")
@click.pass_context
def list_invoices(ctx, job: str):
    """List a job's invoices, newest first."""
    job_service = JobService(ctx.obj["ledger"])
    job_id = resolve_job_or_exit(ctx, job_service, job)

    invoices = job_service.list_invoices(job_id)
    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo("\nInvoices:")
    click.echo("-" * 70)
    for invoice in invoices:
        click.echo(
            f"{invoice.id[:8]} | No. {invoice.number:10s} | Issued {iso_to_dmy(invoice.issue_date)} | "
            f"Due {iso_to_dmy(invoice.due_date)} | {currency_format(invoice.total)} | "
            f"{'Paid' if invoice.paid else 'Pending'}"
        )


@invoice_group.command("mark-paid")
@click.argument("job", metavar="JOB")
@click.argument("invoice_id", metavar="INVOICE_ID")
@click.option("--unpaid", is_flag=True, help="Mark as pending instead")
@click.pass_context
def mark_paid(ctx, job: str, invoice_id: str, unpaid: bool) -> None:
    """Mark an invoice as paid (or pending with --unpaid)."""
    job_service = JobService(ctx.obj["ledger"])
    job_id = resolve_job_or_exit(ctx, job_service, job)

    updated = job_service.update_invoice(job_id, invoice_id, paid=not unpaid)
    if updated is None:
        handle_domain_error(ctx, NotFoundError(errors.invoice_not_found(invoice_id)))
    click.echo(f"Invoice {updated.number} is now {'paid' if updated.paid else 'pending'}")


@invoice_group.command("delete")
@click.argument("job", metavar="JOB")
@click.argument("invoice_id", metavar="INVOICE_ID")
@click.pass_context
def delete_invoice(ctx, job: str, invoice_id: str) -> None:
    """Delete an invoice. Its expenses become general expenses."""
    job_service = JobService(ctx.obj["ledger"])
    job_id = resolve_job_or_exit(ctx, job_service, job)

    if not job_service.delete_invoice(job_id, invoice_id):
        handle_domain_error(ctx, NotFoundError(errors.invoice_not_found(invoice_id)))
    click.echo(f"Deleted invoice {invoice_id}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
