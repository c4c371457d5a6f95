"""Expense management commands."""

import click
from jobledger.cli.error_handling import handle_domain_error
from jobledger.cli.job_resolution import resolve_job_or_exit
from jobledger.domain import errors
from jobledger.domain.errors import NotFoundError, ValidationError
from jobledger.domain.job import JobService
from jobledger.domain.validation import validate_expense_input
from jobledger.utils.amount_parser import currency_format, parse_number


@click.group()
def expense_group():
    """Manage job expenses."""
    pass


def _check_invoice(ctx, job_service: JobService, job_id: str, invoice_id: str | None) -> None:
    """Exit with an error unless the invoice belongs to the job."""
    if not invoice_id:
        return
    if all(invoice.id != invoice_id for invoice in job_service.list_invoices(job_id)):
        handle_domain_error(ctx, NotFoundError(errors.invoice_not_found(invoice_id)))


@expense_group.command("add")
@click.argument("job", metavar="JOB")
@click.option("--description", required=True, help="What the money was spent on")
@click.option("--amount", required=True, help="Amount (e.g., 250.000 or 250.000,50)")
@click.option("--invoice", "invoice_id", help="ID of the invoice this expense belongs to")
@click.pass_context
def add_expense(ctx, job: str, description: str, amount: str, invoice_id: str | None):
    """Record an expense against a job.

    Examples:
        jobledger job add "Roof repair" --quote 850.000
        jobledger expense add "Roof repair" --description "Tiles" --amount 125.000
    """
    job_service = JobService(ctx.obj["ledger"])
    job_id = resolve_job_or_exit(ctx, job_service, job)

    try:
        description, value = validate_expense_input(description, amount)
    except ValidationError as e:
        handle_domain_error(ctx, e)
    _check_invoice(ctx, job_service, job_id, invoice_id)

    expense_id = job_service.add_expense(job_id, description=description, amount=value, invoice_id=invoice_id)
    click.echo(f"Added expense '{description}' ({currency_format(value)}) (ID: {expense_id})")


@expense_group.command("edit")
@click.argument("job", metavar="JOB")
@click.argument("expense_id", metavar="EXPENSE_ID")
@click.option("--description", help="New description")
@click.option("--amount", help="New amount")
@click.option("--invoice", "invoice_id", help="Invoice ID, or empty string for a general expense")
@click.pass_context
def edit_expense(
    ctx,
    job: str,
    expense_id: str,
    description: str | None,
    amount: str | None,
    invoice_id: str | None,
) -> None:
    """Edit an expense. Updates only the fields that are provided."""
    job_service = JobService(ctx.obj["ledger"])
    job_id = resolve_job_or_exit(ctx, job_service, job)

    changes = {}
    try:
        if description is not None:
            if not description.strip():
                raise ValidationError(errors.DESCRIPTION_REQUIRED)
            changes["description"] = description.strip()
        if amount is not None:
            if parse_number(amount) <= 0:
                raise ValidationError(errors.AMOUNT_NOT_POSITIVE)
            changes["amount"] = amount
    except ValidationError as e:
        handle_domain_error(ctx, e)

    if invoice_id is not None:
        _check_invoice(ctx, job_service, job_id, invoice_id)
        changes["invoice_id"] = invoice_id

    if not changes:
        click.echo("Nothing to update.")
        return

    updated = job_service.update_expense(job_id, expense_id, **changes)
    if updated is None:
        handle_domain_error(ctx, NotFoundError(errors.expense_not_found(expense_id)))
    click.echo(f"Updated expense '{updated.description}' ({currency_format(updated.amount)})")


@expense_group.command("delete")
@click.argument("job", metavar="JOB")
@click.argument("expense_id", metavar="EXPENSE_ID")
@click.pass_context
def delete_expense(ctx, job: str, expense_id: str) -> None:
    """Delete an expense from a job."""
    job_service = JobService(ctx.obj["ledger"])
    job_id = resolve_job_or_exit(ctx, job_service, job)

    if not job_service.delete_expense(job_id, expense_id):
        handle_domain_error(ctx, NotFoundError(errors.expense_not_found(expense_id)))
    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
