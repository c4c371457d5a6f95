"""Company commands."""

import click
from jobledger.domain.company import CompanyService
from jobledger.domain.job import JobService


@click.group()
def company_group():
    """Manage companies."""
    pass


@company_group.command("list")
@click.pass_context
def list_companies(ctx):
    """List companies with their job counts.

    Companies are created by naming them on a job (--company).
    """
    ledger = ctx.obj["ledger"]
    company_service = CompanyService(ledger)
    job_service = JobService(ledger)

    companies = company_service.list_companies()
    if not companies:
        click.echo("No companies found.")
        return

    jobs = job_service.list_jobs()
    click.echo("\nCompanies:")
    click.echo("-" * 60)
    for company in companies:
        job_count = sum(1 for job in jobs if job.company_id == company.id)
        line = f"{company.id[:8]} | {company.name:30s} | {job_count} job{'s' if job_count != 1 else ''}"
        if company.rut:
            line += f" | RUT: {company.rut}"
        click.echo(line)


def register_commands(cli):
    """Register company commands with main CLI."""
    cli.add_command(company_group, name="company")
