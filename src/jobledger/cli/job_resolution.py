"""CLI helper for turning a JOB argument into a job ID."""

from __future__ import annotations

import click
from jobledger.cli.error_handling import handle_domain_error
from jobledger.domain.errors import NotFoundError
from jobledger.domain.job import JobService
from jobledger.utils.job_resolver import resolve_job


def resolve_job_or_exit(ctx: click.Context, job_service: JobService, reference: str) -> str:
    """Resolve job ID, ID prefix or name, or exit with a CLI error."""
    try:
        return resolve_job(job_service, reference)
    except NotFoundError as exc:
        handle_domain_error(ctx, exc)
