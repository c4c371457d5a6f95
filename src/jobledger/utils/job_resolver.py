"""Utility for resolving job references to IDs."""

from jobledger.domain import errors
from jobledger.domain.errors import NotFoundError
from jobledger.domain.job import JobService


def resolve_job(job_service: JobService, reference: str) -> str:
    """Resolve a job reference to a job ID.

    A reference may be, in order of precedence:
    - a full job ID
    - the start of exactly one job ID (e.g. the first 8 characters)
    - a job name (case-insensitive, surrounding whitespace ignored)

    Args:
        job_service: JobService instance
        reference: Job ID, ID prefix or name

    Returns:
        Job ID

    Raises:
        NotFoundError: If no job matches, or the reference is ambiguous
    """
    reference = reference.strip()
    if not reference:
        raise NotFoundError(errors.job_not_found(reference))

    if job_service.get_job(reference) is not None:
        return reference

    jobs = job_service.list_jobs()
    prefixed = [job for job in jobs if job.id.startswith(reference)]
    if len(prefixed) == 1:
        return prefixed[0].id

    wanted = reference.casefold()
    named = [job for job in jobs if job.name.strip().casefold() == wanted]
    if len(named) == 1:
        return named[0].id

    if len(prefixed) > 1 or len(named) > 1:
        raise NotFoundError(errors.ambiguous_job_reference(reference, max(len(prefixed), len(named))))
    raise NotFoundError(errors.job_not_found(reference))
