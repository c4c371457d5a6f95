"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


DESCRIPTION_REQUIRED = "Description is required."
AMOUNT_NOT_POSITIVE = "Amount must be greater than 0."
JOB_NAME_REQUIRED = "Job name is required."
QUOTE_NOT_POSITIVE = "Quote must be greater than 0."
QUOTE_DATE_REQUIRED = "Quote date is required."
DUE_DATE_REQUIRED = "Due date is required."
INVOICE_NUMBER_REQUIRED = "Invoice number is required."
ISSUE_DATE_REQUIRED = "Issue date is required."
AMOUNT_NEGATIVE = "Amounts cannot be negative."


def job_not_found(reference: str) -> str:
    """Return message for missing job."""
    return f"Job '{reference}' not found"


def ambiguous_job_reference(reference: str, count: int) -> str:
    """Return message when a job reference matches several jobs."""
    return f"Job reference '{reference}' matches {count} jobs; use a longer ID"


def expense_not_found(expense_id: str) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def invoice_not_found(invoice_id: str) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def unknown_field(entity: str, name: str) -> str:
    """Return message for an update naming a field the entity does not have."""
    return f"{entity} has no field '{name}'"
