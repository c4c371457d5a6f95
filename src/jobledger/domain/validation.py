"""Entry validation for job, expense and invoice input.

These checks run before a mutating operation is called. A failed check
raises ValidationError with the message shown to the user, and the
operation is not invoked.
"""

from decimal import Decimal
from typing import Any, Optional

from jobledger.domain import errors
from jobledger.domain.errors import ValidationError
from jobledger.utils.amount_parser import parse_number


def validate_expense_input(description: Optional[str], amount: Any) -> tuple[str, Decimal]:
    """Validate expense form input.

    Returns:
        Tuple of (trimmed description, parsed amount)

    Raises:
        ValidationError: If the description is blank or the amount is not positive
    """
    description = (description or "").strip()
    if not description:
        raise ValidationError(errors.DESCRIPTION_REQUIRED)

    value = parse_number(amount)
    if value <= 0:
        raise ValidationError(errors.AMOUNT_NOT_POSITIVE)

    return description, value


def validate_job_input(
    name: Optional[str],
    quote: Any,
    quote_date: Optional[str],
    due_date: Optional[str],
) -> tuple[str, Decimal]:
    """Validate job form input.

    Checks run in form order and the first failure wins.

    Returns:
        Tuple of (trimmed name, parsed quote)

    Raises:
        ValidationError: If the name is blank, the quote is not positive,
            or either date is missing
    """
    name = (name or "").strip()
    if not name:
        raise ValidationError(errors.JOB_NAME_REQUIRED)

    value = parse_number(quote)
    if value <= 0:
        raise ValidationError(errors.QUOTE_NOT_POSITIVE)

    if not quote_date:
        raise ValidationError(errors.QUOTE_DATE_REQUIRED)
    if not due_date:
        raise ValidationError(errors.DUE_DATE_REQUIRED)

    return name, value


def validate_invoice_input(
    number: Optional[str],
    issue_date: Optional[str],
    due_date: Optional[str],
    net: Any,
    vat: Any,
    total: Any = None,
) -> tuple[str, Decimal, Decimal]:
    """Validate invoice form input.

    `total` is optional; when given it must not be negative either.

    Returns:
        Tuple of (trimmed number, parsed net, parsed VAT)

    Raises:
        ValidationError: If the number or a date is missing, or an amount is negative
    """
    number = (number or "").strip()
    if not number:
        raise ValidationError(errors.INVOICE_NUMBER_REQUIRED)
    if not issue_date:
        raise ValidationError(errors.ISSUE_DATE_REQUIRED)
    if not due_date:
        raise ValidationError(errors.DUE_DATE_REQUIRED)

    net_value = parse_number(net)
    vat_value = parse_number(vat)
    total_value = parse_number(total) if total is not None else Decimal("0")
    if net_value < 0 or vat_value < 0 or total_value < 0:
        raise ValidationError(errors.AMOUNT_NEGATIVE)

    return number, net_value, vat_value
