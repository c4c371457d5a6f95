"""Amount parsing and formatting utilities.

Parsing is permissive on purpose: it runs on every keystroke of an amount
field, so anything it cannot read becomes zero instead of an error.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any

from jobledger.utils.locale_config import LocaleConfig, DEFAULT_LOCALE

ZERO = Decimal("0")


def _noise_pattern(locale: LocaleConfig) -> re.Pattern:
    """Whitespace, currency symbol and currency code, matched anywhere."""
    return re.compile(
        rf"\s|{re.escape(locale.currency_symbol)}|{re.escape(locale.currency_code)}",
        re.IGNORECASE,
    )


def parse_number(value: Any, locale: LocaleConfig = DEFAULT_LOCALE) -> Decimal:
    """Parse a localized amount into a Decimal.

    Handles:
    - numbers (int, float, Decimal), returned as Decimal
    - "1.500.000" (thousands separators)
    - "35.000,75" (decimal comma)
    - "$ 1.500 CLP" (currency symbol and code)

    Args:
        value: Number, string, or None
        locale: Separators and currency markers to strip

    Returns:
        Decimal amount. Empty, None, non-finite or unparseable input
        returns Decimal("0"); this function never raises.
    """
    if isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO

    if isinstance(value, (int, float)):
        number = Decimal(str(value))
        return number if number.is_finite() else ZERO

    if not value:
        return ZERO

    cleaned = _noise_pattern(locale).sub("", str(value))
    cleaned = cleaned.replace(locale.thousands_separator, "")
    cleaned = cleaned.replace(locale.decimal_separator, ".")
    # Decimal() reads "1_000" as 1000
    if "_" in cleaned:
        return ZERO

    try:
        number = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return ZERO

    if not number.is_finite():
        return ZERO
    return number


def format_number_cl(value: Any, locale: LocaleConfig = DEFAULT_LOCALE) -> str:
    """Format an amount with locale grouping and up to two decimals.

    Examples:
        125000 -> "125.000"
        35000.75 -> "35.000,75"
        1.5 -> "1,5"
    """
    number = parse_number(value, locale)
    quantum = Decimal(1).scaleb(-locale.max_fraction_digits)
    with localcontext() as context:
        # Room for every integer digit plus the kept fraction digits
        context.prec = max(28, number.adjusted() + locale.max_fraction_digits + 2)
        rounded = number.quantize(quantum, rounding=ROUND_HALF_UP)

    sign = "-" if rounded < 0 else ""
    integer, _, fraction = f"{rounded.copy_abs():f}".partition(".")
    fraction = fraction.rstrip("0")

    head = len(integer) % 3 or 3
    groups = [integer[:head]] + [integer[i:i + 3] for i in range(head, len(integer), 3)]
    grouped = locale.thousands_separator.join(groups)
    if fraction:
        return f"{sign}{grouped}{locale.decimal_separator}{fraction}"
    return f"{sign}{grouped}"


def currency_format(value: Any, locale: LocaleConfig = DEFAULT_LOCALE) -> str:
    """Format an amount as currency, e.g. "$1.500.000" or "-$2.500,5"."""
    number = parse_number(value, locale)
    sign = "-" if number < 0 else ""
    return f"{sign}{locale.currency_symbol}{format_number_cl(number.copy_abs(), locale)}"
