"""Utility functions for jobledger."""

from jobledger.utils.amount_parser import parse_number, format_number_cl, currency_format
from jobledger.utils.date_parser import dmy_to_iso, iso_to_dmy, add_months, days_until
from jobledger.utils.ids import new_id
from jobledger.utils.locale_config import LocaleConfig, DEFAULT_LOCALE

__all__ = [
    "parse_number",
    "format_number_cl",
    "currency_format",
    "dmy_to_iso",
    "iso_to_dmy",
    "add_months",
    "days_until",
    "new_id",
    "LocaleConfig",
    "DEFAULT_LOCALE",
]
