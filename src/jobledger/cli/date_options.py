"""CLI helpers for dd/mm/yyyy date options."""

from typing import Optional

import click

from jobledger.cli.error_handling import fail
from jobledger.utils.date_parser import dmy_to_iso


def parse_date_option(ctx: click.Context, value: Optional[str], label: str) -> Optional[str]:
    """Convert a dd/mm/yyyy option to ISO, or exit with a CLI error.

    Returns None when the option was not given.
    """
    if value is None:
        return None
    iso = dmy_to_iso(value.strip())
    if not iso:
        fail(ctx, f"Invalid {label} '{value}'. Use dd/mm/yyyy.")
    return iso
