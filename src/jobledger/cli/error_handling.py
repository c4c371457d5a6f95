"""Error reporting for CLI commands.

A failed command prints one "Error: ..." line to stderr and exits with
status 1. Domain errors never reach the user as tracebacks.
"""

import logging
from typing import NoReturn

import click

from jobledger.domain.errors import DomainError

logger = logging.getLogger(__name__)


def fail(ctx: click.Context, message: str) -> NoReturn:
    """Print `message` as an error and exit the command with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError) -> NoReturn:
    """Report a validation or lookup failure raised by the domain layer."""
    logger.debug("%s in '%s': %s", type(error).__name__, ctx.command_path, error)
    fail(ctx, str(error))
