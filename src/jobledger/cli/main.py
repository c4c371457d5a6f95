"""Main CLI entry point."""

import logging

import click
from jobledger.domain.ledger import Ledger
from jobledger.storage.factories import create_sqlite_store
from jobledger.storage.repository import LedgerRepository, STORAGE_KEY

# Import and register all commands at module level
from jobledger.cli.commands import (
    job,
    expense,
    invoice,
    company,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides JOBLEDGER_DB_PATH environment variable)",
    envvar="JOBLEDGER_DB_PATH",
)
@click.option(
    "--storage-key",
    default=STORAGE_KEY,
    show_default=True,
    envvar="JOBLEDGER_STORAGE_KEY",
    help="Key the ledger document is stored under",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, storage_key: str, verbose: bool):
    """Jobledger - job quoting and profitability tracking.

    Record quoted jobs, the expenses and invoices that belong to them,
    and see what each job actually earns.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.call_on_close(store.disconnect)
        ctx.obj["store"] = store
        ctx.obj["ledger"] = Ledger(LedgerRepository(store, key=storage_key))


# Register all commands
job.register_commands(cli)
expense.register_commands(cli)
invoice.register_commands(cli)
company.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
