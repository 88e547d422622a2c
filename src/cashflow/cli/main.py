"""Main CLI entry point."""

import logging
from datetime import date

import click

from cashflow.database.factories import create_sqlite_database
from cashflow.domain.errors import DomainError
from cashflow.domain.ledger import LedgerService
from cashflow.domain.runway import RunwaySettings
from cashflow.cli.error_handling import handle_domain_error
from cashflow.utils.amount_parser import parse_positive_amount
from cashflow.utils.date_parser import parse_date

# Import and register all commands at module level
from cashflow.cli.commands import (
    invoice,
    bill,
    template,
    cash,
    forecast,
    dashboard,
    export,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHFLOW_DB_PATH environment variable)",
    envvar="CASHFLOW_DB_PATH",
)
@click.option(
    "--org",
    default="default",
    show_default=True,
    envvar="CASHFLOW_ORG",
    help="Organization whose ledger to use",
)
@click.option(
    "--today",
    "today_str",
    envvar="CASHFLOW_TODAY",
    help="Reference date for all computations (defaults to the system date)",
)
@click.option(
    "--default-weekly-burn",
    default="1000",
    show_default=True,
    envvar="CASHFLOW_DEFAULT_WEEKLY_BURN",
    help="Weekly burn assumed when there are no unpaid bills",
)
@click.option(
    "--runway-cap",
    default="999",
    show_default=True,
    envvar="CASHFLOW_RUNWAY_CAP",
    help="Maximum runway in weeks, also reported when nothing is being spent",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    org: str,
    today_str: str | None,
    default_weekly_burn: str,
    runway_cap: str,
    verbose: bool,
):
    """Cashflow - Receivables, payables and cash forecasting.

    Track invoices and bills, generate recurring entries from templates,
    project the cash balance week by week and test spending decisions
    against your runway.
    """
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            today = parse_date(today_str) if today_str else date.today()
            settings = RunwaySettings(
                default_weekly_burn=parse_positive_amount(default_weekly_burn),
                runway_cap=parse_positive_amount(runway_cap),
            )
        except DomainError as e:
            handle_domain_error(ctx, e)

        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        ctx.obj["db"] = db
        ctx.obj["today"] = today
        ctx.obj["settings"] = settings
        ctx.obj["org_id"] = LedgerService(db).ensure_organization(org)


# Register all commands
invoice.register_commands(cli)
bill.register_commands(cli)
template.register_commands(cli)
cash.register_commands(cli)
forecast.register_commands(cli)
dashboard.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
