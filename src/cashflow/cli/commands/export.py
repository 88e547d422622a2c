"""Ledger backup command."""

import click

from cashflow.domain.backup import backup_filename
from cashflow.domain.ledger import LedgerService


@click.command("export")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, allow_dash=True),
    help="File to write (defaults to cashflow_backup_<date>.json, '-' for stdout)",
)
@click.pass_context
def export_command(ctx, output: str | None):
    """Export the ledger as a JSON backup.

    Examples:
        cashflow export
        cashflow export --output backups/march.json
        cashflow export -o - | jq '.invoices | length'
    """
    today = ctx.obj["today"]
    service = LedgerService(ctx.obj["db"])

    data = service.export_ledger(ctx.obj["org_id"], today)
    path = output or backup_filename(today)
    with click.open_file(path, "w") as f:
        f.write(data)
        f.write("\n")

    if path != "-":
        click.echo(f"Exported ledger to {path}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_command)
