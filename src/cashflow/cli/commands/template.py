"""Recurring template commands."""

import click

from cashflow.cli.error_handling import handle_domain_error
from cashflow.cli.formatting import format_currency
from cashflow.domain.entities import Frequency, TemplateType
from cashflow.domain.errors import DomainError
from cashflow.domain.recurring import next_occurrence
from cashflow.domain.template import TemplateService
from cashflow.utils.amount_parser import parse_positive_amount
from cashflow.utils.date_parser import parse_date


@click.group("template")
def template_group():
    """Manage recurring invoice and bill templates."""
    pass


@template_group.command("add")
@click.argument("name")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice([t.value for t in TemplateType], case_sensitive=False),
    required=True,
    help="Kind of entry to generate",
)
@click.option("--amount", required=True, help="Amount of each occurrence")
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in Frequency], case_sensitive=False),
    required=True,
    help="How often an entry is generated (monthly = 30 days, quarterly = 90 days)",
)
@click.option("--start", "start_date", help="First date of the schedule (defaults to today)")
@click.option("--id", "template_id", help="Template ID (auto-generated if not provided)")
@click.pass_context
def add_template(
    ctx,
    name: str,
    entry_type: str,
    amount: str,
    frequency: str,
    start_date: str | None,
    template_id: str | None,
):
    """Add a recurring template.

    Examples:
        cashflow template add "Retainer - Acme" --type invoice --amount 4000 --frequency monthly
        cashflow template add "Office rent" --type bill --amount 2000 --frequency monthly --start 2025-01-01
    """
    today = ctx.obj["today"]
    service = TemplateService(ctx.obj["db"])

    try:
        template = service.create_template(
            org_id=ctx.obj["org_id"],
            type=TemplateType(entry_type.lower()),
            name=name,
            amount=parse_positive_amount(amount),
            frequency=Frequency(frequency.lower()),
            start_date=parse_date(start_date, today) if start_date else today,
            template_id=template_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created template {template.id}")
    click.echo(
        f"  {template.name}: {format_currency(template.amount)} {template.frequency.value} "
        f"{template.type.value} starting {template.start_date}"
    )


@template_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include inactive templates")
@click.pass_context
def list_templates(ctx, show_all: bool):
    """List recurring templates and their next occurrence."""
    today = ctx.obj["today"]
    service = TemplateService(ctx.obj["db"])

    templates = service.list_templates(ctx.obj["org_id"], active_only=not show_all)
    if not templates:
        click.echo("No templates found.")
        return

    click.echo("\nTemplates:")
    click.echo("-" * 96)
    for template in templates:
        occurrence = next_occurrence(template, today)
        if not template.active:
            next_str = "inactive"
        elif occurrence is None:
            next_str = f"starts {template.start_date}"
        else:
            next_str = f"next {occurrence.due_date} ({occurrence.entry_id})"
        click.echo(
            f"{template.id:<16} {template.type.value:<8} {template.name[:24]:<24} "
            f"{format_currency(template.amount):>12} {template.frequency.value:<10} {next_str}"
        )


@template_group.command("deactivate")
@click.argument("template_id")
@click.pass_context
def deactivate_template(ctx, template_id: str):
    """Stop a template from generating entries. Existing entries are kept."""
    service = TemplateService(ctx.obj["db"])
    try:
        service.deactivate_template(ctx.obj["org_id"], template_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated template {template_id}")


@template_group.command("delete")
@click.argument("template_id")
@click.confirmation_option(prompt="Delete this template? Existing entries are not affected.")
@click.pass_context
def delete_template(ctx, template_id: str):
    """Delete a template. Existing entries are kept."""
    service = TemplateService(ctx.obj["db"])
    try:
        service.delete_template(ctx.obj["org_id"], template_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted template {template_id}")


def register_commands(cli):
    """Register template commands with main CLI."""
    cli.add_command(template_group)
