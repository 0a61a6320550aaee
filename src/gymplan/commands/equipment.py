"""Equipment catalog commands."""

import click

from ..services.equipment import EquipmentService
from .base import async_command, echo_info, ensure_initialized, format_table, get_settings


@click.group()
@click.pass_context
def equipment(ctx):
    """Browse the equipment catalog."""
    ensure_initialized(ctx)


@equipment.command(name="list")
@click.pass_context
@async_command
async def list_equipment(ctx):
    """List every catalog item."""
    items = await EquipmentService(get_settings(ctx).db_path).list_catalog()
    if not items:
        echo_info("The catalog is empty. Run 'gymplan init' to seed it.")
        return

    rows = [[item.name, item.category.value, item.id] for item in items]
    click.echo(format_table(["Name", "Category", "ID"], rows))
    click.echo()
    click.echo(f"Total: {len(items)} item(s)")
