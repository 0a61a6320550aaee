"""Initialize the database command."""

import click

from ..db import init_db, seed_catalog
from .base import async_command, echo_info, echo_success, get_settings


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Create the database and seed the gym, equipment and exercise catalog.

    Safe to run again; existing rows are kept.
    """
    settings = get_settings(ctx)
    echo_info(f"Initializing gymplan in {settings.data_dir}")

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    await init_db(settings.db_path)
    echo_success("Database initialized")

    counts = await seed_catalog(settings.db_path)
    echo_success(
        f"Catalog seeded ({counts['gyms']} gyms, {counts['equipment']} equipment, "
        f"{counts['exercises']} exercises added)"
    )

    click.echo()
    click.echo("Next steps:")
    click.echo("  gymplan user create")
    click.echo("  gymplan plan generate you@example.com --split ppl --equipment Dumbbells")
