"""Gym lookup commands."""

import click

from ..services.gyms import DEFAULT_RADIUS_M, GymService
from .base import async_command, echo_info, ensure_initialized, format_table, get_settings


@click.group()
@click.pass_context
def gyms(ctx):
    """Find gyms."""
    ensure_initialized(ctx)


@gyms.command()
@click.option("--lat", type=float, required=True, help="Latitude in degrees")
@click.option("--lng", type=float, required=True, help="Longitude in degrees")
@click.option("--radius", "-r", type=float, default=DEFAULT_RADIUS_M, show_default=True,
              help="Search radius in meters")
@click.pass_context
@async_command
async def nearby(ctx, lat: float, lng: float, radius: float):
    """List gyms within RADIUS meters of a point, nearest first."""
    found = await GymService(get_settings(ctx).db_path).nearby(lat, lng, radius)
    if not found:
        echo_info(f"No gyms within {radius:.0f} m")
        return

    rows = [[gym.name, gym.address, f"{gym.distance:.0f} m", gym.id] for gym in found]
    click.echo(format_table(["Name", "Address", "Distance", "ID"], rows))
