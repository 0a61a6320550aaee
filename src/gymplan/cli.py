"""CLI entry point for gymplan."""

import click

from . import __version__
from .commands import equipment, gyms, init, plan, serve, user
from .config import configure_logging, load_settings


@click.group()
@click.version_option(version=__version__, prog_name="gymplan")
@click.pass_context
def main(ctx: click.Context):
    """gymplan: equipment-aware workout plans.

    Example usage:

        gymplan init

        gymplan user create

        gymplan plan generate you@example.com --split ppl -e Dumbbells -e "Pull-up Bar"
    """
    ctx.obj = load_settings()
    configure_logging(ctx.obj.log_level)


main.add_command(init)
main.add_command(serve)
main.add_command(user)
main.add_command(equipment)
main.add_command(gyms)
main.add_command(plan)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
