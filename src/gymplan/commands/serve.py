"""API server command."""

import click

from .base import echo_error, ensure_initialized, get_settings


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the API server.

    Examples:

        gymplan serve

        gymplan serve --host 0.0.0.0 --port 3000
    """
    ensure_initialized(ctx)
    settings = get_settings(ctx)
    if not settings.secret_key:
        echo_error("GYMPLAN_SECRET_KEY must be set to sign login tokens.")
        ctx.exit(1)

    import uvicorn

    from ..web import create_app

    click.echo(click.style("Starting gymplan API...", fg="green"))
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo("Press Ctrl+C to stop the server.")

    uvicorn.run(
        create_app(settings) if not reload else "gymplan.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
