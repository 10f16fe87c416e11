"""Web server command."""

import click

from .base import ensure_initialized, get_db_path


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int):
    """Start the JSON API server.

    Examples:

        # Start on default port (8000)
        fit-journey serve

        # Expose to network (all interfaces)
        fit-journey serve --host 0.0.0.0
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting fit-journey API server...", fg="green"))
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")

    uvicorn.run(create_app(get_db_path(ctx)), host=host, port=port)
