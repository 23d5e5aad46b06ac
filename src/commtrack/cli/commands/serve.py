"""Serve the HTTP API."""

import click
from commtrack.config import Settings
from commtrack.web import create_app


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=5000, show_default=True, type=int, help="Port to listen on")
@click.option("--debug", is_flag=True, help="Run the Flask development server in debug mode")
@click.pass_context
def serve(ctx, host: str, port: int, debug: bool):
    """Serve the commission API with the Flask development server.

    Examples:
        commtrack serve
        commtrack --database-url postgresql://localhost/commtrack serve --port 8000
    """
    try:
        settings = Settings.from_env()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    app = create_app(settings=settings, db=ctx.obj["db"])
    click.echo(f"Serving on http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
