"""Web server command."""

import click

from .base import ensure_configured


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the web server.

    Launches the goalpath web interface on the specified host and port.
    Requires SUPABASE_URL and SUPABASE_KEY in the environment or a .env file.

    Examples:

        # Start on default port (8000)
        goalpath serve

        # Start on custom port
        goalpath serve --port 3000

        # Development mode with auto-reload
        goalpath serve --reload
    """
    settings = ensure_configured(ctx)

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting goalpath web server...", fg="green"))
    click.echo()
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo(f"  Backend: {settings.supabase_url}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    uvicorn.run(
        create_app(settings) if not reload else "goalpath.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
        log_level=settings.log_level.lower(),
    )
