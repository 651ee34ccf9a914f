"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..config import ConfigError, Settings, load_settings
from ..models.session import Toast


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def ensure_configured(ctx: click.Context) -> Settings:
    """Load settings or exit with a hint about the missing variables."""
    try:
        return load_settings()
    except ConfigError as e:
        echo_error(str(e))
        click.echo("Set them in the environment or in a .env file.")
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_toasts(toasts: list[Toast]) -> None:
    """Print queued notifications the way the web UI would show them."""
    for toast in toasts:
        text = f"{toast.title}: {toast.description}" if toast.description else toast.title
        if toast.variant == "destructive":
            echo_error(text)
        else:
            echo_success(text)
