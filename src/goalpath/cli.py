"""CLI entry point for goalpath."""

import os

import click

from . import __version__
from .commands import serve, signin, signup
from .logger import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="goalpath")
@click.option(
    "--log-level",
    default=lambda: os.getenv("GOALPATH_LOG_LEVEL", "INFO"),
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (default: GOALPATH_LOG_LEVEL or INFO)",
)
def main(log_level: str):
    """goalpath: personal goal tracking on a hosted backend.

    Sign up, complete your profile and organise goals into categories.
    Accounts and data live in Supabase; configure it with SUPABASE_URL and
    SUPABASE_KEY.

    Example usage:

        # Run the web interface
        goalpath serve

        # Create an account from the terminal
        goalpath signup --method phone

        # Check where an existing account lands after signing in
        goalpath signin --method email --identifier me@example.com
    """
    setup_logging(log_level)


# Register commands
main.add_command(serve)
main.add_command(signup)
main.add_command(signin)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
