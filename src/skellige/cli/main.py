"""Skellige CLI main entry point."""

import click

from skellige import __version__
from skellige.config import settings
from skellige.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="skellige")
def cli() -> None:
    """Skellige - git helpers with a single error type."""
    try:
        configure_logging(settings)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


# Import and register subcommands
from skellige.cli.repo import branch, clone, last_msg, update, url  # noqa: E402

cli.add_command(url)
cli.add_command(branch)
cli.add_command(last_msg)
cli.add_command(clone)
cli.add_command(update)
