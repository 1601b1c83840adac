"""Skellige repository CLI commands."""

import click

from skellige import git as skellige_git
from skellige.config import settings
from skellige.git import Error, StreamProgress


def _progress(enabled: bool) -> StreamProgress | None:
    if enabled or settings.progress:
        return StreamProgress(click.get_text_stream("stderr"))
    return None


@click.command()
@click.argument("path", default=".")
@click.option("--remote", default=None, help="Remote to read (default: settings)")
def url(path: str, remote: str | None) -> None:
    """Print the remote url of a repository."""
    try:
        click.echo(skellige_git.url(path, remote=remote))
    except Error as e:
        raise click.ClickException(str(e))


@click.command()
@click.argument("path", default=".")
def branch(path: str) -> None:
    """Print the checked out branch of a repository."""
    try:
        click.echo(skellige_git.branch(path))
    except Error as e:
        raise click.ClickException(str(e))


@click.command("last-msg")
@click.argument("path", default=".")
def last_msg(path: str) -> None:
    """Print the message of the HEAD commit."""
    try:
        click.echo(skellige_git.last_message(path))
    except Error as e:
        raise click.ClickException(str(e))


@click.command()
@click.argument("source")
@click.argument("dst")
@click.option("--branch", "branch_name", default=None, help="Branch to check out")
@click.option("--progress", is_flag=True, help="Report progress on stderr")
def clone(source: str, dst: str, branch_name: str | None, progress: bool) -> None:
    """Clone SOURCE into DST."""
    try:
        target = skellige_git.clone(
            source,
            dst,
            branch=branch_name,
            progress=_progress(progress),
        )
    except Error as e:
        raise click.ClickException(str(e))
    click.echo(f"Cloned into {target}")


@click.command()
@click.argument("path", default=".")
@click.option("--remote", default=None, help="Remote to fetch (default: settings)")
@click.option("--progress", is_flag=True, help="Report progress on stderr")
def update(path: str, remote: str | None, progress: bool) -> None:
    """Fast-forward the checked out branch from its remote."""
    try:
        moved = skellige_git.update(path, remote=remote, progress=_progress(progress))
    except Error as e:
        raise click.ClickException(str(e))

    if moved:
        click.echo("Updated")
    else:
        click.echo("Already up to date")
