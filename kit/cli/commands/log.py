"""Log command - show commit history."""

import click
from datetime import datetime
from kit.core.errors import KitError
from kit.operations.history import HistoryWalker
from kit.cli import require_repository
from kit.cli.output import error, warning, highlight


def format_timestamp(timestamp: int) -> str:
    """Format Unix timestamp to readable date."""
    return datetime.fromtimestamp(timestamp).strftime("%a %b %d %H:%M:%S %Y")


@click.command('log')
@click.option('-n', '--max-count', type=int, default=None, help='Limit number of commits')
@click.option('--oneline', is_flag=True, help='Show each commit on one line')
def log_cmd(max_count, oneline):
    """
    Show commit history from HEAD back to the root commit.

    Examples:
        kit log
        kit log -n 5
        kit log --oneline
    """
    repo = require_repository()
    walker = HistoryWalker(repo)

    try:
        entries = walker.log(max_count=max_count)
    except KitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    for commit_hash, commit in entries:
        if oneline:
            click.echo(f"{highlight(commit_hash[:7])} {commit.summary}")
            continue

        click.echo(highlight(f"commit {commit_hash}"))
        click.echo(f"Author: {commit.author}")
        click.echo(f"Date:   {format_timestamp(commit.author_time)}")
        click.echo()
        for line in commit.message.split('\n'):
            click.echo(f"    {line}")
        click.echo()

    if walker.error is not None:
        click.echo(warning(f"History truncated: {walker.error}"))
