"""Add command - stage files for commit."""

import click
from kit.core.index import Index
from kit.cli import require_repository
from kit.cli.output import success, error, info


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Directories are staged recursively. A path that cannot be staged is
    reported and the others are still staged.

    Examples:
        kit add file.txt
        kit add src
        kit add .
    """
    repo = require_repository()

    result = Index(repo).stage(paths)

    if result.staged:
        click.echo(success(f"Added {len(result.staged)} file(s) to staging area"))
        for path in result.staged:
            click.echo(info(f"  {path}"))

    if result.failed:
        click.echo(error(f"Failed to add {len(result.failed)} path(s):"))
        for path, reason in result.failed:
            click.echo(error(f"  {path}: {reason}"))
        if not result.staged:
            raise click.Abort()

    if not result.staged and not result.failed:
        click.echo(error("No files matched"))
