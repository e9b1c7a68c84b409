"""Commit command - create a commit from staged changes."""

import click
from kit.core.errors import KitError
from kit.operations.commit import CommitEngine
from kit.cli import require_repository
from kit.cli.output import success, error, info


@click.command('commit')
@click.option('-m', '--message', help='Commit message')
def commit_cmd(message):
    """
    Record the staged snapshot as a new commit.

    Examples:
        kit commit -m "Initial commit"
    """
    repo = require_repository()

    try:
        commit_hash = CommitEngine(repo).commit(message or '')
    except KitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    commit = repo.read_object(commit_hash)
    branch = repo.refs.get_current_branch() or 'detached HEAD'

    click.echo(success(f"[{branch} {commit_hash[:7]}] {commit.summary}"))
    if commit.parent:
        click.echo(info(f"Parent: {commit.parent[:7]}"))
    else:
        click.echo(info("(root commit)"))
    click.echo(info(f"Tree: {commit.tree[:7]}"))
