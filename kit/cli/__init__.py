"""Command-line interface for Kit."""

import click

from kit.core.repository import Repository
from kit.cli.output import error


def require_repository() -> Repository:
    """Find the enclosing repository or abort."""
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()
    return repo
