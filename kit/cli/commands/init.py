"""Initialize a new Kit repository."""

import click
from pathlib import Path
from kit.core.errors import RepositoryExists
from kit.core.repository import Repository
from kit.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new Kit repository.

    Creates a .kit directory with the object database, refs and HEAD.

    Examples:
        kit init                    # Initialize in current directory
        kit init my-project         # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = Repository(str(repo_path)).init()
    except RepositoryExists as e:
        click.echo(error(str(e)))
        raise click.Abort()
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()

    click.echo(success(f"Initialized empty Kit repository in {repo.kit_dir}"))
