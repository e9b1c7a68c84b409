"""Inspection commands - list trees and dump objects."""

import click
from kit.core.errors import KitError
from kit.operations.history import HistoryWalker
from kit.operations.reader import ObjectReader
from kit.cli import require_repository
from kit.cli.output import error


@click.command('ls-tree')
@click.option('--name-only', is_flag=True, help='Show only file names')
@click.argument('treeish', required=False, default='HEAD')
def ls_tree_cmd(name_only, treeish):
    """
    List contents of a tree object.

    TREEISH is a tree hash, a commit hash, or HEAD (the default); a
    commit lists its tree.

    Examples:
        kit ls-tree
        kit ls-tree --name-only HEAD
        kit ls-tree 3b18e512dba79e4c8300dd08aeb37f8e728b8dad
    """
    repo = require_repository()
    reader = ObjectReader(repo)

    try:
        obj_hash = repo.refs.resolve(treeish)
        if not obj_hash:
            click.echo(error(f"Not a valid reference: {treeish}"))
            raise click.Abort()

        if reader.object_kind(obj_hash) == 'commit':
            obj_hash = HistoryWalker(repo).read_commit(obj_hash).tree

        for line in reader.read_tree(obj_hash, name_only=name_only):
            click.echo(line)
    except KitError as e:
        click.echo(error(str(e)))
        raise click.Abort()


@click.command('cat-file')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', '--size', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', '--pretty', is_flag=True, help='Print object content')
@click.argument('object_hash')
def cat_file_cmd(show_type, show_size, pretty, object_hash):
    """
    Show object content, type, or size.

    Examples:
        kit cat-file -t abc123...     # Show object type
        kit cat-file -s abc123...     # Show object size
        kit cat-file -p abc123...     # Print object content
    """
    repo = require_repository()
    reader = ObjectReader(repo)

    try:
        if show_type:
            click.echo(reader.object_kind(object_hash))
        elif show_size:
            click.echo(reader.object_size(object_hash))
        elif pretty:
            click.echo(reader.read_raw(object_hash), nl=False)
        else:
            click.echo(error("Use -t, -s or -p"))
            raise click.Abort()
    except KitError as e:
        click.echo(error(str(e)))
        raise click.Abort()
