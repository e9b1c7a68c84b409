"""CLI commands for Kit."""

from kit.cli.commands.init import init_cmd
from kit.cli.commands.add import add_cmd
from kit.cli.commands.commit import commit_cmd
from kit.cli.commands.log import log_cmd
from kit.cli.commands.ls_tree import ls_tree_cmd, cat_file_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'log_cmd',
           'ls_tree_cmd', 'cat_file_cmd']
