"""Create commits from the staged index."""

import logging
from typing import Optional

from kit.core.errors import EmptyIndex, InvalidArgument, NothingToCommit
from kit.core.objects import Commit
from kit.operations.tree import TreeBuilder

logger = logging.getLogger(__name__)


class CommitEngine:
    """
    Records the index as a new commit on top of HEAD.

    Every call with a non-empty index creates a commit, even when the
    tree is identical to the parent's.
    """

    def __init__(self, repo, tree_builder: Optional[TreeBuilder] = None):
        self.repo = repo
        self.tree_builder = tree_builder or TreeBuilder(repo)

    def commit(self, message: str, timestamp: Optional[int] = None, author: Optional[str] = None) -> str:
        """
        Create a commit from the index and advance the current branch.

        Args:
            message: Commit message; must not be blank
            timestamp: Unix timestamp (defaults to current time)
            author: 'Name <email>' (defaults to the configured identity)

        Returns:
            str: Hash of the new commit

        Raises:
            InvalidArgument: If the message is blank
            NothingToCommit: If the index is missing or empty
        """
        if not message or not message.strip():
            raise InvalidArgument("Commit message required")

        try:
            tree_hash = self.tree_builder.write_tree()
        except EmptyIndex as e:
            raise NothingToCommit(f"Nothing to commit ({e})")

        parent = self.repo.refs.resolve_head()
        identity = author or self.repo.config.author()

        commit = Commit.create(
            tree_hash=tree_hash,
            parent_hash=parent,
            author=identity,
            committer=identity,
            message=message,
            timestamp=timestamp,
        )
        commit_hash = self.repo.write_object(commit)
        self.repo.refs.update_head(commit_hash)

        logger.debug("created commit %s (tree %s, parent %s)", commit_hash, tree_hash, parent)
        return commit_hash
