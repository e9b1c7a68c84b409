"""Walk commit history from HEAD to the root commit."""

import logging
from typing import Iterator, NamedTuple, Optional

from kit.core.errors import (
    CommitObjectNotFound,
    CorruptObject,
    InvalidCommitFormat,
    KitError,
    NoCommits,
    ObjectNotFound,
)
from kit.core.objects import Commit

logger = logging.getLogger(__name__)


class LogEntry(NamedTuple):
    """A commit hash together with its decoded commit."""
    hash: str
    commit: Commit


class HistoryWalker:
    """
    Follows parent links from a starting commit.

    A missing or undecodable commit ends the walk: everything yielded so
    far stands, and the error that stopped it is kept in `error`.
    """

    def __init__(self, repo):
        self.repo = repo
        self.error: Optional[KitError] = None

    def log(self, start: str = 'HEAD', max_count: Optional[int] = None) -> Iterator[LogEntry]:
        """
        Produce the commit chain lazily, newest first.

        Args:
            start: Where to start ('HEAD', a ref path or a commit hash)
            max_count: Stop after this many commits

        Returns:
            Iterator of LogEntry

        Raises:
            NoCommits: If start resolves to nothing
        """
        commit_hash = self.repo.refs.resolve(start)
        if not commit_hash:
            raise NoCommits("No commits yet")

        self.error = None
        return self._walk(commit_hash, max_count)

    def _walk(self, commit_hash: Optional[str], max_count: Optional[int]) -> Iterator[LogEntry]:
        count = 0
        while commit_hash and (max_count is None or count < max_count):
            try:
                commit = self.read_commit(commit_hash)
            except (CommitObjectNotFound, InvalidCommitFormat) as e:
                logger.warning("history stopped at %s: %s", commit_hash, e)
                self.error = e
                return

            yield LogEntry(commit_hash, commit)
            count += 1
            commit_hash = commit.parent

    def read_commit(self, commit_hash: str) -> Commit:
        """
        Retrieve and decode one commit.

        Raises:
            CommitObjectNotFound: If the object is missing
            InvalidCommitFormat: If it is unreadable or not a commit
        """
        try:
            stored = self.repo.objects.retrieve(commit_hash)
        except ObjectNotFound:
            raise CommitObjectNotFound(commit_hash)
        except CorruptObject as e:
            raise InvalidCommitFormat(str(e))

        if stored.kind != 'commit':
            raise InvalidCommitFormat(f"Object {commit_hash} is a {stored.kind}, not a commit")

        commit = Commit()
        commit.deserialize(stored.body)
        return commit
