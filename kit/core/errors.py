"""Exception hierarchy for Kit.

Core operations raise these; CLI commands catch KitError at the boundary
and report it.
"""


class KitError(Exception):
    """Base class for all Kit errors."""


class NotFound(KitError):
    """An object, ref or index file is absent."""


class ObjectNotFound(NotFound):
    """No object file exists for a hash."""

    def __init__(self, obj_hash: str):
        super().__init__(f"Object {obj_hash} not found")
        self.hash = obj_hash


class IndexNotFound(NotFound):
    """The index file does not exist."""


class CommitObjectNotFound(NotFound):
    """A commit referenced during a history walk is missing."""

    def __init__(self, obj_hash: str):
        super().__init__(f"Commit object {obj_hash} not found")
        self.hash = obj_hash


class CorruptObject(KitError):
    """An object file could not be decompressed or framed."""


class InvalidCommitFormat(CorruptObject):
    """A commit body does not have the expected shape."""


class InvalidArgument(KitError):
    """A required input is missing or blank."""


class EmptyState(KitError):
    """The repository has nothing to operate on."""


class EmptyIndex(EmptyState):
    """The index is missing or has no valid entries."""


class NothingToCommit(EmptyState):
    """A commit was requested with nothing staged."""


class NoCommits(EmptyState):
    """HEAD does not resolve to any commit."""


class WrongObjectKind(KitError):
    """An object has a different kind than the operation requires."""

    def __init__(self, obj_hash: str, expected: str, actual: str):
        super().__init__(f"Object {obj_hash} is a {actual}, not a {expected}")
        self.hash = obj_hash
        self.expected = expected
        self.actual = actual


class RepositoryExists(KitError):
    """A repository is already initialized at the target path."""
