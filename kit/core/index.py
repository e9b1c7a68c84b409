"""Index (staging area) implementation."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import IndexNotFound
from .objects import Blob
from .repository import KIT_DIR

logger = logging.getLogger(__name__)

FILE_MODE = '100644'


@dataclass
class IndexEntry:
    """
    Represents a single entry in the index.

    The path is relative to the working tree and is the entry's key.
    """
    mode: str
    kind: str
    hash: str
    path: str

    def to_line(self) -> str:
        """Render as '<mode> <kind> <hash> <path>'."""
        return f"{self.mode} {self.kind} {self.hash} {self.path}"

    @classmethod
    def from_line(cls, line: str) -> Optional['IndexEntry']:
        """
        Parse an index line.

        The path is everything after the third field, so it may contain
        spaces. Returns None for lines with fewer than four fields.
        """
        parts = line.split(None, 3)
        if len(parts) < 4:
            return None
        return cls(*parts)

    def __repr__(self) -> str:
        return f"IndexEntry({self.mode} {self.hash[:7]} {self.path})"


@dataclass
class StageResult:
    """Outcome of staging a set of paths."""
    staged: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def list_files(directory: Path, exclude: Callable[[Path], bool] = None) -> Iterator[Path]:
    """
    Yield regular files under a directory.

    Uses an explicit stack so deep trees do not hit the recursion limit.
    Directories for which exclude() is true are not entered.
    """
    if exclude is None:
        exclude = is_metadata_dir

    stack = [Path(directory)]
    while stack:
        current = stack.pop()
        for child in sorted(current.iterdir(), reverse=True):
            if child.is_dir() and not child.is_symlink():
                if not exclude(child):
                    stack.append(child)
            elif child.is_file():
                yield child


def is_metadata_dir(path: Path) -> bool:
    return path.name == KIT_DIR


def is_storable_path(rel_path: str) -> bool:
    """
    Check that a path survives a round trip through an index line.

    The path must encode as UTF-8, stay on one line and not start with
    whitespace, which from_line would strip.
    """
    try:
        rel_path.encode('utf-8')
    except UnicodeEncodeError:
        return False
    if '\n' in rel_path or '\r' in rel_path:
        return False
    return not rel_path[:1].isspace()


def printable_path(path: str) -> str:
    """Escape characters that cannot be written as UTF-8."""
    return path.encode('utf-8', 'backslashreplace').decode('utf-8')


def load(index_file: Path) -> List[IndexEntry]:
    """
    Load index entries from disk in file order.

    Args:
        index_file: Path to the index file

    Returns:
        List of entries; empty for an empty file

    Raises:
        IndexNotFound: If the index file does not exist
    """
    index_file = Path(index_file)
    if not index_file.exists():
        raise IndexNotFound(f"No index file at {index_file}")

    entries = []
    for lineno, line in enumerate(index_file.read_text(encoding='utf-8').split('\n'), 1):
        if not line.strip():
            continue
        entry = IndexEntry.from_line(line)
        if entry is None:
            logger.warning("skipping malformed index line %d: %r", lineno, line)
            continue
        entries.append(entry)
    return entries


class Index:
    """
    Kit index (staging area) implementation.

    The index maps repository-relative paths to the blob staged for the
    next commit. It is stored as one text line per entry, sorted by path.
    """

    def __init__(self, repo):
        """
        Initialize empty index.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.entries: Dict[str, IndexEntry] = {}

    @classmethod
    def load(cls, repo) -> List[IndexEntry]:
        """
        Load the repository's index entries.

        Raises:
            IndexNotFound: If the index file does not exist
        """
        return load(repo.index_file)

    def read(self) -> 'Index':
        """
        Replace in-memory entries with the persisted ones.

        A missing index file reads as an empty index.
        """
        self.entries.clear()
        if self.repo.index_file.exists():
            for entry in load(self.repo.index_file):
                self.entries[entry.path] = entry
        return self

    def write(self) -> None:
        """Write all entries sorted by path; no entries writes an empty file."""
        data = ''.join(entry.to_line() + '\n' for entry in self).encode('utf-8')
        self.repo.index_file.write_bytes(data)
        logger.debug("wrote index with %d entries", len(self.entries))

    def add_entry(self, path: str, obj_hash: str, mode: str = FILE_MODE, kind: str = 'blob') -> None:
        """Add or replace the entry for path."""
        self.entries[path] = IndexEntry(mode, kind, obj_hash, path)

    def add_file(self, filepath) -> str:
        """
        Store a file as a blob and stage it.

        Args:
            filepath: Path to a regular file inside the working tree

        Returns:
            str: Hash of the stored blob

        Raises:
            ValueError: If the file is outside the working tree
        """
        rel_path = self.repo.relative_path(filepath)
        obj_hash = self.repo.objects.write(Blob.from_file(filepath))
        self.add_entry(rel_path, obj_hash)
        return obj_hash

    def stage(self, paths: Iterable, list_files: Callable[[Path], Iterable[Path]] = list_files) -> StageResult:
        """
        Stage files and directories, then persist the merged index.

        Files are stored as blobs. Directories are expanded with
        list_files. A path that fails is recorded in the result and
        the remaining paths are still processed.

        Args:
            paths: Filesystem paths (absolute or relative to the cwd)
            list_files: Callable yielding the files under a directory

        Returns:
            StageResult: Staged relative paths and (path, reason) failures
        """
        self.read()
        result = StageResult()

        for raw in paths:
            path = Path(raw)
            try:
                if not path.exists():
                    result.failed.append((str(raw), "File not found"))
                    continue

                if path.is_dir():
                    candidates = list_files(path)
                elif path.is_file():
                    candidates = [path]
                else:
                    result.failed.append((str(raw), "Not a regular file"))
                    continue

                for file_path in candidates:
                    self._stage_one(file_path, result)
            except OSError as e:
                logger.warning("cannot stage %s: %s", raw, e)
                result.failed.append((str(raw), str(e)))

        self.write()
        return result

    def _stage_one(self, file_path: Path, result: StageResult) -> None:
        try:
            rel_path = self.repo.relative_path(file_path)
        except ValueError:
            result.failed.append((str(file_path), "Outside repository"))
            return

        if rel_path.split('/')[0] == KIT_DIR:
            result.failed.append((rel_path, "Inside repository metadata"))
            return

        if not is_storable_path(rel_path):
            result.failed.append((printable_path(rel_path), "Unsupported file name"))
            return

        try:
            self.add_file(file_path)
        except OSError as e:
            result.failed.append((rel_path, str(e)))
            return
        result.staged.append(rel_path)

    def get_entry(self, path: str) -> Optional[IndexEntry]:
        """Get entry by path."""
        return self.entries.get(path)

    def __iter__(self) -> Iterator[IndexEntry]:
        for path in sorted(self.entries):
            yield self.entries[path]

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Index(entries={len(self.entries)})"
