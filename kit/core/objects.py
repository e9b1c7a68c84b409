"""Kit objects and the content-addressed object store."""

import logging
import zlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, NamedTuple, Optional

from .errors import CorruptObject, InvalidCommitFormat, ObjectNotFound
from .hash import frame, hash_object

logger = logging.getLogger(__name__)


class KitObject(ABC):
    """Base class for all Kit objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to its body bytes.

        Returns:
            bytes: Object body, without the header
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from body bytes.

        Args:
            data: Object body
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, tree, commit)
        """
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\\0<content>

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = hash_object(frame(self.type, self.serialize()))
        return self._hash

    @property
    def hash(self) -> str:
        """40-character SHA-1 hash of the framed object."""
        return self.compute_hash()


class Blob(KitObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


class TreeEntry:
    """
    A single line of a flat tree: mode, object type, hash and name.

    The name is a full repository-relative path; trees are not nested.
    """

    def __init__(self, mode: str, obj_type: str, obj_hash: str, name: str):
        self.mode = mode
        self.type = obj_type
        self.hash = obj_hash
        self.name = name

    def to_line(self) -> str:
        """Render as '<mode> <kind> <hash> <name>'."""
        return f"{self.mode} {self.type} {self.hash} {self.name}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return self.to_line() == other.to_line()

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"


class Tree(KitObject):
    """
    Represents a staged snapshot as a flat list of entries.

    Entries keep the order they were added in; the tree builder adds
    them in index (path-sorted) order.
    """

    def __init__(self):
        super().__init__()
        self.entries: List[TreeEntry] = []

    def add_entry(self, mode: str, obj_type: str, obj_hash: str, name: str) -> None:
        """Append an entry to the tree."""
        self.entries.append(TreeEntry(mode, obj_type, obj_hash, name))
        self._hash = None

    def serialize(self) -> bytes:
        """
        Serialize tree entries.

        Format: one '<mode> <kind> <hash> <name>\\n' line per entry.

        Returns:
            bytes: Serialized tree data
        """
        return ''.join(entry.to_line() + '\n' for entry in self.entries).encode()

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize tree lines.

        Lines that do not split into exactly four whitespace-separated
        fields are skipped.

        Args:
            data: Serialized tree data
        """
        self.entries = []
        for line in data.decode('utf-8', errors='replace').split('\n'):
            parts = line.split()
            if len(parts) != 4:
                continue
            self.entries.append(TreeEntry(*parts))
        self._hash = None

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(KitObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - Snapshot of project (tree hash)
    - At most one parent commit
    - Author and committer identity with timestamps
    - Commit message, which may span several lines
    """

    HEADER_KEYS = ('tree', 'parent', 'author', 'committer')
    MESSAGE_PREFIX = 'message '

    def __init__(self):
        super().__init__()
        self.tree: str = ''
        self.parent: Optional[str] = None
        self.author: str = ''
        self.author_time: int = 0
        self.committer: str = ''
        self.committer_time: int = 0
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize commit.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (absent on a root commit)
        author Name <email> <timestamp>
        committer Name <email> <timestamp>
        message <commit message, possibly several lines>

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'tree {self.tree}']
        if self.parent:
            lines.append(f'parent {self.parent}')
        lines.append(f'author {self.author} {self.author_time}')
        lines.append(f'committer {self.committer} {self.committer_time}')
        lines.append(f'{self.MESSAGE_PREFIX}{self.message}')
        return ('\n'.join(lines) + '\n').encode()

    def deserialize(self, data: bytes) -> None:
        """
        Parse a commit body.

        Header lines must be '<key> <value>' with a known key and appear
        at most once. Everything from the 'message ' line on is message
        text, including lines that look like headers.

        Args:
            data: Serialized commit data

        Raises:
            InvalidCommitFormat: If the body does not have that shape
        """
        try:
            text = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidCommitFormat(f"Commit body is not UTF-8: {e}")

        if text.endswith('\n'):
            text = text[:-1]
        lines = text.split('\n')

        fields = {}
        message = None
        for i, line in enumerate(lines):
            if line.startswith(self.MESSAGE_PREFIX):
                message = '\n'.join([line[len(self.MESSAGE_PREFIX):]] + lines[i + 1:])
                break

            key, sep, value = line.partition(' ')
            if not sep or key not in self.HEADER_KEYS:
                raise InvalidCommitFormat(f"Unexpected commit line: {line!r}")
            if key in fields:
                raise InvalidCommitFormat(f"Duplicate commit field: {key}")
            fields[key] = value

        if message is None:
            raise InvalidCommitFormat("Commit has no message line")
        for key in ('tree', 'author', 'committer'):
            if key not in fields:
                raise InvalidCommitFormat(f"Commit is missing '{key}'")

        self.tree = fields['tree']
        self.parent = fields.get('parent')
        self.author, self.author_time = self._split_identity(fields['author'])
        self.committer, self.committer_time = self._split_identity(fields['committer'])
        self.message = message
        self._hash = None

    @staticmethod
    def _split_identity(value: str):
        identity, _, timestamp = value.rpartition(' ')
        try:
            return identity, int(timestamp)
        except ValueError:
            raise InvalidCommitFormat(f"Invalid identity line: {value!r}")

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hash: Optional[str],
        author: str,
        committer: str,
        message: str,
        timestamp: Optional[int] = None,
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hash: Hash of the parent commit, or None for a root commit
            author: Author name and email (e.g., "Name <email>")
            committer: Committer name and email
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            Commit: New commit object
        """
        import time

        commit = cls()
        commit.tree = tree_hash
        commit.parent = parent_hash
        commit.author = author
        commit.committer = committer
        commit.message = message

        if timestamp is None:
            timestamp = int(time.time())

        commit.author_time = timestamp
        commit.committer_time = timestamp
        return commit

    @property
    def summary(self) -> str:
        """First line of the message."""
        return self.message.split('\n')[0]

    def __repr__(self) -> str:
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{self.summary[:50]}')"


class StoredObject(NamedTuple):
    """Decoded object file: header kind, declared size and body."""
    kind: str
    size: int
    body: bytes


OBJECT_CLASSES = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}


class ObjectStore:
    """
    Content-addressed object database under .kit/objects.

    Objects are stored zlib-compressed as '<kind> <size>\\0<body>' at
    objects/<first 2 hex chars>/<remaining 38 hex chars>.
    """

    def __init__(self, objects_dir: Path):
        self.objects_dir = Path(objects_dir)

    def object_path(self, obj_hash: str) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123456789... for hash abcdef0123456789...
        """
        return self.objects_dir / obj_hash[:2] / obj_hash[2:]

    def store(self, kind: str, body: bytes) -> str:
        """
        Store an object and return its hash.

        An object that already exists is left as is; its content is
        identical by construction.

        Args:
            kind: Object kind (blob, tree, commit)
            body: Object body

        Returns:
            str: SHA-1 hash of the framed object
        """
        content = frame(kind, body)
        obj_hash = hash_object(content)
        path = self.object_path(obj_hash)

        if path.exists():
            return obj_hash

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(zlib.compress(content))
        logger.debug("stored %s %s (%d bytes)", kind, obj_hash, len(body))
        return obj_hash

    def retrieve(self, obj_hash: str) -> StoredObject:
        """
        Read and decode an object file.

        Args:
            obj_hash: 40-character SHA-1 hash

        Returns:
            StoredObject: kind, declared size and body

        Raises:
            ObjectNotFound: If no object file exists
            CorruptObject: If the file cannot be decompressed or framed
        """
        path = self.object_path(obj_hash)

        if not path.is_file():
            raise ObjectNotFound(obj_hash)

        try:
            content = zlib.decompress(path.read_bytes())
        except zlib.error as e:
            raise CorruptObject(f"Object {obj_hash} cannot be decompressed: {e}")

        header, sep, body = content.partition(b'\0')
        if not sep:
            raise CorruptObject(f"Object {obj_hash} has no header separator")

        try:
            kind, size_str = header.decode().split(' ', 1)
            size = int(size_str)
        except (UnicodeDecodeError, ValueError):
            raise CorruptObject(f"Invalid object header in {obj_hash}: {header!r}")

        if size != len(body):
            logger.warning("object %s declares size %d but has %d bytes",
                           obj_hash, size, len(body))

        return StoredObject(kind, size, body)

    def write(self, obj: KitObject) -> str:
        """Store a typed object and return its hash."""
        return self.store(obj.type, obj.serialize())

    def read(self, obj_hash: str) -> KitObject:
        """
        Read an object and parse it into its typed view.

        Raises:
            ObjectNotFound: If no object file exists
            CorruptObject: If the object is unreadable or of unknown kind
        """
        stored = self.retrieve(obj_hash)
        cls = OBJECT_CLASSES.get(stored.kind)
        if cls is None:
            raise CorruptObject(f"Unknown object type: {stored.kind}")

        obj = cls()
        obj.deserialize(stored.body)
        return obj
