"""Repository management for Kit."""

from pathlib import Path
from typing import Optional

from .errors import RepositoryExists
from .objects import KitObject, ObjectStore

KIT_DIR = '.kit'
DEFAULT_BRANCH = 'main'


class Repository:
    """
    Represents a Kit repository.

    The repository owns the working-tree root and derives every
    metadata path from it. Components take the repository as their
    context instead of relying on the current directory.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.kit_dir = self.work_tree / KIT_DIR
        self.objects_dir = self.kit_dir / 'objects'
        self.refs_dir = self.kit_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.kit_dir / 'HEAD'
        self.index_file = self.kit_dir / 'index'
        self.config_file = self.kit_dir / 'config'

        self._object_store = None
        self._ref_manager = None
        self._config = None

    @property
    def objects(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._object_store is None:
            self._object_store = ObjectStore(self.objects_dir)
        return self._object_store

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def config(self):
        """Get Config instance for this repository."""
        if self._config is None:
            from .config import get_config
            self._config = get_config(self)
        return self._config

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .kit directory structure:
        .kit/
        ├── objects/       # Object database
        ├── refs/
        │   └── heads/     # Branch references
        ├── HEAD           # Current branch/commit
        └── config         # Repository configuration

        The default branch file is not created until the first commit.

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryExists: If repository already exists
        """
        if self.kit_dir.exists():
            raise RepositoryExists(f"Repository already exists at {self.kit_dir}")

        self.kit_dir.mkdir(parents=True)
        self.objects_dir.mkdir()
        self.refs_dir.mkdir()
        self.heads_dir.mkdir()

        self.head_file.write_text(f'ref: refs/heads/{DEFAULT_BRANCH}\n', encoding='utf-8')
        self.config_file.write_text('[core]\n\trepositoryformatversion = 0\n', encoding='utf-8')

        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / KIT_DIR).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    def object_path(self, obj_hash: str) -> Path:
        """Get filesystem path for an object."""
        return self.objects.object_path(obj_hash)

    def write_object(self, obj: KitObject) -> str:
        """Store a typed object and return its hash."""
        return self.objects.write(obj)

    def read_object(self, obj_hash: str) -> KitObject:
        """Read an object into its typed view (Blob, Tree or Commit)."""
        return self.objects.read(obj_hash)

    def relative_path(self, path) -> str:
        """
        Express a path relative to the working tree with '/' separators.

        Raises:
            ValueError: If the path is outside the working tree
        """
        return Path(path).resolve().relative_to(self.work_tree).as_posix()

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
