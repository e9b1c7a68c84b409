"""Reference management for Kit."""

import logging
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

SYMBOLIC_PREFIX = 'ref: '
HEADS_PREFIX = 'refs/heads/'


class RefManager:
    """
    Manages HEAD and branch references.

    Handles:
    - Symbolic references (HEAD pointing to a branch)
    - Direct references (detached HEAD)
    - Branch references (refs/heads/*)
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.kit_dir = repo.kit_dir
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file

    def _read_head(self) -> Optional[str]:
        if not self.head_file.exists():
            return None
        return self.head_file.read_text(encoding='utf-8').strip()

    def resolve(self, target: str = 'HEAD') -> Optional[str]:
        """
        Resolve HEAD, a symbolic pointer or a raw hash to a commit hash.

        Args:
            target: 'HEAD', 'ref: <path>', a ref path such as
                'refs/heads/main', or a commit hash

        Returns:
            Commit hash, or None if the pointer leads nowhere
        """
        if target == 'HEAD':
            target = self._read_head()
            if target is None:
                return None

        if target.startswith(SYMBOLIC_PREFIX):
            return self.read_ref(target[len(SYMBOLIC_PREFIX):].strip())

        if target.startswith('refs/'):
            return self.read_ref(target)

        return target

    def resolve_head(self) -> Optional[str]:
        """Resolve HEAD to a commit hash."""
        return self.resolve('HEAD')

    def read_ref(self, ref_name: str) -> Optional[str]:
        """
        Read a reference file under .kit.

        Returns:
            Commit hash or None if the file doesn't exist or is empty
        """
        ref_path = self.kit_dir / ref_name
        if not ref_path.is_file():
            return None
        content = ref_path.read_text(encoding='utf-8').strip()
        return content or None

    def update_branch(self, branch_name: str, commit_hash: str) -> None:
        """
        Point a branch at a commit, creating it if needed.

        The previous value is overwritten without validation.
        """
        ref_path = self.heads_dir / branch_name
        ref_path.parent.mkdir(parents=True, exist_ok=True)
        ref_path.write_text(commit_hash + '\n', encoding='utf-8')
        logger.debug("updated %s%s to %s", HEADS_PREFIX, branch_name, commit_hash)

    def update_head(self, commit_hash: str) -> None:
        """
        Move the current position to a new commit.

        Updates the checked-out branch, or HEAD itself when detached.
        """
        branch = self.get_current_branch()
        if branch is None:
            self.head_file.write_text(commit_hash + '\n', encoding='utf-8')
            logger.debug("updated detached HEAD to %s", commit_hash)
        else:
            self.update_branch(branch, commit_hash)

    def get_current_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name or None if in detached HEAD state
        """
        content = self._read_head()
        if content and content.startswith(SYMBOLIC_PREFIX + HEADS_PREFIX):
            return content[len(SYMBOLIC_PREFIX + HEADS_PREFIX):]
        return None

    def is_detached_head(self) -> bool:
        """Check if HEAD holds a raw commit hash."""
        content = self._read_head()
        return bool(content) and not content.startswith(SYMBOLIC_PREFIX)

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples
        """
        if not self.heads_dir.exists():
            return []

        branches = []
        for branch_file in self.heads_dir.rglob('*'):
            if branch_file.is_file():
                branch_name = branch_file.relative_to(self.heads_dir).as_posix()
                branches.append((branch_name, branch_file.read_text(encoding='utf-8').strip()))

        return sorted(branches, key=lambda x: x[0])
