"""Decode stored objects for inspection commands."""

from typing import List

from kit.core.errors import WrongObjectKind


class ObjectReader:
    """Read-only views of stored objects (tree listings, raw dumps)."""

    def __init__(self, repo):
        self.repo = repo

    def read_tree(self, tree_hash: str, name_only: bool = False) -> List[str]:
        """
        List a tree object's entries.

        Lines that do not split into exactly four whitespace-separated
        fields are skipped, so names containing spaces are not listed.

        Args:
            tree_hash: Hash of a tree object
            name_only: Return only the name field of each entry

        Returns:
            '<mode> <kind> <hash> <name>' lines, or names

        Raises:
            ObjectNotFound: If the object is missing
            CorruptObject: If the object is unreadable
            WrongObjectKind: If the object is not a tree
        """
        stored = self.repo.objects.retrieve(tree_hash)
        if stored.kind != 'tree':
            raise WrongObjectKind(tree_hash, 'tree', stored.kind)

        result = []
        for line in stored.body.decode('utf-8', errors='replace').split('\n'):
            parts = line.split()
            if len(parts) != 4:
                continue
            result.append(parts[3] if name_only else ' '.join(parts))
        return result

    def read_raw(self, obj_hash: str) -> bytes:
        """Return an object's body verbatim."""
        return self.repo.objects.retrieve(obj_hash).body

    def object_kind(self, obj_hash: str) -> str:
        return self.repo.objects.retrieve(obj_hash).kind

    def object_size(self, obj_hash: str) -> int:
        return self.repo.objects.retrieve(obj_hash).size
