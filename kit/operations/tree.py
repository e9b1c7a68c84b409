"""Build tree objects from the index."""

import logging

from kit.core.errors import EmptyIndex, IndexNotFound
from kit.core.index import Index
from kit.core.objects import Tree

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Serializes the index into a single flat tree object.

    Paths with separators become literal entry names; no subtrees are
    written.
    """

    def __init__(self, repo):
        self.repo = repo

    def build(self) -> Tree:
        """
        Build the tree for the current index without storing it.

        Raises:
            EmptyIndex: If the index is missing or has no valid entries
        """
        try:
            entries = Index.load(self.repo)
        except IndexNotFound:
            raise EmptyIndex("Nothing staged: no index file")

        if not entries:
            raise EmptyIndex("Nothing staged: index is empty")

        tree = Tree()
        for entry in entries:
            tree.add_entry(entry.mode, entry.kind, entry.hash, entry.path)
        return tree

    def write_tree(self) -> str:
        """
        Store the index as a tree object.

        The same index content always yields the same hash.

        Returns:
            str: Hash of the tree object

        Raises:
            EmptyIndex: If the index is missing or has no valid entries
        """
        tree = self.build()
        tree_hash = self.repo.write_object(tree)
        logger.debug("wrote tree %s with %d entries", tree_hash, len(tree.entries))
        return tree_hash
