"""Operations module for high-level Kit operations.

This module contains the logic built on top of the core store:
- Tree building from the index
- Commit creation
- History traversal
- Object inspection
"""

from kit.operations.tree import TreeBuilder
from kit.operations.commit import CommitEngine
from kit.operations.history import HistoryWalker, LogEntry
from kit.operations.reader import ObjectReader

__all__ = [
    'TreeBuilder',
    'CommitEngine',
    'HistoryWalker', 'LogEntry',
    'ObjectReader',
]
