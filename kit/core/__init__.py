"""Core functionality for Kit.

This module contains the core data structures:
- Kit objects (Blob, Tree, Commit) and the object store
- Repository layout
- Index/staging area
- Reference management
- Configuration
- Hashing utilities

For tree building, committing, history and inspection see kit.operations
"""

from kit.core.objects import KitObject, Blob, Tree, TreeEntry, Commit, ObjectStore, StoredObject
from kit.core.repository import Repository
from kit.core.hash import hash_object
from kit.core.index import Index, IndexEntry, StageResult
from kit.core.refs import RefManager
from kit.core.config import Config, get_config

__all__ = [
    'KitObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'ObjectStore',
    'StoredObject',
    'Repository',
    'Index',
    'IndexEntry',
    'StageResult',
    'RefManager',
    'Config',
    'get_config',
    'hash_object',
]
