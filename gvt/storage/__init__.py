"""Storage layer components for snapshots and repository records."""

from .file_store import SnapshotStore
from .layout import REPOSITORY_DIR_NAME, RepositoryLayout
from . import records

__all__ = [
    'SnapshotStore',
    'RepositoryLayout',
    'REPOSITORY_DIR_NAME',
    'records',
]
