"""Repository store: the versioning and storage model of GVT.

A repository lives in ``.gvt`` under the project root. Every mutating
operation (add, commit, detach) creates the next global version by cloning the
current snapshot directory, applying one change, writing the version's log
entry and finally persisting the index and HEAD.

There is no locking and no transaction log. Concurrent invocations against
the same repository are unsupported, and an interrupted operation may leave
a snapshot or log entry beyond HEAD; ``verify`` reports such leftovers but
nothing repairs them.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .exceptions import (
    AlreadyInitializedError,
    AlreadyTrackedError,
    FileNotFoundInWorkingTreeError,
    InvalidVersionError,
    NotInitializedError,
    NotTrackedError,
    StorageFaultError,
)
from .interfaces import IVersionStore
from .models import (
    INIT_MESSAGE,
    HistoryEntry,
    RepositoryState,
    StatusReport,
    Version,
    VersionInfo,
    added_message,
    committed_message,
    detached_message,
)
from ..storage import records
from ..storage.file_store import SnapshotStore
from ..storage.layout import RepositoryLayout


logger = logging.getLogger(__name__)


class Repository(IVersionStore):
    """Owns the on-disk state of a GVT repository."""

    def __init__(self, project_root: Optional[Path] = None):
        """Initialize repository handle.

        Args:
            project_root: Directory holding the working files and ``.gvt``
                (defaults to the current working directory)
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.layout = RepositoryLayout(self.project_root)
        self.snapshots = SnapshotStore(self.layout)

    def is_initialized(self) -> bool:
        return self.layout.exists()

    # Preconditions

    def _require_initialized(self) -> RepositoryState:
        if not self.layout.exists():
            raise NotInitializedError(self.project_root)
        return records.read_state(self.layout)

    def _require_working_file(self, file_name: str) -> Path:
        # The index stores one name per line, so line breaks cannot be recorded.
        path = self.layout.working_file(file_name)
        if (
            not file_name
            or "\n" in file_name
            or "\r" in file_name
            or Path(file_name).name != file_name
            or not path.is_file()
        ):
            raise FileNotFoundInWorkingTreeError(file_name)
        return path

    def _resolve_version(self, version_spec: str, head: Version) -> Version:
        version = records.parse_version(version_spec) if version_spec is not None else None
        if version is None or version > head:
            raise InvalidVersionError(version_spec)
        return version

    # Mutating operations

    def initialize(self) -> None:
        """Create the repository structure with an empty version 0.

        Raises:
            AlreadyInitializedError: If ``.gvt`` already exists
            StorageFaultError: If any directory or record cannot be created
        """
        if self.layout.exists():
            raise AlreadyInitializedError(self.project_root)

        try:
            self.layout.repo_dir.mkdir()
            self.layout.versions_dir.mkdir()
            self.layout.files_dir.mkdir()
        except OSError as e:
            logger.error(f"Failed to create repository in {self.project_root}: {e}")
            raise StorageFaultError("initialize", str(e)) from e

        self.snapshots.create_empty_snapshot(0)
        records.write_log_entry(self.layout, 0, INIT_MESSAGE)
        records.write_state(self.layout, RepositoryState(head=0))
        logger.info(f"Initialized repository in {self.layout.repo_dir}")

    def add(self, file_name: str, message: str = "") -> Version:
        """Start tracking ``file_name``.

        Returns:
            The newly created version

        Raises:
            NotInitializedError, AlreadyTrackedError,
            FileNotFoundInWorkingTreeError, StorageFaultError
        """
        state = self._require_initialized()
        if state.is_tracked(file_name):
            raise AlreadyTrackedError(file_name)
        source = self._require_working_file(file_name)

        new_state = state.advance().with_tracked(file_name)
        self.snapshots.clone_snapshot(state.head, state.next_version)
        self.snapshots.put_file(new_state.head, source, file_name)
        self._finish_version(new_state, message or added_message(file_name))
        return new_state.head

    def commit(self, file_name: str, message: str = "") -> Version:
        """Record the working content of a tracked file as a new version."""
        state = self._require_initialized()
        if not state.is_tracked(file_name):
            raise NotTrackedError(file_name)
        source = self._require_working_file(file_name)

        new_state = state.advance()
        self.snapshots.clone_snapshot(state.head, state.next_version)
        self.snapshots.put_file(new_state.head, source, file_name)
        self._finish_version(new_state, message or committed_message(file_name))
        return new_state.head

    def detach(self, file_name: str) -> Version:
        """Stop tracking ``file_name``; the working copy is left untouched."""
        state = self._require_initialized()
        if not state.is_tracked(file_name):
            raise NotTrackedError(file_name)
        self._require_working_file(file_name)

        new_state = state.advance().without_tracked(file_name)
        self.snapshots.clone_snapshot(state.head, state.next_version)
        self.snapshots.remove_file(new_state.head, file_name)
        self._finish_version(new_state, detached_message(file_name))
        return new_state.head

    def _finish_version(self, new_state: RepositoryState, message: str) -> None:
        records.write_log_entry(self.layout, new_state.head, message)
        records.write_state(self.layout, new_state)
        logger.info(f"Created version {new_state.head}: {records.summary_line(message)}")

    # Read-only operations

    def checkout(self, version_spec: str) -> List[str]:
        """Restore every file of a version into the working directory.

        Only the requested snapshot is read. Working files that the snapshot
        does not contain are left as they are.

        Returns:
            Names of the restored files
        """
        state = self._require_initialized()
        version = self._resolve_version(version_spec, state.head)
        if not self.snapshots.snapshot_exists(version):
            raise InvalidVersionError(version_spec)

        restored = self.snapshots.restore_snapshot(version, self.project_root)
        logger.info(f"Checked out version {version} ({len(restored)} files)")
        return restored

    def history(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        """List versions from HEAD down, newest first.

        Args:
            limit: Maximum number of entries; None lists every version
        """
        state = self._require_initialized()
        if limit is not None and limit <= 0:
            return []
        lowest = 0 if limit is None else max(0, state.head - limit + 1)

        return [
            HistoryEntry(version, records.summary_line(records.read_log_entry(self.layout, version)))
            for version in range(state.head, lowest - 1, -1)
        ]

    def show_version(self, version_spec: Optional[str] = None) -> VersionInfo:
        state = self._require_initialized()
        if version_spec is None:
            version = state.head
        else:
            version = self._resolve_version(version_spec, state.head)
            if not records.log_entry_exists(self.layout, version):
                raise InvalidVersionError(version_spec)

        message = records.read_log_entry(self.layout, version).strip()
        return VersionInfo(version=version, message=message)

    def status(self) -> StatusReport:
        state = self._require_initialized()
        head_message = records.summary_line(records.read_log_entry(self.layout, state.head))
        return StatusReport(head=state.head, tracked=list(state.tracked), head_message=head_message)

    def verify(self) -> List[str]:
        """Check the repository for inconsistencies without changing anything.

        Returns:
            Human-readable descriptions of every problem found
        """
        if not self.layout.exists():
            raise NotInitializedError(self.project_root)

        problems: List[str] = []
        try:
            head = records.read_head(self.layout)
        except StorageFaultError as e:
            return [f"HEAD is unreadable: {e.detail}"]

        try:
            entries = records.read_index_entries(self.layout)
        except StorageFaultError as e:
            return [f"index is unreadable: {e.detail}"]
        tracked = list(dict.fromkeys(entries))
        if len(entries) != len(tracked):
            problems.append("index contains duplicate file names")

        for version in range(head + 1):
            if not records.log_entry_exists(self.layout, version):
                problems.append(f"version {version} has no log entry")
            if not self.snapshots.snapshot_exists(version):
                problems.append(f"version {version} has no snapshot directory")

        if self.snapshots.snapshot_exists(head):
            stored = set(self.snapshots.list_files(head))
            for name in sorted(set(tracked) - stored):
                problems.append(f"tracked file {name} is missing from snapshot {head}")
            for name in sorted(stored - set(tracked)):
                problems.append(f"snapshot {head} contains untracked file {name}")

        for version in self.snapshots.list_snapshots():
            if version > head:
                problems.append(f"snapshot {version} is beyond HEAD {head}")
        if records.log_entry_exists(self.layout, head + 1):
            problems.append(f"log entry {head + 1} is beyond HEAD {head}")

        if problems:
            logger.warning(f"Repository verification found {len(problems)} problems")
        return problems
