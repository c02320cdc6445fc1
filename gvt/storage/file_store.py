"""File-based storage for version snapshots.

Each version owns a full copy of every tracked file under ``files/<N>/``.
New snapshots are produced by cloning the previous one and applying a single
change, so restoring a version only ever reads one directory.
"""

import logging
import shutil
from pathlib import Path
from typing import List

from ..core.exceptions import StorageFaultError
from ..core.models import FileName, Version
from .layout import RepositoryLayout


logger = logging.getLogger(__name__)


class SnapshotStore:
    """Manages the per-version snapshot directories of a repository."""

    def __init__(self, layout: RepositoryLayout):
        """Initialize snapshot store.

        Args:
            layout: Layout of the repository whose snapshots are managed
        """
        self.layout = layout

    def _get_snapshot_dir(self, version: Version) -> Path:
        return self.layout.snapshot_dir(version)

    def snapshot_exists(self, version: Version) -> bool:
        return self._get_snapshot_dir(version).is_dir()

    def create_empty_snapshot(self, version: Version) -> Path:
        """Create an empty snapshot directory.

        Raises:
            StorageFaultError: If the directory exists or cannot be created
        """
        snapshot_dir = self._get_snapshot_dir(version)
        if snapshot_dir.exists():
            raise StorageFaultError(
                f"create snapshot {version}", f"snapshot directory already exists: {snapshot_dir}"
            )
        try:
            snapshot_dir.mkdir(parents=True)
        except OSError as e:
            logger.error(f"Failed to create snapshot directory {snapshot_dir}: {e}")
            raise StorageFaultError(f"create snapshot {version}", str(e)) from e
        return snapshot_dir

    def clone_snapshot(self, source: Version, target: Version) -> Path:
        """Copy every regular file of snapshot ``source`` into a new snapshot ``target``.

        Args:
            source: Version to copy from
            target: Version to create; its directory must not exist yet

        Returns:
            Path to the new snapshot directory

        Raises:
            StorageFaultError: If the source is missing or copying fails
        """
        source_dir = self._get_snapshot_dir(source)
        if not source_dir.is_dir():
            raise StorageFaultError(
                f"clone snapshot {source} -> {target}", f"snapshot directory missing: {source_dir}"
            )

        target_dir = self.create_empty_snapshot(target)
        copied = 0
        try:
            for entry in sorted(source_dir.iterdir()):
                if entry.is_file():
                    shutil.copyfile(entry, target_dir / entry.name)
                    copied += 1
        except OSError as e:
            logger.error(f"Failed to clone snapshot {source} into {target}: {e}")
            raise StorageFaultError(f"clone snapshot {source} -> {target}", str(e)) from e

        logger.debug(f"Cloned snapshot {source} into {target} ({copied} files)")
        return target_dir

    def put_file(self, version: Version, source: Path, file_name: FileName) -> None:
        """Store ``source`` as ``file_name`` in a snapshot, replacing any stored copy."""
        destination = self._get_snapshot_dir(version) / file_name
        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            logger.error(f"Failed to store {file_name} in snapshot {version}: {e}")
            raise StorageFaultError(f"store {file_name} in snapshot {version}", str(e)) from e
        logger.debug(f"Stored {file_name} in snapshot {version}")

    def remove_file(self, version: Version, file_name: FileName) -> bool:
        """Delete a stored file from a snapshot.

        Returns:
            True if a stored copy was removed
        """
        stored = self._get_snapshot_dir(version) / file_name
        if not stored.exists():
            return False
        try:
            stored.unlink()
        except OSError as e:
            logger.error(f"Failed to remove {file_name} from snapshot {version}: {e}")
            raise StorageFaultError(f"remove {file_name} from snapshot {version}", str(e)) from e
        logger.debug(f"Removed {file_name} from snapshot {version}")
        return True

    def list_files(self, version: Version) -> List[FileName]:
        """List the file names stored in a snapshot, sorted by name."""
        snapshot_dir = self._get_snapshot_dir(version)
        try:
            return sorted(entry.name for entry in snapshot_dir.iterdir() if entry.is_file())
        except OSError as e:
            logger.error(f"Failed to list snapshot {version}: {e}")
            raise StorageFaultError(f"list snapshot {version}", str(e)) from e

    def restore_snapshot(self, version: Version, target_dir: Path) -> List[FileName]:
        """Copy every file of a snapshot into ``target_dir``, overwriting existing files.

        Files in ``target_dir`` that are not part of the snapshot are left alone.

        Returns:
            Names of the restored files
        """
        snapshot_dir = self._get_snapshot_dir(version)
        restored: List[FileName] = []
        for file_name in self.list_files(version):
            try:
                shutil.copyfile(snapshot_dir / file_name, target_dir / file_name)
            except OSError as e:
                logger.error(f"Failed to restore {file_name} from snapshot {version}: {e}")
                raise StorageFaultError(f"restore {file_name} from snapshot {version}", str(e)) from e
            restored.append(file_name)

        logger.debug(f"Restored {len(restored)} files from snapshot {version}")
        return restored

    def list_snapshots(self) -> List[Version]:
        """List the versions that have a snapshot directory, ascending."""
        files_dir = self.layout.files_dir
        if not files_dir.exists():
            return []

        versions = []
        for entry in files_dir.iterdir():
            if entry.is_dir() and entry.name.isdigit():
                versions.append(int(entry.name))
        return sorted(versions)
