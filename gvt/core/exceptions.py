"""Error taxonomy for GVT repository operations.

Every error raised by the repository store derives from :class:`GvtError` and
carries a ``kind`` plus the context needed to describe it (file name, version
string, ...), so callers can map errors to exit codes and messages without
parsing exception text.
"""

from pathlib import Path
from typing import Optional


class GvtError(Exception):
    """Base exception for repository operations."""

    kind = "error"


class NotInitializedError(GvtError):
    """Raised when no repository exists in the project root."""

    kind = "not_initialized"

    def __init__(self, root: Path):
        self.root = root
        super().__init__(
            "Current directory is not initialized. Please use init command to initialize."
        )


class AlreadyInitializedError(GvtError):
    """Raised by initialize when a repository already exists."""

    kind = "already_initialized"

    def __init__(self, root: Path):
        self.root = root
        super().__init__("Current directory is already initialized.")


class FileNotFoundInWorkingTreeError(GvtError):
    """Raised when the named file is absent from the working directory."""

    kind = "file_not_found"

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"File not found. File: {file_name}")


class AlreadyTrackedError(GvtError):
    kind = "already_tracked"

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"File already added. File: {file_name}")


class NotTrackedError(GvtError):
    kind = "not_tracked"

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"File is not added to gvt. File: {file_name}")


class InvalidVersionError(GvtError):
    """Raised when a version string does not parse or names no version."""

    kind = "invalid_version"

    def __init__(self, version_spec: Optional[str]):
        self.version_spec = version_spec
        super().__init__(f"Invalid version number: {version_spec if version_spec is not None else ''}")


class StorageFaultError(GvtError):
    """Raised when an underlying I/O operation fails.

    The repository may be left partially updated; nothing is rolled back.
    The original exception is available as ``__cause__``.
    """

    kind = "storage_fault"

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage failure during {operation}: {detail}")
