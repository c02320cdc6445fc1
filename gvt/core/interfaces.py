"""Core interfaces and abstract base classes for GVT."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import HistoryEntry, StatusReport, VersionInfo


class IVersionStore(ABC):
    """Interface for the repository store."""

    @abstractmethod
    def initialize(self) -> None:
        """Create an empty repository at version 0."""
        pass

    @abstractmethod
    def add(self, file_name: str, message: str = "") -> int:
        """Start tracking a file, creating a new version."""
        pass

    @abstractmethod
    def commit(self, file_name: str, message: str = "") -> int:
        """Record the current content of a tracked file as a new version."""
        pass

    @abstractmethod
    def detach(self, file_name: str) -> int:
        """Stop tracking a file, creating a new version."""
        pass

    @abstractmethod
    def checkout(self, version_spec: str) -> List[str]:
        """Restore the files of a version into the working directory."""
        pass

    @abstractmethod
    def history(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        """List versions from HEAD downwards."""
        pass

    @abstractmethod
    def show_version(self, version_spec: Optional[str] = None) -> VersionInfo:
        """Return the full log entry of a version (HEAD when omitted)."""
        pass

    @abstractmethod
    def status(self) -> StatusReport:
        """Summarize HEAD and the tracked files."""
        pass

    @abstractmethod
    def verify(self) -> List[str]:
        """Check on-disk consistency and return the problems found."""
        pass


class IConfigManager(ABC):
    """Interface for configuration management."""

    @abstractmethod
    def load_config(self, config_path: Optional[Path] = None) -> Dict[str, Any]:
        """Load configuration from file."""
        pass

    @abstractmethod
    def save_config(self, config: Dict[str, Any], config_path: Optional[Path] = None) -> bool:
        """Save configuration to file."""
        pass

    @abstractmethod
    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        pass

    @abstractmethod
    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """Validate configuration and return any errors."""
        pass
