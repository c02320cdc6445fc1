"""Core data models and type definitions for GVT."""

from dataclasses import dataclass, field, replace
from typing import List, Tuple


# Type aliases for better readability
Version = int
FileName = str


INIT_MESSAGE = "GVT initialized."


def added_message(file_name: FileName) -> str:
    return f"File added successfully. File: {file_name}"


def committed_message(file_name: FileName) -> str:
    return f"File committed successfully. File: {file_name}"


def detached_message(file_name: FileName) -> str:
    return f"File detached successfully. File: {file_name}"


@dataclass(frozen=True)
class RepositoryState:
    """HEAD and tracked index as read from disk at the start of an operation.

    Mutating operations never change a state in place; they derive the next
    state and persist it as their final step.
    """
    head: Version
    tracked: Tuple[FileName, ...] = ()

    def is_tracked(self, file_name: FileName) -> bool:
        return file_name in self.tracked

    @property
    def next_version(self) -> Version:
        return self.head + 1

    def advance(self) -> "RepositoryState":
        return replace(self, head=self.next_version)

    def with_tracked(self, file_name: FileName) -> "RepositoryState":
        if file_name in self.tracked:
            return self
        return replace(self, tracked=self.tracked + (file_name,))

    def without_tracked(self, file_name: FileName) -> "RepositoryState":
        return replace(self, tracked=tuple(name for name in self.tracked if name != file_name))


@dataclass(frozen=True)
class HistoryEntry:
    """One line of history: a version and the first line of its log entry."""
    version: Version
    summary: str

    def format(self) -> str:
        return f"{self.version}: {self.summary}"


@dataclass(frozen=True)
class VersionInfo:
    """Full log entry of a single version."""
    version: Version
    message: str


@dataclass
class StatusReport:
    """Current repository status."""
    head: Version
    tracked: List[FileName] = field(default_factory=list)
    head_message: str = ""
