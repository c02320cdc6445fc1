"""Serialization of the repository's text records.

HEAD, the tracked index and the per-version log entries are plain text files.
All parsing and formatting of those files lives here so the command logic
never depends on the on-disk format.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from ..core.exceptions import StorageFaultError
from ..core.models import RepositoryState, Version
from .layout import RepositoryLayout


logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def _read_text(path: Path, operation: str) -> str:
    try:
        return path.read_text(encoding=ENCODING)
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise StorageFaultError(operation, f"cannot read {path}: {e}") from e


def _write_text(path: Path, content: str, operation: str) -> None:
    try:
        path.write_text(content, encoding=ENCODING)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        raise StorageFaultError(operation, f"cannot write {path}: {e}") from e


def parse_version(text: str) -> Optional[Version]:
    """Parse decimal version text, returning None when it is not one."""
    candidate = text.strip()
    if not candidate or not candidate.isascii() or not candidate.isdigit():
        return None
    return int(candidate)


def format_index(names: Iterable[str]) -> str:
    return "".join(f"{name}\n" for name in names)


def index_entries(content: str) -> List[str]:
    """Split index content into names, one per line, kept exactly as written.

    Only empty lines are dropped; surrounding whitespace is part of a name.
    """
    return [line for line in content.split("\n") if line]


def parse_index(content: str) -> List[str]:
    """Parse index content, dropping empty lines and repeated names."""
    return list(dict.fromkeys(index_entries(content)))


def read_head(layout: RepositoryLayout) -> Version:
    content = _read_text(layout.head_path, "read HEAD")
    version = parse_version(content)
    if version is None:
        raise StorageFaultError("read HEAD", f"malformed HEAD record: {content!r}")
    return version


def write_head(layout: RepositoryLayout, version: Version) -> None:
    _write_text(layout.head_path, str(version), "write HEAD")


def read_index(layout: RepositoryLayout) -> List[str]:
    return parse_index(_read_text(layout.index_path, "read index"))


def read_index_entries(layout: RepositoryLayout) -> List[str]:
    """Every non-empty index line, duplicates included."""
    return index_entries(_read_text(layout.index_path, "read index"))


def write_index(layout: RepositoryLayout, names: Iterable[str]) -> None:
    _write_text(layout.index_path, format_index(names), "write index")


def read_state(layout: RepositoryLayout) -> RepositoryState:
    """Load HEAD and the tracked index."""
    return RepositoryState(head=read_head(layout), tracked=tuple(read_index(layout)))


def write_state(layout: RepositoryLayout, state: RepositoryState) -> None:
    """Persist the index, then HEAD.

    HEAD is written last so that it only advances once everything else for
    the new version is on disk.
    """
    write_index(layout, state.tracked)
    write_head(layout, state.head)


def log_entry_exists(layout: RepositoryLayout, version: Version) -> bool:
    return layout.log_entry_path(version).is_file()


def read_log_entry(layout: RepositoryLayout, version: Version) -> str:
    return _read_text(layout.log_entry_path(version), f"read log entry {version}")


def write_log_entry(layout: RepositoryLayout, version: Version, message: str) -> None:
    _write_text(layout.log_entry_path(version), message, f"write log entry {version}")


def summary_line(message: str) -> str:
    """First line of a log entry, as shown in history."""
    lines = message.strip().splitlines()
    return lines[0].strip() if lines else ""
