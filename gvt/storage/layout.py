"""On-disk layout of a GVT repository."""

from pathlib import Path


REPOSITORY_DIR_NAME = ".gvt"


class RepositoryLayout:
    """Resolves every path of a repository rooted at a project directory.

    The layout only computes paths; it never touches the filesystem.
    """

    HEAD_NAME = "HEAD"
    INDEX_NAME = "index.txt"
    VERSIONS_DIR_NAME = "versions"
    FILES_DIR_NAME = "files"
    CONFIG_NAME = "config.yml"

    def __init__(self, project_root: Path):
        self.project_root = Path(project_root)
        self.repo_dir = self.project_root / REPOSITORY_DIR_NAME
        self.head_path = self.repo_dir / self.HEAD_NAME
        self.index_path = self.repo_dir / self.INDEX_NAME
        self.versions_dir = self.repo_dir / self.VERSIONS_DIR_NAME
        self.files_dir = self.repo_dir / self.FILES_DIR_NAME
        self.config_path = self.repo_dir / self.CONFIG_NAME

    def log_entry_path(self, version: int) -> Path:
        return self.versions_dir / f"{version}.txt"

    def snapshot_dir(self, version: int) -> Path:
        return self.files_dir / str(version)

    def working_file(self, file_name: str) -> Path:
        return self.project_root / file_name

    def exists(self) -> bool:
        return self.repo_dir.exists()

    def __repr__(self) -> str:
        return f"RepositoryLayout({self.project_root!r})"
