"""Test configuration and fixtures."""

import pytest
from pathlib import Path

from gvt.core.repository import Repository


@pytest.fixture
def temp_project(tmp_path):
    """Create an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def repository(temp_project):
    """Repository handle on an uninitialized project."""
    return Repository(temp_project)


@pytest.fixture
def initialized_repository(repository):
    """Repository initialized at version 0."""
    repository.initialize()
    return repository


@pytest.fixture
def write_file(temp_project):
    """Write a working file in the project and return its path."""
    def _write(name: str, content: str) -> Path:
        path = temp_project / name
        path.write_text(content)
        return path
    return _write
