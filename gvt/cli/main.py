"""Main CLI entry point for GVT."""

import logging
import sys
import traceback
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Iterator, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ..core.config import ConfigError, ConfigManager
from ..core.exceptions import (
    AlreadyInitializedError,
    AlreadyTrackedError,
    FileNotFoundInWorkingTreeError,
    GvtError,
    InvalidVersionError,
    NotInitializedError,
    NotTrackedError,
    StorageFaultError,
)
from ..core.history import HistoryView, format_version
from ..core.models import added_message, committed_message, detached_message
from ..core.repository import Repository
from ..storage.layout import REPOSITORY_DIR_NAME


logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Process exit statuses, one per error kind."""
    OK = 0
    BAD_CONFIG = 1
    ALREADY_INITIALIZED = 10
    FILE_NOT_FOUND = 21
    ALREADY_TRACKED = 22
    NOT_TRACKED = 31
    INVALID_VERSION = 60
    VERIFY_FAILED = 70
    NOT_INITIALIZED = -2
    STORAGE_FAULT = -3


ERROR_EXIT_CODES = {
    NotInitializedError: ExitCode.NOT_INITIALIZED,
    AlreadyInitializedError: ExitCode.ALREADY_INITIALIZED,
    FileNotFoundInWorkingTreeError: ExitCode.FILE_NOT_FOUND,
    AlreadyTrackedError: ExitCode.ALREADY_TRACKED,
    NotTrackedError: ExitCode.NOT_TRACKED,
    InvalidVersionError: ExitCode.INVALID_VERSION,
}

STORAGE_FAULT_MESSAGE = "Underlying system problem. See ERR for details."


def _configure_logging(level: str) -> None:
    package_logger = logging.getLogger("gvt")
    package_logger.setLevel(level.upper())
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@contextmanager
def _exit_on_error() -> Iterator[None]:
    """Translate repository errors into a message and an exit status."""
    try:
        yield
    except StorageFaultError as e:
        logger.error(f"Storage fault: {e}")
        click.echo(STORAGE_FAULT_MESSAGE, err=True)
        click.echo(traceback.format_exc(), err=True)
        sys.exit(ExitCode.STORAGE_FAULT)
    except GvtError as e:
        click.echo(str(e), err=True)
        sys.exit(ERROR_EXIT_CODES[type(e)])


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='Path to configuration file')
@click.option('--project-root', '-p', type=click.Path(exists=True, file_okay=False),
              help='Project root directory')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], project_root: Optional[str], verbose: bool):
    """GVT - minimal local version control for individual files."""
    ctx.ensure_object(dict)

    project_path = Path(project_root) if project_root else Path.cwd()
    config_manager = ConfigManager(project_path)

    try:
        config_data = config_manager.load_config(Path(config) if config else None)
    except ConfigError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(ExitCode.BAD_CONFIG)

    validation_errors = config_manager.validate_config(config_data)
    if validation_errors:
        click.echo("Configuration validation errors:", err=True)
        for error in validation_errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(ExitCode.BAD_CONFIG)

    _configure_logging("DEBUG" if verbose else config_data['logging']['level'])

    ctx.obj['config'] = config_data
    ctx.obj['config_manager'] = config_manager
    ctx.obj['project_root'] = project_path
    ctx.obj['repository'] = Repository(project_path)
    ctx.obj['verbose'] = verbose


def _history_view(ctx: click.Context) -> HistoryView:
    display = ctx.obj['config']['display']
    console = Console(no_color=not display['color'])
    return HistoryView(console=console, style=display['history_style'])


@cli.command()
@click.option('--skip-git-check', is_flag=True, help='Skip git repository detection and .gitignore setup')
@click.pass_context
def init(ctx: click.Context, skip_git_check: bool):
    """Initialize a repository in the project root."""
    repository: Repository = ctx.obj['repository']
    config_manager: ConfigManager = ctx.obj['config_manager']
    verbose = ctx.obj['verbose']

    with _exit_on_error():
        repository.initialize()

    if config_manager.create_default_config_file():
        if verbose:
            click.echo(f"Created configuration file: {config_manager.get_config_path()}")
    else:
        click.echo("Warning: Could not create configuration file", err=True)

    if not skip_git_check and ctx.obj['config']['git_integration']['update_gitignore']:
        _update_gitignore(ctx.obj['project_root'], verbose)

    click.echo("Current directory initialized successfully.")


def _update_gitignore(project_root: Path, verbose: bool) -> None:
    """Add the repository directory to .gitignore when inside a git work tree."""
    import git

    try:
        repo = git.Repo(project_root, search_parent_directories=True)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError):
        if verbose:
            click.echo("No git repository detected - skipping git integration")
        return

    if repo.working_tree_dir is None:
        return

    gitignore_path = Path(repo.working_tree_dir) / ".gitignore"
    gitignore_entry = f"{REPOSITORY_DIR_NAME}/"

    try:
        if gitignore_path.exists():
            gitignore_content = gitignore_path.read_text()
            if gitignore_entry in gitignore_content.splitlines():
                if verbose:
                    click.echo(f"{gitignore_entry} already in .gitignore")
                return
            separator = "" if not gitignore_content or gitignore_content.endswith("\n") else "\n"
            with open(gitignore_path, 'a') as f:
                f.write(f"{separator}{gitignore_entry}\n")
        else:
            gitignore_path.write_text(f"{gitignore_entry}\n")
        click.echo(f"Added {gitignore_entry} to .gitignore")
    except OSError as e:
        click.echo(f"Warning: git integration failed: {e}", err=True)


@cli.command()
@click.argument('file_name')
@click.option('-m', '--message', default="", help='Log entry for the new version')
@click.pass_context
def add(ctx: click.Context, file_name: str, message: str):
    """Start tracking FILE_NAME."""
    with _exit_on_error():
        ctx.obj['repository'].add(file_name, message)
    click.echo(added_message(file_name))


@cli.command()
@click.argument('file_name')
@click.option('-m', '--message', default="", help='Log entry for the new version')
@click.pass_context
def commit(ctx: click.Context, file_name: str, message: str):
    """Record the current content of a tracked FILE_NAME."""
    with _exit_on_error():
        ctx.obj['repository'].commit(file_name, message)
    click.echo(committed_message(file_name))


@cli.command()
@click.argument('file_name')
@click.pass_context
def detach(ctx: click.Context, file_name: str):
    """Stop tracking FILE_NAME."""
    with _exit_on_error():
        ctx.obj['repository'].detach(file_name)
    click.echo(detached_message(file_name))


@cli.command()
@click.argument('version')
@click.pass_context
def checkout(ctx: click.Context, version: str):
    """Restore the files stored in VERSION."""
    with _exit_on_error():
        restored = ctx.obj['repository'].checkout(version)
    if ctx.obj['verbose']:
        for name in restored:
            click.echo(f"Restored {name}")
    click.echo(f"Checkout successful for version: {version}")


@cli.command()
@click.option('-last', '--last', 'last', type=click.IntRange(min=0),
              help='Show only the N most recent versions')
@click.pass_context
def history(ctx: click.Context, last: Optional[int]):
    """List versions from the newest down."""
    with _exit_on_error():
        entries = ctx.obj['repository'].history(last)
    _history_view(ctx).show_history(entries)


@cli.command()
@click.argument('version', required=False)
@click.pass_context
def version(ctx: click.Context, version: Optional[str]):
    """Show the full log entry of VERSION (default: current)."""
    with _exit_on_error():
        info = ctx.obj['repository'].show_version(version)
    click.echo(format_version(info))


@cli.command()
@click.pass_context
def status(ctx: click.Context):
    """Show HEAD and the tracked files."""
    with _exit_on_error():
        report = ctx.obj['repository'].status()
    _history_view(ctx).show_status(report)


@cli.command()
@click.pass_context
def verify(ctx: click.Context):
    """Check the repository for inconsistencies left by interrupted runs."""
    with _exit_on_error():
        problems = ctx.obj['repository'].verify()

    if not problems:
        click.echo("Repository is consistent.")
        return

    click.echo(f"Found {len(problems)} problems:", err=True)
    for problem in problems:
        click.echo(f"  - {problem}", err=True)
    sys.exit(ExitCode.VERIFY_FAILED)


if __name__ == '__main__':
    cli()
