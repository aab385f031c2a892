from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from gopub.core.config import (
    CONFIG_FILE_NAME,
    DEFAULT_SOURCE_DIR,
    FileConfig,
    load_config,
    resolve_config,
)
from gopub.core.errors import ErrorCode
from gopub.core.result import Err
from gopub.git.client import CliGitClient
from gopub.output.console import RichConsole, Style
from gopub.output.errors import print_release_error, release_error_exit_code
from gopub.release.releaser import GoReleaser


def _exit(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))


def _load_file_config(path: Path | None) -> FileConfig | None:
    if path is None:
        default = Path.cwd() / CONFIG_FILE_NAME
        if not default.is_file():
            return None
        path = default

    loaded = load_config(path)
    if isinstance(loaded, Err):
        _exit(loaded.error.message, code=ErrorCode.USER_ERROR)
    return loaded.value


def release(
    directory: Path = typer.Argument(
        DEFAULT_SOURCE_DIR,
        help="Directory holding the generated Go modules.",
    ),
    branch: str | None = typer.Option(
        None, "--branch", envvar="GIT_BRANCH", help="Branch to commit to and push (default: main)."
    ),
    dry_run: bool | None = typer.Option(
        None,
        "--dry-run/--no-dry-run",
        envvar="DRYRUN",
        help="Commit and tag locally, but push nothing.",
    ),
    username: str | None = typer.Option(
        None, "--username", envvar="GIT_USER_NAME", help="Committer name (default: git config)."
    ),
    email: str | None = typer.Option(
        None, "--email", envvar="GIT_USER_EMAIL", help="Committer email (default: git config)."
    ),
    version: str | None = typer.Option(
        None, "--version", envvar="VERSION", help="Version applied to every module."
    ),
    message: str | None = typer.Option(
        None, "--message", envvar="GIT_COMMIT_MESSAGE", help="Commit message override."
    ),
    clone_depth: int | None = typer.Option(
        None, "--clone-depth", envvar="GIT_CLONE_DEPTH", min=1, help="Clone history depth (default: 1)."
    ),
    work_dir: Path | None = typer.Option(
        None, "--work-dir", help="Keep the clone under this directory."
    ),
    config_file: Path | None = typer.Option(
        None, "--config", help=f"Config file (default: ./{CONFIG_FILE_NAME} if present)."
    ),
) -> None:
    """Commit, tag and push generated Go modules to their repository."""
    file_config = _load_file_config(config_file)
    config = resolve_config(
        directory,
        file_config,
        branch=branch,
        dry_run=dry_run,
        username=username,
        email=email,
        version=version,
        message=message,
        clone_depth=clone_depth,
        work_dir=work_dir,
    )

    console = RichConsole()
    releaser = GoReleaser(config=config, git=CliGitClient(), console=console)
    result = releaser.release()
    if isinstance(result, Err):
        print_release_error(result.error, RichConsole(stderr=True))
        raise typer.Exit(code=release_error_exit_code(result.error))

    outcome = result.value
    if outcome.tags is None:
        console.info("nothing to release")
        return

    verb = "tagged (dry run)" if config.dry_run else "released"
    for tag in outcome.tags:
        console.success(f"{verb} {tag}")
    if outcome.repo_dir is not None:
        console.print(f"clone kept at {outcome.repo_dir}", Style.DIM)
