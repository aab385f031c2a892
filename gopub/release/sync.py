"""Synchronize generated sources into a repository clone.

Copying alone only ever adds or overwrites, so files and modules removed
from the generated output would survive in the repository forever. Each
sync therefore deletes first, then copies:

- Root module repository (go.mod at the top of the clone): everything
  except ``.git`` is generated, so the clone is emptied.
- Otherwise: only child directories that are modules are deleted. Other
  content (docs, CI config, ...) is left alone.
"""

from __future__ import annotations

from pathlib import Path

from gopub.core.result import Err, Ok, Result
from gopub.platform.files import VCS_DIR, clear_directory, copy_tree, remove_path
from gopub.release.discovery import is_module_dir
from gopub.release.errors import ReleaseError

__all__ = ["sync_content"]


def _remove_modules(repo_dir: Path) -> None:
    for child in sorted(repo_dir.iterdir()):
        if child.name == VCS_DIR or child.is_symlink() or not child.is_dir():
            continue
        if is_module_dir(child):
            remove_path(child)


def sync_content(source_dir: Path, repo_dir: Path) -> Result[None, ReleaseError]:
    """Make repo_dir reflect source_dir, keeping ``.git`` and non-module content."""
    try:
        if is_module_dir(repo_dir):
            clear_directory(repo_dir, exclude=(VCS_DIR,))
        else:
            _remove_modules(repo_dir)
        copy_tree(source_dir, repo_dir)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="sync_failed",
                message=f"failed to sync {source_dir} into {repo_dir}",
                hint=str(e),
            )
        )
    return Ok(None)
