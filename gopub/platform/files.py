"""Filesystem helpers.

These raise OSError on failure; callers that report errors as values wrap
them at their own boundary.
"""

from __future__ import annotations

import shutil
from collections.abc import Collection
from pathlib import Path

__all__ = ["clear_directory", "copy_tree", "remove_path"]

VCS_DIR = ".git"


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)


def clear_directory(directory: Path, *, exclude: Collection[str] = (VCS_DIR,)) -> None:
    """Remove every entry of directory except names listed in exclude."""
    for entry in sorted(directory.iterdir()):
        if entry.name in exclude:
            continue
        remove_path(entry)


def copy_tree(src: Path, dst: Path) -> None:
    """Copy the contents of src into dst, overwriting existing files.

    A top-level ``.git`` in src is never copied so the destination's own
    repository metadata stays intact.
    """
    dst.mkdir(parents=True, exist_ok=True)
    for entry in sorted(src.iterdir()):
        if entry.name == VCS_DIR:
            continue
        target = dst / entry.name
        if entry.is_dir() and not entry.is_symlink():
            if target.is_symlink() or target.is_file():
                target.unlink()
            shutil.copytree(entry, target, symlinks=True, dirs_exist_ok=True)
        else:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            shutil.copy2(entry, target, follow_symlinks=False)
