"""Git capability consumed by the release engine.

The engine only talks to git through ``GitClient`` (remote and global
operations) and the ``WorkingCopy`` it returns from ``clone`` (operations
inside the clone). ``CliGitClient`` implements both on top of the git
executable; tests substitute their own implementation.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol

from gopub.core.result import Err, Ok, Result
from gopub.git.auth import GitAuth
from gopub.git.errors import GitError
from gopub.git.repository import (
    GIT_NETWORK_TIMEOUT_SECONDS,
    GIT_TIMEOUT_SECONDS,
    Repository,
    git_env,
)
from gopub.platform.process import run as run_process

__all__ = ["CliGitClient", "GitClient", "WorkingCopy"]


class WorkingCopy(Protocol):
    """Operations inside a cloned repository."""

    path: Path

    def checkout(self, branch: str, *, create_if_missing: bool = False) -> Result[None, GitError]: ...

    def identify(self, username: str, email: str) -> Result[None, GitError]: ...

    def add(self, pathspec: str = ".") -> Result[None, GitError]: ...

    def fetch_tags(self, depth: int = 1) -> Result[None, GitError]:
        """Make every remote tag visible locally, whatever the clone depth."""
        ...

    def diff_index(self) -> Result[bool, GitError]:
        """Ok(True) when staged changes differ from HEAD."""
        ...

    def commit(self, message: str) -> Result[None, GitError]: ...

    def tag(self, name: str) -> Result[bool, GitError]:
        """Ok(True) if created, Ok(False) if the tag already existed."""
        ...

    def push(self, ref: str) -> Result[None, GitError]: ...


class GitClient(Protocol):
    """Remote, global and capability operations."""

    def is_available(self) -> bool: ...

    def supports_host(self, repo_url: str) -> bool:
        """True if modules hosted at repo_url can be cloned with the
        configured credentials."""
        ...

    def username(self) -> str | None: ...

    def email(self) -> str | None: ...

    def branch_exists_on_remote(self, repo_url: str, branch: str) -> Result[bool, GitError]: ...

    def clone(
        self,
        repo_url: str,
        dest: Path,
        *,
        depth: int = 1,
        branch: str | None = None,
        tags: bool = True,
    ) -> Result[WorkingCopy, GitError]: ...


class CliGitClient:
    """GitClient backed by the git executable.

    Attributes:
        auth: Credentials used to build clone URLs
        cwd: Directory git config lookups run from
    """

    def __init__(self, *, auth: GitAuth | None = None, cwd: Path | None = None) -> None:
        self.auth = auth if auth is not None else GitAuth.from_env()
        self.cwd = cwd if cwd is not None else Path.cwd()

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def supports_host(self, repo_url: str) -> bool:
        return self.auth.supports_host(repo_url)

    def username(self) -> str | None:
        return self._config_get("user.name")

    def email(self) -> str | None:
        return self._config_get("user.email")

    def remote_url(self, repo_url: str) -> Result[str, GitError]:
        """URL git talks to for a module repository URL."""
        return self.auth.clone_url(repo_url)

    def branch_exists_on_remote(self, repo_url: str, branch: str) -> Result[bool, GitError]:
        url = self.remote_url(repo_url)
        if isinstance(url, Err):
            return url

        result = run_process(
            ["git", "ls-remote", "--heads", url.value, branch],
            cwd=self.cwd,
            env=git_env(),
            timeout=GIT_NETWORK_TIMEOUT_SECONDS,
            secrets=self.auth.secrets,
        )
        if isinstance(result, Err):
            return Err(GitError.from_process("ls-remote", result.error))

        wanted = f"refs/heads/{branch}"
        refs = [line.split()[-1] for line in result.value.splitlines() if line.strip()]
        return Ok(wanted in refs)

    def clone(
        self,
        repo_url: str,
        dest: Path,
        *,
        depth: int = 1,
        branch: str | None = None,
        tags: bool = True,
    ) -> Result[WorkingCopy, GitError]:
        url = self.remote_url(repo_url)
        if isinstance(url, Err):
            return url

        cmd = ["git", "clone", "--depth", str(depth)]
        if not tags:
            cmd.append("--no-tags")
        if branch is not None:
            cmd.extend(["--branch", branch])
        cmd.extend([url.value, str(dest)])

        dest.parent.mkdir(parents=True, exist_ok=True)
        result = run_process(
            cmd,
            cwd=dest.parent,
            env=git_env(),
            timeout=GIT_NETWORK_TIMEOUT_SECONDS,
            secrets=self.auth.secrets,
        )
        if isinstance(result, Err):
            return Err(GitError.from_process("clone", result.error))
        return Ok(Repository(dest, secrets=self.auth.secrets))

    def _config_get(self, key: str) -> str | None:
        result = run_process(
            ["git", "config", key],
            cwd=self.cwd,
            env=git_env(),
            timeout=GIT_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return None
        return result.value.strip() or None
