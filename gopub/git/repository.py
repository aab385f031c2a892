"""Git working copy abstraction.

This module provides the Repository class for the git operations a release
performs inside a clone. All operations return Result types.

Usage:
    repo = Repository(Path("/tmp/clone"))

    match repo.tag("v1.2.3"):
        case Ok(True):
            print("created")
        case Ok(False):
            print("already released")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import os
from pathlib import Path

from gopub.core.result import Err, Ok, Result
from gopub.git.errors import GitError
from gopub.platform.process import ProcessError
from gopub.platform.process import run as run_process

__all__ = [
    "GIT_NETWORK_TIMEOUT_SECONDS",
    "GIT_TIMEOUT_SECONDS",
    "Repository",
    "git_env",
]

# Staging and committing a large generated tree is slow; keep local
# operations generous.
GIT_TIMEOUT_SECONDS = 5 * 60.0
GIT_NETWORK_TIMEOUT_SECONDS = 15 * 60.0

_NETWORK_COMMANDS = frozenset({"clone", "fetch", "ls-remote", "pull", "push"})


def git_env() -> dict[str, str]:
    """Environment for git: never block on an interactive credential prompt."""
    env = dict(os.environ)
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


class Repository:
    """A cloned git repository.

    Attributes:
        path: Path to the working tree root
    """

    def __init__(self, path: Path, *, secrets: tuple[str, ...] = ()) -> None:
        """Initialize repository.

        Args:
            path: Path to repository root (containing .git)
            secrets: Strings to mask in error output (e.g. the clone token,
                which git keeps in the origin URL)
        """
        self.path = path
        self._secrets = secrets

    def checkout(self, branch: str, *, create_if_missing: bool = False) -> Result[None, GitError]:
        """Check out a branch.

        With create_if_missing, a branch unknown to ``origin`` is created
        locally from the current HEAD (``git checkout -B``).
        """
        if create_if_missing and not self.remote_branch_known(branch):
            return self._simple(["checkout", "-B", branch])
        return self._simple(["checkout", branch])

    def remote_branch_known(self, branch: str) -> bool:
        """True if ``origin/<branch>`` exists in this clone."""
        result = self._run(["rev-parse", "--verify", "--quiet", f"refs/remotes/origin/{branch}"])
        return isinstance(result, Ok)

    def identify(self, username: str, email: str) -> Result[None, GitError]:
        """Set the committer identity for this repository only."""
        result = self._simple(["config", "user.name", username])
        if isinstance(result, Err):
            return result
        return self._simple(["config", "user.email", email])

    def add(self, pathspec: str = ".") -> Result[None, GitError]:
        """Stage additions, modifications and deletions under pathspec."""
        return self._simple(["add", "-A", "--", pathspec])

    def fetch_tags(self, depth: int = 1) -> Result[None, GitError]:
        """Fetch every tag of ``origin``.

        A shallow clone only carries the tags that point into its own
        history, so an older release tag would otherwise look missing.
        """
        listed = self._run(["ls-remote", "--tags", "origin"])
        if isinstance(listed, Err):
            return Err(GitError.from_process("ls-remote --tags", listed.error))
        if not listed.value.strip():
            return Ok(None)
        return self._simple(
            ["fetch", "--depth", str(depth), "origin", "+refs/tags/*:refs/tags/*"]
        )

    def has_head(self) -> bool:
        """False on an unborn branch, e.g. right after cloning an empty repository."""
        return isinstance(self._run(["rev-parse", "--verify", "--quiet", "HEAD"]), Ok)

    def diff_index(self) -> Result[bool, GitError]:
        """Compare the index with HEAD.

        Without a HEAD commit, anything staged counts as a change.

        Returns:
            Ok(True) if staged changes exist
            Ok(False) if the index matches HEAD
            Err(GitError) if git fails for another reason
        """
        if not self.has_head():
            staged = self._run(["ls-files", "--cached"])
            if isinstance(staged, Err):
                return Err(GitError.from_process("ls-files", staged.error))
            return Ok(bool(staged.value.strip()))

        result = self._run(["diff-index", "--quiet", "--cached", "HEAD", "--"])
        match result:
            case Ok(_):
                return Ok(False)
            case Err(e) if e.returncode == 1:
                return Ok(True)
            case Err(e):
                return Err(GitError.from_process("diff-index", e))

    def commit(self, message: str) -> Result[None, GitError]:
        return self._simple(["commit", "-m", message])

    def tag(self, name: str) -> Result[bool, GitError]:
        """Create an annotated tag on HEAD.

        Returns:
            Ok(True) if the tag was created
            Ok(False) if a tag with this name already exists
            Err(GitError) on any other failure
        """
        result = self._run(["tag", "-a", name, "-m", name])
        match result:
            case Ok(_):
                return Ok(True)
            case Err(e) if "already exists" in e.output:
                return Ok(False)
            case Err(e):
                return Err(GitError.from_process(f"tag {name}", e))

    def push(self, ref: str) -> Result[None, GitError]:
        return self._simple(["push", "origin", ref])

    def _simple(self, args: list[str]) -> Result[None, GitError]:
        result = self._run(args)
        if isinstance(result, Err):
            return Err(GitError.from_process(" ".join(args[:3]), result.error))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else GIT_TIMEOUT_SECONDS
        )
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            env=git_env(),
            timeout=timeout,
            secrets=self._secrets,
        )
