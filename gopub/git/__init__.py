"""Git operations module.

This module provides the git capability the release engine depends on:
- GitClient / WorkingCopy: the protocols the engine is written against
- CliGitClient / Repository: implementations on top of the git executable
- GitAuth: credential and host capability checks

Usage:
    from gopub.git import CliGitClient

    git = CliGitClient()
    match git.clone("github.com/org/repo", Path("/tmp/repo"), branch="main"):
        case Ok(repo):
            repo.checkout("main", create_if_missing=True)
        case Err(e):
            print(e.message)
"""

from gopub.git.auth import PUBLIC_HOST, GitAuth
from gopub.git.client import CliGitClient, GitClient, WorkingCopy
from gopub.git.errors import GitError
from gopub.git.repository import Repository

__all__ = [
    "CliGitClient",
    "GitAuth",
    "GitClient",
    "GitError",
    "PUBLIC_HOST",
    "Repository",
    "WorkingCopy",
]
