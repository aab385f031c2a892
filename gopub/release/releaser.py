"""Release orchestration.

``GoReleaser.release()`` publishes the Go modules of a generated source tree
to the repository they declare:

1. discover modules and resolve the single target repository
2. clone it, fetch every remote tag, and check out / create the release branch
3. sync generated content into the clone and commit it
4. tag every module version that is not tagged yet
5. push the branch and the new tags (or only report them in dry-run mode)

Re-running is the recovery path for any failure: an unchanged tree produces
no commit, and existing tags are never re-created.
"""

from __future__ import annotations

import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from gopub.core.config import ReleaseConfig
from gopub.core.result import Err, Ok, Result
from gopub.git.client import GitClient, WorkingCopy
from gopub.git.errors import GitError
from gopub.output.console import ConsoleProtocol, Style
from gopub.release.compose import release_message
from gopub.release.discovery import discover_modules
from gopub.release.errors import ReleaseError, ReleaseErrorKind
from gopub.release.model import ModuleDescriptor, Release
from gopub.release.resolver import resolve_repository
from gopub.release.sync import sync_content

__all__ = ["GoReleaser", "Identity"]

_CLONE_DIR_NAME = "repo"
_TEMP_PREFIX = "gopub-"


@dataclass(frozen=True, slots=True)
class Identity:
    username: str
    email: str


def _git_failure(kind: ReleaseErrorKind, error: GitError) -> ReleaseError:
    return ReleaseError(kind=kind, message=f"git {error.command} failed", hint=error.message or None)


class GoReleaser:
    """Release a set of Go modules by committing and tagging their repository."""

    def __init__(
        self,
        *,
        config: ReleaseConfig,
        git: GitClient,
        console: ConsoleProtocol,
    ) -> None:
        self._config = config
        self._git = git
        self._console = console

    def release(self) -> Result[Release, ReleaseError]:
        """Run the release.

        Returns:
            Ok(Release) with the created tags, or an empty Release when
            there is nothing to publish
            Err(ReleaseError) on any configuration or execution failure
        """
        preflight = self._preflight()
        if isinstance(preflight, Err):
            return preflight
        identity = preflight.value

        discovered = discover_modules(
            self._config.source_dir,
            version_override=self._config.version,
            host_supported=self._git.supports_host,
        )
        if isinstance(discovered, Err):
            return discovered
        modules = discovered.value

        if not modules:
            self._console.print("No modules detected. Skipping", Style.DIM)
            return Ok(Release())

        self._console.print("Detected modules:")
        for module in modules:
            self._console.print(f" - {module.mod_file}", Style.DIM)

        repo = resolve_repository(modules)
        if isinstance(repo, Err):
            return repo
        repo_url = repo.value
        self._console.print(f"Repository is: {repo_url}")

        if self._config.work_dir is not None:
            self._config.work_dir.mkdir(parents=True, exist_ok=True)
            clone_root = Path(tempfile.mkdtemp(prefix=_TEMP_PREFIX, dir=self._config.work_dir))
            return self._release_into(
                modules, repo_url, clone_root / _CLONE_DIR_NAME, identity, keep=True
            )

        with tempfile.TemporaryDirectory(prefix=_TEMP_PREFIX) as tmp:
            return self._release_into(
                modules, repo_url, Path(tmp) / _CLONE_DIR_NAME, identity, keep=False
            )

    def _preflight(self) -> Result[Identity, ReleaseError]:
        if not self._git.is_available():
            return Err(
                ReleaseError(
                    kind="git_missing",
                    message="git must be available in order to push Go code to GitHub",
                )
            )

        validated = self._config.validate()
        if isinstance(validated, Err):
            return Err(ReleaseError(kind="invalid_config", message=validated.error.message))

        username = self._config.username or self._git.username()
        if not username:
            return Err(
                ReleaseError(
                    kind="identity_missing",
                    message="Unable to detect username",
                    hint="Configure a git user.name or pass GIT_USER_NAME.",
                )
            )

        email = self._config.email or self._git.email()
        if not email:
            return Err(
                ReleaseError(
                    kind="identity_missing",
                    message="Unable to detect user email",
                    hint="Configure a git user.email or pass GIT_USER_EMAIL.",
                )
            )

        return Ok(Identity(username=username, email=email))

    def _clone(self, repo_url: str, repo_dir: Path) -> Result[WorkingCopy, ReleaseError]:
        branch = self._config.branch

        exists = self._git.branch_exists_on_remote(repo_url, branch)
        if isinstance(exists, Err):
            return Err(_git_failure("clone_failed", exists.error))
        if not exists.value:
            self._console.warning(
                f"Remote branch '{branch}' not found, continuing with default branch."
            )

        cloned = self._git.clone(
            repo_url,
            repo_dir,
            depth=self._config.clone_depth,
            branch=branch if exists.value else None,
            tags=True,
        )
        if isinstance(cloned, Err):
            return Err(_git_failure("clone_failed", cloned.error))

        fetched = cloned.value.fetch_tags(self._config.clone_depth)
        if isinstance(fetched, Err):
            return Err(_git_failure("clone_failed", fetched.error))
        return Ok(cloned.value)

    def _release_into(
        self,
        modules: Sequence[ModuleDescriptor],
        repo_url: str,
        repo_dir: Path,
        identity: Identity,
        *,
        keep: bool,
    ) -> Result[Release, ReleaseError]:
        cloned = self._clone(repo_url, repo_dir)
        if isinstance(cloned, Err):
            return cloned
        repo = cloned.value

        identified = repo.identify(identity.username, identity.email)
        if isinstance(identified, Err):
            return Err(_git_failure("git_failed", identified.error))

        checked_out = repo.checkout(self._config.branch, create_if_missing=True)
        if isinstance(checked_out, Err):
            return Err(_git_failure("git_failed", checked_out.error))

        synced = sync_content(self._config.source_dir, repo.path)
        if isinstance(synced, Err):
            return synced

        commit = self._commit(repo, modules)
        if isinstance(commit, Err):
            return commit
        message = commit.value
        if message is None:
            return Ok(Release())

        tagged = self._tag(repo, modules)
        if isinstance(tagged, Err):
            return tagged
        tags = tagged.value
        if not tags:
            self._console.print("All tags already exist. Skipping release", Style.DIM)
            return Ok(Release())

        pushed = self._push(repo, tags)
        if isinstance(pushed, Err):
            return pushed

        return Ok(
            Release(
                tags=tuple(tags),
                commit_message=message,
                repo_dir=repo.path if keep else None,
            )
        )

    def _commit(
        self, repo: WorkingCopy, modules: Sequence[ModuleDescriptor]
    ) -> Result[str | None, ReleaseError]:
        """Stage and commit; Ok(None) when nothing changed."""
        added = repo.add(".")
        if isinstance(added, Err):
            return Err(_git_failure("git_failed", added.error))

        changed = repo.diff_index()
        if isinstance(changed, Err):
            return Err(_git_failure("git_failed", changed.error))
        if not changed.value:
            self._console.print("No changes. Skipping release", Style.DIM)
            return Ok(None)

        message = self._config.message or release_message(modules)
        committed = repo.commit(message)
        if isinstance(committed, Err):
            return Err(_git_failure("git_failed", committed.error))
        return Ok(message)

    def _tag(
        self, repo: WorkingCopy, modules: Sequence[ModuleDescriptor]
    ) -> Result[list[str], ReleaseError]:
        tags: list[str] = []
        for module in modules:
            name = module.tag_name
            created = repo.tag(name)
            if isinstance(created, Err):
                return Err(_git_failure("git_failed", created.error))
            if created.value:
                tags.append(name)
            else:
                self._console.print(f"Tag {name} already exists", Style.DIM)
        return Ok(tags)

    def _push(self, repo: WorkingCopy, tags: Sequence[str]) -> Result[None, ReleaseError]:
        refs = [self._config.branch, *tags]

        if self._config.dry_run:
            self._console.header("DRY-RUN MODE: nothing will be pushed")
            for ref in refs:
                self._console.print(f"Remote ref will be updated: {ref}")
            return Ok(None)

        for ref in refs:
            pushed = repo.push(ref)
            if isinstance(pushed, Err):
                return Err(_git_failure("push_failed", pushed.error))
            self._console.success(f"pushed {ref}")
        return Ok(None)
