"""Error types for the release engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    # configuration
    "git_missing",
    "identity_missing",
    "invalid_config",
    "invalid_module",
    "invalid_version",
    "version_missing",
    "version_conflict",
    "major_version_mismatch",
    "unsupported_host",
    "no_repository",
    "multiple_repositories",
    # execution
    "clone_failed",
    "sync_failed",
    "git_failed",
    "push_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``hint`` carries either a remedy or the captured output of the command
    that failed.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
