"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gopub.core.errors import ErrorCode
from gopub.output.console import Style
from gopub.release.errors import ReleaseError

if TYPE_CHECKING:
    from gopub.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        for line in error.hint.splitlines():
            console.print(f"  {line}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error."""
    match error.kind:
        case (
            "invalid_config"
            | "invalid_module"
            | "invalid_version"
            | "version_missing"
            | "version_conflict"
            | "major_version_mismatch"
            | "no_repository"
            | "multiple_repositories"
        ):
            return int(ErrorCode.USER_ERROR)
        case "git_missing" | "identity_missing" | "unsupported_host":
            return int(ErrorCode.ENV_ERROR)
        case "git_failed":
            return int(ErrorCode.GIT_ERROR)
        case "clone_failed" | "push_failed":
            return int(ErrorCode.NETWORK_ERROR)
        case "sync_failed":
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
