from __future__ import annotations

from dataclasses import dataclass

from gopub.platform.process import ProcessError

__all__ = ["GitError"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "push origin main")
        message: Captured git output, or a description when git never ran
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1

    @classmethod
    def from_process(cls, command: str, error: ProcessError) -> GitError:
        return cls(
            command=command,
            message=error.output or f"git {command} failed",
            returncode=error.returncode,
        )
