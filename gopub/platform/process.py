"""Subprocess execution with Result-based error handling.

Wraps subprocess.run so that callers get captured output or a structured
error instead of an exception. Clone URLs can embed an access token, so any
``secrets`` passed in are masked in the recorded command and captured
output before an error leaves this module.

Usage:
    result = run(["git", "status"], cwd=repo_path)
    match result:
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error.output}")
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from gopub.core.result import Err, Ok, Result

__all__ = ["ProcessError", "redact", "run"]

_MASK = "***"


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed (secrets masked).
        returncode: Exit code of the process, -1 if it never ran.
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """Combined stderr and stdout, stripped.

        git reports some failures (e.g. "already exists") on either stream
        depending on version, so checks look at both.
        """
        return "\n".join(s.strip() for s in (self.stderr, self.stdout) if s.strip())

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def redact(text: str, secrets: Iterable[str]) -> str:
    """Replace every non-empty secret in text with a mask."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, _MASK)
    return text


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
    secrets: tuple[str, ...] = (),
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).
        secrets: Strings to mask in the returned error.

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    shown = tuple(redact(part, secrets) for part in cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=shown,
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=shown,
                returncode=-1,
                stdout="",
                stderr=redact(str(e), secrets),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=shown,
                returncode=proc.returncode,
                stdout=redact(proc.stdout or "", secrets),
                stderr=redact(proc.stderr or "", secrets),
            )
        )

    return Ok(proc.stdout or "")
