"""Error codes for CLI exit status.

Release failures are reported as ReleaseError values; the CLI maps their kind
onto one of these codes so that CI pipelines can tell a misconfiguration from
a failed push.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success (including "nothing to release")
    - 1: User error (bad module files, conflicting versions, bad options)
    - 2: Environment error (git missing, no identity, no credentials)
    - 3: Git error (a local git command failed)
    - 4: Network error (clone or push failed)
    - 5: I/O error (copying generated sources failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
