"""Git host credentials and capability checks.

Module repositories are cloned over https with an access token by default.
Two alternatives widen the set of hosts that can be released to:

- ssh (``GITHUB_USE_SSH``): clone ``git@host:org/repo.git`` with whatever
  keys the agent provides, for any host.
- GitHub Enterprise (``GH_ENTERPRISE_TOKEN`` + ``GH_HOST``): clone the
  enterprise host over https with the enterprise token.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from gopub.core.result import Err, Ok, Result
from gopub.git.errors import GitError

__all__ = ["GitAuth", "PUBLIC_HOST"]

PUBLIC_HOST = "github.com"

_FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


def _flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() not in _FALSE_VALUES


def _non_blank(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


@dataclass(frozen=True, slots=True)
class GitAuth:
    """Credentials available to the git client."""

    use_ssh: bool = False
    github_token: str | None = None
    enterprise_token: str | None = None
    enterprise_host: str | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> GitAuth:
        e = os.environ if env is None else env
        return cls(
            use_ssh=_flag(e.get("GITHUB_USE_SSH")),
            github_token=_non_blank(e.get("GITHUB_TOKEN")),
            enterprise_token=_non_blank(e.get("GH_ENTERPRISE_TOKEN"))
            or _non_blank(e.get("GITHUB_ENTERPRISE_TOKEN")),
            enterprise_host=_non_blank(e.get("GH_HOST")),
        )

    def detect_ssh(self) -> bool:
        return self.use_ssh

    def detect_ghe(self) -> bool:
        """True when both an enterprise token and its host are configured."""
        return self.enterprise_token is not None and self.enterprise_host is not None

    def supports_host(self, repo_url: str) -> bool:
        host = repo_url.split("/", 1)[0]
        return host == PUBLIC_HOST or self.detect_ssh() or self.detect_ghe()

    def token_for(self, host: str) -> str | None:
        if self.detect_ghe() and host == self.enterprise_host:
            return self.enterprise_token
        return self.github_token

    @property
    def secrets(self) -> tuple[str, ...]:
        return tuple(t for t in (self.github_token, self.enterprise_token) if t)

    def clone_url(self, repo_url: str) -> Result[str, GitError]:
        """Build the URL git clones from, e.g. for ``github.com/org/repo``.

        Returns:
            Ok(url) on success
            Err(GitError) when neither ssh nor a token is configured
        """
        host, _, path = repo_url.partition("/")
        if self.detect_ssh():
            return Ok(f"git@{host}:{path}.git")

        token = self.token_for(host)
        if token is None:
            return Err(
                GitError(
                    command="clone",
                    message=(
                        "GITHUB_TOKEN env variable is required when "
                        "GITHUB_USE_SSH env variable is not used"
                    ),
                )
            )
        return Ok(f"https://{token}@{repo_url}.git")
