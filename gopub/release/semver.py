from __future__ import annotations

import re
from dataclasses import dataclass


_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @property
    def major_suffix(self) -> str | None:
        """Path segment Go requires for majors above 1 (e.g. "v3")."""
        if self.major > 1:
            return f"v{self.major}"
        return None


def parse_version(text: str) -> SemVer | None:
    """Parse "1.2.3", "1.2.3-beta.1" or "1.2.3+build". No leading "v"."""
    m = _SEMVER_RE.match(text)
    if m is None:
        return None
    return SemVer(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        prerelease=m.group(4),
        build=m.group(5),
    )
