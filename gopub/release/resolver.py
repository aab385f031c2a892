from __future__ import annotations

from collections.abc import Sequence

from gopub.core.result import Err, Ok, Result
from gopub.release.errors import ReleaseError
from gopub.release.model import ModuleDescriptor


def resolve_repository(modules: Sequence[ModuleDescriptor]) -> Result[str, ReleaseError]:
    """Reduce the modules' repository URLs to the single release target."""
    repos = list(dict.fromkeys(m.repo_url for m in modules))
    if not repos:
        return Err(
            ReleaseError(
                kind="no_repository",
                message="Unable to detect repository from module files.",
            )
        )
    if len(repos) > 1:
        return Err(
            ReleaseError(
                kind="multiple_repositories",
                message=f"Multiple repositories found in module files: {', '.join(repos)}",
                hint="All modules of a release must live in the same repository.",
            )
        )
    return Ok(repos[0])
