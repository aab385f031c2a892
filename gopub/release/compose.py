from __future__ import annotations

from collections.abc import Sequence

from gopub.release.model import ModuleDescriptor

RELEASE_SCOPE = "chore(release)"


def release_message(modules: Sequence[ModuleDescriptor]) -> str:
    """Commit message for a release.

    One shared version: ``chore(release): v1.2.3``. Otherwise every module
    in discovery order: ``chore(release): module1@v1.1.0 module2@v1.2.0``;
    the root module appears as a bare ``v1.0.0``.
    """
    versions = list(dict.fromkeys(m.version for m in modules))
    if len(versions) == 1:
        return f"{RELEASE_SCOPE}: v{versions[0]}"

    parts = [f"v{m.version}" if m.is_root else f"{m.repo_path}@v{m.version}" for m in modules]
    return f"{RELEASE_SCOPE}: {' '.join(parts)}"
