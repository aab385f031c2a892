"""Go module release engine.

Layers, leaves first:
- descriptor / discovery: pure parsing of the generated source tree
- resolver / compose: repository, tag and commit-message policy
- sync: delete-then-copy of generated content into a clone
- releaser: orchestration against an injected GitClient
"""

from __future__ import annotations

from gopub.release.errors import ReleaseError, ReleaseErrorKind
from gopub.release.model import ModuleDescriptor, Release
from gopub.release.releaser import GoReleaser

__all__ = [
    "GoReleaser",
    "ModuleDescriptor",
    "Release",
    "ReleaseError",
    "ReleaseErrorKind",
]
