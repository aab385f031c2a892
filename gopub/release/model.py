from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ModuleDescriptor:
    """A Go module found in the generated sources.

    Attributes:
        mod_file: Path to the module's go.mod
        version: Semantic version, without a leading "v" (e.g. "3.3.3")
        canonical_name: Module path (e.g. "github.com/aws/constructs-go/constructs/v3")
        repo_url: First three segments of the module path (e.g. "github.com/aws/constructs-go")
        repo_path: Directory of the module inside the repository, without
            the major version suffix (e.g. "constructs"); "" for the root module
    """

    mod_file: Path
    version: str
    canonical_name: str
    repo_url: str
    repo_path: str

    @property
    def is_root(self) -> bool:
        return self.repo_path == ""

    @property
    def tag_name(self) -> str:
        # root: v1.2.3, submodule: constructs/v1.2.3
        if self.is_root:
            return f"v{self.version}"
        return f"{self.repo_path}/v{self.version}"


@dataclass(frozen=True, slots=True)
class Release:
    """Outcome of a release run.

    A release with no tags is a no-op: there were no modules, no content
    changes, or every tag already existed.
    """

    tags: tuple[str, ...] | None = None
    commit_message: str | None = None
    repo_dir: Path | None = None

    @property
    def is_noop(self) -> bool:
        return self.tags is None
