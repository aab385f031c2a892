"""Parsing of a single Go module.

A module is a directory holding a ``go.mod`` whose ``module`` line declares
the module path, plus (optionally) a ``version`` file. From those, and an
optional global version, this module builds an immutable ModuleDescriptor.

Go's major version rule applies: a module at major version N > 1 must
declare a path ending in the segment ``vN``. That segment is not a
directory in the repository, so it is dropped from ``repo_path``; it is
only ever dropped as a whole segment (``mypackagev3`` stays intact).
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from gopub.core.result import Err, Ok, Result
from gopub.release.errors import ReleaseError
from gopub.release.model import ModuleDescriptor
from gopub.release.semver import parse_version

__all__ = [
    "MOD_FILE",
    "VERSION_FILE",
    "find_module_declaration",
    "parse_descriptor",
    "resolve_version",
]

MOD_FILE = "go.mod"
VERSION_FILE = "version"

_REPO_URL_SEGMENTS = 3


def find_module_declaration(text: str) -> str | None:
    """Return the module path declared in go.mod content, if any.

    Accepts ``module example.com/m``, a quoted path, and a trailing
    ``//`` comment.
    """
    for raw in text.splitlines():
        line = raw.split("//", 1)[0].strip()
        if not line.startswith("module"):
            continue
        rest = line[len("module") :]
        if not rest or not rest[0].isspace():
            continue
        name = rest.strip().strip('"').strip("`").strip()
        if name:
            return name
    return None


def resolve_version(module_dir: Path, version_override: str | None) -> Result[str, ReleaseError]:
    """Determine a module's version from its version file and/or the override.

    Both sources are whitespace-trimmed before comparison. If both are
    present they must agree.
    """
    version_file = module_dir / VERSION_FILE
    module_version: str | None = None
    if version_file.is_file():
        try:
            module_version = version_file.read_text(encoding="utf-8").strip() or None
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                ReleaseError(
                    kind="invalid_module",
                    message=f"cannot read version file: {version_file}",
                    hint=str(e),
                )
            )

    repo_version = version_override.strip() if version_override else None
    repo_version = repo_version or None

    if repo_version and module_version and repo_version != module_version:
        return Err(
            ReleaseError(
                kind="version_conflict",
                message=(
                    f"Repo version ({repo_version}) conflicts with module version "
                    f"({module_version}) for module in {module_dir}"
                ),
                hint="Remove the version file or the global version override.",
            )
        )

    version = module_version or repo_version
    if version is None:
        return Err(
            ReleaseError(
                kind="version_missing",
                message=f"Unable to determine version of module {module_dir}",
                hint=(
                    f"Either include a '{VERSION_FILE}' file, or specify a global "
                    "version using the VERSION environment variable."
                ),
            )
        )
    return Ok(version)


def parse_descriptor(
    mod_file: Path,
    *,
    version_override: str | None = None,
    host_supported: Callable[[str], bool] | None = None,
) -> Result[ModuleDescriptor, ReleaseError]:
    """Parse a go.mod (and its sibling version file) into a ModuleDescriptor.

    Args:
        mod_file: Path to go.mod
        version_override: Global version applied to every module
        host_supported: Host capability check of the git client; when given, a
            module whose repository host it rejects is an error

    Returns:
        Ok(ModuleDescriptor) on success
        Err(ReleaseError) for unreadable files, missing or conflicting
        versions, a missing major version suffix, or an unsupported host
    """
    version_result = resolve_version(mod_file.parent, version_override)
    if isinstance(version_result, Err):
        return version_result
    version = version_result.value

    semver = parse_version(version)
    if semver is None:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"Invalid version '{version}' for module in {mod_file.parent}",
                hint="Expected MAJOR.MINOR.PATCH, without a leading 'v'.",
            )
        )

    try:
        content = mod_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ReleaseError(kind="invalid_module", message=f"cannot read {mod_file}", hint=str(e))
        )

    canonical_name = find_module_declaration(content)
    if canonical_name is None:
        return Err(
            ReleaseError(
                kind="invalid_module",
                message=f"Unable to detect module declaration in {mod_file}",
            )
        )

    segments = canonical_name.split("/")
    if len(segments) < _REPO_URL_SEGMENTS or not all(segments[:_REPO_URL_SEGMENTS]):
        return Err(
            ReleaseError(
                kind="invalid_module",
                message=f"Module path '{canonical_name}' in {mod_file} is not host/org/repo[/path]",
            )
        )

    suffix = semver.major_suffix
    if suffix is not None and segments[-1] != suffix:
        return Err(
            ReleaseError(
                kind="major_version_mismatch",
                message=(
                    f"Module declaration in '{mod_file}' expected to end with '/{suffix}' "
                    "since its major version is larger than 1"
                ),
            )
        )

    repo_url = "/".join(segments[:_REPO_URL_SEGMENTS])
    if host_supported is not None and not host_supported(repo_url):
        return Err(
            ReleaseError(
                kind="unsupported_host",
                message=f"Repository must be hosted on github.com. Found: '{repo_url}' in {mod_file}",
                hint="Set GITHUB_USE_SSH, or GH_ENTERPRISE_TOKEN and GH_HOST.",
            )
        )

    path_segments = segments[_REPO_URL_SEGMENTS:]
    if suffix is not None and path_segments and path_segments[-1] == suffix:
        path_segments = path_segments[:-1]
    repo_path = "/".join(s for s in path_segments if s)

    return Ok(
        ModuleDescriptor(
            mod_file=mod_file,
            version=version,
            canonical_name=canonical_name,
            repo_url=repo_url,
            repo_path=repo_path,
        )
    )
