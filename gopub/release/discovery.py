from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from gopub.core.result import Err, Ok, Result
from gopub.platform.files import VCS_DIR
from gopub.release.descriptor import MOD_FILE, parse_descriptor
from gopub.release.errors import ReleaseError
from gopub.release.model import ModuleDescriptor

__all__ = ["discover_modules", "is_module_dir"]


def is_module_dir(path: Path) -> bool:
    return (path / MOD_FILE).is_file()


def discover_modules(
    source_dir: Path,
    *,
    version_override: str | None = None,
    host_supported: Callable[[str], bool] | None = None,
) -> Result[tuple[ModuleDescriptor, ...], ReleaseError]:
    """Collect the modules of a generated source tree.

    Looks one level deep: immediate child directories sorted by name, then
    the root itself. The order is stable across runs and drives both tag
    creation and the commit message. An empty tuple is a valid result.
    """
    try:
        children = sorted(
            p for p in source_dir.iterdir() if p.is_dir() and p.name != VCS_DIR
        )
    except OSError as e:
        return Err(
            ReleaseError(
                kind="invalid_config",
                message=f"cannot list source directory: {source_dir}",
                hint=str(e),
            )
        )

    modules: list[ModuleDescriptor] = []
    for module_dir in (*children, source_dir):
        if not is_module_dir(module_dir):
            continue
        parsed = parse_descriptor(
            module_dir / MOD_FILE,
            version_override=version_override,
            host_supported=host_supported,
        )
        if isinstance(parsed, Err):
            return parsed
        modules.append(parsed.value)

    return Ok(tuple(modules))
