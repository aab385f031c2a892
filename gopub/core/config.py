"""Typed release configuration.

The release engine never reads the process environment itself. Everything it
needs is captured here in a frozen ``ReleaseConfig`` that is validated once,
before any git command runs. Values come from (highest priority first):

1. CLI flags / environment variables (resolved by the CLI layer)
2. an optional ``gopub.toml`` file with a ``[release]`` table
3. the defaults below
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_int, get_str, get_table

__all__ = [
    "ConfigError",
    "FileConfig",
    "ReleaseConfig",
    "load_config",
    "resolve_config",
    "CONFIG_FILE_NAME",
    "DEFAULT_BRANCH",
    "DEFAULT_CLONE_DEPTH",
    "DEFAULT_SOURCE_DIR",
]

CONFIG_FILE_NAME = "gopub.toml"
DEFAULT_BRANCH = "main"
DEFAULT_CLONE_DEPTH = 1
DEFAULT_SOURCE_DIR = Path("dist") / "go"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when configuration is invalid or cannot be loaded."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FileConfig:
    """Values read from the ``[release]`` table of a config file.

    Every field is optional; None means "not set in the file".
    """

    branch: str | None = None
    dry_run: bool | None = None
    username: str | None = None
    email: str | None = None
    version: str | None = None
    message: str | None = None
    clone_depth: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> FileConfig:
        release: StrDict = get_table(data, "release") or {}
        return cls(
            branch=get_str(release, "branch"),
            dry_run=get_bool(release, "dry_run"),
            username=get_str(release, "username"),
            email=get_str(release, "email"),
            version=get_str(release, "version"),
            message=get_str(release, "message", strip=False),
            clone_depth=get_int(release, "clone_depth"),
        )


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Inputs of a single release run.

    Attributes:
        source_dir: Directory holding the generated module trees
        branch: Branch to commit to and push
        dry_run: Compute everything locally but push nothing
        username: Committer name override (falls back to git config)
        email: Committer email override (falls back to git config)
        version: Global version applied to every module
        message: Commit message override
        clone_depth: History depth of the clone
        work_dir: Keep the clone under this directory instead of a
            temporary one that is removed when the run ends
    """

    source_dir: Path
    branch: str = DEFAULT_BRANCH
    dry_run: bool = False
    username: str | None = None
    email: str | None = None
    version: str | None = None
    message: str | None = None
    clone_depth: int = DEFAULT_CLONE_DEPTH
    work_dir: Path | None = None

    def validate(self) -> Result[ReleaseConfig, ConfigError]:
        if not self.source_dir.is_dir():
            return Err(ConfigError(f"source directory not found: {self.source_dir}"))
        if not self.branch.strip():
            return Err(ConfigError("branch must not be empty"))
        if self.clone_depth < 1:
            return Err(ConfigError(f"clone depth must be at least 1 (got {self.clone_depth})"))
        if self.version is not None and not self.version.strip():
            return Err(ConfigError("version override must not be empty"))
        if self.message is not None and not self.message.strip():
            return Err(ConfigError("commit message override must not be empty"))
        if self.work_dir is not None and self.work_dir.exists() and not self.work_dir.is_dir():
            return Err(ConfigError(f"work directory is not a directory: {self.work_dir}"))
        return Ok(self)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def resolve_config(
    source_dir: Path,
    file_config: FileConfig | None = None,
    *,
    branch: str | None = None,
    dry_run: bool | None = None,
    username: str | None = None,
    email: str | None = None,
    version: str | None = None,
    message: str | None = None,
    clone_depth: int | None = None,
    work_dir: Path | None = None,
) -> ReleaseConfig:
    """Merge explicit values over file values over defaults.

    Blank strings (e.g. an exported but empty ``VERSION``) count as unset.
    A commit message override is kept verbatim.
    """
    fc = file_config or FileConfig()
    if clone_depth is None:
        clone_depth = fc.clone_depth if fc.clone_depth is not None else DEFAULT_CLONE_DEPTH
    return ReleaseConfig(
        source_dir=source_dir.expanduser().resolve(),
        branch=_blank_to_none(branch) or fc.branch or DEFAULT_BRANCH,
        dry_run=dry_run if dry_run is not None else bool(fc.dry_run),
        username=_blank_to_none(username) or fc.username,
        email=_blank_to_none(email) or fc.email,
        version=_blank_to_none(version) or fc.version,
        message=message if message is not None and message.strip() else fc.message,
        clone_depth=clone_depth,
        work_dir=work_dir.expanduser().resolve() if work_dir is not None else None,
    )


def load_config(path: Path) -> Result[FileConfig, ConfigError]:
    """Load the ``[release]`` table from a TOML file.

    Args:
        path: Path to gopub.toml

    Returns:
        Ok(FileConfig) on success, Err(ConfigError) on failure
    """
    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    if "release" in data and get_table(data, "release") is None:
        return Err(ConfigError("[release] must be a TOML table", path=path))
    return Ok(FileConfig.from_dict(data))
