"""Tests for gopub.core.config module."""

from __future__ import annotations

from pathlib import Path

from gopub.core.config import (
    DEFAULT_BRANCH,
    DEFAULT_CLONE_DEPTH,
    FileConfig,
    ReleaseConfig,
    load_config,
    resolve_config,
)
from gopub.core.errors import ErrorCode
from gopub.core.result import Err, Ok
from gopub.core.structured import get_bool, get_int, get_str, get_table


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_full_table(self, tmp_path: Path) -> None:
        config_file = tmp_path / "gopub.toml"
        config_file.write_text(
            "[release]\n"
            'branch = "dev"\n'
            "dry_run = true\n"
            'username = "bot"\n'
            'email = "bot@example.com"\n'
            'version = "1.2.3"\n'
            'message = "release"\n'
            "clone_depth = 5\n",
            encoding="utf-8",
        )

        result = load_config(config_file)

        assert result == Ok(
            FileConfig(
                branch="dev",
                dry_run=True,
                username="bot",
                email="bot@example.com",
                version="1.2.3",
                message="release",
                clone_depth=5,
            )
        )

    def test_missing_table_is_empty(self, tmp_path: Path) -> None:
        config_file = tmp_path / "gopub.toml"
        config_file.write_text("[other]\nkey = 1\n", encoding="utf-8")

        assert load_config(config_file) == Ok(FileConfig())

    def test_wrong_types_are_ignored(self, tmp_path: Path) -> None:
        config_file = tmp_path / "gopub.toml"
        config_file.write_text(
            '[release]\nbranch = 3\ndry_run = "yes"\nclone_depth = true\n', encoding="utf-8"
        )

        assert load_config(config_file) == Ok(FileConfig())

    def test_file_not_found(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message
        assert result.error.path == tmp_path / "missing.toml"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "gopub.toml"
        config_file.write_text("[release\n", encoding="utf-8")

        result = load_config(config_file)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_release_not_a_table(self, tmp_path: Path) -> None:
        config_file = tmp_path / "gopub.toml"
        config_file.write_text('release = "main"\n', encoding="utf-8")

        result = load_config(config_file)

        assert isinstance(result, Err)
        assert "[release]" in result.error.message


class TestResolveConfig:
    """Tests for resolve_config() precedence."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = resolve_config(tmp_path)

        assert config.source_dir == tmp_path.resolve()
        assert config.branch == DEFAULT_BRANCH
        assert config.dry_run is False
        assert config.clone_depth == DEFAULT_CLONE_DEPTH
        assert config.version is None
        assert config.work_dir is None

    def test_file_values_used(self, tmp_path: Path) -> None:
        fc = FileConfig(branch="dev", dry_run=True, version="2.0.0", clone_depth=3)

        config = resolve_config(tmp_path, fc)

        assert config.branch == "dev"
        assert config.dry_run is True
        assert config.version == "2.0.0"
        assert config.clone_depth == 3

    def test_explicit_values_win(self, tmp_path: Path) -> None:
        fc = FileConfig(branch="dev", dry_run=True, username="file-user", clone_depth=3)

        config = resolve_config(
            tmp_path, fc, branch="boo", dry_run=False, username="cli-user", clone_depth=10
        )

        assert config.branch == "boo"
        assert config.dry_run is False
        assert config.username == "cli-user"
        assert config.clone_depth == 10

    def test_blank_values_count_as_unset(self, tmp_path: Path) -> None:
        """An exported but empty VERSION must not override anything."""
        fc = FileConfig(version="1.0.0")

        config = resolve_config(tmp_path, fc, version="  ", branch="", message="")

        assert config.version == "1.0.0"
        assert config.branch == DEFAULT_BRANCH
        assert config.message is None

    def test_message_kept_verbatim(self, tmp_path: Path) -> None:
        config = resolve_config(tmp_path, message="  fix: regenerate\n\nbody\n")
        assert config.message == "  fix: regenerate\n\nbody\n"

    def test_file_message_kept_verbatim(self, tmp_path: Path) -> None:
        config_file = tmp_path / "gopub.toml"
        config_file.write_text('[release]\nmessage = "release\\n\\ndetails "\n', encoding="utf-8")

        fc = load_config(config_file).unwrap()

        assert fc.message == "release\n\ndetails "
        assert resolve_config(tmp_path, fc).message == "release\n\ndetails "

    def test_work_dir_resolved(self, tmp_path: Path) -> None:
        config = resolve_config(tmp_path, work_dir=tmp_path / "work")
        assert config.work_dir == (tmp_path / "work").resolve()


class TestReleaseConfigValidate:
    def test_valid(self, tmp_path: Path) -> None:
        config = ReleaseConfig(source_dir=tmp_path)
        assert config.validate() == Ok(config)

    def test_missing_source_dir(self, tmp_path: Path) -> None:
        result = ReleaseConfig(source_dir=tmp_path / "nope").validate()

        assert isinstance(result, Err)
        assert "source directory not found" in result.error.message

    def test_empty_branch(self, tmp_path: Path) -> None:
        result = ReleaseConfig(source_dir=tmp_path, branch=" ").validate()
        assert isinstance(result, Err)

    def test_clone_depth_below_one(self, tmp_path: Path) -> None:
        result = ReleaseConfig(source_dir=tmp_path, clone_depth=0).validate()

        assert isinstance(result, Err)
        assert "clone depth" in result.error.message

    def test_empty_version_override(self, tmp_path: Path) -> None:
        result = ReleaseConfig(source_dir=tmp_path, version="").validate()
        assert isinstance(result, Err)

    def test_work_dir_is_a_file(self, tmp_path: Path) -> None:
        work = tmp_path / "work"
        work.write_text("", encoding="utf-8")

        result = ReleaseConfig(source_dir=tmp_path, work_dir=work).validate()

        assert isinstance(result, Err)
        assert "not a directory" in result.error.message


class TestStructured:
    def test_get_str_strips(self) -> None:
        assert get_str({"k": "  v  "}, "k") == "v"
        assert get_str({"k": "   "}, "k") is None
        assert get_str({"k": 1}, "k") is None

    def test_get_str_without_strip(self) -> None:
        assert get_str({"k": " v\n"}, "k", strip=False) == " v\n"
        assert get_str({"k": "  "}, "k", strip=False) is None

    def test_get_int_rejects_bool(self) -> None:
        assert get_int({"k": 3}, "k") == 3
        assert get_int({"k": True}, "k") is None

    def test_get_bool(self) -> None:
        assert get_bool({"k": False}, "k") is False
        assert get_bool({"k": 0}, "k") is None

    def test_get_table(self) -> None:
        assert get_table({"t": {"a": 1}}, "t") == {"a": 1}
        assert get_table({"t": [1]}, "t") is None


class TestErrorCode:
    def test_values_are_stable(self) -> None:
        assert int(ErrorCode.OK) == 0
        assert int(ErrorCode.USER_ERROR) == 1
        assert int(ErrorCode.ENV_ERROR) == 2
        assert int(ErrorCode.GIT_ERROR) == 3
        assert int(ErrorCode.NETWORK_ERROR) == 4
        assert int(ErrorCode.IO_ERROR) == 5

    def test_str(self) -> None:
        assert str(ErrorCode.NETWORK_ERROR) == "network error"
