"""Tests for gopub.git.client module."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from gopub.core.result import Err, Ok
from gopub.git.auth import GitAuth
from gopub.git.client import CliGitClient
from gopub.git.repository import Repository


def make_completed_process(
    stdout: str = "",
    stderr: str = "",
    returncode: int = 0,
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(
        args=["git"], returncode=returncode, stdout=stdout, stderr=stderr
    )


def _client(tmp_path: Path, **auth: object) -> CliGitClient:
    return CliGitClient(auth=GitAuth(**auth), cwd=tmp_path)  # type: ignore[arg-type]


class TestClone:
    @patch("subprocess.run")
    def test_command(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()
        dest = tmp_path / "work" / "repo"

        result = _client(tmp_path, github_token="tok").clone(
            "github.com/aws/repo", dest, depth=3, branch="main"
        )

        assert isinstance(result, Ok)
        assert isinstance(result.value, Repository)
        assert result.value.path == dest
        assert dest.parent.is_dir()
        assert mock_run.call_args.args[0] == [
            "git",
            "clone",
            "--depth",
            "3",
            "--branch",
            "main",
            "https://tok@github.com/aws/repo.git",
            str(dest),
        ]

    @patch("subprocess.run")
    def test_without_tags(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        _client(tmp_path).clone("github.com/aws/repo", tmp_path / "repo", tags=False)

        assert "--no-tags" in mock_run.call_args.args[0]

    @patch("subprocess.run")
    def test_default_branch(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        _client(tmp_path, use_ssh=True).clone("github.com/aws/repo", tmp_path / "repo")

        cmd = mock_run.call_args.args[0]
        assert "--branch" not in cmd
        assert "git@github.com:aws/repo.git" in cmd

    @patch("subprocess.run")
    def test_failure_masks_token(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=128,
            stderr="fatal: repository 'https://tok@github.com/aws/repo.git/' not found",
        )

        result = _client(tmp_path, github_token="tok").clone(
            "github.com/aws/repo", tmp_path / "repo"
        )

        assert isinstance(result, Err)
        assert result.error.command == "clone"
        assert "tok@" not in result.error.message

    @patch("subprocess.run")
    def test_missing_credentials(self, mock_run: MagicMock, tmp_path: Path) -> None:
        result = _client(tmp_path).clone("github.com/aws/repo", tmp_path / "repo")

        assert isinstance(result, Err)
        assert "GITHUB_TOKEN" in result.error.message
        mock_run.assert_not_called()


class TestBranchExists:
    @patch("subprocess.run")
    def test_found(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="abc123\trefs/heads/main\n")

        result = _client(tmp_path, github_token="tok").branch_exists_on_remote(
            "github.com/aws/repo", "main"
        )

        assert result == Ok(True)
        assert mock_run.call_args.args[0][:3] == ["git", "ls-remote", "--heads"]

    @patch("subprocess.run")
    def test_not_found(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="")

        result = _client(tmp_path, github_token="tok").branch_exists_on_remote(
            "github.com/aws/repo", "boo"
        )

        assert result == Ok(False)

    @patch("subprocess.run")
    def test_prefix_match_is_not_a_match(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="abc123\trefs/heads/feature/boo\n")

        result = _client(tmp_path, github_token="tok").branch_exists_on_remote(
            "github.com/aws/repo", "boo"
        )

        assert result == Ok(False)

    @patch("subprocess.run")
    def test_error(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(returncode=128, stderr="fatal: denied")

        result = _client(tmp_path, github_token="tok").branch_exists_on_remote(
            "github.com/aws/repo", "main"
        )

        assert isinstance(result, Err)
        assert result.error.command == "ls-remote"


class TestIdentity:
    @patch("subprocess.run")
    def test_username(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="Jane Doe\n")

        assert _client(tmp_path).username() == "Jane Doe"
        assert mock_run.call_args.args[0] == ["git", "config", "user.name"]

    @patch("subprocess.run")
    def test_unset_email(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(returncode=1)
        assert _client(tmp_path).email() is None


def test_supports_host_delegates_to_auth(tmp_path: Path) -> None:
    assert _client(tmp_path).supports_host("github.com/aws/repo") is True
    assert _client(tmp_path).supports_host("gitlab.com/aws/repo") is False
    assert _client(tmp_path, use_ssh=True).supports_host("gitlab.com/aws/repo") is True
