"""Tests for gopub.git.auth module."""

from __future__ import annotations

from gopub.core.result import Err, Ok
from gopub.git.auth import GitAuth


class TestFromEnv:
    def test_empty_env(self) -> None:
        assert GitAuth.from_env({}) == GitAuth()

    def test_reads_tokens(self) -> None:
        auth = GitAuth.from_env(
            {
                "GITHUB_TOKEN": "tok",
                "GH_ENTERPRISE_TOKEN": "ent",
                "GH_HOST": "github.corp.example",
            }
        )
        assert auth.github_token == "tok"
        assert auth.enterprise_token == "ent"
        assert auth.enterprise_host == "github.corp.example"

    def test_enterprise_token_alias(self) -> None:
        auth = GitAuth.from_env({"GITHUB_ENTERPRISE_TOKEN": "ent"})
        assert auth.enterprise_token == "ent"

    def test_ssh_flag(self) -> None:
        assert GitAuth.from_env({"GITHUB_USE_SSH": "1"}).use_ssh is True
        assert GitAuth.from_env({"GITHUB_USE_SSH": "true"}).use_ssh is True
        assert GitAuth.from_env({"GITHUB_USE_SSH": "false"}).use_ssh is False
        assert GitAuth.from_env({"GITHUB_USE_SSH": ""}).use_ssh is False

    def test_blank_token_is_unset(self) -> None:
        assert GitAuth.from_env({"GITHUB_TOKEN": "  "}).github_token is None


class TestSupportsHost:
    def test_public_host_only_by_default(self) -> None:
        auth = GitAuth(github_token="tok")
        assert auth.supports_host("github.com/aws/repo") is True
        assert auth.supports_host("gitlab.com/aws/repo") is False

    def test_ssh_supports_any_host(self) -> None:
        assert GitAuth(use_ssh=True).supports_host("gitlab.com/aws/repo") is True

    def test_enterprise_needs_token_and_host(self) -> None:
        assert GitAuth(enterprise_token="ent").detect_ghe() is False
        auth = GitAuth(enterprise_token="ent", enterprise_host="github.corp.example")
        assert auth.detect_ghe() is True
        assert auth.supports_host("github.corp.example/org/repo") is True


class TestCloneUrl:
    def test_token_https(self) -> None:
        result = GitAuth(github_token="tok").clone_url("github.com/aws/repo")
        assert result == Ok("https://tok@github.com/aws/repo.git")

    def test_ssh(self) -> None:
        result = GitAuth(use_ssh=True, github_token="tok").clone_url("github.com/aws/repo")
        assert result == Ok("git@github.com:aws/repo.git")

    def test_enterprise_token_for_enterprise_host(self) -> None:
        auth = GitAuth(
            github_token="tok", enterprise_token="ent", enterprise_host="github.corp.example"
        )
        assert auth.clone_url("github.corp.example/org/repo") == Ok(
            "https://ent@github.corp.example/org/repo.git"
        )
        assert auth.clone_url("github.com/org/repo") == Ok("https://tok@github.com/org/repo.git")

    def test_missing_token(self) -> None:
        result = GitAuth().clone_url("github.com/aws/repo")

        assert isinstance(result, Err)
        assert "GITHUB_TOKEN env variable is required" in result.error.message

    def test_secrets(self) -> None:
        assert GitAuth(github_token="a", enterprise_token="b").secrets == ("a", "b")
        assert GitAuth().secrets == ()
