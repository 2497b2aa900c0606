"""Tests for crunchwrap.publish - remote parsing and the publishing steps."""

from __future__ import annotations

from pathlib import Path

import pytest

from crunchwrap.execution.stages import Outcome
from crunchwrap.models.config import GitConfig
from crunchwrap.publish.git import Publisher, publish_project
from crunchwrap.publish.remote import Visibility, auth_remediation, parse_remote, push_remediation


def _publisher(tmp_path: Path, fake_run, remote_url=None, which=lambda name: True, **kwargs) -> Publisher:
    return Publisher(tmp_path, remote_url, run=fake_run, which=which, **kwargs)


def _names(report) -> list[str]:
    return [name for name, _ in report.results]


class TestParseRemote:
    """Recognizing GitHub remotes."""

    @pytest.mark.parametrize(
        ("url", "transport"),
        [
            ("https://github.com/acme/site.git", "https"),
            ("https://github.com/acme/site", "https"),
            ("git@github.com:acme/site.git", "ssh"),
            ("ssh://git@github.com/acme/site.git", "ssh"),
        ],
    )
    def test_github_forms(self, url: str, transport: str) -> None:
        remote = parse_remote(url)
        assert remote is not None
        assert remote.full_name == "acme/site"
        assert remote.transport == transport
        assert remote.url == url

    @pytest.mark.parametrize(
        "url",
        ["https://gitlab.com/acme/site.git", "git@bitbucket.org:acme/site.git", "not a url"],
    )
    def test_other_hosts(self, url: str) -> None:
        assert parse_remote(url) is None


class TestPushRemediation:
    def test_https_mentions_token_and_ssh_alternative(self) -> None:
        text = push_remediation(parse_remote("https://github.com/acme/site.git"), "main")
        assert "personal access token" in text
        assert "gh auth setup-git" in text
        assert "git remote set-url origin git@github.com:acme/site.git" in text
        assert "git push -u origin main" in text

    def test_ssh_mentions_key_and_https_alternative(self) -> None:
        text = push_remediation(parse_remote("git@github.com:acme/site.git"), "trunk")
        assert "ssh -T git@github.com" in text
        assert "git remote set-url origin https://github.com/acme/site.git" in text
        assert "git push -u origin trunk" in text


class TestAuthRemediation:
    @pytest.mark.parametrize("visibility", list(Visibility))
    def test_create_command_uses_chosen_visibility(self, visibility: Visibility) -> None:
        text = auth_remediation(parse_remote("https://github.com/acme/site.git"), "main", visibility)
        assert f"gh repo create acme/site --{visibility.value} --source=." in text
        other = Visibility.PRIVATE if visibility is Visibility.PUBLIC else Visibility.PUBLIC
        assert f"--{other.value}" not in text

    def test_existing_repository_steps(self) -> None:
        text = auth_remediation(parse_remote("git@github.com:acme/site.git"), "trunk", Visibility.PUBLIC)
        assert "gh auth login" in text
        assert "git remote add origin git@github.com:acme/site.git" in text
        assert "git push -u origin trunk" in text


class TestLocalSteps:
    """git init/add/commit/branch without a remote."""

    def test_no_remote_runs_only_local_steps(self, fake_run, tmp_path: Path) -> None:
        report = _publisher(tmp_path, fake_run).publish()

        assert report.succeeded
        assert fake_run.calls == [
            ("git", "init"),
            ("git", "add", "."),
            ("git", "commit", "-m", "Initial commit from crunchwrap CLI"),
            ("git", "branch", "-M", "main"),
        ]
        assert all(cwd == tmp_path for cwd in fake_run.cwds)
        assert not fake_run.called("gh")

    def test_git_config_applied(self, fake_run, tmp_path: Path) -> None:
        config = GitConfig(default_branch="trunk", commit_message="scaffold")
        _publisher(tmp_path, fake_run, git_config=config).publish()
        assert ("git", "commit", "-m", "scaffold") in fake_run.calls
        assert ("git", "branch", "-M", "trunk") in fake_run.calls

    def test_blank_remote_treated_as_none(self, fake_run, tmp_path: Path) -> None:
        report = _publisher(tmp_path, fake_run, remote_url="   ").publish()
        assert _names(report) == ["git init", "git add", "git commit", "git branch"]

    def test_missing_git_warns_and_skips(self, fake_run, tmp_path: Path) -> None:
        report = _publisher(
            tmp_path, fake_run, "https://github.com/acme/site.git", which=lambda name: False
        ).publish()
        assert fake_run.calls == []
        assert report.results[0][1].outcome is Outcome.WARN
        assert "'git' not found" in report.results[0][1].diagnostic
        assert _names(report) == ["git init"]

    def test_local_failure_skips_remote_steps(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("git", "commit", returncode=1, stderr="Author identity unknown")
        report = _publisher(tmp_path, fake_run, "https://github.com/acme/site.git").publish()

        name, result = report.results[-1]
        assert name == "git commit"
        assert result.outcome is Outcome.FATAL
        assert "Author identity unknown" in result.diagnostic
        assert not report.aborted
        assert _names(report) == ["git init", "git add", "git commit"]
        assert not fake_run.called("gh")


class TestRemoteSteps:
    """GitHub publishing paths."""

    def test_existing_repo_over_ssh_is_attached_and_pushed(self, fake_run, tmp_path: Path) -> None:
        url = "git@github.com:acme/site.git"
        report = _publisher(tmp_path, fake_run, url).publish()

        assert report.succeeded
        assert fake_run.calls[4:] == [
            ("gh", "auth", "status"),
            ("gh", "auth", "setup-git"),
            ("gh", "repo", "view", "acme/site"),
            ("git", "remote", "add", "origin", url),
            ("git", "push", "-u", "origin", "main"),
        ]
        assert not fake_run.called("gh", "repo", "create")
        assert report.results[-1][1].diagnostic == "Pushed to existing repository acme/site"

    def test_missing_repo_is_created_private(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("gh", "repo", "view", returncode=1, stderr="Could not resolve to a Repository")
        report = _publisher(
            tmp_path, fake_run, "https://github.com/acme/site.git", visibility=Visibility.PRIVATE
        ).publish()

        assert report.succeeded
        assert fake_run.calls[-1] == (
            "gh", "repo", "create", "acme/site", "--private", "--source=.", "--remote=origin", "--push",
        )
        assert not fake_run.called("git", "remote", "add")
        assert not fake_run.called("git", "push")

    def test_default_visibility_is_public(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("gh", "repo", "view", returncode=1)
        publish_project(tmp_path, "https://github.com/acme/site", run=fake_run, which=lambda name: True)
        assert "--public" in fake_run.calls[-1]

    def test_unauthenticated_gh_skips_publish(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("gh", "auth", "status", returncode=1, stderr="You are not logged into any GitHub hosts")
        report = _publisher(tmp_path, fake_run, "https://github.com/acme/site.git").publish()

        name, result = report.results[-1]
        assert name == "gh auth"
        assert result.outcome is Outcome.WARN
        assert "gh auth login" in result.diagnostic
        assert "gh repo create acme/site" in result.diagnostic
        assert "publish" not in _names(report)
        assert not fake_run.called("gh", "repo")
        assert not fake_run.called("git", "push")

    @pytest.mark.parametrize("visibility", list(Visibility))
    def test_auth_remediation_follows_visibility(self, fake_run, tmp_path: Path, visibility) -> None:
        fake_run.on("gh", "auth", "status", returncode=1)
        report = _publisher(
            tmp_path, fake_run, "https://github.com/acme/site.git", visibility=visibility
        ).publish()

        diagnostic = report.results[-1][1].diagnostic
        assert f"gh repo create acme/site --{visibility.value} " in diagnostic

    def test_missing_gh_skips_publish(self, fake_run, tmp_path: Path) -> None:
        report = _publisher(
            tmp_path, fake_run, "https://github.com/acme/site.git", which=lambda name: name == "git"
        ).publish()
        name, result = report.results[-1]
        assert name == "gh auth"
        assert result.outcome is Outcome.WARN
        assert "'gh' not found" in result.diagnostic
        assert not fake_run.called("gh")

    def test_unsupported_host_keeps_local_repo(self, fake_run, tmp_path: Path) -> None:
        report = _publisher(tmp_path, fake_run, "https://gitlab.com/acme/site.git").publish()

        name, result = report.results[-1]
        assert name == "remote"
        assert result.outcome is Outcome.WARN
        assert "only supported for GitHub" in result.diagnostic
        assert fake_run.called("git", "branch")
        assert not fake_run.called("gh")

    def test_https_push_failure_carries_remediation(self, fake_run, tmp_path: Path) -> None:
        fake_run.on(
            "git", "push", returncode=128,
            stderr="remote: Support for password authentication was removed.",
        )
        report = _publisher(tmp_path, fake_run, "https://github.com/acme/site.git").publish()

        name, result = report.results[-1]
        assert name == "publish"
        assert result.outcome is Outcome.WARN
        assert "password authentication was removed" in result.diagnostic
        assert "personal access token" in result.diagnostic
        assert "git remote set-url origin git@github.com:acme/site.git" in result.diagnostic

    def test_create_failure_over_ssh(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("gh", "repo", "view", returncode=1)
        fake_run.on("gh", "repo", "create", returncode=1, stderr="Permission denied (publickey).")
        report = _publisher(tmp_path, fake_run, "git@github.com:acme/site.git").publish()

        result = report.results[-1][1]
        assert result.outcome is Outcome.WARN
        assert "Permission denied (publickey)." in result.diagnostic
        assert "ssh -T git@github.com" in result.diagnostic

    def test_on_result_sees_every_step(self, fake_run, tmp_path: Path) -> None:
        seen: list[str] = []
        _publisher(tmp_path, fake_run, "https://github.com/acme/site.git").publish(
            on_result=lambda name, result: seen.append(name)
        )
        assert seen == ["git init", "git add", "git commit", "git branch", "remote", "gh auth", "publish"]
