"""Local git initialization and optional GitHub publishing.

Steps run through the stage driver with SUBSTAGE_POLICY: the first step
that does not succeed skips the remaining publishing steps, while the
project generated so far (and any local repository) stays in place.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from crunchwrap.errors import AuthenticationError, GitError, PushError, ToolUnavailable
from crunchwrap.execution.process import Runner, ToolResult, run_tool, tool_available
from crunchwrap.execution.stages import (
    SUBSTAGE_POLICY,
    PipelineReport,
    Stage,
    StageResult,
    guarded,
    run_stages,
)
from crunchwrap.models.config import GitConfig
from crunchwrap.publish.remote import (
    GitHubRemote,
    Visibility,
    auth_remediation,
    parse_remote,
    push_remediation,
)

_WARN_ERRORS = (ToolUnavailable, AuthenticationError, PushError)
_FATAL_ERRORS = (GitError,)


class Publisher:
    """Sequences git init/commit and GitHub repository creation or push.

    Args:
        project_dir: Generated project directory.
        remote_url: Optional remote repository URL.
        visibility: Visibility used when the GitHub repository is created.
        git_config: Branch name and commit message.
        run: Command runner (injectable for tests).
        which: PATH lookup (injectable for tests).
    """

    def __init__(
        self,
        project_dir: Path,
        remote_url: str | None = None,
        visibility: Visibility = Visibility.PUBLIC,
        *,
        git_config: GitConfig | None = None,
        run: Runner = run_tool,
        which: Callable[[str], bool] = tool_available,
    ) -> None:
        self.project_dir = project_dir
        self.remote_url = (remote_url or "").strip() or None
        self.visibility = visibility
        self.git_config = git_config or GitConfig()
        self._run = run
        self._which = which
        self._remote: GitHubRemote | None = None

    @property
    def branch(self) -> str:
        return self.git_config.default_branch

    # -- command helpers -------------------------------------------------

    def _tool(self, *args: str) -> ToolResult:
        return self._run(list(args), cwd=self.project_dir)

    def _git(self, *args: str) -> None:
        result = self._tool("git", *args)
        if not result.succeeded:
            raise GitError(f"git {' '.join(args)} failed: {result.diagnostic}")

    def _require(self, tool: str, hint: str) -> None:
        if not self._which(tool):
            raise ToolUnavailable(tool, hint)

    # -- local steps -----------------------------------------------------

    def _init(self) -> None:
        self._require("git", "Install git to initialize the repository.")
        self._git("init")

    def _add(self) -> None:
        self._git("add", ".")

    def _commit(self) -> None:
        self._git("commit", "-m", self.git_config.commit_message)

    def _rename_branch(self) -> None:
        self._git("branch", "-M", self.branch)

    # -- remote steps ----------------------------------------------------

    def _resolve_remote(self) -> StageResult | None:
        assert self.remote_url is not None
        self._remote = parse_remote(self.remote_url)
        if self._remote is None:
            return StageResult.warn(
                f"Automated publishing is only supported for GitHub; skipping remote "
                f"setup for {self.remote_url}. The local repository is ready."
            )
        return None

    def _check_auth(self) -> None:
        assert self._remote is not None
        self._require("gh", "Install the GitHub CLI (https://cli.github.com) to publish automatically.")
        if not self._tool("gh", "auth", "status").succeeded:
            raise AuthenticationError(auth_remediation(self._remote, self.branch, self.visibility))
        # Lets plain 'git push' reuse the gh token; a failure here only matters if the push fails
        self._tool("gh", "auth", "setup-git")

    def _publish_remote(self) -> StageResult | None:
        remote = self._remote
        assert remote is not None
        exists = self._tool("gh", "repo", "view", remote.full_name).succeeded
        if exists:
            self._git("remote", "add", "origin", remote.url)
            pushed = self._tool("git", "push", "-u", "origin", self.branch)
        else:
            pushed = self._tool(
                "gh",
                "repo",
                "create",
                remote.full_name,
                f"--{self.visibility.value}",
                "--source=.",
                "--remote=origin",
                "--push",
            )
        if not pushed.succeeded:
            raise PushError(f"{pushed.diagnostic}\n{push_remediation(remote, self.branch)}")
        action = "Pushed to existing" if exists else "Created and pushed"
        return StageResult.ok(f"{action} repository {remote.full_name}")

    # -- driver ----------------------------------------------------------

    def _stage(self, name: str, func: Callable[[], StageResult | None]) -> Stage:
        return Stage(name, guarded(func, warn=_WARN_ERRORS, fatal=_FATAL_ERRORS))

    def stages(self) -> list[Stage]:
        stages = [
            self._stage("git init", self._init),
            self._stage("git add", self._add),
            self._stage("git commit", self._commit),
            self._stage("git branch", self._rename_branch),
        ]
        if self.remote_url:
            stages += [
                self._stage("remote", self._resolve_remote),
                self._stage("gh auth", self._check_auth),
                self._stage("publish", self._publish_remote),
            ]
        return stages

    def publish(
        self, on_result: Callable[[str, StageResult], None] | None = None
    ) -> PipelineReport:
        return run_stages(self.stages(), SUBSTAGE_POLICY, on_result=on_result)


def publish_project(
    project_dir: Path,
    remote_url: str | None = None,
    visibility: Visibility = Visibility.PUBLIC,
    **kwargs,
) -> PipelineReport:
    """Initialize git in project_dir and publish to remote_url when given."""
    return Publisher(project_dir, remote_url, visibility, **kwargs).publish()
