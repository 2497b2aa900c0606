"""Remote repository references and push remediation text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Literal

_GITHUB_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^https://github\.com/([^/\s]+)/([^/\s]+?)(?:\.git)?/?$"), "https"),
    (re.compile(r"^git@github\.com:([^/\s]+)/([^/\s]+?)(?:\.git)?$"), "ssh"),
    (re.compile(r"^ssh://git@github\.com/([^/\s]+)/([^/\s]+?)(?:\.git)?/?$"), "ssh"),
)


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class GitHubRemote:
    """A remote URL recognized as a GitHub repository."""

    owner: str
    name: str
    url: str
    transport: Literal["https", "ssh"]

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def https_url(self) -> str:
        return f"https://github.com/{self.full_name}.git"

    @property
    def ssh_url(self) -> str:
        return f"git@github.com:{self.full_name}.git"


def parse_remote(url: str) -> GitHubRemote | None:
    """Return a GitHubRemote for GitHub https/ssh URLs, None for any other host."""
    url = url.strip()
    for pattern, transport in _GITHUB_PATTERNS:
        match = pattern.match(url)
        if match:
            return GitHubRemote(
                owner=match.group(1),
                name=match.group(2),
                url=url,
                transport=transport,  # type: ignore[arg-type]
            )
    return None


def push_remediation(remote: GitHubRemote, branch: str) -> str:
    """Host-specific next steps after a failed push."""
    if remote.transport == "https":
        return (
            "GitHub does not accept account passwords for HTTPS pushes. "
            "Create a personal access token (https://github.com/settings/tokens) "
            "and use it as the password, or run 'gh auth setup-git' to let the "
            "GitHub CLI provide credentials.\n"
            "Or push over SSH instead:\n"
            f"  git remote set-url origin {remote.ssh_url}\n"
            f"  git push -u origin {branch}"
        )
    return (
        "Check that your SSH key is registered with GitHub ('ssh -T git@github.com').\n"
        "Or push over HTTPS with a personal access token instead:\n"
        f"  git remote set-url origin {remote.https_url}\n"
        f"  git push -u origin {branch}"
    )


def auth_remediation(remote: GitHubRemote, branch: str, visibility: Visibility) -> str:
    """Next steps when the GitHub CLI is not logged in."""
    return (
        "The GitHub CLI is not authenticated. Run 'gh auth login', then publish manually:\n"
        f"  gh repo create {remote.full_name} --{visibility.value} --source=. --remote=origin --push\n"
        "or, if the repository already exists:\n"
        f"  git remote add origin {remote.url}\n"
        f"  git push -u origin {branch}"
    )
