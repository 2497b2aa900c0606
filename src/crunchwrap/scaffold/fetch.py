"""Template fetching via degit: file contents only, no history."""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

from crunchwrap.errors import FetchError
from crunchwrap.execution.process import Runner, run_tool, tool_available

_TEMPLATE_URL = re.compile(r"^https://github\.com/([^/]+)/([^/]+)(/.*)?$")


def normalize_template_source(url: str) -> str:
    """Reduce a hosted-repository URL to the 'owner/name' form degit expects.

    Strips a trailing .git suffix and any sub-path.

    Raises:
        FetchError: If the URL is not https://github.com/<owner>/<name>[...].
    """
    match = _TEMPLATE_URL.match(url.strip())
    if not match:
        raise FetchError(f"Invalid GitHub repository URL: {url}")
    owner, name = match.group(1), match.group(2)
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise FetchError(f"Invalid GitHub repository URL: {url}")
    return f"{owner}/{name}"


def degit_runner(which: Callable[[str], bool] = tool_available) -> list[str]:
    """Prefer bunx (faster startup), fall back to npx.

    Raises:
        FetchError: If neither bun nor npx is installed.
    """
    if which("bun"):
        return ["bunx"]
    if which("npx"):
        return ["npx", "--yes"]
    raise FetchError("Neither 'bun' nor 'npx' was found. Install Node.js or Bun to fetch templates.")


def fetch_template(
    url: str,
    dest: Path,
    *,
    run: Runner = run_tool,
    which: Callable[[str], bool] = tool_available,
) -> None:
    """Materialize a template repository snapshot into dest.

    Args:
        url: Hosted-repository URL of the template.
        dest: Destination directory; must not exist yet.
        run: Command runner (injectable for tests).
        which: PATH lookup used to pick the degit runner.

    Raises:
        FetchError: On a malformed URL or a non-zero degit exit, carrying
            the tool's error stream.
    """
    source = normalize_template_source(url)
    result = run([*degit_runner(which), "degit", source, str(dest), "--mode=tar"])
    if not result.succeeded:
        raise FetchError(result.diagnostic)
