"""Blocking external-process invocation.

Every stage that shells out goes through run_tool(), which never raises
on a non-zero exit: callers inspect ToolResult and decide whether the
failure is fatal, a warning, or ignorable.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """Best available error text: stderr, else stdout, else the exit code."""
        text = self.stderr.strip() or self.stdout.strip()
        return text or f"'{' '.join(self.args)}' exited with code {self.returncode}"


# Signature shared by run_tool and the fakes used in tests
Runner = Callable[..., ToolResult]

# Exit code used when the executable itself cannot be found
COMMAND_NOT_FOUND = 127


def run_tool(
    args: Sequence[str],
    cwd: Path | None = None,
    *,
    capture: bool = True,
    interactive: bool = False,
) -> ToolResult:
    """Run a command to completion and return its result.

    Args:
        args: Executable and arguments.
        cwd: Working directory for the command.
        capture: Capture stdout and stderr. If False, both go to the terminal.
        interactive: Inherit stdin/stdout so the tool can prompt the user;
            only stderr is captured.

    Returns:
        ToolResult. A missing executable yields returncode 127 with the
        OSError text as stderr.
    """
    argv = tuple(str(a) for a in args)
    if interactive:
        stdout = None
        stderr = subprocess.PIPE
    elif capture:
        stdout = subprocess.PIPE
        stderr = subprocess.PIPE
    else:
        stdout = None
        stderr = None

    try:
        completed = subprocess.run(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            stdout=stdout,
            stderr=stderr,
            text=True,
            check=False,
        )
    except OSError as exc:
        return ToolResult(args=argv, returncode=COMMAND_NOT_FOUND, stderr=str(exc))

    return ToolResult(
        args=argv,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def tool_available(name: str) -> bool:
    """Return True if an executable is on PATH."""
    return shutil.which(name) is not None
