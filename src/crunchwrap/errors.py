"""Error taxonomy for project generation.

Leaf operations raise these; pipeline stages translate them into tagged
stage results so the command layer decides whether to continue, skip,
or abort.
"""

from __future__ import annotations


class CrunchwrapError(Exception):
    """Base class for all crunchwrap errors."""


class DestinationExistsError(CrunchwrapError):
    """Raised when the target project directory already exists."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Folder already exists: {path}")


class FetchError(CrunchwrapError):
    """Raised when a template reference is malformed or the fetch tool fails."""


class SubstitutionError(CrunchwrapError):
    """Raised when a rewritten template file cannot be written back."""


class ToolUnavailable(CrunchwrapError):
    """Raised when a required external binary is not on PATH."""

    def __init__(self, tool: str, hint: str | None = None) -> None:
        self.tool = tool
        self.hint = hint
        message = f"'{tool}' not found on PATH"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


class AuthenticationError(CrunchwrapError):
    """Raised when the hosting provider CLI is not authenticated."""


class PushError(CrunchwrapError):
    """Raised when pushing to the remote repository fails."""


class GenerationError(CrunchwrapError):
    """Raised when the image-generation service yields no usable image."""


class GitError(CrunchwrapError):
    """Raised when a local git command fails."""
