"""Project name and metadata answer validation, slug derivation."""

from __future__ import annotations

import re

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")

INVALID_NAME_MESSAGE = "Use letters, numbers, dashes and underscores only."

PLACEHOLDER_DELIMITERS = ("{{", "}}")


def is_valid_project_name(name: str) -> bool:
    """Return True if the trimmed name is a filesystem-safe identifier."""
    return bool(_NAME_PATTERN.match(name.strip()))


def slugify(name: str) -> str:
    """Derive a URL-safe slug: lowercase, dash-separated, no edge dashes."""
    return _NON_ALNUM_RUN.sub("-", name.strip().lower()).strip("-")


def validate_project_name(name: str) -> str | None:
    """Prompt validator: the fixed rejection message, or None when valid."""
    if not is_valid_project_name(name):
        return INVALID_NAME_MESSAGE
    return None


def validate_answer(value: str) -> str | None:
    """Prompt validator for metadata answers: no placeholder delimiters.

    Substituted values must never form a placeholder, neither alone
    ("{{TITLE}}") nor joined with a neighbouring value ("{{EMAIL" then
    "}}"), or a second substitution pass would expand it again.
    """
    if any(delimiter in value for delimiter in PLACEHOLDER_DELIMITERS):
        return "Answers must not contain '{{' or '}}'."
    return None
