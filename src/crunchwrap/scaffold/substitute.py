"""Placeholder substitution across a generated project tree.

Walks every regular file below the root, skipping control directories
and binary extensions, and replaces each placeholder token literally
with the matching metadata value.
"""

from __future__ import annotations

import os
from pathlib import Path

from crunchwrap.errors import SubstitutionError
from crunchwrap.models.project import ProjectMetadata

SKIP_DIRS: frozenset[str] = frozenset(
    {"node_modules", ".git", ".output", "dist", ".nuxt", ".cache"}
)

SKIP_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".webp",
        ".ico",
        ".woff",
        ".woff2",
        ".ttf",
        ".pdf",
        ".zip",
    }
)

# Token -> ProjectMetadata attribute, applied in this order
PLACEHOLDERS: tuple[tuple[str, str], ...] = (
    ("{{PROJECT_NAME}}", "project_name"),
    ("{{PROJECT_SLUG}}", "slug"),
    ("{{SHORT_NAME}}", "short_name"),
    ("{{DOMAIN_NAME}}", "domain_name"),
    ("{{TITLE}}", "title"),
    ("{{DESCRIPTION}}", "description"),
    ("{{EMAIL}}", "email"),
    ("{{PHONE}}", "phone"),
)


def build_replacements(metadata: ProjectMetadata) -> list[tuple[str, str]]:
    """Pair every placeholder token with its value (missing -> empty string)."""
    return [(token, getattr(metadata, attr, "") or "") for token, attr in PLACEHOLDERS]


def iter_template_files(root: Path):
    """Yield regular files under root, never descending into SKIP_DIRS."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.suffix.lower() in SKIP_EXTENSIONS:
                continue
            if path.is_symlink() or not path.is_file():
                continue
            yield path


def replace_tokens(content: str, replacements: list[tuple[str, str]]) -> str:
    for token, value in replacements:
        content = content.replace(token, value)
    return content


def substitute_file(path: Path, replacements: list[tuple[str, str]]) -> bool:
    """Rewrite one file in place. Returns True if it changed.

    Files that are not valid UTF-8 text are skipped silently. Newline
    style is preserved.

    Raises:
        SubstitutionError: If the changed content cannot be written back.
    """
    try:
        with open(path, encoding="utf-8", newline="") as fh:
            content = fh.read()
    except (UnicodeDecodeError, OSError):
        return False

    updated = replace_tokens(content, replacements)
    if updated == content:
        return False

    try:
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(updated)
    except OSError as exc:
        raise SubstitutionError(f"Could not write {path}: {exc}") from exc
    return True


def substitute_tokens(root: Path, metadata: ProjectMetadata) -> list[Path]:
    """Replace all placeholder tokens under root.

    Args:
        root: Directory of the freshly fetched template.
        metadata: Values to substitute.

    Returns:
        Files that were rewritten, relative to root.

    Raises:
        SubstitutionError: If a file write fails.
    """
    replacements = build_replacements(metadata)
    changed: list[Path] = []
    for path in iter_template_files(root):
        if substitute_file(path, replacements):
            changed.append(path.relative_to(root))
    return changed
