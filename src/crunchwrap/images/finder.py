"""Locate candidate source images inside a project."""

from __future__ import annotations

import os
from pathlib import Path

from crunchwrap.scaffold.substitute import SKIP_DIRS

IMAGE_EXTENSIONS: frozenset[str] = frozenset({".png", ".jpg", ".jpeg", ".webp"})


def find_images(root: Path) -> list[str]:
    """Return image paths relative to root, sorted, outside control directories."""
    images: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.suffix.lower() in IMAGE_EXTENSIONS:
                images.append(path.relative_to(root).as_posix())
    return sorted(images)
