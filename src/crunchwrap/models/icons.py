"""Icon catalog: every derived asset's geometry and destination path.

Paths are relative to the public-assets root of the generated project.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

IconFormat = Literal["png", "webp", "ico"]


class IconSpec(BaseModel):
    """Target geometry for one derived icon."""

    model_config = {"frozen": True, "extra": "forbid"}

    relative_path: str
    width: int
    height: int
    format: IconFormat = "png"
    purpose: str | None = None


def _square(path: str, size: int, fmt: IconFormat = "png", purpose: str | None = None) -> IconSpec:
    return IconSpec(relative_path=path, width=size, height=size, format=fmt, purpose=purpose)


ICON_CATALOG: tuple[IconSpec, ...] = (
    _square("android-chrome-512x512.png", 512),
    _square("favicon.ico", 32, "ico"),
    _square("img/brand/pwa-72x72.png", 72),
    _square("img/brand/pwa-96x96.png", 96),
    _square("img/brand/pwa-120x120.png", 120),
    _square("img/brand/pwa-152x152.png", 152),
    _square("img/brand/pwa-167x167.png", 167),
    _square("img/brand/pwa-180x180.png", 180),
    _square("img/brand/pwa-192x192.png", 192),
    _square("img/brand/pwa-384x384.webp", 384, "webp"),
    _square("img/brand/pwa-512x512.png", 512, purpose="any"),
    _square("img/brand/maskable-icon-512x512.png", 512, purpose="maskable"),
)

MONOCHROME_ICON = _square("img/brand/monochrome-icon-512x512.png", 512, purpose="monochrome")
