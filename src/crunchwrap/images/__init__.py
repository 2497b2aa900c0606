"""crunchwrap images - icon derivation with ffmpeg."""

from crunchwrap.images.finder import find_images
from crunchwrap.images.pipeline import (
    IconReport,
    ScalePolicy,
    build_filter_chain,
    convert_icons,
    probe_dimensions,
)

__all__ = [
    "IconReport",
    "ScalePolicy",
    "build_filter_chain",
    "convert_icons",
    "find_images",
    "probe_dimensions",
]
