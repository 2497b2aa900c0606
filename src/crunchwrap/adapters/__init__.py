"""crunchwrap adapters - image-generation provider abstraction layer."""

from crunchwrap.adapters.base import (
    GeneratedImage,
    ImageAdapter,
    ImageRequestConfig,
    ImageSession,
)
from crunchwrap.adapters.registry import get_adapter

__all__ = [
    "GeneratedImage",
    "ImageAdapter",
    "ImageRequestConfig",
    "ImageSession",
    "get_adapter",
]
