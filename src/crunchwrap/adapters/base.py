"""ImageAdapter ABC and the dataclasses shared by image providers.

Provider adapters subclass ImageAdapter and return an ImageSession from
start_session(). A session keeps the provider's conversational context
so follow-up instructions refine the previous image instead of starting
over.

These are plain dataclasses (not Pydantic) since they only carry
provider payloads between the adapter and the generator loop.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

# output_format value -> MIME type of the returned payload
OUTPUT_MIME_TYPES: dict[str, str] = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
}


@dataclass
class GeneratedImage:
    """Decoded image payload returned by one session turn."""

    data: bytes
    mime_type: str = "image/png"


@dataclass
class ImageRequestConfig:
    """Generation parameters fixed for the lifetime of a session."""

    model: str
    aspect_ratio: str = "1:1"
    output_format: str = "png"
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def mime_type(self) -> str:
        """MIME type every image of the session must carry."""
        return OUTPUT_MIME_TYPES[self.output_format]


class ImageSession(ABC):
    """A conversational handle on one image-generation context."""

    @abstractmethod
    async def send(self, instruction: str) -> GeneratedImage:
        """Send a prompt or refinement instruction and return the image.

        Raises:
            GenerationError: If the provider denies the request or returns
                no image payload.
        """
        ...


class ImageAdapter(ABC):
    """Abstract base class for all image-generation providers.

    Args:
        api_key: Provider credential. Adapters may fall back to their
            SDK's own environment lookup when None.
    """

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key

    @abstractmethod
    def start_session(self, config: ImageRequestConfig) -> ImageSession:
        """Open a new conversational session."""
        ...
