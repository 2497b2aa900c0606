"""Gemini image adapter built on google-genai chat sessions."""

from __future__ import annotations

import base64
from typing import Any

from crunchwrap.adapters.base import (
    GeneratedImage,
    ImageAdapter,
    ImageRequestConfig,
    ImageSession,
)
from crunchwrap.errors import GenerationError

# Finish reasons that mean the provider refused to produce an image
_DENIED_FINISH_REASONS = frozenset(
    {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII", "IMAGE_SAFETY", "RECITATION"}
)


def _enum_name(value: Any) -> str | None:
    if value is None:
        return None
    return getattr(value, "name", None) or str(value)


def extract_image(response: Any) -> GeneratedImage:
    """Pull the first inline image out of a generate-content response.

    Raises:
        GenerationError: If the prompt was blocked, the candidate was
            stopped for safety reasons, or no image part is present.
    """
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = _enum_name(getattr(feedback, "block_reason", None))
    if block_reason:
        raise GenerationError(f"Request denied by the image service ({block_reason}).")

    denied: str | None = None
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is None or not inline.data:
                continue
            data = inline.data
            if isinstance(data, str):
                data = base64.b64decode(data)
            return GeneratedImage(data=data, mime_type=inline.mime_type or "image/png")
        reason = _enum_name(getattr(candidate, "finish_reason", None))
        if reason in _DENIED_FINISH_REASONS:
            denied = reason

    if denied:
        raise GenerationError(f"Request denied by the image service ({denied}).")
    raise GenerationError("No image data received from AI.")


class _GeminiSession(ImageSession):
    def __init__(self, chat: Any) -> None:
        self._chat = chat

    async def send(self, instruction: str) -> GeneratedImage:
        response = await self._chat.send_message(instruction)
        return extract_image(response)


class GeminiImageAdapter(ImageAdapter):
    """Adapter for Gemini native image generation.

    Uses a lazily-initialized genai.Client; with no explicit key the SDK
    reads GEMINI_API_KEY / GOOGLE_API_KEY from the environment.
    """

    def __init__(self, api_key: str | None = None) -> None:
        super().__init__(api_key)
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazily initialize and return the genai client."""
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def start_session(self, config: ImageRequestConfig) -> ImageSession:
        from google.genai import types

        # The Gemini API does not support output_mime_type; generate_logo checks the
        # returned MIME type against config.output_format instead.
        generation_config = types.GenerateContentConfig(
            response_modalities=["TEXT", "IMAGE"],
            image_config=types.ImageConfig(aspect_ratio=config.aspect_ratio),
            **config.extras,
        )
        chat = self._get_client().aio.chats.create(
            model=config.model,
            config=generation_config,
        )
        return _GeminiSession(chat)
