"""Tests for the Gemini image adapter and response extraction."""

from __future__ import annotations

import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from crunchwrap.adapters.base import ImageRequestConfig
from crunchwrap.adapters.gemini_adapter import GeminiImageAdapter, extract_image
from crunchwrap.errors import GenerationError

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def _response(*parts, finish_reason=None, block_reason=None):
    candidate = SimpleNamespace(
        content=SimpleNamespace(parts=list(parts)),
        finish_reason=finish_reason,
    )
    feedback = SimpleNamespace(block_reason=block_reason) if block_reason else None
    return SimpleNamespace(candidates=[candidate], prompt_feedback=feedback)


def _image_part(data, mime_type="image/png"):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def _text_part(text):
    return SimpleNamespace(inline_data=None, text=text)


class TestExtractImage:
    """Picking the image payload out of a response."""

    def test_first_inline_image_returned(self) -> None:
        response = _response(_text_part("Here you go"), _image_part(PNG_BYTES), _image_part(b"second"))
        image = extract_image(response)
        assert image.data == PNG_BYTES
        assert image.mime_type == "image/png"

    def test_base64_payload_decoded(self) -> None:
        response = _response(_image_part(base64.b64encode(PNG_BYTES).decode("ascii")))
        assert extract_image(response).data == PNG_BYTES

    def test_missing_mime_type_defaults_to_png(self) -> None:
        assert extract_image(_response(_image_part(PNG_BYTES, mime_type=None))).mime_type == "image/png"

    def test_text_only_response(self) -> None:
        with pytest.raises(GenerationError, match="No image data received from AI."):
            extract_image(_response(_text_part("I cannot draw that")))

    def test_no_candidates(self) -> None:
        with pytest.raises(GenerationError, match="No image data"):
            extract_image(SimpleNamespace(candidates=None, prompt_feedback=None))

    def test_blocked_prompt(self) -> None:
        reason = SimpleNamespace(name="PROHIBITED_CONTENT")
        with pytest.raises(GenerationError, match="denied.*PROHIBITED_CONTENT"):
            extract_image(_response(_image_part(PNG_BYTES), block_reason=reason))

    def test_safety_finish_reason(self) -> None:
        with pytest.raises(GenerationError, match="denied.*SAFETY"):
            extract_image(_response(finish_reason=SimpleNamespace(name="SAFETY")))

    def test_normal_stop_without_image(self) -> None:
        with pytest.raises(GenerationError, match="No image data"):
            extract_image(_response(finish_reason=SimpleNamespace(name="STOP")))


class TestGeminiImageAdapter:
    def test_client_created_lazily(self) -> None:
        adapter = GeminiImageAdapter(api_key="k")
        assert adapter._client is None

    @pytest.mark.asyncio
    async def test_session_sends_in_one_chat(self) -> None:
        pytest.importorskip("google.genai")
        chat = MagicMock()
        chat.send_message = AsyncMock(return_value=_response(_image_part(PNG_BYTES)))
        client = MagicMock()
        client.aio.chats.create.return_value = chat

        adapter = GeminiImageAdapter(api_key="k")
        adapter._client = client
        session = adapter.start_session(ImageRequestConfig(model="gemini-2.5-flash-image"))

        first = await session.send("a red fox logo")
        second = await session.send("make it blue")

        assert first.data == PNG_BYTES
        assert second.data == PNG_BYTES
        client.aio.chats.create.assert_called_once()
        kwargs = client.aio.chats.create.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash-image"
        assert kwargs["config"].image_config.aspect_ratio == "1:1"
        assert [c.args[0] for c in chat.send_message.call_args_list] == ["a red fox logo", "make it blue"]

    @pytest.mark.asyncio
    async def test_session_surfaces_missing_image(self) -> None:
        pytest.importorskip("google.genai")
        chat = MagicMock()
        chat.send_message = AsyncMock(return_value=_response(_text_part("no")))
        client = MagicMock()
        client.aio.chats.create.return_value = chat

        adapter = GeminiImageAdapter()
        adapter._client = client
        session = adapter.start_session(ImageRequestConfig(model="m"))
        with pytest.raises(GenerationError):
            await session.send("logo")
