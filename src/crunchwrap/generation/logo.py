"""Iterative AI logo generation.

One session is opened per run. The first turn sends the prompt; every
non-empty refinement instruction is sent as a follow-up turn in the
same session. Each successful turn overwrites the logo file and hands it
to on_image (the icon pipeline), so the caller always ends up with a
complete icon set for the latest image.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from crunchwrap.adapters.base import (
    OUTPUT_MIME_TYPES,
    GeneratedImage,
    ImageAdapter,
    ImageRequestConfig,
    ImageSession,
)
from crunchwrap.errors import GenerationError
from crunchwrap.execution.retry import retry_with_backoff
from crunchwrap.models.config import ImageConfig

LOGO_BASENAME = "logo"

# MIME type -> file extension of the saved logo
_EXTENSIONS: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}


def logo_filename(output_format: str = "png") -> str:
    """File name the logo is saved under for an output_format."""
    return f"{LOGO_BASENAME}.{_EXTENSIONS[OUTPUT_MIME_TYPES[output_format]]}"


def save_image(image: GeneratedImage, public_root: Path) -> Path:
    """Write the image to <public_root>/logo.<ext> and return its path.

    The extension follows image.mime_type.

    Raises:
        GenerationError: If the MIME type is not a supported image format.
    """
    extension = _EXTENSIONS.get(image.mime_type)
    if extension is None:
        raise GenerationError(f"Unsupported image type from the image service: {image.mime_type}")
    public_root.mkdir(parents=True, exist_ok=True)
    path = public_root / f"{LOGO_BASENAME}.{extension}"
    path.write_bytes(image.data)
    return path


async def _send(
    session: ImageSession,
    instruction: str,
    max_retries: int,
    retry_delay: float,
) -> GeneratedImage:
    try:
        image, _retries = await retry_with_backoff(
            lambda: session.send(instruction),
            max_retries=max_retries,
            base_delay=retry_delay,
        )
    except GenerationError:
        raise
    except Exception as exc:
        raise GenerationError(f"Image service error: {exc}") from exc
    return image


async def generate_logo(
    prompt: str,
    adapter: ImageAdapter,
    public_root: Path,
    *,
    config: ImageConfig | None = None,
    refine: Callable[[], str] | None = None,
    on_image: Callable[[Path], None] | None = None,
    retry_delay: float = 1.0,
) -> Path:
    """Generate a logo and refine it until the user submits an empty instruction.

    Args:
        prompt: Initial text prompt.
        adapter: Image provider adapter.
        public_root: Directory the logo is written to.
        config: Model, aspect ratio, retry and refinement limits.
        refine: Returns the next refinement instruction; empty ends the
            loop. None means a single turn.
        on_image: Called with the logo path after every successful turn.
        retry_delay: Base backoff delay for transient errors.

    Returns:
        Path of the final logo.

    Raises:
        GenerationError: If a turn is denied, returns no image or one not
            in config.output_format, or keeps failing after retries. Files from earlier turns are kept.
    """
    config = config or ImageConfig()
    request = ImageRequestConfig(
        model=config.model,
        aspect_ratio=config.aspect_ratio,
        output_format=config.output_format,
    )
    try:
        session = adapter.start_session(request)
    except ImportError as exc:
        raise GenerationError(str(exc)) from exc

    instruction = prompt
    refinements = 0
    while True:
        image = await _send(session, instruction, config.max_retries, retry_delay)
        if image.mime_type != request.mime_type:
            raise GenerationError(
                f"Image service returned {image.mime_type}, expected {request.mime_type}."
            )
        logo_path = save_image(image, public_root)
        if on_image is not None:
            on_image(logo_path)

        if refine is None:
            return logo_path
        if config.max_refinements is not None and refinements >= config.max_refinements:
            return logo_path

        next_instruction = refine().strip()
        if not next_instruction:
            return logo_path
        instruction = next_instruction
        refinements += 1
