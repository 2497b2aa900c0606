"""Interactive logo and icon steps shared by init, new-logo and new-pwa-images."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from crunchwrap.adapters.registry import get_adapter
from crunchwrap.cli.output import (
    console,
    create_icon_progress,
    print_warning,
    render_icon_report,
)
from crunchwrap.errors import GenerationError, ToolUnavailable
from crunchwrap.execution.stages import StageResult
from crunchwrap.generation.logo import generate_logo
from crunchwrap.images.pipeline import ScalePolicy, convert_icons, probe_dimensions
from crunchwrap.models.config import ToolConfig
from crunchwrap.prompt.terminal import Choice, confirm, prompt_choice, prompt_text


@dataclass(frozen=True)
class IconOptions:
    policy: ScalePolicy = ScalePolicy.STRETCH
    monochrome: bool = False


@dataclass(frozen=True)
class LogoRequest:
    prompt: str
    api_key: str


def ask_icon_options(source: Path | None = None) -> IconOptions:
    """Ask for a scaling policy (only for non-square sources) and the monochrome variant."""
    policy = ScalePolicy.STRETCH
    if source is not None:
        dimensions = probe_dimensions(source)
        if dimensions is not None and dimensions[0] != dimensions[1]:
            width, height = dimensions
            print_warning(f"Source image is {width}x{height}, but the icons are square.")
            policy = prompt_choice(
                "How should the image be scaled?",
                [
                    Choice("Fit (keep aspect ratio, transparent padding)", ScalePolicy.FIT),
                    Choice("Stretch (distort to fill)", ScalePolicy.STRETCH),
                ],
            )
    monochrome = confirm("Also generate a 512x512 monochrome icon?")
    return IconOptions(policy=policy, monochrome=monochrome)


def run_icon_pipeline(source: Path, public_root: Path, options: IconOptions) -> StageResult:
    """Convert source into the icon catalog, reporting progress per icon."""
    progress = create_icon_progress()
    try:
        if progress is None:
            report = convert_icons(
                source, public_root, policy=options.policy, monochrome=options.monochrome
            )
        else:
            with progress:
                task = progress.add_task("Converting logo to multiple sizes", total=None)

                def advance(index: int, total: int, _spec) -> None:
                    progress.update(task, completed=index, total=total)

                report = convert_icons(
                    source,
                    public_root,
                    policy=options.policy,
                    monochrome=options.monochrome,
                    on_progress=advance,
                )
    except ToolUnavailable as exc:
        return StageResult.warn(f"{exc} Skipping logo conversion.")

    render_icon_report(report)
    if report.succeeded:
        return StageResult.ok()
    return StageResult.warn(f"{len(report.failures)} of {report.total} icons could not be generated.")


def resolve_api_key(config: ToolConfig) -> str:
    """Read the image service key from the environment, else ask for it."""
    key = os.environ.get(config.image.api_key_env, "").strip()
    if key:
        return key
    return prompt_text("🔑 Enter your Google Gemini API key", required=True)


def ask_logo_request(config: ToolConfig) -> LogoRequest:
    prompt = prompt_text("✨ Enter a prompt for your logo", required=True)
    return LogoRequest(prompt=prompt, api_key=resolve_api_key(config))


def logo_stage(
    request: LogoRequest,
    public_root: Path,
    config: ToolConfig,
    options: IconOptions,
) -> StageResult:
    """Generate the logo, refine it interactively, and derive icons after every turn.

    Never fatal: generation errors become a warning.
    """
    try:
        adapter = get_adapter(config.image.adapter, api_key=request.api_key)
    except (ValueError, ImportError, TypeError) as exc:
        return StageResult.warn(f"Failed to generate logo: {exc}")

    icon_results: list[StageResult] = []

    def on_image(path: Path) -> None:
        console.print(f"[green]✓[/green] Logo saved to {escape(str(path))}")
        result = run_icon_pipeline(path, public_root, options)
        if result.diagnostic:
            print_warning(result.diagnostic)
        icon_results.append(result)

    def refine() -> str:
        instruction = prompt_text("🔁 Refine the logo (leave empty to finish)")
        if instruction.strip():
            console.print("[cyan]Refining logo...[/cyan]")
        return instruction

    console.print("[cyan]🎨 Generating logo with AI...[/cyan]")
    try:
        path = asyncio.run(
            generate_logo(
                request.prompt,
                adapter,
                public_root,
                config=config.image,
                refine=refine,
                on_image=on_image,
            )
        )
    except GenerationError as exc:
        return StageResult.warn(f"Failed to generate logo: {exc}")

    if icon_results and not icon_results[-1].succeeded:
        return StageResult.warn(f"Logo saved to {path}, but some icons were not generated.")
    return StageResult.ok(f"Logo and icons written to {public_root}")
