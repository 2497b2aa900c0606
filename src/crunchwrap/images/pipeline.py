"""Derive the icon catalog from one source image with ffmpeg.

Every catalog entry is converted independently: a failed entry is
recorded with the tool's exit code and the loop moves on to the next.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from crunchwrap.errors import ToolUnavailable
from crunchwrap.execution.process import Runner, run_tool, tool_available
from crunchwrap.models.icons import ICON_CATALOG, MONOCHROME_ICON, IconSpec

FFMPEG = "ffmpeg"
FFPROBE = "ffprobe"

# Fully transparent RGBA
PAD_COLOR = "0x00000000"


class ScalePolicy(str, Enum):
    """How a non-square source is mapped onto square targets."""

    STRETCH = "stretch"
    FIT = "fit"


@dataclass
class IconReport:
    """What convert_icons() produced."""

    generated: list[IconSpec] = field(default_factory=list)
    failures: list[tuple[IconSpec, int]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.generated) + len(self.failures)

    @property
    def succeeded(self) -> bool:
        return not self.failures


ProgressCallback = Callable[[int, int, IconSpec], None]


def build_filter_chain(
    width: int,
    height: int,
    policy: ScalePolicy = ScalePolicy.STRETCH,
    grayscale: bool = False,
) -> str:
    """Return the -vf filter chain for one target size.

    stretch distorts the source to exactly width x height; fit scales it
    down preserving aspect ratio, then pads to the exact size, centered,
    with a transparent background.
    """
    if policy is ScalePolicy.FIT:
        chain = (
            f"scale=w={width}:h={height}:force_original_aspect_ratio=decrease,"
            f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2:color={PAD_COLOR}"
        )
    else:
        chain = f"scale={width}:{height}"
    if grayscale:
        chain += ",format=gray"
    return chain


def conversion_args(
    source: Path,
    target: Path,
    spec: IconSpec,
    policy: ScalePolicy,
    grayscale: bool = False,
) -> list[str]:
    chain = build_filter_chain(spec.width, spec.height, policy, grayscale)
    return [FFMPEG, "-i", str(source), "-vf", chain, "-y", str(target)]


def parse_dimensions(output: str) -> tuple[int, int] | None:
    """Parse ffprobe's 'WxH' csv output; None if it is not two integers."""
    line = output.strip().splitlines()[0] if output.strip() else ""
    width, sep, height = line.partition("x")
    if not sep:
        return None
    try:
        return int(width), int(height)
    except ValueError:
        return None


def probe_dimensions(source: Path, *, run: Runner = run_tool) -> tuple[int, int] | None:
    """Return (width, height) of the source image, or None if it cannot be probed."""
    if not tool_available(FFPROBE):
        return None
    result = run(
        [
            FFPROBE,
            "-v",
            "error",
            "-select_streams",
            "v:0",
            "-show_entries",
            "stream=width,height",
            "-of",
            "csv=s=x:p=0",
            str(source),
        ]
    )
    if not result.succeeded:
        return None
    return parse_dimensions(result.stdout)


def icon_targets(monochrome: bool, catalog: Sequence[IconSpec] = ICON_CATALOG) -> list[tuple[IconSpec, bool]]:
    """Catalog entries paired with their grayscale flag; the monochrome variant goes last."""
    targets = [(spec, False) for spec in catalog]
    if monochrome:
        targets.append((MONOCHROME_ICON, True))
    return targets


def convert_icons(
    source: Path,
    public_root: Path,
    *,
    policy: ScalePolicy = ScalePolicy.STRETCH,
    monochrome: bool = False,
    catalog: Sequence[IconSpec] = ICON_CATALOG,
    on_progress: ProgressCallback | None = None,
    run: Runner = run_tool,
) -> IconReport:
    """Convert source into every catalog entry under public_root.

    Args:
        source: Image to derive icons from.
        public_root: Public-assets directory of the project.
        policy: Scaling policy for every entry.
        monochrome: Also emit the 512x512 grayscale variant.
        catalog: Icon specs to produce.
        on_progress: Called with (index, total, spec) after each entry.
        run: Command runner (injectable for tests).

    Returns:
        IconReport listing generated entries and failures with exit codes.

    Raises:
        ToolUnavailable: If ffmpeg is not installed.
    """
    if not tool_available(FFMPEG):
        raise ToolUnavailable(FFMPEG, "Install FFmpeg to generate icons.")

    report = IconReport()
    targets = icon_targets(monochrome, catalog)
    for index, (spec, grayscale) in enumerate(targets, start=1):
        target = public_root / spec.relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        result = run(conversion_args(source, target, spec, policy, grayscale))
        if result.succeeded:
            report.generated.append(spec)
        else:
            report.failures.append((spec, result.returncode))
        if on_progress is not None:
            on_progress(index, len(targets), spec)
    return report
