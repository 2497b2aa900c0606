"""Tool configuration model for crunchwrap.

Captures config.yaml fields with sensible defaults for the template
catalog, prompt defaults, image generation and git publishing.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from crunchwrap.models.project import TemplateChoice

CONFIG_ENV_VAR = "CRUNCHWRAP_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "crunchwrap" / "config.yaml"


def _default_templates() -> list[TemplateChoice]:
    return [
        TemplateChoice(
            key="nuxt4-tw-template",
            label="Nuxt Tailwind",
            url="https://github.com/crunchwrap89/nuxt4-tw-template",
        ),
        TemplateChoice(
            key="nuxt4-tw-fb-template",
            label="Nuxt Tailwind (Firebase)",
            url="https://github.com/crunchwrap89/nuxt4-tw-fb-template",
        ),
        TemplateChoice(key="tbd-c", label="TBD", url=None),
    ]


class PromptDefaults(BaseModel):
    """Default answers offered by the init prompts."""

    model_config = {"extra": "forbid"}

    project_name: str = "the-example-app"
    short_name: str = "Example"
    domain_name: str = "example.com"
    title: str = "The Example Page"
    description: str = "Find examples every day, anywhere, for example."
    email: str = "hello@example.com"
    phone: str = "+46 7182387123"


class ImageConfig(BaseModel):
    """Configuration for AI logo generation.

    max_refinements bounds the number of follow-up turns; None leaves
    the refinement loop open until the user submits an empty instruction.
    """

    model_config = {"extra": "forbid"}

    adapter: str = "gemini"
    model: str = "gemini-2.5-flash-image"
    aspect_ratio: str = "1:1"
    output_format: Literal["png", "jpeg", "webp"] = "png"
    api_key_env: str = "GEMINI_API_KEY"
    max_retries: int = Field(default=3, ge=0, le=10)
    max_refinements: int | None = Field(default=None, ge=0)


class GitConfig(BaseModel):
    """Configuration for local repository initialization."""

    model_config = {"extra": "forbid"}

    default_branch: str = "main"
    commit_message: str = "Initial commit from crunchwrap CLI"


class ToolConfig(BaseModel):
    """Tool-level configuration loaded from config.yaml."""

    model_config = {"extra": "forbid"}

    templates: list[TemplateChoice] = Field(default_factory=_default_templates, min_length=1)
    defaults: PromptDefaults = Field(default_factory=PromptDefaults)
    image: ImageConfig = Field(default_factory=ImageConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    public_dir: str = "public"


def resolve_config_path(path: Path | None = None) -> Path:
    """Pick the config file: explicit path, then $CRUNCHWRAP_CONFIG, then the user default."""
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(path: Path | None = None) -> ToolConfig:
    """Load ToolConfig from YAML. Returns defaults if the file is missing or empty.

    Args:
        path: Explicit config file. If None, uses resolve_config_path().

    Returns:
        Validated ToolConfig instance.
    """
    config_path = resolve_config_path(path)
    if not config_path.exists():
        return ToolConfig()
    import yaml

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return ToolConfig()
    return ToolConfig.model_validate(raw)
