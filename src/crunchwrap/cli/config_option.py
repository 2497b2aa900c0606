"""Config loading shared by all commands."""

from __future__ import annotations

from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from crunchwrap.cli.output import print_failure
from crunchwrap.models.config import ToolConfig, load_config, resolve_config_path


def load_config_or_exit(path: Path | None) -> ToolConfig:
    """Load the tool config, exiting with code 1 on a malformed file."""
    try:
        return load_config(path)
    except (ValidationError, yaml.YAMLError) as exc:
        print_failure(f"Invalid config file: {resolve_config_path(path)}", str(exc))
        raise typer.Exit(code=1)
