"""crunchwrap new-logo -- generate a logo with AI for the current project."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from crunchwrap.cli.assets import IconOptions, ask_logo_request, logo_stage
from crunchwrap.cli.config_option import load_config_or_exit
from crunchwrap.cli.output import console, print_banner, print_warning
from crunchwrap.generation.logo import logo_filename
from crunchwrap.prompt.terminal import confirm


def new_logo(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a crunchwrap config.yaml"
    ),
) -> None:
    """Generate a new logo and icon set for the project in the current directory."""
    config = load_config_or_exit(config_path)
    print_banner("Generate a new logo for your project! 🎨", style="yellow")

    public_root = Path.cwd() / config.public_dir
    if (public_root / logo_filename(config.image.output_format)).exists():
        print_warning(f"Existing logo files found in /{config.public_dir} directory.")
        if not confirm("  Do you want to overwrite them?"):
            console.print("\n[blue]  Operation cancelled. No files were changed.[/blue]")
            return
        console.print()

    request = ask_logo_request(config)
    options = IconOptions(monochrome=confirm("Also generate a 512x512 monochrome icon?"))
    result = logo_stage(request, public_root, config, options)

    if result.succeeded:
        console.print("\n[blue]  ✅ All done![/blue]")
        console.print(f"  📂 Files updated in: [bold]{escape(str(public_root))}[/bold]")
        return

    print_warning(result.diagnostic or "Failed to generate logo.")
    console.print("\n[red]  ❌ Failed to generate logo.[/red]")
