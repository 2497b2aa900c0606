"""crunchwrap new-pwa-images -- derive the icon set from an existing image."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from crunchwrap.cli.assets import ask_icon_options, run_icon_pipeline
from crunchwrap.cli.config_option import load_config_or_exit
from crunchwrap.cli.output import console, print_banner, print_warning
from crunchwrap.images.finder import IMAGE_EXTENSIONS, find_images
from crunchwrap.prompt.terminal import Choice, prompt_choice


def new_pwa_images(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a crunchwrap config.yaml"
    ),
) -> None:
    """Generate PWA icons from an image in the current directory."""
    config = load_config_or_exit(config_path)
    print_banner("Generate PWA images from an existing image! 📱", style="yellow")

    root = Path.cwd()
    console.print("[cyan]  Scanning for images...[/cyan]")
    images = find_images(root)

    if not images:
        console.print("\n[red]  ❌ No images found in this directory.[/red]")
        supported = ", ".join(sorted(IMAGE_EXTENSIONS))
        console.print(f"[yellow]  Supported formats: {supported}[/yellow]")
        return

    console.print(f"[cyan]  Found {len(images)} image(s).[/cyan]\n")
    selected = prompt_choice(
        "📷 Select an image to use as source",
        [Choice(image, image) for image in images],
    )
    source = root / selected
    console.print(f"\n[cyan]  Using: {escape(selected)}[/cyan]")

    options = ask_icon_options(source)
    public_root = root / config.public_dir
    result = run_icon_pipeline(source, public_root, options)
    if result.diagnostic:
        print_warning(result.diagnostic)

    console.print("\n[blue]  ✅ All done![/blue]")
    console.print(f"  📂 PWA images generated in: [bold]{escape(str(public_root))}[/bold]")
