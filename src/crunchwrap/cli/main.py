"""crunchwrap CLI entry point."""

import typer

from crunchwrap import __version__
from crunchwrap.cli.icons_cmd import new_pwa_images
from crunchwrap.cli.init_cmd import init
from crunchwrap.cli.logo_cmd import new_logo

app = typer.Typer(
    name="crunchwrap",
    help="Crunchwrap App CLI - scaffold projects from templates",
    no_args_is_help=True,
)

# Register subcommands
app.command()(init)
app.command(name="new-logo")(new_logo)
app.command(name="new-pwa-images")(new_pwa_images)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"crunchwrap {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Crunchwrap App CLI - scaffold projects from templates."""
