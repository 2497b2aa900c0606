"""crunchwrap init -- interactively generate a project from a template.

Collects project metadata, the template, optional publishing and logo
settings, then runs the generation pipeline: fetch, placeholder
substitution, backend provisioning, logo and icons, git publishing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from crunchwrap.cli.assets import (
    IconOptions,
    LogoRequest,
    ask_logo_request,
    logo_stage,
)
from crunchwrap.cli.config_option import load_config_or_exit
from crunchwrap.cli.output import (
    console,
    print_banner,
    print_failure,
    print_stage_result,
    status,
)
from crunchwrap.errors import DestinationExistsError
from crunchwrap.execution.stages import GENERATION_POLICY, StageResult, run_stages
from crunchwrap.models.config import ToolConfig
from crunchwrap.models.project import ProjectMetadata, TemplateChoice
from crunchwrap.prompt.terminal import Choice, confirm, prompt_choice, prompt_text
from crunchwrap.publish.remote import Visibility
from crunchwrap.scaffold.generate import GenerationPlan, check_destination, generation_stages
from crunchwrap.scaffold.validate import validate_answer, validate_project_name


def _ask_optional(label: str, default: str) -> str:
    return prompt_text(label, default, validate=validate_answer)


def collect_metadata(config: ToolConfig) -> tuple[ProjectMetadata, str, Visibility]:
    """Ask for project metadata, the git remote and its visibility."""
    defaults = config.defaults
    project_name = prompt_text(
        "📂 Project name",
        defaults.project_name,
        required=True,
        validate=validate_project_name,
    ).lower()

    remote_url = prompt_text("🌐 Git repository URL (optional)")
    visibility = Visibility.PUBLIC
    if remote_url:
        visibility = prompt_choice(
            "🔒 Repository visibility",
            [Choice("🔓 Public", Visibility.PUBLIC), Choice("🔒 Private", Visibility.PRIVATE)],
        )

    metadata = ProjectMetadata(
        project_name=project_name,
        short_name=_ask_optional("📝 Short name (optional)", defaults.short_name),
        domain_name=_ask_optional("🌍 Domain name (optional)", defaults.domain_name),
        title=_ask_optional("👑 Title (optional)", defaults.title),
        description=_ask_optional("📖 Description (optional)", defaults.description),
        email=_ask_optional("📧 Email contact (optional)", defaults.email),
        phone=_ask_optional("📞 Phone number (optional)", defaults.phone),
    )
    return metadata, remote_url, visibility


def select_template(config: ToolConfig) -> TemplateChoice:
    return prompt_choice(
        "✨ Select which template to use:",
        [Choice(template.label, template) for template in config.templates],
    )


def init(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a crunchwrap config.yaml"
    ),
) -> None:
    """Initialize a new project from a template.

    Exits with code 0 on success (even if publishing only partly
    succeeded) or when the chosen template is not available yet, and 1
    when the project could not be generated.
    """
    config = load_config_or_exit(config_path)
    print_banner("Welcome to the crunchwrap app CLI! 🌯 Let's build something awesome.")

    metadata, remote_url, visibility = collect_metadata(config)
    console.print()
    template = select_template(config)

    if not template.available:
        console.print("\n[yellow]🚧 That template is not available yet. Exiting.[/yellow]")
        return

    destination = Path.cwd() / metadata.project_name
    try:
        check_destination(destination)
    except DestinationExistsError as exc:
        print_failure(f"Error: {exc}")
        console.print(
            "[yellow]💡 Please choose a different project name or remove the existing folder.[/yellow]\n"
        )
        raise typer.Exit(code=1)

    logo_request: LogoRequest | None = None
    icon_options = IconOptions()
    if confirm("🎨 Generate a logo with AI?"):
        logo_request = ask_logo_request(config)
        icon_options = IconOptions(monochrome=confirm("Also generate a 512x512 monochrome icon?"))

    plan = GenerationPlan(
        metadata=metadata,
        template=template,
        destination=destination,
        remote_url=remote_url or None,
        visibility=visibility,
    )
    public_root = destination / config.public_dir

    def make_logo() -> StageResult:
        assert logo_request is not None
        return logo_stage(logo_request, public_root, config, icon_options)

    stages = generation_stages(
        plan,
        config,
        logo_stage=make_logo if logo_request is not None else None,
        status=status,
        on_publish_result=print_stage_result,
    )
    report = run_stages(stages, GENERATION_POLICY, on_result=print_stage_result)

    if report.aborted:
        failure = report.first_failure()
        print_failure("Failed to generate project.", failure[1].diagnostic if failure else None)
        raise typer.Exit(code=1)

    console.print(
        f"\n[bold green]🎉 Project successfully generated in: {escape(metadata.project_name)}[/bold green]"
    )
    console.print("[green]🚀 Next steps:[/green]")
    console.print(f"[cyan]  cd {escape(metadata.project_name)}[/cyan]")
    console.print("[cyan]  yarn install[/cyan]")
    console.print("[cyan]  yarn dev[/cyan]\n")
    console.print("[bold magenta]Happy coding! 🌮🌯✨[/bold magenta]\n")
