"""Assemble the project generation pipeline.

fetch -> substitute -> backend provisioning -> logo/icons -> publish.
Fetch and substitution failures abort generation; every later stage can
only warn, so a project that was written to disk is always reported as
generated.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import ContextManager

from crunchwrap.errors import DestinationExistsError, FetchError, SubstitutionError
from crunchwrap.execution.process import Runner, run_tool, tool_available
from crunchwrap.execution.stages import Stage, StageResult, guarded
from crunchwrap.models.config import ToolConfig
from crunchwrap.models.project import ProjectMetadata, TemplateChoice
from crunchwrap.publish.firebase import provision_firebase
from crunchwrap.publish.git import Publisher
from crunchwrap.publish.remote import Visibility
from crunchwrap.scaffold.fetch import fetch_template
from crunchwrap.scaffold.substitute import substitute_tokens


@dataclass(frozen=True)
class GenerationPlan:
    """Everything collected interactively before anything touches disk."""

    metadata: ProjectMetadata
    template: TemplateChoice
    destination: Path
    remote_url: str | None = None
    visibility: Visibility = Visibility.PUBLIC


def check_destination(destination: Path) -> None:
    """Raises DestinationExistsError if the project folder is already there."""
    if destination.exists():
        raise DestinationExistsError(str(destination))


def _fetch_and_substitute(
    plan: GenerationPlan, run: Runner, which: Callable[[str], bool]
) -> StageResult:
    assert plan.template.url is not None
    fetch_template(plan.template.url, plan.destination, run=run, which=which)
    changed = substitute_tokens(plan.destination, plan.metadata)
    return StageResult.ok(f"Template fetched, placeholders replaced in {len(changed)} files")


def _publish(
    plan: GenerationPlan,
    config: ToolConfig,
    run: Runner,
    which: Callable[[str], bool],
    on_result: Callable[[str, StageResult], None] | None,
) -> StageResult:
    publisher = Publisher(
        plan.destination,
        plan.remote_url,
        plan.visibility,
        git_config=config.git,
        run=run,
        which=which,
    )
    report = publisher.publish(on_result=on_result)
    if report.succeeded:
        return StageResult.ok()
    # The failing sub-step already reported its own diagnostic
    return StageResult.warn("Publishing did not complete; the generated project is intact.")


def generation_stages(
    plan: GenerationPlan,
    config: ToolConfig,
    *,
    logo_stage: Callable[[], StageResult] | None = None,
    status: Callable[[str], ContextManager] = lambda _text: nullcontext(),
    on_publish_result: Callable[[str, StageResult], None] | None = None,
    run: Runner = run_tool,
    which: Callable[[str], bool] = tool_available,
) -> list[Stage]:
    """Build the ordered stage list for one generation run.

    Args:
        plan: Collected answers and destination.
        config: Tool configuration.
        logo_stage: Optional AI logo + icon stage, built by the caller
            since it is interactive.
        status: Spinner factory wrapped around the template stage.
        on_publish_result: Reporter for each publishing sub-step.
        run: Command runner (injectable for tests).
        which: PATH lookup (injectable for tests).
    """

    def generate() -> StageResult:
        with status("Generating repository..."):
            return _fetch_and_substitute(plan, run, which)

    stages = [
        Stage(
            "generate",
            guarded(generate, fatal=(FetchError, SubstitutionError)),
        )
    ]
    if plan.template.provisions_firebase:
        stages.append(
            Stage("firebase", lambda: provision_firebase(plan.destination, run=run, which=which))
        )
    if logo_stage is not None:
        stages.append(Stage("logo", logo_stage))
    stages.append(
        Stage("publish", lambda: _publish(plan, config, run, which, on_publish_result))
    )
    return stages
