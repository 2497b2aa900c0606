"""Sequential stage pipeline driven by an explicit policy table.

Each stage returns a tagged StageResult. run_stages() looks the outcome
up in a policy table to decide whether to continue, skip the remaining
stages of this pipeline, or abort the whole run. Nested pipelines (the
publishing steps) run with their own, more lenient, policy.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum


class Outcome(str, Enum):
    """Tag carried by every stage result."""

    OK = "ok"
    WARN = "warn"
    FATAL = "fatal"


class Action(str, Enum):
    """What the driver does after a stage, per the policy table."""

    CONTINUE = "continue"
    SKIP_REST = "skip-rest"
    ABORT = "abort"


@dataclass(frozen=True)
class StageResult:
    """Result of one pipeline stage."""

    outcome: Outcome
    diagnostic: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def ok(cls, diagnostic: str | None = None) -> StageResult:
        return cls(Outcome.OK, diagnostic)

    @classmethod
    def warn(cls, diagnostic: str) -> StageResult:
        return cls(Outcome.WARN, diagnostic)

    @classmethod
    def fatal(cls, diagnostic: str) -> StageResult:
        return cls(Outcome.FATAL, diagnostic)


Policy = Mapping[Outcome, Action]

# Top-level generation: warnings never stop the run, fatal errors end it.
GENERATION_POLICY: Policy = {
    Outcome.OK: Action.CONTINUE,
    Outcome.WARN: Action.CONTINUE,
    Outcome.FATAL: Action.ABORT,
}

# Sub-pipelines such as publishing: any failure skips their remaining steps only.
SUBSTAGE_POLICY: Policy = {
    Outcome.OK: Action.CONTINUE,
    Outcome.WARN: Action.SKIP_REST,
    Outcome.FATAL: Action.SKIP_REST,
}


@dataclass(frozen=True)
class Stage:
    """A named, zero-argument step returning a StageResult."""

    name: str
    run: Callable[[], StageResult]


@dataclass
class PipelineReport:
    """Per-stage results plus how the pipeline ended."""

    results: list[tuple[str, StageResult]] = field(default_factory=list)
    aborted: bool = False

    @property
    def succeeded(self) -> bool:
        """True when every stage that ran returned OK."""
        return not self.aborted and all(r.succeeded for _, r in self.results)

    def first_failure(self) -> tuple[str, StageResult] | None:
        for name, result in self.results:
            if not result.succeeded:
                return name, result
        return None


def run_stages(
    stages: list[Stage],
    policy: Policy = GENERATION_POLICY,
    on_result: Callable[[str, StageResult], None] | None = None,
) -> PipelineReport:
    """Run stages in order, applying the policy after each one.

    Args:
        stages: Stages to run sequentially.
        policy: Mapping from outcome to action.
        on_result: Optional callback invoked after each stage.

    Returns:
        PipelineReport with results of the stages that ran and whether
        the pipeline aborted.
    """
    report = PipelineReport()
    for stage in stages:
        result = stage.run()
        report.results.append((stage.name, result))
        if on_result is not None:
            on_result(stage.name, result)

        action = policy.get(result.outcome, Action.ABORT)
        if action is Action.CONTINUE:
            continue
        if action is Action.ABORT:
            report.aborted = True
        break
    return report


def guarded(
    func: Callable[[], StageResult | None],
    *,
    warn: tuple[type[Exception], ...] = (),
    fatal: tuple[type[Exception], ...] = (),
) -> Callable[[], StageResult]:
    """Wrap a step that raises domain errors into one returning a StageResult.

    A step returning None counts as OK. Exceptions listed in neither
    tuple propagate.
    """

    def run() -> StageResult:
        try:
            result = func()
        except fatal as exc:
            return StageResult.fatal(str(exc))
        except warn as exc:
            return StageResult.warn(str(exc))
        return result if result is not None else StageResult.ok()

    return run
