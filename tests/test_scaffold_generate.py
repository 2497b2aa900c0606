"""Tests for crunchwrap.scaffold.generate - the generation stage list."""

from __future__ import annotations

from pathlib import Path

import pytest

from crunchwrap.errors import DestinationExistsError
from crunchwrap.execution.stages import Outcome, StageResult, run_stages
from crunchwrap.models.config import ToolConfig
from crunchwrap.models.project import ProjectMetadata, TemplateChoice
from crunchwrap.scaffold.generate import GenerationPlan, check_destination, generation_stages

TEMPLATE = TemplateChoice(key="nuxt-starter", label="Nuxt", url="https://github.com/acme/nuxt-starter")
FIREBASE_TEMPLATE = TemplateChoice(
    key="nuxt-fb-starter", label="Nuxt + Firebase", url="https://github.com/acme/nuxt-fb-starter"
)


def _degit_writes(files: dict[str, str]):
    """Runner effect that materializes a template at the degit destination."""

    def effect(argv, cwd) -> None:
        dest = Path(argv[argv.index("degit") + 2])
        for rel, text in files.items():
            path = dest / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")

    return effect


def _plan(tmp_path: Path, template: TemplateChoice = TEMPLATE, remote_url=None) -> GenerationPlan:
    return GenerationPlan(
        metadata=ProjectMetadata(project_name="shop", title="Shop"),
        template=template,
        destination=tmp_path / "shop",
        remote_url=remote_url,
    )


def _run(plan, fake_run, **kwargs):
    stages = generation_stages(plan, ToolConfig(), run=fake_run, which=lambda name: True, **kwargs)
    return stages, run_stages(stages)


class TestCheckDestination:
    def test_existing_folder(self, tmp_path: Path) -> None:
        with pytest.raises(DestinationExistsError, match="Folder already exists"):
            check_destination(tmp_path)

    def test_free_folder(self, tmp_path: Path) -> None:
        check_destination(tmp_path / "new")


class TestGenerationStages:
    """Stage order and failure handling."""

    def test_basic_stage_order(self, fake_run, tmp_path: Path) -> None:
        stages = generation_stages(_plan(tmp_path), ToolConfig(), run=fake_run)
        assert [s.name for s in stages] == ["generate", "publish"]

    def test_firebase_and_logo_stages(self, fake_run, tmp_path: Path) -> None:
        stages = generation_stages(
            _plan(tmp_path, FIREBASE_TEMPLATE), ToolConfig(),
            logo_stage=lambda: StageResult.ok(), run=fake_run,
        )
        assert [s.name for s in stages] == ["generate", "firebase", "logo", "publish"]

    def test_happy_path_substitutes_and_commits(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("bunx", effect=_degit_writes({"app.vue": "<h1>{{TITLE}}</h1>"}))
        plan = _plan(tmp_path)

        _, report = _run(plan, fake_run)

        assert report.succeeded
        assert (plan.destination / "app.vue").read_text() == "<h1>Shop</h1>"
        assert fake_run.calls[0] == (
            "bunx", "degit", "acme/nuxt-starter", str(plan.destination), "--mode=tar",
        )
        assert ("git", "init") in fake_run.calls

    def test_fetch_failure_aborts_before_publishing(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("bunx", returncode=1, stderr="could not find repository")
        _, report = _run(_plan(tmp_path), fake_run)

        assert report.aborted
        name, result = report.results[-1]
        assert name == "generate"
        assert result.outcome is Outcome.FATAL
        assert "could not find repository" in result.diagnostic
        assert [name for name, _ in report.results] == ["generate"]
        assert not fake_run.called("git")

    def test_logo_warning_does_not_stop_publishing(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("bunx", effect=_degit_writes({"a.txt": "x"}))
        _, report = _run(_plan(tmp_path), fake_run, logo_stage=lambda: StageResult.warn("no key"))

        assert not report.aborted
        assert [name for name, _ in report.results] == ["generate", "logo", "publish"]
        assert fake_run.called("git", "init")

    def test_firebase_runs_in_new_project(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("bunx", effect=_degit_writes({"a.txt": "x"}))
        plan = _plan(tmp_path, FIREBASE_TEMPLATE)
        _run(plan, fake_run)
        index = fake_run.calls.index(("firebase", "init"))
        assert fake_run.cwds[index] == plan.destination

    def test_publish_failure_is_a_warning(self, fake_run, tmp_path: Path) -> None:
        fake_run.on("bunx", effect=_degit_writes({"a.txt": "x"}))
        fake_run.on("gh", "auth", "status", returncode=1)
        seen: list[str] = []

        _, report = _run(
            _plan(tmp_path, remote_url="https://github.com/acme/shop.git"), fake_run,
            on_publish_result=lambda name, result: seen.append(name),
        )

        name, result = report.results[-1]
        assert name == "publish"
        assert result.outcome is Outcome.WARN
        assert not report.aborted
        assert seen[-1] == "gh auth"

    def test_status_wraps_generation(self, fake_run, tmp_path: Path) -> None:
        from contextlib import contextmanager

        messages: list[str] = []

        @contextmanager
        def status(text):
            messages.append(text)
            yield

        fake_run.on("bunx", effect=_degit_writes({"a.txt": "x"}))
        _run(_plan(tmp_path), fake_run, status=status)
        assert messages == ["Generating repository..."]
