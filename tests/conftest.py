"""Shared fixtures: a fake command runner and fake image adapters."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from crunchwrap.adapters.base import (
    GeneratedImage,
    ImageAdapter,
    ImageRequestConfig,
    ImageSession,
)
from crunchwrap.execution.process import ToolResult


class FakeRunner:
    """Records every command and answers by argument prefix.

    Unmatched commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.cwds: list[Path | None] = []
        self._rules: list[tuple[tuple[str, ...], dict]] = []

    def on(
        self,
        *prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        effect: Callable[[tuple[str, ...], Path | None], None] | None = None,
    ) -> FakeRunner:
        self._rules.append(
            (prefix, {"returncode": returncode, "stdout": stdout, "stderr": stderr, "effect": effect})
        )
        return self

    def __call__(self, args, cwd=None, *, capture=True, interactive=False) -> ToolResult:
        argv = tuple(str(a) for a in args)
        self.calls.append(argv)
        self.cwds.append(cwd)
        for prefix, rule in self._rules:
            if argv[: len(prefix)] == prefix:
                if rule["effect"] is not None:
                    rule["effect"](argv, cwd)
                return ToolResult(
                    args=argv,
                    returncode=rule["returncode"],
                    stdout=rule["stdout"],
                    stderr=rule["stderr"],
                )
        return ToolResult(args=argv, returncode=0)

    def called(self, *prefix: str) -> bool:
        return any(call[: len(prefix)] == prefix for call in self.calls)


class FakeSession(ImageSession):
    """Returns queued images (or raises queued exceptions) in order."""

    def __init__(self, outcomes: list) -> None:
        self.outcomes = list(outcomes)
        self.instructions: list[str] = []

    async def send(self, instruction: str) -> GeneratedImage:
        self.instructions.append(instruction)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeImageAdapter(ImageAdapter):
    def __init__(self, outcomes: list | None = None, api_key: str | None = None) -> None:
        super().__init__(api_key)
        self.session = FakeSession(outcomes or [])
        self.configs: list[ImageRequestConfig] = []

    def start_session(self, config: ImageRequestConfig) -> ImageSession:
        self.configs.append(config)
        return self.session


@pytest.fixture
def fake_run() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def no_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point config discovery at a file that does not exist."""
    monkeypatch.setenv("CRUNCHWRAP_CONFIG", str(tmp_path / "missing-config.yaml"))


@pytest.fixture
def make_adapter() -> type[FakeImageAdapter]:
    return FakeImageAdapter


class PromptScript:
    """Scripted answers for prompt_text, prompt_choice and confirm.

    Text answers behave like the real prompt: blank resolves to the
    default, and an answer the validator rejects is recorded and the
    next one is taken. Choice answers are item indexes.
    """

    def __init__(self, texts=(), choices=(), confirms=()) -> None:
        self.texts = list(texts)
        self.choices = list(choices)
        self.confirms = list(confirms)
        self.labels: list[str] = []
        self.rejections: list[str] = []

    def text(self, label, default="", *, required=False, validate=None, console=None) -> str:
        self.labels.append(label)
        while True:
            value = self.texts.pop(0).strip() or default
            message = validate(value) if validate is not None else None
            if not message:
                return value
            self.rejections.append(message)

    def choice(self, label, items, **kwargs):
        self.labels.append(label)
        return list(items)[self.choices.pop(0)].value

    def confirm(self, label, **kwargs) -> bool:
        self.labels.append(label)
        return self.confirms.pop(0)

    def install(self, monkeypatch: pytest.MonkeyPatch, *modules: str) -> PromptScript:
        for module in modules:
            for name, func in (
                ("prompt_text", self.text),
                ("prompt_choice", self.choice),
                ("confirm", self.confirm),
            ):
                monkeypatch.setattr(f"{module}.{name}", func, raising=False)
        return self


@pytest.fixture
def prompts() -> type[PromptScript]:
    return PromptScript
