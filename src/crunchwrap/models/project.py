"""Project metadata and template choice records.

Both are frozen pydantic models: created once from user answers and
never mutated afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, computed_field, field_validator

from crunchwrap.scaffold.validate import (
    INVALID_NAME_MESSAGE,
    is_valid_project_name,
    slugify,
    validate_answer,
)


class ProjectMetadata(BaseModel):
    """Answers collected by `crunchwrap init`, consumed by token substitution.

    No value may contain a placeholder token, so one substitution pass
    consumes every token and a second pass changes nothing.
    """

    model_config = {"frozen": True, "extra": "forbid", "str_strip_whitespace": True}

    project_name: str
    short_name: str = ""
    domain_name: str = ""
    title: str = ""
    description: str = ""
    email: str = ""
    phone: str = ""

    @field_validator("*")
    @classmethod
    def _reject_placeholders(cls, value: str) -> str:
        message = validate_answer(value)
        if message:
            raise ValueError(message)
        return value

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        if not is_valid_project_name(value):
            raise ValueError(INVALID_NAME_MESSAGE)
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def slug(self) -> str:
        return slugify(self.project_name)


class TemplateChoice(BaseModel):
    """A selectable template. A missing URL marks a not-yet-available entry."""

    model_config = {"frozen": True, "extra": "forbid"}

    key: str
    label: str
    url: str | None = None

    @property
    def available(self) -> bool:
        return bool(self.url)

    @property
    def provisions_firebase(self) -> bool:
        """Firebase-backed templates carry '-fb-' in their key."""
        return "-fb-" in self.key
