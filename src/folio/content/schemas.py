"""Frontmatter schemas for each content collection.

Required string fields must be present and non-empty. Optional fields stay
``None`` when absent; they are never coerced into empty strings here.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

RequiredText = Annotated[str, Field(min_length=1)]


def validate_iso_date(value: str) -> str:
    """Accept only zero-padded ``YYYY-MM-DD`` calendar dates."""
    if not ISO_DATE_PATTERN.match(value):
        msg = f"expected YYYY-MM-DD, got {value!r}"
        raise ValueError(msg)
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        msg = f"not a calendar date: {value!r}"
        raise ValueError(msg) from exc
    return value


class Frontmatter(BaseModel):
    """Fields shared by every collection."""

    model_config = ConfigDict(extra="allow", frozen=True, str_strip_whitespace=True)

    title: RequiredText
    date: RequiredText
    summary: RequiredText
    featured: bool | None = None

    @field_validator("date")
    @classmethod
    def _check_date(cls, v: str) -> str:
        return validate_iso_date(v)


class ProjectLinks(BaseModel):
    model_config = ConfigDict(frozen=True)

    github: str | None = None
    demo: str | None = None


class ProjectFrontmatter(Frontmatter):
    """Frontmatter of a project case study."""

    type: RequiredText
    stack: list[str] | None = None
    confidential: bool | None = None
    links: ProjectLinks | None = None


class BlogFrontmatter(Frontmatter):
    """Frontmatter of a blog post; ``type`` is optional (e.g. "Case Study")."""

    type: str | None = None
    tags: list[str] | None = None


def required_fields(schema: type[BaseModel]) -> list[str]:
    """Return the names of the fields a schema requires, in declaration order."""
    return [name for name, field in schema.model_fields.items() if field.is_required()]
