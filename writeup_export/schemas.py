"""Pydantic schemas for the write-up document handed to the exporters."""
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

WORDS_PER_PAGE = 250


class _Frozen(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        protected_namespaces=(),
    )


class ExportSettings(_Frozen):
    target_length: str = ""
    style: str = ""
    tone: str = ""
    format: str = ""
    # Carried for forward compatibility; no renderer reads it yet.
    include_references: bool = False


class Section(_Frozen):
    id: Optional[str] = None
    title: str
    content: str = ""
    word_count: int = 0
    model: Optional[str] = None
    model_provider: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("section title must not be empty")
        return value

    @property
    def is_emitted(self) -> bool:
        return bool(self.content and self.content.strip())


class Project(_Frozen):
    id: Optional[str] = None
    title: str
    prompt: Optional[str] = None
    sections: Tuple[Section, ...] = Field(default_factory=tuple)
    word_count: int = 0
    created_at: datetime
    settings: ExportSettings = Field(default_factory=ExportSettings)

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("project title must not be empty")
        return value

    def numbered_sections(self) -> Iterator[Tuple[int, Section]]:
        """Yield ``(number, section)`` for sections that produce output.

        Numbers are positional: an empty section is skipped but still
        consumes its ordinal, so the sequence may show gaps.
        """
        for index, section in enumerate(self.sections):
            if section.is_emitted:
                yield index + 1, section


def estimate_pages(word_count: int) -> int:
    """Rough page estimate shown in headers, rounding halves up."""
    return int(math.floor(word_count / WORDS_PER_PAGE + 0.5))


def format_word_count(word_count: int) -> str:
    return f"{word_count:,}"


def format_created(value: date, pattern: Optional[str] = None) -> str:
    if pattern:
        return value.strftime(pattern)
    return f"{value.month}/{value.day}/{value.year}"
