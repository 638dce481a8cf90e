"""Shared fixtures for export tests."""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Sequence, Tuple

import pytest

from writeup_export.config import AppConfig
from writeup_export.schemas import ExportSettings, Project, Section


def build_project(title: str = "My Report", sections: Sequence[Tuple[str, str]] = (), word_count: int = 1234) -> Project:
    return Project(
        id="proj-1",
        title=title,
        prompt="Write a report",
        sections=[Section(id=f"s{i}", title=name, content=body) for i, (name, body) in enumerate(sections)],
        word_count=word_count,
        created_at=datetime(2024, 3, 5, 14, 30),
        settings=ExportSettings(
            target_length="medium",
            style="academic",
            tone="formal",
            format="report",
            include_references=True,
        ),
    )


@pytest.fixture
def make_project() -> Callable[..., Project]:
    return build_project


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def three_sections() -> Project:
    return build_project(
        sections=[
            ("Introduction", "## Background\n\nThis is **important** context."),
            ("Empty", "   \n  "),
            ("Findings", "- first point\n- second point\n\nSee [docs](https://example.com)."),
        ]
    )
