"""Plain-text export rendered through a Jinja2 template."""
from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .. import asset_path
from ..config import AppConfig
from ..errors import TextExportError
from ..schemas import Project, estimate_pages, format_created, format_word_count
from .markdown import normalize

log = logging.getLogger(__name__)

TEMPLATE_NAME = "writeup.txt.j2"


class TextRenderer:
    extension = ".txt"
    media_type = "text/plain; charset=utf-8"

    def __init__(self, config: AppConfig, template_dir: Path | str | None = None) -> None:
        directory = Path(template_dir or asset_path("templates")).resolve()
        self.environment = Environment(
            loader=FileSystemLoader(directory),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.config = config

    def render_text(self, project: Project) -> str:
        template = self.environment.get_template(TEMPLATE_NAME)
        sections = [
            (number, section.title, normalize(section.content))
            for number, section in project.numbered_sections()
        ]
        return template.render(
            project=project,
            attribution=self.config.branding.attribution,
            created=format_created(project.created_at, self.config.dates.format),
            word_count=format_word_count(project.word_count),
            pages=estimate_pages(project.word_count),
            sections=sections,
        )

    def render(self, project: Project) -> bytes:
        try:
            content = self.render_text(project)
        except Exception as exc:
            raise TextExportError("Failed to export text file", detail=str(exc)) from exc
        log.debug("Rendered %d characters of text for %r", len(content), project.title)
        return content.encode("utf-8")
