"""Format dispatch and artifact delivery for write-up exports."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Type

from pydantic import ValidationError

from ..config import AppConfig, get_cached_config
from ..errors import ExportError, ExportInputError
from ..schemas import Project
from .filenames import build_filename
from .pdf import PdfRenderer
from .structured import DocxRenderer
from .text import TextRenderer

log = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    page = "page"
    structured = "structured"
    text = "text"

    @classmethod
    def parse(cls, value: "ExportFormat | str") -> "ExportFormat":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().lstrip(".")
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValueError(f"Unsupported export format: {value}") from None


_ALIASES: Dict[str, ExportFormat] = {
    "page": ExportFormat.page,
    "pdf": ExportFormat.page,
    "structured": ExportFormat.structured,
    "docx": ExportFormat.structured,
    "word": ExportFormat.structured,
    "text": ExportFormat.text,
    "txt": ExportFormat.text,
}


class Renderer(Protocol):
    extension: str
    media_type: str

    def render(self, project: Project) -> bytes:
        ...


RENDERERS: Dict[ExportFormat, Type[Renderer]] = {
    ExportFormat.page: PdfRenderer,
    ExportFormat.structured: DocxRenderer,
    ExportFormat.text: TextRenderer,
}


@dataclass(frozen=True)
class ExportArtifact:
    format: ExportFormat
    filename: str
    media_type: str
    data: bytes

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")


def coerce_project(project: Any) -> Project:
    """Accept a Project or its mapping form; reject anything else early."""
    if isinstance(project, Project):
        return project
    if project is None:
        raise ExportInputError("No project supplied for export")
    if not isinstance(project, Mapping):
        raise ExportInputError(f"Cannot export object of type {type(project).__name__}")
    if project.get("sections") is None:
        raise ExportInputError("Project has no sections to export")
    try:
        return Project.model_validate(project)
    except ValidationError as exc:
        raise ExportInputError("Project is malformed", detail=str(exc)) from exc


class Exporter:
    """Render projects to one of the supported formats and optionally persist them."""

    def __init__(self, config: AppConfig | None = None, output_dir: str | Path | None = None) -> None:
        self.config = config or get_cached_config()
        self.output_dir = Path(output_dir or self.config.output.directory)

    def renderer_for(self, format: ExportFormat | str) -> Renderer:
        return RENDERERS[ExportFormat.parse(format)](self.config)

    def export(self, project: Project | Mapping[str, Any], format: ExportFormat | str) -> ExportArtifact:
        export_format = ExportFormat.parse(format)
        model = coerce_project(project)
        renderer = self.renderer_for(export_format)
        try:
            data = renderer.render(model)
        except ExportError as exc:
            log.warning("%s export of %r failed: %s", export_format.value, model.title, exc.detail or exc)
            raise
        filename = build_filename(model.title, renderer.extension)
        log.info("Exported %r as %s (%d bytes)", model.title, filename, len(data))
        return ExportArtifact(
            format=export_format,
            filename=filename,
            media_type=renderer.media_type,
            data=data,
        )

    def save(self, artifact: ExportArtifact, directory: str | Path | None = None) -> Path:
        target_dir = Path(directory) if directory is not None else self.output_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        destination = target_dir / artifact.filename
        destination.write_bytes(artifact.data)
        return destination

    def export_to_file(
        self,
        project: Project | Mapping[str, Any],
        format: ExportFormat | str,
        directory: str | Path | None = None,
    ) -> Path:
        return self.save(self.export(project, format), directory)

    def export_all(
        self,
        project: Project | Mapping[str, Any],
        directory: str | Path | None = None,
    ) -> Dict[ExportFormat, Path]:
        """Export every format with the same base name. Returns format -> path."""
        model = coerce_project(project)
        return {fmt: self.export_to_file(model, fmt, directory) for fmt in ExportFormat}


def export_project(
    project: Project | Mapping[str, Any],
    format: ExportFormat | str,
    *,
    config: Optional[AppConfig] = None,
) -> ExportArtifact:
    return Exporter(config=config).export(project, format)
