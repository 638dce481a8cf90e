"""Exception taxonomy raised at the export call boundary."""
from __future__ import annotations

from typing import Optional


class ExportError(Exception):
    """Base class for every failure surfaced by the export engine."""

    def __init__(self, message: str, *, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ExportInputError(ExportError):
    """The project handed to the engine is absent or malformed."""


class RenderError(ExportError):
    """A renderer failed; no artifact was produced."""

    format_name = "unknown"


class PdfExportError(RenderError):
    format_name = "page"


class DocxExportError(RenderError):
    format_name = "structured"


class TextExportError(RenderError):
    format_name = "text"
