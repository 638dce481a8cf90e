"""Exporters for write-up projects."""
from .exporter import ExportArtifact, Exporter, ExportFormat, export_project
from .filenames import sanitize_filename
from .markdown import normalize, split_paragraphs

__all__ = [
    "ExportArtifact",
    "ExportFormat",
    "Exporter",
    "export_project",
    "normalize",
    "sanitize_filename",
    "split_paragraphs",
]
