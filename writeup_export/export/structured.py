"""Word-processor (DOCX) export built from geometry-free blocks."""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Literal, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

from ..config import AppConfig
from ..errors import DocxExportError
from ..schemas import Project, estimate_pages, format_created, format_word_count
from .markdown import normalized_paragraphs

log = logging.getLogger(__name__)

Alignment = Literal["left", "center"]


@dataclass(frozen=True)
class Block:
    """One paragraph of the structured document; sizes and spacing in points."""

    text: str = ""
    size: float = 11
    bold: bool = False
    align: Alignment = "left"
    space_before: float = 0
    space_after: float = 0
    heading_level: Optional[int] = None
    page_break_before: bool = False


def build_blocks(project: Project, config: AppConfig) -> List[Block]:
    settings = project.settings
    words = format_word_count(project.word_count)
    pages = estimate_pages(project.word_count)
    blocks: List[Block] = [
        Block(project.title, size=16, bold=True, align="center", space_after=20),
        Block(config.branding.attribution, size=10, align="center", space_after=10),
        Block(
            f"Created: {format_created(project.created_at, config.dates.format)}",
            size=8,
            align="center",
            space_after=5,
        ),
        Block(f"Word Count: {words} | Pages: {pages}", size=8, align="center", space_after=20),
        Block(
            f"Format: {settings.format} | Style: {settings.style} | Tone: {settings.tone}",
            size=7,
            align="center",
            space_after=30,
        ),
        Block(page_break_before=True),
    ]

    for number, section in project.numbered_sections():
        log.debug("Structuring section %d: %s", number, section.title)
        blocks.append(
            Block(
                f"{number}. {section.title}",
                size=12,
                bold=True,
                heading_level=1,
                space_before=20,
                space_after=10,
            )
        )
        for paragraph in normalized_paragraphs(section.content):
            blocks.append(Block(paragraph, size=11, space_after=10))
        blocks.append(Block(space_after=20))
    return blocks


class DocxRenderer:
    extension = ".docx"
    media_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def render(self, project: Project) -> bytes:
        try:
            blocks = build_blocks(project, self.config)
            log.debug("Created %d blocks for Word document %r", len(blocks), project.title)
            return self._serialize(project, blocks)
        except Exception as exc:
            raise DocxExportError(f"Failed to export Word document: {exc}", detail=str(exc)) from exc

    def _serialize(self, project: Project, blocks: List[Block]) -> bytes:
        document = Document()
        properties = document.core_properties
        properties.title = project.title
        properties.comments = self.config.branding.attribution
        properties.author = self.config.branding.creator

        for block in blocks:
            style = f"Heading {block.heading_level}" if block.heading_level else None
            paragraph = document.add_paragraph(style=style)
            fmt = paragraph.paragraph_format
            if block.page_break_before:
                fmt.page_break_before = True
            if block.space_before:
                fmt.space_before = Pt(block.space_before)
            if block.space_after:
                fmt.space_after = Pt(block.space_after)
            if block.align == "center":
                paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            run = paragraph.add_run(block.text)
            run.font.size = Pt(block.size)
            if block.bold:
                run.bold = True

        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()
