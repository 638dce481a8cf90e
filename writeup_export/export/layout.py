"""Manual pagination for the page-based (PDF) export.

The layout pass turns a :class:`~writeup_export.schemas.Project` into a
:class:`PageLayout`: an ordered list of pages, each holding text lines and
horizontal rules positioned in millimetres from the top-left corner of the
page. Nothing is drawn here; :mod:`writeup_export.export.pdf` paints the plan
onto a reportlab canvas. Keeping the two apart lets the pagination be checked
without parsing PDF output.

All mutable state (the vertical cursor and the pages built so far) lives on a
:class:`LayoutContext` created for a single render call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Union

from reportlab.lib import pagesizes
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

from ..config import AppConfig
from ..schemas import Project, estimate_pages, format_created, format_word_count
from .markdown import normalized_paragraphs

Align = Literal["left", "center"]

TITLE_SIZE = 24
META_SIZE = 12
DETAIL_SIZE = 10
HEADING_SIZE = 16
BODY_SIZE = 11

TITLE_Y = 60.0
META_START_Y = 80.0
META_STEP = 10.0
DETAILS_Y = 130.0

LINE_GUARD = 8.0
LINE_ADVANCE = 7.0
BLOCK_GAP = 5.0
HEADING_GAP = 5.0
RULE_GUARD = 5.0
TITLE_RULE_BEFORE = 10.0
TITLE_RULE_AFTER = 20.0
TITLE_RULE_WIDTH = 0.5
SECTION_RULE_BEFORE = 10.0
SECTION_RULE_AFTER = 15.0
SECTION_RULE_WIDTH = 0.2


@dataclass(frozen=True)
class PageGeometry:
    width: float
    height: float
    margin: float

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        return self.height - self.margin

    @classmethod
    def from_config(cls, config: AppConfig) -> "PageGeometry":
        width_pt, height_pt = getattr(pagesizes, config.page.size)
        return cls(width=width_pt / mm, height=height_pt / mm, margin=config.page.margin_mm)


@dataclass(frozen=True)
class TextLine:
    text: str
    x: float
    y: float
    font: str
    size: float
    align: Align = "left"


@dataclass(frozen=True)
class Rule:
    x1: float
    x2: float
    y: float
    width: float


PageItem = Union[TextLine, Rule]


@dataclass
class Page:
    number: int
    items: List[PageItem] = field(default_factory=list)

    @property
    def lines(self) -> List[TextLine]:
        return [item for item in self.items if isinstance(item, TextLine)]

    @property
    def rules(self) -> List[Rule]:
        return [item for item in self.items if isinstance(item, Rule)]


@dataclass
class PageLayout:
    geometry: PageGeometry
    pages: List[Page]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def lines(self) -> List[TextLine]:
        return [line for page in self.pages for line in page.lines]


def text_width(text: str, font: str, size: float) -> float:
    """Width of ``text`` in millimetres."""
    return pdfmetrics.stringWidth(text, font, size) / mm


def measure_and_wrap(text: str, font: str, size: float, max_width: float) -> List[str]:
    """Greedy word wrap to ``max_width`` millimetres.

    Newlines in ``text`` are hard breaks. Lines only break between words; a
    single word wider than ``max_width`` sits alone on its own line.
    """
    lines: List[str] = []
    for raw_line in text.split("\n"):
        words = raw_line.split()
        if not words:
            lines.append("")
            continue
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if text_width(candidate, font, size) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


class LayoutContext:
    """Per-render cursor and page list."""

    def __init__(self, geometry: PageGeometry, *, regular_font: str, bold_font: str) -> None:
        self.geometry = geometry
        self.regular_font = regular_font
        self.bold_font = bold_font
        self.pages: List[Page] = [Page(number=1)]
        self.y = geometry.margin

    @property
    def page(self) -> Page:
        return self.pages[-1]

    def new_page(self) -> None:
        self.pages.append(Page(number=len(self.pages) + 1))
        self.y = self.geometry.margin

    def ensure_space(self, required: float) -> None:
        if self.y + required > self.geometry.bottom_limit:
            self.new_page()

    def font(self, bold: bool) -> str:
        return self.bold_font if bold else self.regular_font

    def write_centered(self, text: str, y: float, size: float, *, bold: bool = False) -> None:
        self.page.items.append(
            TextLine(text=text, x=self.geometry.width / 2, y=y, font=self.font(bold), size=size, align="center")
        )

    def write_block(self, text: str, size: float, *, bold: bool = False) -> None:
        font = self.font(bold)
        for line in measure_and_wrap(text, font, size, self.geometry.content_width):
            self.ensure_space(LINE_GUARD)
            self.page.items.append(TextLine(text=line, x=self.geometry.margin, y=self.y, font=font, size=size))
            self.y += LINE_ADVANCE
        self.y += BLOCK_GAP

    def rule(self, width: float) -> None:
        self.page.items.append(
            Rule(x1=self.geometry.margin, x2=self.geometry.width - self.geometry.margin, y=self.y, width=width)
        )


def write_title_block(ctx: LayoutContext, project: Project, config: AppConfig) -> None:
    ctx.write_centered(project.title, TITLE_Y, TITLE_SIZE, bold=True)
    meta = [
        config.branding.attribution,
        f"Created: {format_created(project.created_at, config.dates.format)}",
        f"Word Count: {format_word_count(project.word_count)}",
        f"Pages: {estimate_pages(project.word_count)}",
    ]
    for offset, text in enumerate(meta):
        ctx.write_centered(text, META_START_Y + offset * META_STEP, META_SIZE)

    ctx.y = DETAILS_Y
    settings = project.settings
    ctx.write_block(f"Format: {settings.format}", DETAIL_SIZE)
    ctx.write_block(f"Style: {settings.style}", DETAIL_SIZE)
    ctx.write_block(f"Tone: {settings.tone}", DETAIL_SIZE)
    ctx.write_block(f"Target Length: {settings.target_length}", DETAIL_SIZE)

    ctx.y += TITLE_RULE_BEFORE
    ctx.rule(TITLE_RULE_WIDTH)
    ctx.y += TITLE_RULE_AFTER


def write_sections(ctx: LayoutContext, project: Project) -> None:
    for number, section in project.numbered_sections():
        ctx.write_block(f"{number}. {section.title}", HEADING_SIZE, bold=True)
        ctx.y += HEADING_GAP
        for paragraph in normalized_paragraphs(section.content):
            ctx.write_block(paragraph, BODY_SIZE)
        ctx.y += SECTION_RULE_BEFORE
        ctx.ensure_space(RULE_GUARD)
        ctx.rule(SECTION_RULE_WIDTH)
        ctx.y += SECTION_RULE_AFTER


def layout_project(project: Project, config: AppConfig) -> PageLayout:
    ctx = LayoutContext(
        PageGeometry.from_config(config),
        regular_font=config.fonts.regular,
        bold_font=config.fonts.bold,
    )
    write_title_block(ctx, project, config)
    # Section content never shares the title page.
    ctx.new_page()
    write_sections(ctx, project)
    return PageLayout(geometry=ctx.geometry, pages=ctx.pages)
