"""Paint a :class:`PageLayout` onto a reportlab canvas."""
from __future__ import annotations

import io
import logging

from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from ..config import AppConfig
from ..errors import PdfExportError
from ..schemas import Project
from .layout import PageLayout, Rule, TextLine, layout_project

log = logging.getLogger(__name__)


class PdfRenderer:
    extension = ".pdf"
    media_type = "application/pdf"

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def layout(self, project: Project) -> PageLayout:
        return layout_project(project, self.config)

    def render(self, project: Project) -> bytes:
        try:
            plan = self.layout(project)
            data = self._paint(project, plan)
        except Exception as exc:
            raise PdfExportError("PDF export failed", detail=str(exc)) from exc
        log.debug("Rendered %d PDF pages for %r", plan.page_count, project.title)
        return data

    def _paint(self, project: Project, plan: PageLayout) -> bytes:
        buffer = io.BytesIO()
        geometry = plan.geometry
        pdf = canvas.Canvas(buffer, pagesize=(geometry.width * mm, geometry.height * mm))
        branding = self.config.branding
        pdf.setTitle(project.title)
        pdf.setSubject(branding.attribution)
        pdf.setAuthor(branding.creator)
        pdf.setCreator(branding.generator)

        for page in plan.pages:
            for item in page.items:
                if isinstance(item, TextLine):
                    self._draw_text(pdf, item, geometry.height)
                elif isinstance(item, Rule):
                    pdf.setLineWidth(item.width * mm)
                    y = (geometry.height - item.y) * mm
                    pdf.line(item.x1 * mm, y, item.x2 * mm, y)
            pdf.showPage()
        pdf.save()
        return buffer.getvalue()

    def _draw_text(self, pdf: canvas.Canvas, line: TextLine, page_height: float) -> None:
        pdf.setFont(line.font, line.size)
        x = line.x * mm
        y = (page_height - line.y) * mm
        if line.align == "center":
            pdf.drawCentredString(x, y, line.text)
        else:
            pdf.drawString(x, y, line.text)
