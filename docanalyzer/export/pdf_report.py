"""PDF rendering of an Analysis.

Sections are laid out top to bottom with a page break whenever the next
line or bullet does not fit. Footers ("Page X of Y") are drawn once the
total page count is known.
"""

import io
from pathlib import Path
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from docanalyzer.analysis.models import Analysis
from docanalyzer.logging.logger import Log

REPORT_TITLE = "AI Document Analysis Report"
EMPTY_SECTION_TEXT = "No items found."

_MARGIN = 15 * mm
_FOOTER_OFFSET = 10 * mm
_BODY_FONT = ("Helvetica", 12)
_BODY_LEADING = 15
_HEADING_FONT = ("Helvetica-Bold", 16)
_HEADING_LEADING = 24
_TITLE_FONT = ("Helvetica-Bold", 22)
_BULLET = "•"
_BULLET_INDENT = 5 * mm

_BLUE = colors.Color(4 / 255, 98 / 255, 201 / 255)
_GREEN = colors.Color(22 / 255, 115 / 255, 82 / 255)
_AMBER = colors.Color(217 / 255, 119 / 255, 6 / 255)


class _NumberedCanvas(canvas.Canvas):
    """Canvas that defers page output so each page can show the total count."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._saved_page_states: list[dict[str, Any]] = []

    def showPage(self) -> None:  # noqa: N802
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int) -> None:
        width, _ = self._pagesize
        self.setFont("Helvetica", 10)
        self.setFillColor(colors.grey)
        self.drawCentredString(width / 2, _FOOTER_OFFSET, f"Page {self._pageNumber} of {total}")


class _ReportLayout:
    def __init__(self, pdf: canvas.Canvas) -> None:
        self._pdf = pdf
        self._width, self._height = A4
        self._text_width = self._width - 2 * _MARGIN
        self._bottom = _MARGIN + _FOOTER_OFFSET
        self._y = self._height - _MARGIN

    def title(self, text: str) -> None:
        self._pdf.setFont(*_TITLE_FONT)
        self._pdf.setFillColor(colors.black)
        self._y -= _TITLE_FONT[1]
        self._pdf.drawCentredString(self._width / 2, self._y, text)
        self._y -= _HEADING_LEADING

    def section(self, heading: str, color: colors.Color) -> None:
        # Keep a heading on the same page as at least one body line.
        self._ensure_space(_HEADING_LEADING + _BODY_LEADING)
        self._pdf.setFont(*_HEADING_FONT)
        self._pdf.setFillColor(color)
        self._pdf.drawString(_MARGIN, self._y - _HEADING_FONT[1], heading)
        self._y -= _HEADING_LEADING

    def paragraph(self, text: str) -> None:
        lines = simpleSplit(text, _BODY_FONT[0], _BODY_FONT[1], self._text_width)
        for line in lines:
            self._ensure_space(_BODY_LEADING)
            self._draw_body_line(line, _MARGIN)
        self._y -= _BODY_LEADING / 2

    def bullets(self, items: list[str]) -> None:
        if not items:
            self._ensure_space(_BODY_LEADING)
            self._pdf.setFont("Helvetica-Oblique", _BODY_FONT[1])
            self._pdf.setFillColor(colors.grey)
            self._pdf.drawString(_MARGIN, self._y - _BODY_FONT[1], EMPTY_SECTION_TEXT)
            self._y -= _BODY_LEADING * 1.5
            return
        for item in items:
            lines = simpleSplit(
                item, _BODY_FONT[0], _BODY_FONT[1], self._text_width - _BULLET_INDENT
            )
            block_height = len(lines) * _BODY_LEADING
            if block_height <= self._height - _MARGIN - self._bottom:
                self._ensure_space(block_height)
            for i, line in enumerate(lines):
                self._ensure_space(_BODY_LEADING)
                if i == 0:
                    self._pdf.setFont(*_BODY_FONT)
                    self._pdf.setFillColor(colors.black)
                    self._pdf.drawString(_MARGIN, self._y - _BODY_FONT[1], _BULLET)
                self._draw_body_line(line, _MARGIN + _BULLET_INDENT)
            self._y -= 2
        self._y -= _BODY_LEADING / 2

    def finish(self) -> None:
        self._pdf.showPage()
        self._pdf.save()

    def _draw_body_line(self, line: str, x: float) -> None:
        self._pdf.setFont(*_BODY_FONT)
        self._pdf.setFillColor(colors.black)
        self._pdf.drawString(x, self._y - _BODY_FONT[1], line)
        self._y -= _BODY_LEADING

    def _ensure_space(self, height: float) -> None:
        if self._y - height < self._bottom:
            self._pdf.showPage()
            self._y = self._height - _MARGIN


def render_analysis_report(analysis: Analysis) -> bytes:
    """Render the analysis as a paginated PDF and return its bytes."""
    buffer = io.BytesIO()
    layout = _ReportLayout(_NumberedCanvas(buffer, pagesize=A4))
    layout.title(REPORT_TITLE)
    layout.section("Summary", _BLUE)
    layout.paragraph(analysis.summary)
    layout.section("Critical Findings", _BLUE)
    layout.bullets(analysis.critical_findings)
    layout.section("Cost Analysis", _GREEN)
    layout.bullets(analysis.cost_and_risk_analysis.costs)
    layout.section("Risk Analysis", _AMBER)
    layout.bullets(analysis.cost_and_risk_analysis.risks)
    layout.finish()
    return buffer.getvalue()


def write_analysis_report(analysis: Analysis, path: Path) -> None:
    """Render the analysis report and write it to `path`."""
    data = render_analysis_report(analysis)
    path.write_bytes(data)
    Log.info(f"Wrote {len(data)} byte analysis report to {path}")
