"""
infrastructure.reports.pdf_report - Table reports rendered with reportlab.

Implements the DocumentRenderer port: a centered title in the report's
accent color above a single table whose header row uses the same color
and whose body rows alternate between two light shades.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from domain.exceptions import ExportError

logger = logging.getLogger(__name__)

_ROW_SHADES = (colors.HexColor("#f9f9f9"), colors.HexColor("#ffffff"))
_RULE_COLOR = colors.HexColor("#cccccc")


def _drawable(text: str) -> str:
    """Drop characters outside the WinAnsi set of the built-in Type1 fonts.

    Those fonts have no emoji glyphs; "😊 Happy" is drawn as "Happy".
    """
    return str(text).encode("cp1252", errors="ignore").decode("cp1252").strip()


class ReportLabRenderer:
    """Writes one-table PDF reports."""

    def __init__(self, font_name: str = "Helvetica", font_size: int = 10):
        self.font_name = font_name
        self.font_size = font_size
        self.styles = getSampleStyleSheet()

    def render(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[tuple[str, ...]],
        destination: Path,
        accent_color: str = "#2196F3",
    ) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)
        accent = colors.HexColor(accent_color)

        doc = SimpleDocTemplate(
            str(destination),
            pagesize=A4,
            rightMargin=2*cm,
            leftMargin=2*cm,
            topMargin=2*cm,
            bottomMargin=2*cm,
            title=title,
        )
        title_style = ParagraphStyle(
            name="ReportTitle",
            parent=self.styles["Title"],
            textColor=accent,
            alignment=1,
            spaceAfter=12,
        )
        small_style = ParagraphStyle(
            name="ReportSmall",
            parent=self.styles["Normal"],
            fontSize=8,
            textColor=colors.grey,
        )

        story = [
            Paragraph(title, title_style),
            Paragraph(f"Generated {datetime.now():%Y-%m-%d %H:%M}", small_style),
            Spacer(1, 12),
            self._build_table(columns, rows, accent, doc.width),
        ]

        try:
            doc.build(story)
        except LayoutError as exc:
            raise ExportError(f"Could not lay out '{title}': {exc}") from exc
        logger.debug("Rendered %d rows to %s", len(rows), destination)
        return destination

    def _build_table(self, columns, rows, accent, width: float) -> Table:
        data = [[_drawable(c) for c in columns]] + [[_drawable(v) for v in row] for row in rows]
        col_width = width / max(len(columns), 1)
        table = Table(data, colWidths=[col_width] * len(columns), repeatRows=1)

        commands = [
            ("FONTNAME", (0, 0), (-1, -1), self.font_name),
            ("FONTNAME", (0, 0), (-1, 0), f"{self.font_name}-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), self.font_size),
            ("BACKGROUND", (0, 0), (-1, 0), accent),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("ALIGN", (0, 0), (-1, -1), "LEFT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LINEBELOW", (0, 1), (-1, -1), 0.5, _RULE_COLOR),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
            ("TOPPADDING", (0, 0), (-1, -1), 8),
        ]
        for index in range(1, len(data)):
            shade = _ROW_SHADES[(index - 1) % 2]
            commands.append(("BACKGROUND", (0, index), (-1, index), shade))
        table.setStyle(TableStyle(commands))
        return table
