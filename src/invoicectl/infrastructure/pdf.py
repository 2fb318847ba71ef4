"""PDF rendering of the invoice with ReportLab.

Lays out the same display record the HTML template receives: header,
parties, line items, total, and the per-project summary, on A4.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Flowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

ITEM_COLUMNS: tuple[tuple[str, str], ...] = (
    ("description", "Description"),
    ("start_date", "Start Date"),
    ("end_date", "End Date"),
    ("hours", "Hours"),
    ("rate", "Rate"),
    ("amount", "Amount"),
)

# Fraction of the frame width given to each item column.
_ITEM_WIDTHS = (0.36, 0.13, 0.13, 0.1, 0.13, 0.15)

_TABLE_STYLE = TableStyle(
    [
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("LINEBELOW", (0, 0), (-1, 0), 1, colors.black),
        ("LINEBELOW", (0, 1), (-1, -1), 0.25, colors.lightgrey),
        ("ALIGN", (-3, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
    ]
)

_SUMMARY_STYLE = TableStyle(
    [
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("LINEBELOW", (0, 0), (-1, 0), 1, colors.black),
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
    ]
)


def _party_block(title: str, party: dict[str, Any], style: ParagraphStyle) -> Paragraph:
    lines = [f"<b>{escape(title)}</b>"]
    lines.extend(escape(str(value)) for value in party.values() if value)
    return Paragraph("<br/>".join(lines), style)


def build_story(invoice: dict[str, Any], *, width: float) -> list[Flowable]:
    """Build the ReportLab flowables for an invoice display record."""
    styles = getSampleStyleSheet()
    normal = styles["Normal"]
    cell = ParagraphStyle("cell", parent=normal, fontSize=9, leading=11)
    total_style = ParagraphStyle("total", parent=styles["Heading2"], alignment=2)

    story: list[Flowable] = [
        Paragraph("INVOICE", styles["Title"]),
        Paragraph(
            f"Invoice #{escape(invoice['number'])} &nbsp;&nbsp; Date: {escape(invoice['date'])}",
            normal,
        ),
        Spacer(1, 0.25 * inch),
    ]

    parties = Table(
        [
            [
                _party_block("From", invoice["bill_from"], normal),
                _party_block("Bill To", invoice["bill_to"], normal),
            ]
        ],
        colWidths=[width / 2, width / 2],
    )
    parties.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
    story.extend([parties, Spacer(1, 0.3 * inch)])

    rows: list[list[Any]] = [[title for _key, title in ITEM_COLUMNS]]
    for item in invoice["items"]:
        rows.append(
            [Paragraph(escape(item["description"]), cell)]
            + [item[key] for key, _title in ITEM_COLUMNS[1:]]
        )
    items = Table(
        rows,
        colWidths=[width * share for share in _ITEM_WIDTHS],
        repeatRows=1,
    )
    items.setStyle(_TABLE_STYLE)
    story.extend(
        [
            items,
            Spacer(1, 0.2 * inch),
            Paragraph(f"Total: {escape(invoice['total_amount'])}", total_style),
            Spacer(1, 0.3 * inch),
        ]
    )

    summary_rows: list[list[str]] = [["Project", "Total"]]
    summary_rows.extend([project, amount] for project, amount in invoice["summary"].items())
    summary = Table(summary_rows, colWidths=[width * 0.3, width * 0.15], hAlign="LEFT")
    summary.setStyle(_SUMMARY_STYLE)
    story.append(summary)
    return story


def render_pdf(invoice: dict[str, Any], path: Path) -> Path:
    """Write the invoice PDF to *path* and return it.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = SimpleDocTemplate(
        str(path),
        pagesize=A4,
        leftMargin=0.7 * inch,
        rightMargin=0.7 * inch,
        topMargin=0.7 * inch,
        bottomMargin=0.7 * inch,
        title=f"Invoice {invoice['number']}",
    )
    doc.build(build_story(invoice, width=doc.width))
    return path
