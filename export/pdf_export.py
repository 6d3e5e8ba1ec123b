"""PDF export of an investment report."""
from __future__ import annotations

import io
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from xml.sax.saxutils import escape

from core.calculators import percent_of_value_annually
from core.models import InvestmentAnalysis, PropertyInput
from core.presets import DISCLAIMER, LINE_ITEM_LABELS
from core.utils import format_currency

_GRID = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
)


def _bullets(items, style):
    return [Paragraph(f"• {escape(item)}", style) for item in items]


def build_report_pdf(
    analysis: InvestmentAnalysis,
    property_input: Optional[PropertyInput] = None,
    title: str = "Property Investment Report",
) -> bytes:
    """Render ``analysis`` to PDF and return the document bytes.

    Nothing is written to disk; the caller decides whether to offer the bytes
    as a download or save them.
    """

    styles = getSampleStyleSheet()
    body = styles["Normal"]
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=LETTER, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = [Paragraph(f"<b>{escape(title)}</b>", styles["Title"]), Spacer(1, 6)]

    if property_input is not None:
        story.append(
            Paragraph(
                f"{escape(property_input.property_type)} in {escape(property_input.state)} • "
                f"{format_currency(property_input.purchase_price)} • "
                f"{property_input.down_payment_percentage:.1f}% down",
                body,
            )
        )
    if analysis.listing_data.address:
        story.append(Paragraph(f"Address: {escape(analysis.listing_data.address)}", body))
    story += [
        Spacer(1, 12),
        Paragraph(f"<b>Investment Score: {analysis.overall_score:.0f}% – {escape(analysis.verdict)}</b>", styles["Heading2"]),
        Spacer(1, 6),
    ]

    if analysis.category_scores:
        rows = [["Category", "Weight", "Score", "Weighted", "Reasoning"]]
        for c in analysis.category_scores:
            rows.append(
                [
                    c.name,
                    f"{c.weight * 100:.0f}%",
                    f"{c.score:.1f}/10",
                    f"+{c.weighted_score:.1f}",
                    Paragraph(escape(c.reasoning), body),
                ]
            )
        t = Table(rows, hAlign="LEFT", colWidths=[90, 45, 50, 55, 300])
        t.setStyle(_GRID)
        story += [Paragraph("<b>Category Breakdown</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]

    payment = analysis.monthly_payment
    pay_rows = [["Monthly Payment", ""]]
    pay_rows += [[LINE_ITEM_LABELS[k], format_currency(v)] for k, v in payment.line_items().items()]
    pay_rows.append(["Total Monthly Payment", format_currency(payment.total)])
    t = Table(pay_rows, hAlign="LEFT", colWidths=[200, 120])
    t.setStyle(_GRID)
    story += [t]
    if property_input is not None:
        pct = percent_of_value_annually(payment.total, property_input.purchase_price)
        story.append(Paragraph(f"{pct:.1f}% of property value annually", body))
    story.append(Spacer(1, 12))

    if analysis.strengths:
        story += [Paragraph("<b>Strengths</b>", styles["Heading3"])] + _bullets(analysis.strengths, body)
    if analysis.risks:
        story += [Paragraph("<b>Risks</b>", styles["Heading3"])] + _bullets(analysis.risks, body)
    if analysis.explanation:
        story += [Paragraph("<b>Summary</b>", styles["Heading3"]), Paragraph(escape(analysis.explanation), body)]

    story += [Spacer(1, 12), Paragraph(f"<font size=8>{escape(DISCLAIMER)}</font>", body)]
    doc.build(story)
    return buf.getvalue()
