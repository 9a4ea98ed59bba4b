"""Render calculation results as a printable quote."""

from __future__ import annotations

from datetime import date
from html import escape

from prorate_app.models.coverage import LineResult
from prorate_app.models.policy import CalculationResult
from prorate_app.services.form_helpers import format_dollar, format_percent

LINE_COLUMNS = [
    "Coverage",
    "Premium",
    "Prorated",
    "Tax",
    "Carrier Fee",
    "Total",
    "Commission",
    "Broker Fee",
]


def line_cells(line: LineResult) -> list[str]:
    """Table cells for one line, in ``LINE_COLUMNS`` order.

    Lines that were not written show only their name and annotation.
    """
    if not line.is_written:
        return [line.name, "", "", "", "", line.annotation, "", ""]
    return [
        line.name,
        format_dollar(line.premium),
        format_dollar(line.prorated_premium),
        format_dollar(line.prorated_tax),
        format_dollar(line.carrier_fee),
        format_dollar(line.final_amount),
        format_dollar(line.commission),
        format_dollar(line.allocated_broker_fee),
    ]


def _summary_rows(result: CalculationResult) -> list[tuple[str, str]]:
    totals = result.totals
    if totals is None:
        return []
    return [
        ("Coverage total", format_dollar(totals.coverage_sum)),
        ("Down payment", format_dollar(totals.total_down_payment)),
        ("Earned broker fee", format_dollar(totals.earned_broker_fee)),
        ("Broker fee to be earned", format_dollar(totals.to_be_earned)),
        ("Due at signing", format_dollar(totals.due_at_signing)),
        ("Amount financed", format_dollar(totals.financed_amount)),
        ("APR", format_percent(totals.apr)),
        (
            f"Monthly payment ({totals.number_of_payments} payments)",
            format_dollar(totals.monthly_payment),
        ),
    ]


def render_quote_html(result: CalculationResult, title: str = "Premium Quote", quote_date: date | None = None) -> str:
    """Build a standalone HTML quote document."""
    quote_date = quote_date or date.today()
    parts = [
        "<html><head><meta charset=\"utf-8\">",
        f"<title>{escape(title)}</title></head><body>",
        f"<h2>{escape(title)}</h2>",
        f"<p>Prepared {quote_date.isoformat()}</p>",
    ]

    if result.blocked:
        parts.append("<p><b>Quote unavailable.</b></p><ul>")
        parts.extend(f"<li>{escape(notice.message)}</li>" for notice in result.errors)
        parts.append("</ul></body></html>")
        return "".join(parts)

    parts.append("<table border=\"1\" cellspacing=\"0\" cellpadding=\"4\"><tr>")
    parts.extend(f"<th>{column}</th>" for column in LINE_COLUMNS)
    parts.append("</tr>")
    for line in result.lines:
        parts.append("<tr>")
        parts.extend(f"<td>{escape(cell)}</td>" for cell in line_cells(line))
        parts.append("</tr>")
    parts.append("</table><table cellpadding=\"4\">")
    for label, value in _summary_rows(result):
        parts.append(f"<tr><td>{escape(label)}</td><td align=\"right\">{value}</td></tr>")
    parts.append("</table>")

    if result.warnings:
        parts.append("<h4>Notes</h4><ul>")
        parts.extend(f"<li>{escape(notice.message)}</li>" for notice in result.warnings)
        parts.append("</ul>")
    parts.append("</body></html>")
    return "".join(parts)


def render_quote_text(result: CalculationResult) -> str:
    """Plain-text summary for terminals and logs."""
    if result.blocked:
        return "\n".join(["Quote unavailable:"] + [f"  - {notice.message}" for notice in result.errors])

    rows = [LINE_COLUMNS] + [line_cells(line) for line in result.lines]
    widths = [max(len(row[index]) for row in rows) for index in range(len(LINE_COLUMNS))]
    lines = ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows]

    summary = _summary_rows(result)
    if summary:
        label_width = max(len(label) for label, _ in summary)
        lines.append("")
        lines.extend(f"{label.ljust(label_width)}  {value}" for label, value in summary)

    for notice in result.notices:
        lines.append(f"[{notice.level}] {notice.message}")
    return "\n".join(lines)
