import csv
import io
import logging
from typing import Any, Dict, Iterable, Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from expense_analytics.utils.records import RecordLike, ensure_records

logger = logging.getLogger(__name__)

CSV_FIELDS = ["expense_id", "title", "amount", "category", "date"]


def generate_csv_export(records: Iterable[RecordLike]) -> str:
    """Expense records as CSV, newest first."""
    expenses = sorted(ensure_records(records), key=lambda exp: exp.date, reverse=True)

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    for exp in expenses:
        writer.writerow({
            "expense_id": exp.expense_id,
            "title": exp.title,
            "amount": exp.amount,
            "category": exp.category.value,
            "date": exp.date.isoformat(),
        })
    return output.getvalue()


def _latin1(text: str) -> str:
    # Core PDF fonts only cover Latin-1; anything else is printed as "?".
    return text.encode("latin-1", "replace").decode("latin-1")


def _line(pdf: FPDF, text: str) -> None:
    pdf.cell(0, 10, _latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def generate_pdf_report(
    user_id: str,
    stats: Dict[str, Any],
    forecast: Optional[Dict[str, Any]] = None,
) -> bytes:
    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 16)
    _line(pdf, "Expense Report")

    totals = stats.get("total_stats", {})
    pdf.set_font("Helvetica", "", 12)
    _line(pdf, f"User ID: {user_id}")
    _line(pdf, f"Total Spent: ${totals.get('total_amount', 0):.2f}")
    _line(pdf, f"Expenses: {totals.get('total_expenses', 0)}")
    _line(pdf, f"Average Expense: ${totals.get('avg_amount', 0):.2f}")
    pdf.ln(5)

    pdf.set_font("Helvetica", "B", 12)
    _line(pdf, "Spending by Category:")
    pdf.set_font("Helvetica", "", 12)
    category_stats = stats.get("category_stats", {})
    if category_stats:
        for category, item in category_stats.items():
            _line(pdf, f"- {category}: ${item['total']:.2f} ({item['count']} expenses)")
    else:
        _line(pdf, "None")

    if forecast is not None:
        pdf.ln(5)
        pdf.set_font("Helvetica", "B", 12)
        _line(pdf, f"Forecast (trend: {forecast['trend']}, confidence: {forecast['confidence']:.2f}):")
        pdf.set_font("Helvetica", "", 12)
        for point in forecast.get("forecast", []):
            _line(pdf, f"- {point['year']}-{point['month']:02d}: ${point['predicted']:.2f}")

    pdf_bytes = bytes(pdf.output())
    logger.info(f"Generated PDF report for user {user_id} ({len(pdf_bytes)} bytes)")
    return pdf_bytes
