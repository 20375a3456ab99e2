"""
Command-line front end: run an analytics operation over a file of expense
records and print the result as JSON.

Usage:
    expense-analytics stats expenses.json
    expense-analytics forecast expenses.csv --months 6
    expense-analytics heatmap expenses.json --year 2024 --month 3
    expense-analytics export expenses.json --format pdf --output report.pdf
"""
import argparse
import datetime as dt
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from expense_analytics.core.config import settings
from expense_analytics.core.exceptions import InvalidArgument
from expense_analytics.utils import report
from expense_analytics.utils.analyzer import ExpenseAnalyzer
from expense_analytics.utils.loader import load_records

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expense-analytics", description="Expense analytics over a records file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    stats = subparsers.add_parser("stats", help="Category, monthly and overall totals")
    stats.add_argument("file", type=Path)

    forecast = subparsers.add_parser("forecast", help="Linear-trend spend forecast")
    forecast.add_argument("file", type=Path)
    forecast.add_argument("--months", type=int, default=settings.FORECAST_DEFAULT_MONTHS)

    heatmap = subparsers.add_parser("heatmap", help="Daily and weekday spend for a year or month")
    heatmap.add_argument("file", type=Path)
    heatmap.add_argument("--year", type=int, default=None)
    heatmap.add_argument("--month", type=int, default=None)

    export = subparsers.add_parser("export", help="Export records as CSV or a PDF report")
    export.add_argument("file", type=Path)
    export.add_argument("--format", choices=["csv", "pdf"], default="csv")
    export.add_argument("--output", type=Path, default=None)
    return parser


def run(args: argparse.Namespace) -> Optional[dict]:
    analyzer = ExpenseAnalyzer()
    records = load_records(args.file)

    if args.command == "stats":
        return analyzer.compute_stats(records)
    if args.command == "forecast":
        return analyzer.compute_forecast(records, args.months)
    if args.command == "heatmap":
        year = args.year if args.year is not None else dt.date.today().year
        return analyzer.compute_heatmap(records, year, args.month)

    if args.format == "csv":
        content = report.generate_csv_export(records)
        if args.output is None:
            sys.stdout.write(content)
            return None
        args.output.write_text(content)
    else:
        if args.output is None:
            raise InvalidArgument("--output is required for PDF export")
        user_id = records[0].user_id if records else "unknown"
        pdf_bytes = report.generate_pdf_report(
            user_id,
            analyzer.compute_stats(records),
            analyzer.compute_forecast(records, settings.FORECAST_DEFAULT_MONTHS),
        )
        args.output.write_bytes(pdf_bytes)
    logger.info(f"Wrote {args.format} export to {args.output}")
    return {"output": str(args.output), "format": args.format}


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        result = run(args)
    except InvalidArgument as e:
        logger.error(f"Invalid argument: {str(e)}")
        return 2

    if result is not None:
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
