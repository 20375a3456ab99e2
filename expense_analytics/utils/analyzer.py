from __future__ import annotations

import datetime as dt
import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional

from expense_analytics.core.config import settings
from expense_analytics.models.budget import Budget
from expense_analytics.models.expense import Category
from expense_analytics.models.savings_goal import SavingsGoal
from expense_analytics.utils import budgets as budget_utils
from expense_analytics.utils import savings as savings_utils
from expense_analytics.utils.forecast import TrendForecaster
from expense_analytics.utils.records import (
    RecordLike,
    ensure_records,
    validate_month,
    validate_year,
)

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


@dataclass
class HeatmapDay:
    """Spend on a single calendar day."""

    date: str
    value: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class WeekdayStat:
    """Spend aggregated over every occurrence of one weekday (0 = Sunday)."""

    day_of_week: int
    name: str
    total: float
    count: int
    average: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def sunday_based_weekday(day: dt.date) -> int:
    return (day.weekday() + 1) % 7


class ExpenseAnalyzer:
    """
    Analytics over one user's expense records: summaries, forecasts,
    calendar heatmaps, budget comparison and savings progress.

    Every method is a pure computation over the records it is handed; the
    caller is responsible for fetching and authorizing them.
    """

    def __init__(
        self,
        history_months: Optional[int] = None,
        trend_threshold: Optional[float] = None,
        full_confidence_months: Optional[int] = None,
        low_confidence: Optional[float] = None,
    ) -> None:
        self._forecaster = TrendForecaster(
            history_months=(
                settings.FORECAST_HISTORY_MONTHS if history_months is None else history_months
            ),
            noise_threshold=(
                settings.TREND_NOISE_THRESHOLD if trend_threshold is None else trend_threshold
            ),
            full_confidence_months=(
                settings.FULL_CONFIDENCE_MONTHS
                if full_confidence_months is None
                else full_confidence_months
            ),
            low_confidence=settings.LOW_CONFIDENCE if low_confidence is None else low_confidence,
        )

    def compute_stats(self, records: Iterable[RecordLike]) -> Dict[str, Any]:
        expenses = ensure_records(records)

        category_totals: Dict[Category, float] = defaultdict(float)
        category_counts: Dict[Category, int] = defaultdict(int)
        month_totals: Dict[int, float] = defaultdict(float)
        month_counts: Dict[int, int] = defaultdict(int)
        for exp in expenses:
            category_totals[exp.category] += exp.amount
            category_counts[exp.category] += 1
            # Month numbers only: the same month of different years is merged.
            month_totals[exp.date.month] += exp.amount
            month_counts[exp.date.month] += 1

        total_amount = sum(exp.amount for exp in expenses)
        total_expenses = len(expenses)
        avg_amount = total_amount / total_expenses if total_expenses else 0.0

        logger.debug(f"Computed stats over {total_expenses} expenses")
        return {
            "category_stats": {
                category.value: {
                    "total": round(category_totals[category], 2),
                    "count": category_counts[category],
                }
                for category in Category
                if category in category_totals
            },
            "monthly_stats": {
                month: {"total": round(month_totals[month], 2), "count": month_counts[month]}
                for month in sorted(month_totals)
            },
            "total_stats": {
                "total_amount": round(total_amount, 2),
                "total_expenses": total_expenses,
                "avg_amount": round(avg_amount, 2),
            },
        }

    def compute_forecast(
        self,
        records: Iterable[RecordLike],
        months_ahead: int,
        today: Optional[dt.date] = None,
    ) -> Dict[str, Any]:
        return self._forecaster.forecast(records, months_ahead, today=today)

    def compute_heatmap(
        self,
        records: Iterable[RecordLike],
        year: int,
        month: Optional[int] = None,
    ) -> Dict[str, Any]:
        year = validate_year(year)
        month = validate_month(month)
        expenses = [
            exp
            for exp in ensure_records(records)
            if exp.date.year == year and (month is None or exp.date.month == month)
        ]

        day_totals: Dict[dt.date, float] = defaultdict(float)
        day_counts: Dict[dt.date, int] = defaultdict(int)
        weekday_totals: Dict[int, float] = defaultdict(float)
        weekday_counts: Dict[int, int] = defaultdict(int)
        for exp in expenses:
            day_totals[exp.date] += exp.amount
            day_counts[exp.date] += 1
            weekday = sunday_based_weekday(exp.date)
            weekday_totals[weekday] += exp.amount
            weekday_counts[weekday] += 1

        heatmap = [
            HeatmapDay(date=day.isoformat(), value=round(day_totals[day], 2), count=day_counts[day])
            for day in sorted(day_totals)
        ]
        weekday_stats = [
            WeekdayStat(
                day_of_week=weekday,
                name=WEEKDAY_NAMES[weekday],
                total=round(weekday_totals[weekday], 2),
                count=weekday_counts[weekday],
                average=round(weekday_totals[weekday] / weekday_counts[weekday], 2),
            )
            for weekday in sorted(weekday_totals)
        ]

        # Days are in ascending order and only a strictly larger value
        # replaces the current maximum, so ties resolve to the earliest date.
        max_day: Dict[str, Any] = {"date": None, "value": 0.0}
        for day in heatmap:
            if max_day["date"] is None or day.value > max_day["value"]:
                max_day = {"date": day.date, "value": day.value}

        total_spent = sum(day_totals.values())
        total_days = len(heatmap)

        logger.debug(f"Heatmap for {year}-{month or 'all'}: {total_days} active days")
        return {
            "heatmap": [day.to_dict() for day in heatmap],
            "weekday_stats": [stat.to_dict() for stat in weekday_stats],
            "stats": {
                "max_day": max_day,
                "total_spent": round(total_spent, 2),
                "total_days": total_days,
                "avg_per_day": round(total_spent / total_days, 2) if total_days else 0.0,
            },
            "period": {"year": year, "month": month},
        }

    def compare_budgets(
        self,
        records: Iterable[RecordLike],
        budgets: Iterable[Budget],
        year: int,
        month: int,
    ) -> Dict[str, Any]:
        return budget_utils.compare_budgets(records, budgets, year, month)

    def summarize_savings_goals(
        self,
        goals: Iterable[SavingsGoal],
        today: Optional[dt.date] = None,
    ) -> Dict[str, Any]:
        return savings_utils.summarize_savings_goals(goals, today=today)


def default_analyzer() -> ExpenseAnalyzer:
    return ExpenseAnalyzer()


def compute_stats(records: Iterable[RecordLike]) -> Dict[str, Any]:
    return default_analyzer().compute_stats(records)


def compute_forecast(
    records: Iterable[RecordLike],
    months_ahead: int,
    today: Optional[dt.date] = None,
) -> Dict[str, Any]:
    return default_analyzer().compute_forecast(records, months_ahead, today=today)


def compute_heatmap(
    records: Iterable[RecordLike],
    year: int,
    month: Optional[int] = None,
) -> Dict[str, Any]:
    return default_analyzer().compute_heatmap(records, year, month)


def compare_budgets(
    records: Iterable[RecordLike],
    budgets: Iterable[Budget],
    year: int,
    month: int,
) -> Dict[str, Any]:
    return default_analyzer().compare_budgets(records, budgets, year, month)


def summarize_savings_goals(
    goals: Iterable[SavingsGoal],
    today: Optional[dt.date] = None,
) -> Dict[str, Any]:
    return default_analyzer().summarize_savings_goals(goals, today=today)
