"""
Linear-trend forecasting over a user's monthly spend.

Monthly totals are placed on an absolute month axis (gaps in the data stay
gaps), a least-squares line is fitted and then extrapolated forward.
"""
from __future__ import annotations

import datetime as dt
import logging
import statistics
from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from expense_analytics.core.exceptions import InvalidArgument
from expense_analytics.models.expense import Category
from expense_analytics.utils.records import (
    RecordLike,
    date_ordinal,
    ensure_records,
    from_ordinal,
)

logger = logging.getLogger(__name__)

INCREASING = "increasing"
DECREASING = "decreasing"


@dataclass
class TrendFit:
    """Least-squares line y = slope * x + intercept with its goodness of fit."""

    slope: float
    intercept: float
    r_squared: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass
class CategoryForecast:
    category: str
    next_month: float
    trend: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def fit_trend(xs: List[float], ys: List[float]) -> TrendFit:
    """Fit a line through at least two points with distinct x values."""
    slope, intercept = statistics.linear_regression(xs, ys)
    mean_y = statistics.fmean(ys)
    ss_tot = sum((y - mean_y) ** 2 for y in ys)
    ss_res = sum((y - (slope * x + intercept)) ** 2 for x, y in zip(xs, ys))
    # A constant series is fitted exactly by a flat line.
    r_squared = 1.0 if ss_tot == 0 else max(0.0, 1 - ss_res / ss_tot)
    return TrendFit(slope=slope, intercept=intercept, r_squared=r_squared)


class TrendForecaster:
    def __init__(
        self,
        history_months: int = 12,
        noise_threshold: float = 0.01,
        full_confidence_months: int = 6,
        low_confidence: float = 0.1,
    ) -> None:
        if isinstance(history_months, bool) or not isinstance(history_months, int) or history_months < 1:
            raise InvalidArgument(f"history_months must be a positive integer, got {history_months!r}")
        if (
            isinstance(full_confidence_months, bool)
            or not isinstance(full_confidence_months, int)
            or full_confidence_months < 1
        ):
            raise InvalidArgument(
                f"full_confidence_months must be a positive integer, got {full_confidence_months!r}"
            )
        self._history_months = history_months
        self._noise_threshold = noise_threshold
        self._full_confidence_months = full_confidence_months
        self._low_confidence = low_confidence

    def classify(self, slope: float) -> str:
        return DECREASING if slope < -self._noise_threshold else INCREASING

    def confidence(self, fit: TrendFit, samples: int) -> float:
        coverage = min(1.0, samples / self._full_confidence_months)
        return round(min(1.0, max(0.0, fit.r_squared * coverage)), 4)

    def forecast(
        self,
        records: Iterable[RecordLike],
        months_ahead: int,
        today: Optional[dt.date] = None,
    ) -> Dict[str, Any]:
        if isinstance(months_ahead, bool) or not isinstance(months_ahead, int):
            raise InvalidArgument(f"months_ahead must be an integer, got {months_ahead!r}")
        if months_ahead <= 0:
            raise InvalidArgument(f"months_ahead must be positive, got {months_ahead}")

        expenses = ensure_records(records)

        totals: Dict[int, float] = defaultdict(float)
        counts: Dict[int, int] = defaultdict(int)
        category_totals: Dict[Category, Dict[int, float]] = defaultdict(lambda: defaultdict(float))
        for exp in expenses:
            ordinal = date_ordinal(exp.date)
            totals[ordinal] += exp.amount
            counts[ordinal] += 1
            category_totals[exp.category][ordinal] += exp.amount

        if totals:
            last = max(totals)
            window_start = last - self._history_months + 1
            ordinals = sorted(o for o in totals if o >= window_start)
        else:
            last = date_ordinal(today or dt.date.today())
            window_start = last + 1
            ordinals = []

        historical = []
        for ordinal in ordinals:
            year, month = from_ordinal(ordinal)
            historical.append(
                {
                    "year": year,
                    "month": month,
                    "total": round(totals[ordinal], 2),
                    "count": counts[ordinal],
                }
            )

        first = ordinals[0] if ordinals else last
        xs = [float(o - first) for o in ordinals]
        ys = [totals[o] for o in ordinals]

        if len(ordinals) >= 2:
            fit = fit_trend(xs, ys)
            trend = self.classify(fit.slope)
            confidence = self.confidence(fit, len(ordinals))
        else:
            # Too little history for a slope: repeat the last known total.
            flat = ys[0] if ys else 0.0
            fit = TrendFit(slope=0.0, intercept=flat, r_squared=0.0)
            trend = INCREASING
            confidence = self._low_confidence

        forecast = []
        for step in range(1, months_ahead + 1):
            year, month = from_ordinal(last + step)
            predicted = max(0.0, fit.predict(float(last - first + step)))
            forecast.append({"year": year, "month": month, "predicted": round(predicted, 2)})

        category_forecasts = [
            cf.to_dict()
            for cf in self._category_forecasts(category_totals, window_start, first, last)
        ]

        logger.debug(
            f"Forecast built from {len(historical)} months: trend={trend}, confidence={confidence}"
        )
        return {
            "historical": historical,
            "forecast": forecast,
            "category_forecasts": category_forecasts,
            "trend": trend,
            "confidence": confidence,
        }

    def _category_forecasts(
        self,
        category_totals: Dict[Category, Dict[int, float]],
        window_start: int,
        first: int,
        last: int,
    ) -> List[CategoryForecast]:
        results: List[CategoryForecast] = []
        for category in Category:
            series = {
                o: total
                for o, total in category_totals.get(category, {}).items()
                if o >= window_start
            }
            if not series:
                continue

            ordinals = sorted(series)
            if len(ordinals) == 1:
                results.append(
                    CategoryForecast(
                        category=category.value,
                        next_month=round(series[ordinals[0]], 2),
                        trend=INCREASING,
                        confidence=self._low_confidence,
                    )
                )
                continue

            fit = fit_trend([float(o - first) for o in ordinals], [series[o] for o in ordinals])
            results.append(
                CategoryForecast(
                    category=category.value,
                    next_month=round(max(0.0, fit.predict(float(last - first + 1))), 2),
                    trend=self.classify(fit.slope),
                    confidence=self.confidence(fit, len(ordinals)),
                )
            )
        return results
