import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from expense_analytics.core.exceptions import InvalidArgument
from expense_analytics.models.budget import Budget, BudgetPeriod
from expense_analytics.models.expense import Category
from expense_analytics.utils.records import (
    RecordLike,
    ensure_records,
    validate_month,
    validate_year,
)

logger = logging.getLogger(__name__)


def _ensure_budgets(budgets: Iterable[Any]) -> List[Budget]:
    validated = []
    for item in budgets or []:
        if isinstance(item, Budget):
            validated.append(item)
            continue
        try:
            validated.append(Budget.model_validate(item))
        except ValidationError as exc:
            raise InvalidArgument(f"Invalid budget: {exc}") from exc
    return validated


def effective_budgets(budgets: Iterable[Any], year: int, month: int) -> Dict[Category, float]:
    """
    Monthly budget amount per category for one calendar month. Yearly budgets
    are prorated; when both kinds exist for a category the larger one wins.
    """
    amounts: Dict[Category, float] = {}
    for budget in _ensure_budgets(budgets):
        if not budget.active or budget.year != year:
            continue
        if budget.period == BudgetPeriod.MONTHLY and budget.month != month:
            continue
        amount = budget.monthly_amount()
        if budget.category not in amounts or amount > amounts[budget.category]:
            amounts[budget.category] = amount
    return amounts


def compare_budgets(
    records: Iterable[RecordLike],
    budgets: Iterable[Any],
    year: int,
    month: int,
) -> Dict[str, Any]:
    """Compare budgeted amounts with actual spend for one month."""
    year = validate_year(year)
    month = validate_month(month)
    if month is None:
        raise InvalidArgument("Month is required for a budget comparison")

    budgeted = effective_budgets(budgets, year, month)
    actual: Dict[Category, float] = defaultdict(float)
    for exp in ensure_records(records):
        if exp.date.year == year and exp.date.month == month:
            actual[exp.category] += exp.amount

    comparison = []
    for category in Category:
        if category not in budgeted and category not in actual:
            continue
        spent = actual.get(category, 0.0)
        if category in budgeted:
            limit = budgeted[category]
            percentage = min(100.0, spent / limit * 100) if limit > 0 else (100.0 if spent > 0 else 0.0)
            remaining = max(0.0, limit - spent)
        else:
            # Spending with no budget at all counts as fully over.
            limit, percentage, remaining = 0.0, 100.0, 0.0
        comparison.append(
            {
                "category": category.value,
                "budget_amount": round(limit, 2),
                "actual_amount": round(spent, 2),
                "percentage": round(percentage, 2),
                "remaining": round(remaining, 2),
            }
        )

    total_budget = sum(row["budget_amount"] for row in comparison)
    total_actual = sum(row["actual_amount"] for row in comparison)
    totals = {
        "budget_amount": round(total_budget, 2),
        "actual_amount": round(total_actual, 2),
        "remaining": round(sum(row["remaining"] for row in comparison), 2),
        "percentage": round(min(100.0, total_actual / total_budget * 100), 2) if total_budget > 0 else 0.0,
    }

    logger.debug(f"Budget comparison for {year}-{month:02d}: {len(comparison)} categories")
    return {
        "comparison": comparison,
        "totals": totals,
        "period": {"year": year, "month": month},
    }
