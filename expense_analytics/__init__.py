"""
expense_analytics
~~~~~~~~~~~~~~~~~

Analytics library for the personal expense tracker. It turns one user's
expense records into category and monthly summaries, a linear-trend spend
forecast, a calendar heatmap, budget comparisons and savings-goal progress.
Callers fetch and authorize the records; everything here is a pure
computation over what it is given.
"""

from expense_analytics.core.exceptions import ExpenseAnalyticsError, InvalidArgument
from expense_analytics.models.budget import Budget, BudgetPeriod
from expense_analytics.models.expense import Category, ExpenseRecord
from expense_analytics.models.savings_goal import Contribution, GoalCategory, SavingsGoal
from expense_analytics.utils.analyzer import (
    ExpenseAnalyzer,
    compare_budgets,
    compute_forecast,
    compute_heatmap,
    compute_stats,
    summarize_savings_goals,
)

__all__ = [
    "Budget",
    "BudgetPeriod",
    "Category",
    "Contribution",
    "ExpenseAnalyticsError",
    "ExpenseAnalyzer",
    "ExpenseRecord",
    "GoalCategory",
    "InvalidArgument",
    "SavingsGoal",
    "compare_budgets",
    "compute_forecast",
    "compute_heatmap",
    "compute_stats",
    "summarize_savings_goals",
]
