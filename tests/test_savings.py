import datetime as dt

import pytest

from expense_analytics import Contribution, InvalidArgument, SavingsGoal, summarize_savings_goals
from expense_analytics.utils.savings import add_contribution, remove_contribution

today = dt.date(2024, 6, 1)

vacation = SavingsGoal(
    title="Vacation",
    target_amount=1000,
    current_amount=500,
    start_date=dt.date(2024, 1, 1),
    target_date=dt.date(2024, 12, 31),
    category="Vacation",
)
laptop = SavingsGoal(
    title="Laptop",
    target_amount=200,
    current_amount=200,
    start_date=dt.date(2024, 1, 1),
    target_date=dt.date(2024, 5, 1),
    is_completed=True,
)
emergency = SavingsGoal(
    title="Emergency fund",
    target_amount=300,
    start_date=dt.date(2024, 5, 1),
    target_date=dt.date(2024, 7, 1),
    category="Emergency",
)


def test_goal_derived_values():
    assert vacation.progress() == 50.0
    assert vacation.remaining_amount() == 500.0
    assert emergency.days_remaining(today) == 30
    assert emergency.daily_savings_needed(today) == pytest.approx(10.0)
    assert laptop.days_remaining(today) == 0
    assert laptop.daily_savings_needed(today) == 0.0


def test_summary():
    summary = summarize_savings_goals([vacation, laptop, emergency], today=today)

    assert summary["total_goals"] == 3
    assert summary["active_goals"] == 2
    assert summary["completed_goals"] == 1
    assert summary["total_saved"] == 700.0
    assert summary["total_target"] == 1500.0
    assert summary["overall_progress"] == pytest.approx(46.67)
    assert [g["title"] for g in summary["upcoming_goals"]] == ["Emergency fund", "Vacation"]
    assert [g["title"] for g in summary["near_completion_goals"]] == ["Vacation"]
    assert summary["upcoming_goals"][0]["days_remaining"] == 30


def test_empty_summary():
    summary = summarize_savings_goals([], today=today)
    assert summary["total_goals"] == 0
    assert summary["overall_progress"] == 0.0
    assert summary["upcoming_goals"] == []


def test_contributions_update_completion():
    goal = SavingsGoal(
        title="Bike",
        target_amount=100,
        current_amount=90,
        start_date=dt.date(2024, 1, 1),
        target_date=dt.date(2024, 12, 1),
    )
    contribution = Contribution(amount=20, date=dt.date(2024, 2, 1))

    funded = add_contribution(goal, contribution)
    assert funded.current_amount == 110
    assert funded.is_completed is True
    assert goal.current_amount == 90

    reverted = remove_contribution(funded, contribution.contribution_id)
    assert reverted.current_amount == 90
    assert reverted.is_completed is False
    assert reverted.contributions == []

    with pytest.raises(InvalidArgument):
        remove_contribution(reverted, "missing")


def test_target_date_must_follow_start():
    with pytest.raises(ValueError):
        SavingsGoal(title="Bad", target_amount=10, start_date=dt.date(2024, 2, 1), target_date=dt.date(2024, 1, 1))
