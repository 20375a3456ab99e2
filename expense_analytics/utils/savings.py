import datetime as dt
import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from expense_analytics.core.exceptions import InvalidArgument
from expense_analytics.models.savings_goal import Contribution, SavingsGoal

logger = logging.getLogger(__name__)

SHORTLIST_SIZE = 3


def _ensure_goals(goals: Iterable[Any]) -> List[SavingsGoal]:
    validated = []
    for item in goals or []:
        if isinstance(item, SavingsGoal):
            validated.append(item)
            continue
        try:
            validated.append(SavingsGoal.model_validate(item))
        except ValidationError as exc:
            raise InvalidArgument(f"Invalid savings goal: {exc}") from exc
    return validated


def add_contribution(goal: SavingsGoal, contribution: Contribution) -> SavingsGoal:
    current = goal.current_amount + contribution.amount
    return goal.model_copy(
        update={
            "contributions": [*goal.contributions, contribution],
            "current_amount": current,
            "is_completed": goal.is_completed or current >= goal.target_amount,
        }
    )


def remove_contribution(goal: SavingsGoal, contribution_id: str) -> SavingsGoal:
    match = next((c for c in goal.contributions if c.contribution_id == contribution_id), None)
    if match is None:
        raise InvalidArgument(f"Contribution {contribution_id} not found on goal {goal.goal_id}")

    current = max(0.0, goal.current_amount - match.amount)
    return goal.model_copy(
        update={
            "contributions": [c for c in goal.contributions if c.contribution_id != contribution_id],
            "current_amount": current,
            "is_completed": current >= goal.target_amount,
        }
    )


def summarize_savings_goals(goals: Iterable[Any], today: Optional[dt.date] = None) -> Dict[str, Any]:
    today = today or dt.date.today()
    goals = _ensure_goals(goals)

    open_goals = [g for g in goals if g.is_active and not g.is_completed]
    total_saved = sum(g.current_amount for g in goals)
    total_target = sum(g.target_amount for g in goals)
    overall_progress = total_saved / total_target * 100 if total_target > 0 else 0.0

    upcoming = sorted(
        (g for g in open_goals if g.days_remaining(today) > 0),
        key=lambda g: g.target_date,
    )[:SHORTLIST_SIZE]
    near_completion = sorted(
        (g for g in open_goals if g.progress() > 0),
        key=lambda g: g.progress(),
        reverse=True,
    )[:SHORTLIST_SIZE]

    logger.debug(f"Summarized {len(goals)} savings goals")
    return {
        "total_goals": len(goals),
        "active_goals": len(open_goals),
        "completed_goals": len([g for g in goals if g.is_completed]),
        "total_saved": round(total_saved, 2),
        "total_target": round(total_target, 2),
        "overall_progress": round(min(100.0, overall_progress), 2),
        "upcoming_goals": [g.to_dict(today) for g in upcoming],
        "near_completion_goals": [g.to_dict(today) for g in near_completion],
    }
