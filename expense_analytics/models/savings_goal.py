import datetime as dt
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator


class GoalCategory(str, Enum):
    EMERGENCY = "Emergency"
    VACATION = "Vacation"
    EDUCATION = "Education"
    HOME = "Home"
    VEHICLE = "Vehicle"
    RETIREMENT = "Retirement"
    INVESTMENT = "Investment"
    DEBT = "Debt"
    OTHERS = "Others"


class Contribution(BaseModel):
    contribution_id: str = Field(default_factory=lambda: uuid4().hex)
    amount: float = Field(gt=0, allow_inf_nan=False)
    date: dt.date = Field(default_factory=dt.date.today)
    note: Optional[str] = Field(default="", max_length=200)


class SavingsGoal(BaseModel):
    goal_id: str = Field(default_factory=lambda: uuid4().hex)
    title: str = Field(min_length=1, max_length=100)
    target_amount: float = Field(ge=1, allow_inf_nan=False)
    current_amount: float = Field(default=0, ge=0, allow_inf_nan=False)
    start_date: dt.date = Field(default_factory=dt.date.today)
    target_date: dt.date
    category: GoalCategory = GoalCategory.OTHERS
    description: Optional[str] = Field(default="", max_length=500)
    is_completed: bool = False
    is_active: bool = True
    contributions: List[Contribution] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_dates(self) -> "SavingsGoal":
        if self.target_date <= self.start_date:
            raise ValueError("Target date must be after start date")
        return self

    def progress(self) -> float:
        if self.target_amount <= 0:
            return 0.0
        percentage = self.current_amount / self.target_amount * 100
        return min(100.0, max(0.0, percentage))

    def remaining_amount(self) -> float:
        return max(0.0, self.target_amount - self.current_amount)

    def days_remaining(self, today: Optional[dt.date] = None) -> int:
        today = today or dt.date.today()
        return max(0, (self.target_date - today).days)

    def daily_savings_needed(self, today: Optional[dt.date] = None) -> float:
        days = self.days_remaining(today)
        if days <= 0:
            return 0.0
        return self.remaining_amount() / days

    def to_dict(self, today: Optional[dt.date] = None) -> Dict[str, Any]:
        data = self.model_dump(mode="json")
        data.update(
            progress=round(self.progress(), 2),
            remaining_amount=round(self.remaining_amount(), 2),
            days_remaining=self.days_remaining(today),
            daily_savings_needed=round(self.daily_savings_needed(today), 2),
        )
        return data
