from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from expense_analytics.models.expense import Category


class BudgetPeriod(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Budget(BaseModel):
    budget_id: str = Field(default_factory=lambda: uuid4().hex)
    category: Category
    amount: float = Field(ge=0, allow_inf_nan=False)
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    month: Optional[int] = Field(default=None, ge=1, le=12)
    year: int = Field(ge=2000)
    active: bool = True

    @model_validator(mode="after")
    def require_month_for_monthly(self) -> "Budget":
        if self.period == BudgetPeriod.MONTHLY and self.month is None:
            raise ValueError("Month is required for monthly budgets")
        return self

    def monthly_amount(self) -> float:
        """Amount available per month; yearly budgets are spread evenly."""
        if self.period == BudgetPeriod.YEARLY:
            return self.amount / 12
        return self.amount
