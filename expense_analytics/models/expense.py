import datetime as dt
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


class Category(str, Enum):
    FOOD = "Food"
    TRANSPORT = "Transport"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    HEALTHCARE = "Healthcare"
    BILLS = "Bills"
    OTHERS = "Others"


class ExpenseRecord(BaseModel):
    expense_id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str
    title: str = ""
    amount: float = Field(gt=0, allow_inf_nan=False)
    category: Category = Category.OTHERS
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def truncate_timestamp(cls, value: Any) -> Any:
        # Timestamps carry no meaning here, only the calendar day.
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value
