"""
Helpers shared by the analytics operations: record coercion, owner checks,
period validation and month arithmetic.
"""
import datetime as dt
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from expense_analytics.core.exceptions import InvalidArgument
from expense_analytics.models.expense import ExpenseRecord

RecordLike = Union[ExpenseRecord, Mapping[str, Any]]


def ensure_records(records: Optional[Iterable[RecordLike]]) -> List[ExpenseRecord]:
    """
    Validate mappings into ExpenseRecord instances and make sure every record
    belongs to the same user.
    """
    if records is None:
        return []

    validated: List[ExpenseRecord] = []
    for item in records:
        if isinstance(item, ExpenseRecord):
            validated.append(item)
            continue
        try:
            validated.append(ExpenseRecord.model_validate(item))
        except ValidationError as exc:
            raise InvalidArgument(f"Invalid expense record: {exc}") from exc

    owners = {record.user_id for record in validated}
    if len(owners) > 1:
        raise InvalidArgument(f"Records belong to more than one user: {sorted(owners)}")
    return validated


def validate_year(year: Any) -> int:
    if isinstance(year, bool) or not isinstance(year, int) or not 1000 <= year <= 9999:
        raise InvalidArgument(f"Year must be a four-digit integer, got {year!r}")
    return year


def validate_month(month: Any) -> Optional[int]:
    if month is None:
        return None
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidArgument(f"Month must be an integer between 1 and 12, got {month!r}")
    return month


def month_ordinal(year: int, month: int) -> int:
    """Number of months since year 0, so consecutive months differ by one."""
    return year * 12 + (month - 1)


def from_ordinal(ordinal: int) -> Tuple[int, int]:
    year, index = divmod(ordinal, 12)
    return year, index + 1


def date_ordinal(day: dt.date) -> int:
    return month_ordinal(day.year, day.month)
