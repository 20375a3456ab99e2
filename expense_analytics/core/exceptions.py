class ExpenseAnalyticsError(Exception):
    """Base class for errors raised by the analytics engine."""


class InvalidArgument(ExpenseAnalyticsError, ValueError):
    """A request parameter or record is malformed or out of range."""
