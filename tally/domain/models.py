"""Domain type definitions for tally.

These NewTypes and enums provide semantic clarity and help with type checking:
- Amount: Expense amount in major currency units (currency agnostic)
- CategoryName: Name of an expense category
- ExpenseId: Opaque unique expense identifier
- PeriodFilter: Named date range used to select expenses
- SortKey: Ordering applied to the expense list
"""

from enum import Enum
from typing import NewType

# Amounts are plain non-negative floats; they are persisted as JSON numbers
Amount = NewType("Amount", float)

# Category name for expense categories
CategoryName = NewType("CategoryName", str)

# Milliseconds since the epoch as a decimal string (e.g., "1704067200000")
ExpenseId = NewType("ExpenseId", str)


class PeriodFilter(str, Enum):
    """Named date range used to select expenses."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


class SortKey(str, Enum):
    """Ordering applied to the expense list."""

    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    AMOUNT_DESC = "amount-desc"
    AMOUNT_ASC = "amount-asc"


DEFAULT_CATEGORIES: tuple[CategoryName, ...] = (
    CategoryName("Food"),
    CategoryName("Transport"),
    CategoryName("Shopping"),
    CategoryName("Bills"),
    CategoryName("Other"),
)
