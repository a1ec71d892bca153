"""Domain models and types for tally.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from tally.domain.models import (
    DEFAULT_CATEGORIES,
    Amount,
    CategoryName,
    ExpenseId,
    PeriodFilter,
    SortKey,
)

__all__ = ["Amount", "CategoryName", "ExpenseId", "PeriodFilter", "SortKey", "DEFAULT_CATEGORIES"]
