"""Pure functions for summary calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from tally.dates import period_range
from tally.domain.expenses import Expense
from tally.domain.models import Amount, CategoryName, PeriodFilter


@dataclass(frozen=True)
class ExpenseSummary:
    """Immutable summary of the expenses in a period."""

    expenses: list[Expense]
    total: Amount
    count: int
    average: Amount
    category_totals: dict[CategoryName, Amount] = field(default_factory=dict)


def filter_by_range(expenses: Sequence[Expense], start: datetime, end: datetime) -> list[Expense]:
    """Select expenses dated within a closed range.

    Args:
        expenses: Expenses in display order.
        start: Inclusive range start.
        end: Inclusive range end.

    Returns:
        Matching expenses, order preserved.
    """
    return [e for e in expenses if start <= e.date <= end]


def filter_by_period(
    expenses: Sequence[Expense],
    period: PeriodFilter,
    now: datetime,
    custom_start: datetime | None = None,
    custom_end: datetime | None = None,
) -> list[Expense]:
    """Select expenses within a period filter relative to now."""
    start, end = period_range(period, now, custom_start, custom_end)
    return filter_by_range(expenses, start, end)


def calculate_total(expenses: Sequence[Expense]) -> Amount:
    """Sum expense amounts."""
    return Amount(sum((e.amount for e in expenses), 0.0))


def calculate_average(total: Amount, count: int) -> Amount:
    """Average amount per expense, zero when there are no expenses."""
    if count == 0:
        return Amount(0.0)
    return Amount(total / count)


def calculate_category_totals(
    expenses: Sequence[Expense],
    categories: Sequence[CategoryName],
) -> dict[CategoryName, Amount]:
    """Total amounts per category.

    Every known category starts at zero. Expenses whose category is not
    known still get an entry under their own category name.

    Args:
        expenses: Expenses to aggregate.
        categories: Known categories in display order.

    Returns:
        Dictionary of category name to total, known categories first.
    """
    totals: dict[CategoryName, Amount] = {category: Amount(0.0) for category in categories}
    for expense in expenses:
        totals[expense.category] = Amount(totals.get(expense.category, 0.0) + expense.amount)
    return totals


def create_summary(expenses: Sequence[Expense], categories: Sequence[CategoryName]) -> ExpenseSummary:
    """Create a summary of an already filtered expense list.

    Args:
        expenses: Filtered expenses.
        categories: Known categories in display order.

    Returns:
        ExpenseSummary with totals, count, average and category totals.
    """
    total = calculate_total(expenses)
    count = len(expenses)
    return ExpenseSummary(
        expenses=list(expenses),
        total=total,
        count=count,
        average=calculate_average(total, count),
        category_totals=calculate_category_totals(expenses, categories),
    )


def summarize(
    expenses: Sequence[Expense],
    categories: Sequence[CategoryName],
    period: PeriodFilter,
    now: datetime,
    custom_start: datetime | None = None,
    custom_end: datetime | None = None,
) -> ExpenseSummary:
    """Filter expenses by period and summarize them.

    Args:
        expenses: Full expense list.
        categories: Known categories in display order.
        period: Period filter.
        now: Reference instant for relative periods.
        custom_start: Start of a custom range.
        custom_end: End of a custom range.

    Returns:
        ExpenseSummary of the filtered expenses.
    """
    filtered = filter_by_period(expenses, period, now, custom_start, custom_end)
    return create_summary(filtered, categories)


def calculate_histogram_bar_length(
    amount: Amount,
    max_amount: Amount,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def format_amount(amount: Amount, symbol: str = "") -> str:
    """Format an amount for display (e.g., "1,234.50" or "£1,234.50")."""
    return f"{symbol}{amount:,.2f}"
