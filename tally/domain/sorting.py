"""Pure functions for ordering expenses."""

from collections.abc import Sequence

from tally.domain.expenses import Expense
from tally.domain.models import SortKey


def sort_expenses(expenses: Sequence[Expense], key: SortKey = SortKey.DATE_DESC) -> list[Expense]:
    """Sort expenses by date or amount.

    Args:
        expenses: Expenses to sort.
        key: Sort key - date or amount, ascending or descending.

    Returns:
        New sorted list.
    """
    if key in (SortKey.AMOUNT_DESC, SortKey.AMOUNT_ASC):
        return sorted(expenses, key=lambda e: e.amount, reverse=key == SortKey.AMOUNT_DESC)
    return sorted(expenses, key=lambda e: e.date, reverse=key == SortKey.DATE_DESC)


def parse_sort_key(value: str | None, default: SortKey = SortKey.DATE_DESC) -> SortKey:
    """Parse a sort key name, falling back to the default for unknown values."""
    try:
        return SortKey(value)
    except ValueError:
        return default
