"""In-memory expense ledger backed by the repository.

The ledger owns the expense and category lists for one session. Every
mutation is persisted before it replaces the in-memory state, so a failed
save leaves the ledger as it was.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from tally.domain.expenses import (
    Expense,
    add_category,
    add_expense,
    find_expense,
    remove_expense,
    update_expense,
)
from tally.domain.models import CategoryName, PeriodFilter, SortKey
from tally.domain.report import ExpenseSummary, filter_by_period, summarize
from tally.domain.sorting import sort_expenses
from tally.store.repository import load_categories, load_expenses, save_categories, save_expenses

logger = logging.getLogger(__name__)


@dataclass
class Ledger:
    """Session state: expenses in sort order, categories, and the sort key."""

    db_path: Path | None = None
    expenses: list[Expense] = field(default_factory=list)
    categories: list[CategoryName] = field(default_factory=list)
    sort_key: SortKey = SortKey.DATE_DESC
    version: int = 0

    @classmethod
    def open(cls, db_path: Path | None = None, sort_key: SortKey = SortKey.DATE_DESC) -> "Ledger":
        """Load categories and expenses from the store.

        Args:
            db_path: Path to the database file. If None, uses default location.
            sort_key: Initial sort order.

        Returns:
            Ledger with sorted expenses.
        """
        categories = load_categories(db_path)
        expenses = load_expenses(db_path)
        return cls(
            db_path=db_path,
            expenses=sort_expenses(expenses, sort_key),
            categories=categories,
            sort_key=sort_key,
        )

    def _commit_expenses(self, expenses: list[Expense], resort: bool = True) -> None:
        save_expenses(expenses, self.db_path)
        self.expenses = sort_expenses(expenses, self.sort_key) if resort else expenses
        self.version += 1

    def get(self, expense_id: str) -> Expense | None:
        """Find an expense by id."""
        return find_expense(self.expenses, expense_id)

    def add(self, expense: Expense) -> None:
        """Add a new expense and persist the list."""
        self._commit_expenses(add_expense(self.expenses, expense))
        logger.info("Added expense %s", expense.id)

    def update(self, expense: Expense) -> bool:
        """Replace the expense with the same id and persist the list.

        Returns:
            True if the expense existed, False otherwise (nothing is written).
        """
        if self.get(expense.id) is None:
            return False
        self._commit_expenses(update_expense(self.expenses, expense))
        logger.info("Updated expense %s", expense.id)
        return True

    def delete(self, expense_id: str) -> bool:
        """Remove an expense by id and persist the list.

        Returns:
            True if the expense existed, False otherwise (nothing is written).
        """
        if self.get(expense_id) is None:
            return False
        self._commit_expenses(remove_expense(self.expenses, expense_id), resort=False)
        logger.info("Deleted expense %s", expense_id)
        return True

    def add_category(self, name: str) -> bool:
        """Append a category and persist the list.

        Returns:
            True if the category was added, False if blank or already present.
        """
        categories = add_category(self.categories, name)
        if len(categories) == len(self.categories):
            return False
        save_categories(categories, self.db_path)
        self.categories = categories
        self.version += 1
        logger.info("Added category %s", categories[-1])
        return True

    def set_sort(self, sort_key: SortKey) -> None:
        """Change the sort key and re-sort the expenses."""
        self.sort_key = sort_key
        self.expenses = sort_expenses(self.expenses, sort_key)

    def view(
        self,
        period: PeriodFilter,
        now: datetime,
        custom_start: datetime | None = None,
        custom_end: datetime | None = None,
    ) -> list[Expense]:
        """Sorted expenses within a period."""
        return filter_by_period(self.expenses, period, now, custom_start, custom_end)

    def summary(
        self,
        period: PeriodFilter,
        now: datetime,
        custom_start: datetime | None = None,
        custom_end: datetime | None = None,
    ) -> ExpenseSummary:
        """Totals for the expenses within a period."""
        return summarize(self.expenses, self.categories, period, now, custom_start, custom_end)
