"""Tests for tally.ledger."""

from datetime import datetime
from pathlib import Path

import pytest

from tally.domain.expenses import Expense
from tally.domain.models import Amount, CategoryName, ExpenseId, PeriodFilter, SortKey
from tally.ledger import Ledger
from tally.store.repository import load_categories, load_expenses, save_expenses

NOW = datetime(2024, 1, 15, 12, 0)


def make_expense(expense_id: str, amount: float, day: int, category: str = "Food") -> Expense:
    return Expense(ExpenseId(expense_id), Amount(amount), CategoryName(category), datetime(2024, 1, day))


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "tally.db"


class TestOpen:
    """Tests for Ledger.open."""

    def test_fresh_store(self, db_path: Path) -> None:
        """Should seed categories and start with no expenses."""
        ledger = Ledger.open(db_path)

        assert ledger.expenses == []
        assert ledger.categories == ["Food", "Transport", "Shopping", "Bills", "Other"]
        assert ledger.version == 0

    def test_sorts_loaded_expenses(self, db_path: Path) -> None:
        """Should sort stored expenses by the given key."""
        save_expenses([make_expense("a", 5, 1), make_expense("b", 9, 3), make_expense("c", 1, 2)], db_path)

        ledger = Ledger.open(db_path, SortKey.AMOUNT_ASC)

        assert [e.id for e in ledger.expenses] == ["c", "a", "b"]


class TestMutations:
    """Tests for add, update, delete and add_category."""

    def test_add_persists_and_sorts(self, db_path: Path) -> None:
        """Should persist the new expense and keep the sort order."""
        ledger = Ledger.open(db_path)
        ledger.add(make_expense("old", 1, 1))
        ledger.add(make_expense("new", 1, 10))
        ledger.add(make_expense("mid", 1, 5))

        assert [e.id for e in ledger.expenses] == ["new", "mid", "old"]
        assert {e.id for e in load_expenses(db_path)} == {"old", "new", "mid"}
        assert ledger.version == 3

    def test_update(self, db_path: Path) -> None:
        """Should replace the expense by id and persist it."""
        ledger = Ledger.open(db_path)
        ledger.add(make_expense("1", 10, 1))

        assert ledger.update(make_expense("1", 42, 1, "Bills")) is True

        (stored,) = load_expenses(db_path)
        assert stored.amount == 42
        assert stored.category == "Bills"

    def test_update_unknown(self, db_path: Path) -> None:
        """Should report a missing expense without writing."""
        ledger = Ledger.open(db_path)

        assert ledger.update(make_expense("nope", 1, 1)) is False
        assert ledger.version == 0

    def test_delete(self, db_path: Path) -> None:
        """Should remove the expense and persist the list."""
        ledger = Ledger.open(db_path)
        ledger.add(make_expense("1", 10, 1))
        ledger.add(make_expense("2", 20, 2))

        assert ledger.delete("1") is True

        assert [e.id for e in ledger.expenses] == ["2"]
        assert [e.id for e in load_expenses(db_path)] == ["2"]

    def test_delete_unknown(self, db_path: Path) -> None:
        """Should report a missing expense."""
        assert Ledger.open(db_path).delete("nope") is False

    def test_add_category(self, db_path: Path) -> None:
        """Should append and persist a new category."""
        ledger = Ledger.open(db_path)

        assert ledger.add_category(" Gifts ") is True
        assert ledger.add_category("Gifts") is False
        assert ledger.add_category("") is False

        assert load_categories(db_path)[-1] == "Gifts"
        assert ledger.categories[-1] == "Gifts"

    def test_failed_save_keeps_state(self, db_path: Path, monkeypatch) -> None:
        """Should leave in-memory state untouched when the save fails."""
        ledger = Ledger.open(db_path)
        ledger.add(make_expense("1", 10, 1))

        def fail(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr("tally.ledger.save_expenses", fail)

        with pytest.raises(OSError):
            ledger.add(make_expense("2", 20, 2))

        assert [e.id for e in ledger.expenses] == ["1"]
        assert ledger.version == 1


class TestViews:
    """Tests for set_sort, view and summary."""

    def test_set_sort(self, db_path: Path) -> None:
        """Should re-sort on sort key change."""
        ledger = Ledger.open(db_path)
        ledger.add(make_expense("small", 1, 2))
        ledger.add(make_expense("big", 100, 1))

        ledger.set_sort(SortKey.AMOUNT_DESC)

        assert [e.id for e in ledger.expenses] == ["big", "small"]

    def test_view_filters_sorted_list(self, db_path: Path) -> None:
        """Should apply the period filter to the sorted list."""
        ledger = Ledger.open(db_path, SortKey.DATE_ASC)
        ledger.add(make_expense("today", 1, 15))
        ledger.add(make_expense("earlier", 1, 2))
        ledger.add(Expense(ExpenseId("last-year"), Amount(1), CategoryName("Food"), datetime(2023, 12, 31)))

        result = ledger.view(PeriodFilter.MONTH, NOW)

        assert [e.id for e in result] == ["earlier", "today"]

    def test_summary(self, db_path: Path) -> None:
        """Should summarize the filtered expenses with known categories."""
        ledger = Ledger.open(db_path)
        ledger.add(make_expense("1", 10, 1))
        ledger.add(make_expense("2", 20, 2))
        ledger.add(make_expense("3", 5, 15, "Gifts"))

        summary = ledger.summary(PeriodFilter.ALL, NOW)

        assert summary.total == 35
        assert summary.count == 3
        assert summary.category_totals[CategoryName("Food")] == 30
        assert summary.category_totals[CategoryName("Transport")] == 0
        assert summary.category_totals[CategoryName("Gifts")] == 5
