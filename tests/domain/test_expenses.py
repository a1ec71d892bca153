"""Tests for tally.domain.expenses pure functions."""

import json
import math
from datetime import datetime, timezone

import pytest

from tally.domain.expenses import (
    INVALID_AMOUNT_MESSAGE,
    Expense,
    add_category,
    add_expense,
    create_expense,
    decode_expenses,
    encode_expenses,
    expense_from_dict,
    expense_to_dict,
    find_expense,
    generate_expense_id,
    parse_amount,
    remove_expense,
    update_expense,
)
from tally.domain.models import Amount, CategoryName, ExpenseId


def make_expense(expense_id: str, amount: float = 10.0, notes: str | None = None) -> Expense:
    return Expense(ExpenseId(expense_id), Amount(amount), CategoryName("Food"), datetime(2024, 1, 1, 9, 30), notes)


class TestParseAmount:
    """Tests for parse_amount."""

    def test_parses_decimal(self) -> None:
        """Should parse a decimal amount."""
        assert parse_amount("12.50") == (12.5, None)

    def test_strips_whitespace(self) -> None:
        """Should ignore surrounding whitespace."""
        assert parse_amount("  7 ") == (7.0, None)

    def test_accepts_zero(self) -> None:
        """Should accept zero."""
        assert parse_amount("0") == (0.0, None)

    def test_negative_zero_is_plain_zero(self) -> None:
        """Should store "-0" as positive zero."""
        amount, error = parse_amount("-0")

        assert error is None
        assert amount == 0.0
        assert math.copysign(1.0, amount) == 1.0
        assert '"amount":0.0,' in encode_expenses([make_expense("1", amount)])

    @pytest.mark.parametrize("text", ["", "abc", "-1", "nan", "inf", "1,5"])
    def test_rejects_invalid(self, text: str) -> None:
        """Should reject blank, non-numeric, negative and non-finite input."""
        amount, error = parse_amount(text)

        assert amount is None
        assert error == INVALID_AMOUNT_MESSAGE


class TestGenerateExpenseId:
    """Tests for generate_expense_id."""

    def test_uses_epoch_milliseconds(self) -> None:
        """Should use milliseconds since the epoch."""
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        assert generate_expense_id(now) == "1704067200000"

    def test_avoids_existing_ids(self) -> None:
        """Should bump the id until it is unique."""
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        result = generate_expense_id(now, ["1704067200000", "1704067200001"])

        assert result == "1704067200002"


class TestCreateExpense:
    """Tests for create_expense."""

    def test_normalizes_notes(self) -> None:
        """Should strip notes and drop blank ones."""
        when = datetime(2024, 1, 1)

        assert create_expense(ExpenseId("1"), Amount(1), CategoryName("Food"), when, "  hi ").notes == "hi"
        assert create_expense(ExpenseId("1"), Amount(1), CategoryName("Food"), when, "   ").notes is None

    def test_truncates_to_milliseconds(self) -> None:
        """Should drop sub-millisecond precision."""
        when = datetime(2024, 1, 1, 12, 0, 0, 123456)

        expense = create_expense(ExpenseId("1"), Amount(1), CategoryName("Food"), when)

        assert expense.date == datetime(2024, 1, 1, 12, 0, 0, 123000)


class TestCodec:
    """Tests for the persisted field mapping."""

    def test_field_order_and_format(self) -> None:
        """Should write fields in a fixed order with an ISO date."""
        data = expense_to_dict(make_expense("1", 10, "lunch"))

        assert list(data) == ["id", "amount", "category", "date", "notes"]
        assert data["date"] == "2024-01-01T09:30:00.000"
        assert data["amount"] == 10.0

    def test_missing_notes_are_none(self) -> None:
        """Should accept records without a notes field."""
        expense = expense_from_dict({"id": "1", "amount": 3, "category": "Food", "date": "2024-01-01T00:00:00"})

        assert expense.notes is None
        assert expense.amount == 3.0

    def test_offset_dates_become_local(self) -> None:
        """Should convert offset-aware dates to naive local time."""
        expense = expense_from_dict(
            {"id": "1", "amount": 3, "category": "Food", "date": "2024-01-01T00:00:00Z", "notes": None}
        )

        expected = datetime(2024, 1, 1, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert expense.date == expected
        assert expense.date.tzinfo is None

    def test_encode_is_compact_json(self) -> None:
        """Should produce a compact JSON array."""
        blob = encode_expenses([make_expense("1")])

        assert blob == (
            '[{"id":"1","amount":10.0,"category":"Food","date":"2024-01-01T09:30:00.000","notes":null}]'
        )

    def test_reencoding_is_byte_identical(self) -> None:
        """Should re-encode a decoded blob to the same bytes."""
        blob = encode_expenses([make_expense("1", 10.1, "café"), make_expense("2", 0.3)])

        assert encode_expenses(decode_expenses(blob)) == blob

    def test_decode_empty(self) -> None:
        """Should treat missing or empty blobs as no expenses."""
        assert decode_expenses(None) == []
        assert decode_expenses("") == []

    def test_decode_malformed_raises(self) -> None:
        """Should propagate parse faults for malformed data."""
        with pytest.raises(json.JSONDecodeError):
            decode_expenses("{not json")

        with pytest.raises(KeyError):
            decode_expenses('[{"id": "1"}]')


class TestListMutations:
    """Tests for add_expense, update_expense, remove_expense and find_expense."""

    def test_add_inserts_at_front(self) -> None:
        """Should put the new expense first."""
        result = add_expense([make_expense("1")], make_expense("2"))

        assert [e.id for e in result] == ["2", "1"]

    def test_update_replaces_by_id(self) -> None:
        """Should replace the expense with the same id in place."""
        expenses = [make_expense("1"), make_expense("2")]

        result = update_expense(expenses, make_expense("2", 99))

        assert [e.amount for e in result] == [10.0, 99.0]
        assert expenses[1].amount == 10.0

    def test_update_unknown_id_is_noop(self) -> None:
        """Should leave the list unchanged for an unknown id."""
        expenses = [make_expense("1")]

        assert update_expense(expenses, make_expense("9")) == expenses

    def test_remove_by_id(self) -> None:
        """Should drop the expense with the id."""
        result = remove_expense([make_expense("1"), make_expense("2")], "1")

        assert [e.id for e in result] == ["2"]

    def test_find(self) -> None:
        """Should find by id or return None."""
        expenses = [make_expense("1")]

        assert find_expense(expenses, "1") == expenses[0]
        assert find_expense(expenses, "2") is None


class TestAddCategory:
    """Tests for add_category."""

    def test_appends_trimmed_name(self) -> None:
        """Should append the trimmed name."""
        result = add_category([CategoryName("Food")], "  Gifts ")

        assert result == ["Food", "Gifts"]

    def test_ignores_duplicates(self) -> None:
        """Should not add a name that already exists."""
        assert add_category([CategoryName("Food")], "Food") == ["Food"]

    def test_ignores_blank(self) -> None:
        """Should not add a blank name."""
        assert add_category([CategoryName("Food")], "   ") == ["Food"]
