"""Pure functions for expense records and list mutations.

This module contains the functional core for expense operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Mutations never modify their input; they return a new list.
"""

import json
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tally.domain.models import Amount, CategoryName, ExpenseId

INVALID_AMOUNT_MESSAGE = "Enter valid amount"


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    id: ExpenseId
    amount: Amount
    category: CategoryName
    date: datetime
    notes: str | None = None


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so a date survives a storage round-trip.

    Args:
        value: Any datetime.

    Returns:
        The same instant with microseconds rounded down to whole milliseconds.
    """
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def normalize_notes(notes: str | None) -> str | None:
    """Strip notes, treating blank text as absent."""
    if notes is None:
        return None
    stripped = notes.strip()
    return stripped or None


def create_expense(
    expense_id: ExpenseId,
    amount: Amount,
    category: CategoryName,
    date: datetime,
    notes: str | None = None,
) -> Expense:
    """Create an expense with normalized date and notes.

    Args:
        expense_id: Unique expense id.
        amount: Validated non-negative amount.
        category: Category name (not checked against known categories).
        date: Local wall-clock date and time.
        notes: Optional free text.

    Returns:
        New Expense.
    """
    return Expense(
        id=expense_id,
        amount=Amount(float(amount)),
        category=category,
        date=truncate_to_millis(date),
        notes=normalize_notes(notes),
    )


def parse_amount(text: str) -> tuple[Amount | None, str | None]:
    """Parse a user-entered amount.

    Args:
        text: Raw amount text.

    Returns:
        Tuple of (amount, error) where exactly one is None.
    """
    try:
        value = float(text.strip())
    except ValueError:
        return None, INVALID_AMOUNT_MESSAGE

    if not math.isfinite(value) or value < 0:
        return None, INVALID_AMOUNT_MESSAGE

    # -0.0 compares equal to zero; store it as plain zero
    return Amount(value + 0.0), None


def generate_expense_id(now: datetime, existing_ids: Iterable[str] = ()) -> ExpenseId:
    """Generate a time-based expense id.

    Args:
        now: Reference instant.
        existing_ids: Ids already in use.

    Returns:
        Milliseconds since the epoch, bumped until it does not collide.
    """
    taken = set(existing_ids)
    millis = int(now.timestamp() * 1000)
    while str(millis) in taken:
        millis += 1
    return ExpenseId(str(millis))


def format_date_iso(value: datetime) -> str:
    """Format a date as ISO-8601 with millisecond precision."""
    return value.isoformat(timespec="milliseconds")


def parse_date_iso(text: str) -> datetime:
    """Parse an ISO-8601 date into naive local time.

    Args:
        text: ISO-8601 timestamp, with or without an offset.

    Returns:
        Naive datetime in local wall-clock time.

    Raises:
        ValueError: If the text is not ISO-8601.
    """
    value = datetime.fromisoformat(text)
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def expense_to_dict(expense: Expense) -> dict[str, Any]:
    """Convert an expense to its persisted field mapping.

    Field order is fixed so that encoding is deterministic.
    """
    return {
        "id": expense.id,
        "amount": float(expense.amount),
        "category": expense.category,
        "date": format_date_iso(expense.date),
        "notes": expense.notes,
    }


def expense_from_dict(data: dict[str, Any]) -> Expense:
    """Build an expense from its persisted field mapping.

    Raises:
        KeyError: If a required field is missing.
        TypeError: If a field has the wrong type.
        ValueError: If the date is not ISO-8601.
    """
    notes = data.get("notes")
    return Expense(
        id=ExpenseId(data["id"]),
        amount=Amount(float(data["amount"])),
        category=CategoryName(data["category"]),
        date=parse_date_iso(data["date"]),
        notes=notes if notes is None else str(notes),
    )


def encode_expenses(expenses: Sequence[Expense]) -> str:
    """Serialize expenses as a compact JSON array."""
    return json.dumps([expense_to_dict(e) for e in expenses], separators=(",", ":"), ensure_ascii=False)


def decode_expenses(blob: str | None) -> list[Expense]:
    """Deserialize expenses from a JSON array.

    Args:
        blob: Stored blob. None or empty means nothing stored yet.

    Returns:
        List of expenses in stored order.

    Raises:
        json.JSONDecodeError: If the blob is not JSON.
    """
    if not blob:
        return []
    return [expense_from_dict(item) for item in json.loads(blob)]


def find_expense(expenses: Sequence[Expense], expense_id: str) -> Expense | None:
    """Find an expense by id."""
    return next((e for e in expenses if e.id == expense_id), None)


def add_expense(expenses: Sequence[Expense], expense: Expense) -> list[Expense]:
    """Return a new list with the expense inserted at the front."""
    return [expense, *expenses]


def update_expense(expenses: Sequence[Expense], expense: Expense) -> list[Expense]:
    """Return a new list with the expense of the same id replaced.

    An unknown id leaves the list unchanged.
    """
    return [expense if e.id == expense.id else e for e in expenses]


def remove_expense(expenses: Sequence[Expense], expense_id: str) -> list[Expense]:
    """Return a new list without the expense with the given id."""
    return [e for e in expenses if e.id != expense_id]


def add_category(categories: Sequence[CategoryName], name: str) -> list[CategoryName]:
    """Return a new category list with the name appended.

    Args:
        categories: Known categories in display order.
        name: Category name to add. Surrounding whitespace is ignored.

    Returns:
        New list. Unchanged if the name is blank or already present.
    """
    stripped = name.strip()
    if not stripped or stripped in categories:
        return list(categories)
    return [*categories, CategoryName(stripped)]
