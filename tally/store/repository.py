"""Expense repository: expenses and categories on top of the record store."""

import logging
from collections.abc import Sequence
from pathlib import Path

from tally.domain.expenses import Expense, decode_expenses, encode_expenses
from tally.domain.models import DEFAULT_CATEGORIES, CategoryName
from tally.store.records import get_string, get_string_list, set_string, set_string_list

logger = logging.getLogger(__name__)

EXPENSES_KEY = "expenses_v1"
CATEGORIES_KEY = "categories_v1"


def load_expenses(db_path: Path | None = None) -> list[Expense]:
    """Load all persisted expenses.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored expenses, or an empty list if nothing is stored yet.

    Raises:
        sqlite3.Error: If database operation fails.
        ValueError: If the stored blob is malformed (includes JSONDecodeError).
        KeyError: If a stored expense is missing a field.
    """
    expenses = decode_expenses(get_string(EXPENSES_KEY, db_path))
    logger.debug("Loaded %d expenses", len(expenses))
    return expenses


def save_expenses(expenses: Sequence[Expense], db_path: Path | None = None) -> None:
    """Persist the full expense list, overwriting prior state.

    Args:
        expenses: Expenses to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    set_string(EXPENSES_KEY, encode_expenses(expenses), db_path)
    logger.debug("Saved %d expenses", len(expenses))


def ensure_default_categories(db_path: Path | None = None) -> bool:
    """Seed the default categories unless a category list is already stored.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if the defaults were written, False if categories already existed.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    if get_string_list(CATEGORIES_KEY, db_path):
        return False

    save_categories(list(DEFAULT_CATEGORIES), db_path)
    logger.info("Seeded default categories: %s", ", ".join(DEFAULT_CATEGORIES))
    return True


def load_categories(db_path: Path | None = None) -> list[CategoryName]:
    """Load persisted categories, seeding the defaults on first use.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Categories in insertion order.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    if ensure_default_categories(db_path):
        return list(DEFAULT_CATEGORIES)
    return [CategoryName(name) for name in get_string_list(CATEGORIES_KEY, db_path) or []]


def save_categories(categories: Sequence[str], db_path: Path | None = None) -> None:
    """Persist the category list, overwriting prior state.

    Args:
        categories: Category names in display order.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    set_string_list(CATEGORIES_KEY, categories, db_path)
