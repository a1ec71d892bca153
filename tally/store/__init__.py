"""Record store layer - provides persistence for the application.

This module re-exports all public store functions for easy importing.
"""

# Re-export record primitives and repository functions
from tally.store.records import get_string, get_string_list, set_string, set_string_list
from tally.store.repository import (
    CATEGORIES_KEY,
    EXPENSES_KEY,
    ensure_default_categories,
    load_categories,
    load_expenses,
    save_categories,
    save_expenses,
)
# Re-export schema functions
from tally.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Records
    "get_string",
    "get_string_list",
    "set_string",
    "set_string_list",
    # Repository
    "CATEGORIES_KEY",
    "EXPENSES_KEY",
    "ensure_default_categories",
    "load_categories",
    "load_expenses",
    "save_categories",
    "save_expenses",
]
