"""Expense management commands (add, edit, delete)."""

import dataclasses
import sqlite3
import sys
from datetime import datetime
from typing import Any, NoReturn

import pandas as pd
import typer
from rich.console import Console

from tally.config import load_settings
from tally.dates import format_day
from tally.domain.expenses import Expense, create_expense, generate_expense_id, parse_amount
from tally.domain.models import Amount, CategoryName
from tally.domain.report import format_amount
from tally.ledger import Ledger

console = Console()


def parse_date_input(text: str, dayfirst: bool = False) -> tuple[datetime | None, str | None]:
    """Parse a user-entered date.

    Args:
        text: Date text (YYYY-MM-DD, DD/MM/YYYY, "2024-01-05 14:30", etc.).
        dayfirst: Whether ambiguous dates put the day first.

    Returns:
        Tuple of (date, error) where exactly one is None. The date is naive
        local time.
    """
    try:
        parsed = pd.to_datetime(text, dayfirst=dayfirst)
    except (ValueError, OverflowError, TypeError) as e:
        return None, f"Invalid date format: {e}"

    if pd.isna(parsed):
        return None, "Invalid date format: empty date"

    value = parsed.to_pydatetime()
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value, None


def exit_with_error(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]")
    sys.exit(1)


def confirm_category(ledger: Ledger, category: str) -> None:
    """Offer to add an unknown category to the category list."""
    if category in ledger.categories:
        return

    console.print(f"[yellow]Category '{category}' is not in your category list[/yellow]")
    if typer.confirm("Add it?", default=True):
        ledger.add_category(category)
        console.print(f"[green]✓[/green] Added category: {category}")


def print_expense(expense: Expense, symbol: str) -> None:
    """Print expense details."""
    console.print(f"  ID: {expense.id}")
    console.print(f"  Date: {format_day(expense.date)}")
    console.print(f"  Category: {expense.category}")
    console.print(f"  Amount: {format_amount(expense.amount, symbol)}")
    if expense.notes:
        console.print(f"  Notes: {expense.notes}")


def add_command(
    amount: str,
    category: str | None = None,
    date: str | None = None,
    notes: str | None = None,
) -> None:
    """Add an expense.

    Args:
        amount: Amount text; must be a non-negative number.
        category: Category name. Defaults to the first known category.
        date: Expense date. Defaults to now.
        notes: Optional notes.
    """
    settings = load_settings()

    value, error = parse_amount(amount)
    if error:
        exit_with_error(error)

    now = datetime.now()
    expense_date = now
    if date:
        expense_date, error = parse_date_input(date, settings.date_dayfirst)
        if error:
            console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, YYYY-MM-DD HH:MM, etc.[/dim]")
            exit_with_error(error)

    try:
        ledger = Ledger.open(settings.db_path, settings.default_sort)

        category_name = CategoryName(category.strip()) if category and category.strip() else None
        if category_name is None:
            category_name = ledger.categories[0] if ledger.categories else CategoryName("Other")
        else:
            confirm_category(ledger, category_name)

        expense = create_expense(
            generate_expense_id(now, (e.id for e in ledger.expenses)),
            Amount(value),
            category_name,
            expense_date,
            notes,
        )
        ledger.add(expense)

        console.print("[green]✓[/green] Expense added:")
        print_expense(expense, settings.currency_symbol)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def edit_command(
    expense_id: str,
    amount: str | None = None,
    category: str | None = None,
    date: str | None = None,
    notes: str | None = None,
) -> None:
    """Edit an expense in place.

    Args:
        expense_id: Expense id (from 'tally list').
        amount: New amount text.
        category: New category name.
        date: New date.
        notes: New notes. An empty string clears them.
    """
    settings = load_settings()
    changes: dict[str, Any] = {}

    if amount is not None:
        value, error = parse_amount(amount)
        if error:
            exit_with_error(error)
        changes["amount"] = value

    if date is not None:
        parsed, error = parse_date_input(date, settings.date_dayfirst)
        if error:
            exit_with_error(error)
        changes["date"] = parsed

    if notes is not None:
        changes["notes"] = notes

    try:
        ledger = Ledger.open(settings.db_path, settings.default_sort)
        existing = ledger.get(expense_id)
        if existing is None:
            exit_with_error(f"Expense {expense_id} not found")

        if category is not None and category.strip():
            new_category = CategoryName(category.strip())
            confirm_category(ledger, new_category)
            changes["category"] = new_category

        if not changes:
            console.print("[yellow]Nothing to change[/yellow]")
            return

        merged = dataclasses.replace(existing, **changes)
        expense = create_expense(merged.id, merged.amount, merged.category, merged.date, merged.notes)
        ledger.update(expense)

        console.print(f"[green]✓[/green] Updated expense {expense_id}:")
        print_expense(expense, settings.currency_symbol)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def delete_command(expense_id: str, yes: bool = False) -> None:
    """Delete an expense.

    Args:
        expense_id: Expense id (from 'tally list').
        yes: Skip the confirmation prompt.
    """
    settings = load_settings()

    try:
        ledger = Ledger.open(settings.db_path, settings.default_sort)
        existing = ledger.get(expense_id)
        if existing is None:
            exit_with_error(f"Expense {expense_id} not found")

        print_expense(existing, settings.currency_symbol)
        if not yes and not typer.confirm("Delete this expense?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        ledger.delete(expense_id)
        console.print(f"[green]✓[/green] Deleted expense {expense_id}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
