"""Admin commands for init and category management."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from tally.config import create_default_config, get_config_path, load_settings
from tally.ledger import Ledger
from tally.store.repository import ensure_default_categories
from tally.store.schema import init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize the record store, default categories and config."""
    console.print(f"[cyan]Initializing store at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Store initialized")

    if ensure_default_categories(db_path):
        console.print("[green]✓[/green] Default categories created")
    else:
        console.print("[dim]Existing categories kept[/dim]")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Store: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize tally store and configuration."""
    config_path = get_config_path()
    db_path = load_settings(config_path).db_path

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Store already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'tally init --force' to overwrite the config[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def categories_command() -> None:
    """List categories in display order."""
    settings = load_settings()

    try:
        ledger = Ledger.open(settings.db_path, settings.default_sort)

        table = Table(title=f"Categories ({len(ledger.categories)})")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Name", style="magenta")
        table.add_column("Expenses", justify="right")

        for idx, category in enumerate(ledger.categories, 1):
            count = sum(1 for e in ledger.expenses if e.category == category)
            table.add_row(str(idx), category, str(count))

        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def add_category_command(name: str) -> None:
    """Append a category."""
    settings = load_settings()

    if not name.strip():
        console.print("[red]Category name cannot be empty[/red]")
        sys.exit(1)

    try:
        ledger = Ledger.open(settings.db_path, settings.default_sort)

        if ledger.add_category(name):
            console.print(f"[green]✓[/green] Added category: {name.strip()}")
        else:
            console.print(f"[yellow]Category '{name.strip()}' already exists[/yellow]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
