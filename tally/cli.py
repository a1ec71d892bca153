"""CLI entry point for tally."""

import logging

import typer
from rich.logging import RichHandler

from tally.commands.admin import add_category_command, categories_command, init_command
from tally.commands.expenses import add_command, delete_command, edit_command
from tally.commands.report import list_command, summary_command
from tally.domain.models import PeriodFilter, SortKey

app = typer.Typer(
    name="tally",
    help="Tally - a simple personal expense tracker",
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; debug output only when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Tally - a simple personal expense tracker."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize the tally store, default categories and configuration."""
    init_command(force)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount spent (non-negative number)"),
    category: str = typer.Option(None, "--category", "-c", help="Category (default: first category)"),
    date: str = typer.Option(None, "--date", "-d", help="Date of the expense (default: now)"),
    notes: str = typer.Option(None, "--notes", "-n", help="Optional notes"),
) -> None:
    """Add an expense."""
    add_command(amount, category, date, notes)


@app.command()
def edit(
    expense_id: str = typer.Argument(..., help="Expense ID (from 'tally list')"),
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
    notes: str = typer.Option(None, "--notes", "-n", help="New notes (empty string clears them)"),
) -> None:
    """Edit an expense."""
    edit_command(expense_id, amount, category, date, notes)


@app.command()
def delete(
    expense_id: str = typer.Argument(..., help="Expense ID (from 'tally list')"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete an expense."""
    delete_command(expense_id, yes)


@app.command(name="list")
def list_expenses(
    period: PeriodFilter = typer.Option(None, "--period", "-p", help="Period to show (default from config)"),
    since: str = typer.Option(None, "--from", help="First day of a custom period"),
    until: str = typer.Option(None, "--to", help="Last day of a custom period"),
    sort: SortKey = typer.Option(None, "--sort", "-s", help="Sort order (default from config)"),
    limit: int = typer.Option(50, help="Maximum expenses to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all matching expenses"),
) -> None:
    """List your expenses."""
    list_command(period, since, until, sort, limit, all)


@app.command()
def summary(
    period: PeriodFilter = typer.Option(None, "--period", "-p", help="Period to summarize (default from config)"),
    since: str = typer.Option(None, "--from", help="First day of a custom period"),
    until: str = typer.Option(None, "--to", help="Last day of a custom period"),
    histogram: bool = typer.Option(True, help="Show histogram of category totals"),
) -> None:
    """Show total, count, average and totals by category."""
    summary_command(period, since, until, histogram)


@app.command()
def categories() -> None:
    """List your categories."""
    categories_command()


@app.command(name="add-category")
def add_category(
    name: str = typer.Argument(..., help="Category name"),
) -> None:
    """Add a category."""
    add_category_command(name)


if __name__ == "__main__":
    app()
