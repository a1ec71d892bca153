"""List and summary commands for viewing expenses."""

import sqlite3
import sys
from datetime import datetime

from rich.console import Console
from rich.table import Table

from tally.commands.expenses import exit_with_error, parse_date_input
from tally.config import Settings, load_settings
from tally.dates import end_of_day, format_day, period_label, period_range, start_of_day
from tally.domain.models import Amount, PeriodFilter, SortKey
from tally.domain.report import ExpenseSummary, calculate_histogram_bar_length, format_amount
from tally.ledger import Ledger

console = Console()


def resolve_period(
    settings: Settings,
    period: PeriodFilter | None,
    since: str | None,
    until: str | None,
) -> tuple[PeriodFilter, datetime | None, datetime | None]:
    """Work out the period filter and custom bounds from command options.

    Giving --from or --to selects a custom period. A missing custom bound is
    left open.

    Returns:
        Tuple of (period, custom_start, custom_end).
    """
    if since or until:
        if period not in (None, PeriodFilter.CUSTOM):
            exit_with_error("--from/--to can only be combined with --period custom")
        period = PeriodFilter.CUSTOM
    elif period is None:
        period = settings.default_period

    if period != PeriodFilter.CUSTOM:
        return period, None, None

    if not since and not until:
        exit_with_error("Custom period needs --from and/or --to")

    first = second = None
    if since:
        first, error = parse_date_input(since, settings.date_dayfirst)
        if error:
            exit_with_error(error)
    if until:
        second, error = parse_date_input(until, settings.date_dayfirst)
        if error:
            exit_with_error(error)

    if first and second and second.date() < first.date():
        exit_with_error("--to must not be before --from")

    custom_start = start_of_day(first) if first else None
    custom_end = end_of_day(second) if second else None
    return period, custom_start, custom_end


def list_command(
    period: PeriodFilter | None = None,
    since: str | None = None,
    until: str | None = None,
    sort: SortKey | None = None,
    limit: int = 50,
    all: bool = False,
) -> None:
    """List expenses for a period in the chosen order."""
    settings = load_settings()
    period, custom_start, custom_end = resolve_period(settings, period, since, until)
    now = datetime.now()

    try:
        ledger = Ledger.open(settings.db_path, sort or settings.default_sort)
        expenses = ledger.view(period, now, custom_start, custom_end)

        if not ledger.expenses:
            console.print("[yellow]No expenses yet. Use 'tally add' to add one.[/yellow]")
            return

        start, end = period_range(period, now, custom_start, custom_end)
        label = period_label(period, start, end)

        if not expenses:
            console.print(f"[yellow]No expenses found for {label}[/yellow]")
            return

        shown = expenses if all else expenses[:limit]
        table = Table(title=f"Expenses - {label} (showing {len(shown)} of {len(expenses)})")
        table.add_column("ID", style="dim")
        table.add_column("Date", style="cyan")
        table.add_column("Category", style="magenta")
        table.add_column("Amount", justify="right")
        table.add_column("Notes", style="dim")

        for expense in shown:
            table.add_row(
                expense.id,
                format_day(expense.date),
                expense.category,
                format_amount(expense.amount, settings.currency_symbol),
                expense.notes or "",
            )

        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def render_category_line(category: str, amount: Amount, symbol: str, max_amount: Amount | None, bar_width: int) -> None:
    """Render single category total line.

    Args:
        category: Category name.
        amount: Category total.
        symbol: Currency symbol.
        max_amount: Maximum amount for histogram scaling, None for no histogram.
        bar_width: Width of histogram bar in characters.
    """
    amount_display = format_amount(amount, symbol)

    if max_amount is not None:
        bar = "█" * calculate_histogram_bar_length(amount, max_amount, bar_width)
        console.print(f"  {category:20} {amount_display:>12} {bar}")
    else:
        console.print(f"  {category}: {amount_display}")


def render_summary(summary: ExpenseSummary, label: str, symbol: str, histogram: bool) -> None:
    """Print totals and the per-category breakdown."""
    console.print(f"[bold cyan]{label}[/bold cyan]\n")
    console.print(f"  [bold]Total:[/bold] {format_amount(summary.total, symbol)}")
    console.print(f"  Count: {summary.count}")
    console.print(f"  Avg: {format_amount(summary.average, symbol)}\n")

    console.print("[bold]By category:[/bold]\n")
    max_amount = Amount(max(summary.category_totals.values(), default=0.0)) if histogram else None
    for category, amount in summary.category_totals.items():
        render_category_line(category, amount, symbol, max_amount, bar_width=30)


def summary_command(
    period: PeriodFilter | None = None,
    since: str | None = None,
    until: str | None = None,
    histogram: bool = True,
) -> None:
    """Show total, count, average and category totals for a period."""
    settings = load_settings()
    period, custom_start, custom_end = resolve_period(settings, period, since, until)
    now = datetime.now()

    try:
        ledger = Ledger.open(settings.db_path, settings.default_sort)
        summary = ledger.summary(period, now, custom_start, custom_end)

        start, end = period_range(period, now, custom_start, custom_end)
        render_summary(summary, period_label(period, start, end), settings.currency_symbol, histogram)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
