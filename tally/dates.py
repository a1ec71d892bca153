"""Date utilities for tally.

Pure functions for period range calculations and formatting.
"""

from datetime import date, datetime, time, timedelta

from tally.domain.models import PeriodFilter

FAR_PAST = datetime.min
FAR_FUTURE = datetime.max

ONE_MILLISECOND = timedelta(milliseconds=1)


def start_of_day(value: date) -> datetime:
    """Get midnight at the start of a calendar day."""
    return datetime(value.year, value.month, value.day)


def end_of_day(value: date) -> datetime:
    """Get 23:59:59 of a calendar day."""
    return datetime.combine(value, time(23, 59, 59))


def custom_range(first: date, second: date) -> tuple[datetime, datetime]:
    """Calculate a custom closed range from two calendar days.

    Args:
        first: First day of the range.
        second: Last day of the range.

    Returns:
        Tuple of (start, end) where start is midnight of the first day and
        end is 23:59:59 of the second day.
    """
    return start_of_day(first), end_of_day(second)


def period_range(
    period: PeriodFilter,
    now: datetime,
    custom_start: datetime | None = None,
    custom_end: datetime | None = None,
) -> tuple[datetime, datetime]:
    """Resolve a period filter to an inclusive instant range.

    Args:
        period: Period filter.
        now: Reference instant.
        custom_start: Start of a custom range (see custom_range).
        custom_end: End of a custom range (see custom_range).

    Returns:
        Tuple of (start, end), both inclusive.
    """
    if period == PeriodFilter.TODAY:
        start = start_of_day(now)
        return start, start + timedelta(days=1) - ONE_MILLISECOND

    if period == PeriodFilter.WEEK:
        start = start_of_day(now - timedelta(days=now.weekday()))
        return start, start + timedelta(days=7) - ONE_MILLISECOND

    if period == PeriodFilter.MONTH:
        start = datetime(now.year, now.month, 1)
        next_month = (start.replace(day=28) + timedelta(days=4)).replace(day=1)
        return start, next_month - ONE_MILLISECOND

    if period == PeriodFilter.CUSTOM:
        return custom_start or FAR_PAST, custom_end or FAR_FUTURE

    return FAR_PAST, FAR_FUTURE


def format_day(value: date) -> str:
    """Format a day for display (e.g., "Jan 5, 2024")."""
    return f"{value:%b} {value.day}, {value.year}"


def period_label(period: PeriodFilter, start: datetime, end: datetime) -> str:
    """Human-readable label for a resolved period.

    Args:
        period: Period filter.
        start: Resolved range start.
        end: Resolved range end.

    Returns:
        Label such as "Today (Jan 5, 2024)" or "October 2026".
    """
    if period == PeriodFilter.TODAY:
        return f"Today ({format_day(start)})"
    if period == PeriodFilter.WEEK:
        return f"This week ({start:%b} {start.day} - {format_day(end)})"
    if period == PeriodFilter.MONTH:
        return start.strftime("%B %Y")
    if period == PeriodFilter.CUSTOM:
        since = "..." if start == FAR_PAST else format_day(start)
        until = "..." if end == FAR_FUTURE else format_day(end)
        return f"{since} - {until}"
    return "All time"
