"""CLI helpers for date range resolution."""

from datetime import date

import click

from tillbook.utils.date_parser import get_date_range, parse_date


def period_options(func):
    """Attach --start-date/--end-date and the period flags to a command."""
    options = [
        click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')"),
        click.option("--today", "today_flag", is_flag=True, help="Filter to today"),
        click.option("--this-week", is_flag=True, help="Filter to current week"),
        click.option("--this-month", is_flag=True, help="Filter to current month"),
        click.option("--last-week", is_flag=True, help="Filter to previous week"),
        click.option("--last-month", is_flag=True, help="Filter to previous month"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            "Error: Only one period option (--today, --this-week, --this-month, --last-week, --last-month) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None and end is None and default_range is not None:
        start, end = default_range

    return start, end


def period_flags_from(kwargs: dict) -> dict[str, bool]:
    """Collect period flag values from click keyword arguments."""
    return {
        "today": kwargs.pop("today_flag", False),
        "this-week": kwargs.pop("this_week", False),
        "this-month": kwargs.pop("this_month", False),
        "last-week": kwargs.pop("last_week", False),
        "last-month": kwargs.pop("last_month", False),
    }
