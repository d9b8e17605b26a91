"""Expense commands."""

from decimal import Decimal

import click

from tillbook.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from tillbook.cli.display import money
from tillbook.cli.error_handling import handle_domain_error
from tillbook.cli.register_context import load_register_service_or_exit, parse_amount_or_exit
from tillbook.domain.errors import DomainError
from tillbook.domain.expense import ExpenseService
from tillbook.utils.date_parser import parse_date


@click.group()
def expense_group():
    """Record and list expenses."""
    pass


@expense_group.command("add")
@click.argument("description")
@click.argument("amount")
@click.option("--category", help="Expense category (e.g., 'Supplies')")
@click.option("--date", "expense_date", default="today", show_default=True, help="Expense date")
@click.pass_context
def add_expense(ctx, description: str, amount: str, category: str | None, expense_date: str):
    """Record an expense.

    The expense is deducted from the register of its date.

    Examples:
        tillbook expense add "Resma de papel" 18000 --category Supplies
        tillbook expense add "Almuerzo" 12000 --date yesterday
    """
    try:
        day = parse_date(expense_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    value = parse_amount_or_exit(ctx, amount)
    register_service = load_register_service_or_exit(ctx)
    service = ExpenseService(ctx.obj["db"], register_service=register_service)

    try:
        expense_id = service.add_expense(
            date=day, description=description, amount=value, category=category
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created expense {expense_id}: {description.strip()} {money(value)}")
    if register_service.is_open:
        click.echo(f"Current balance: {money(register_service.stats.current_balance)}")


@expense_group.command("list")
@period_options
@click.pass_context
def list_expenses(ctx, start_date, end_date, **flags):
    """List expenses (defaults to all dates)."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(flags)
    )
    service = ExpenseService(ctx.obj["db"])

    try:
        expenses = service.list_expenses(start_date=start, end_date=end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(f"\nFound {len(expenses)} expense(s):")
    click.echo("-" * 78)
    for expense in expenses:
        category = expense.category or "-"
        click.echo(
            f"ID: {expense.id:4d} | {expense.date} | {expense.description:30s} | "
            f"{money(expense.amount):>14s} | {category}"
        )
    total = sum((e.amount for e in expenses), Decimal("0"))
    click.echo("-" * 78)
    click.echo(f"Total: {money(total)}")


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, expense_id: int, yes: bool):
    """Delete an expense."""
    register_service = load_register_service_or_exit(ctx)
    service = ExpenseService(ctx.obj["db"], register_service=register_service)

    expense = service.get_expense(expense_id)
    if expense is None:
        click.echo(f"Error: Expense {expense_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete expense {expense_id} ({expense.description})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
