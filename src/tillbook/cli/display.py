"""Plain-text rendering of register state for the CLI."""

from decimal import Decimal

import click

from tillbook.domain.entities import CashRegisterStats, RechargeTransaction, RegisterSnapshot


def money(amount: Decimal) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def echo_stats(stats: CashRegisterStats) -> None:
    """Print the register summary block."""
    rows = [
        ("Opening balance", stats.opening_balance),
        ("Sales", stats.total_sales),
        ("  Products", stats.product_sales),
        ("  Services", stats.service_sales),
        ("  Sublimation", stats.sublimation_sales),
        ("  Paid in cash", stats.cash_sales),
        ("Expenses", stats.total_expenses),
        ("Recharges", stats.total_recharges),
        ("  Cash", stats.cash_recharges),
        ("  Transfer", stats.transfer_recharges),
        ("  Other", stats.other_recharges),
    ]
    for label, amount in rows:
        click.echo(f"{label:<20s} {money(amount):>18s}")
    click.echo("-" * 39)
    click.echo(f"{'Current balance':<20s} {money(stats.current_balance):>18s}")
    if stats.closing_balance is not None:
        click.echo(f"{'Closing balance':<20s} {money(stats.closing_balance):>18s}")
        click.echo(f"{'Variance':<20s} {money(stats.variance):>18s}")


def echo_transactions(transactions: tuple[RechargeTransaction, ...] | list[RechargeTransaction]) -> None:
    for txn in transactions:
        timestamp = txn.created_at.strftime("%H:%M:%S")
        click.echo(
            f"ID: {txn.id:4d} | {timestamp} | {txn.description:30s} | "
            f"{money(txn.amount):>14s} | {txn.payment_method.value}"
        )


def echo_snapshot(snapshot: RegisterSnapshot) -> None:
    """Print register status, summary and recharge list."""
    register = snapshot.register
    if register is None:
        click.echo("Cash register: CLOSED (no register for today)")
        return

    click.echo(
        f"Cash register {register.id} for {register.date.isoformat()}: "
        f"{snapshot.state.value.upper()}"
    )
    click.echo()
    echo_stats(snapshot.stats)
    if snapshot.transactions:
        click.echo(f"\nRecharges ({len(snapshot.transactions)}):")
        echo_transactions(snapshot.transactions)
