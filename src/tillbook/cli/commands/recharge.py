"""Recharge transaction commands."""

import click

from tillbook.cli.display import echo_transactions, money
from tillbook.cli.error_handling import handle_domain_error
from tillbook.cli.register_context import load_register_service_or_exit, parse_amount_or_exit
from tillbook.domain.entities import PaymentMethod
from tillbook.domain.errors import DomainError

PAYMENT_METHOD_CHOICE = click.Choice([m.value for m in PaymentMethod])


@click.group()
def recharge_group():
    """Record manual cash movements against the open register."""
    pass


@recharge_group.command("add")
@click.argument("description")
@click.argument("amount")
@click.option(
    "--payment-method",
    type=PAYMENT_METHOD_CHOICE,
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="How the recharge was paid",
)
@click.pass_context
def add_recharge(ctx, description: str, amount: str, payment_method: str):
    """Record a recharge transaction on today's open register.

    The amount is deducted from the register balance.

    Examples:
        tillbook recharge add "Recarga Claro" 10000
        tillbook recharge add "Provider payout" 25000 --payment-method transfer
    """
    value = parse_amount_or_exit(ctx, amount)
    service = load_register_service_or_exit(ctx)

    try:
        txn = service.add_recharge_transaction(description, value, PaymentMethod(payment_method))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded recharge {txn.id}: {txn.description} {money(txn.amount)}")
    click.echo(f"Current balance: {money(service.stats.current_balance)}")


@recharge_group.command("list")
@click.pass_context
def list_recharges(ctx):
    """List recharge transactions of today's register, most recent first."""
    service = load_register_service_or_exit(ctx)
    snapshot = service.get_state()

    if snapshot.register is None:
        click.echo("No cash register for today.")
        return
    if not snapshot.transactions:
        click.echo("No recharge transactions found.")
        return

    click.echo(f"\nRecharges for cash register {snapshot.register.id}:")
    click.echo("-" * 78)
    echo_transactions(snapshot.transactions)
    click.echo("-" * 78)
    click.echo(f"Total: {money(snapshot.stats.total_recharges)}")


def register_commands(cli):
    """Register recharge commands with main CLI."""
    cli.add_command(recharge_group, name="recharge")
