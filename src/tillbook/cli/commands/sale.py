"""Sale commands."""

from decimal import Decimal

import click

from tillbook.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from tillbook.cli.display import money
from tillbook.cli.error_handling import handle_domain_error
from tillbook.cli.register_context import load_register_service_or_exit, parse_amount_or_exit
from tillbook.cli.commands.recharge import PAYMENT_METHOD_CHOICE
from tillbook.domain.entities import ItemType, PaymentMethod, SaleItemInput
from tillbook.domain.errors import DomainError
from tillbook.domain.sale import SaleService
from tillbook.utils.date_parser import parse_date


@click.group()
def sale_group():
    """Record and list sales."""
    pass


@sale_group.command("add")
@click.option(
    "--item",
    "items",
    type=(click.Choice([t.value for t in ItemType]), str, int, str),
    multiple=True,
    required=True,
    metavar="TYPE NAME QTY PRICE",
    help="Sale item; repeat for several items",
)
@click.option("--date", "sale_date", default="today", show_default=True, help="Sale date")
@click.option(
    "--payment-method",
    type=PAYMENT_METHOD_CHOICE,
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="How the sale was paid",
)
@click.option("--discount", help="Discount subtracted from the subtotal")
@click.option("--tax", help="Tax added to the subtotal")
@click.option("--customer", help="Customer name")
@click.option("--notes", help="Notes")
@click.pass_context
def add_sale(
    ctx,
    items,
    sale_date: str,
    payment_method: str,
    discount: str | None,
    tax: str | None,
    customer: str | None,
    notes: str | None,
):
    """Record a sale.

    Cash sales need an open register. The sale counts toward the register of
    its date.

    Examples:
        tillbook sale add --item product Cuaderno 2 1500
        tillbook sale add --item service Fotocopia 10 200 --item product Lapicero 1 1000 --payment-method transfer
    """
    try:
        day = parse_date(sale_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    sale_items = [
        SaleItemInput(
            item_type=ItemType(item_type),
            item_name=name,
            quantity=quantity,
            unit_price=parse_amount_or_exit(ctx, price, f"price for '{name}'"),
        )
        for item_type, name, quantity, price in items
    ]
    discount_value = parse_amount_or_exit(ctx, discount, "discount") if discount else Decimal("0")
    tax_value = parse_amount_or_exit(ctx, tax, "tax") if tax else Decimal("0")

    register_service = load_register_service_or_exit(ctx)
    service = SaleService(ctx.obj["db"], register_service=register_service)

    try:
        sale_id = service.add_sale(
            date=day,
            items=sale_items,
            payment_method=PaymentMethod(payment_method),
            discount=discount_value,
            tax=tax_value,
            customer_name=customer,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    sale = service.get_sale(sale_id)
    click.echo(f"Created sale {sale_id}")
    click.echo(f"  Date: {sale.date}")
    click.echo(f"  Type: {sale.sale_type.value}")
    click.echo(f"  Total: {money(sale.total)}")
    if register_service.is_open:
        click.echo(f"Current balance: {money(register_service.stats.current_balance)}")


@sale_group.command("list")
@period_options
@click.option("--payment-method", type=PAYMENT_METHOD_CHOICE, help="Filter by payment method")
@click.option("--verbose", "-v", is_flag=True, help="Show sale items")
@click.pass_context
def list_sales(ctx, start_date, end_date, payment_method, verbose: bool, **flags):
    """List sales (defaults to all dates)."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(flags)
    )
    service = SaleService(ctx.obj["db"])

    try:
        sales = service.list_sales(
            start_date=start,
            end_date=end,
            payment_method=PaymentMethod(payment_method) if payment_method else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not sales:
        click.echo("No sales found.")
        return

    click.echo(f"\nFound {len(sales)} sale(s):")
    click.echo("-" * 78)
    for sale in sales:
        customer = sale.customer_name or ""
        click.echo(
            f"ID: {sale.id:4d} | {sale.date} | {sale.sale_type.value:11s} | "
            f"{money(sale.total):>14s} | {sale.payment_method.value:11s} | {customer}"
        )
        if verbose:
            for item in sale.items:
                click.echo(
                    f"        {item.item_type.value:11s} {item.item_name:25s} "
                    f"{item.quantity:4d} x {money(item.unit_price):>12s} = {money(item.subtotal):>14s}"
                )
    total = sum((s.total for s in sales), Decimal("0"))
    click.echo("-" * 78)
    click.echo(f"Total: {money(total)}")


@sale_group.command("delete")
@click.argument("sale_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_sale(ctx, sale_id: int, yes: bool):
    """Delete a sale and its items."""
    register_service = load_register_service_or_exit(ctx)
    service = SaleService(ctx.obj["db"], register_service=register_service)

    sale = service.get_sale(sale_id)
    if sale is None:
        click.echo(f"Error: Sale {sale_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete sale {sale_id} ({money(sale.total)})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_sale(sale_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted sale {sale_id}")


def register_commands(cli):
    """Register sale commands with main CLI."""
    cli.add_command(sale_group, name="sale")
