"""Cash register lifecycle commands."""

import click

from tillbook.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from tillbook.cli.display import echo_snapshot, echo_stats, money
from tillbook.cli.error_handling import handle_domain_error
from tillbook.cli.register_context import load_register_service_or_exit, parse_amount_or_exit
from tillbook.domain.errors import DomainError


@click.group()
def register_group():
    """Open, close and inspect the daily cash register."""
    pass


@register_group.command("open")
@click.argument("opening_balance", metavar="OPENING_BALANCE")
@click.pass_context
def open_register(ctx, opening_balance: str):
    """Open today's cash register with the cash counted in the till.

    Only one register exists per day: once today's register is closed it
    cannot be reopened.

    Examples:
        tillbook register open 50000
        tillbook register open "$50,000.00"
    """
    amount = parse_amount_or_exit(ctx, opening_balance, "opening balance")
    service = load_register_service_or_exit(ctx)

    try:
        register = service.open(amount)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Opened cash register {register.id} for {register.date.isoformat()}")
    click.echo(f"Opening balance: {money(register.opening_balance)}")
    click.echo(f"Current balance: {money(service.stats.current_balance)}")


@register_group.command("close")
@click.argument("closing_balance", metavar="CLOSING_BALANCE")
@click.pass_context
def close_register(ctx, closing_balance: str):
    """Close today's cash register with the counted closing balance.

    The counted balance is stored as given; any difference from the computed
    balance is reported as a variance.

    Examples:
        tillbook register close 60000
    """
    amount = parse_amount_or_exit(ctx, closing_balance, "closing balance")
    service = load_register_service_or_exit(ctx)

    try:
        register = service.close(amount)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Closed cash register {register.id} for {register.date.isoformat()}")
    click.echo()
    echo_stats(service.stats)


@register_group.command("status")
@click.pass_context
def register_status(ctx):
    """Show today's register state, balance and recharges."""
    service = load_register_service_or_exit(ctx)
    echo_snapshot(service.get_state())


@register_group.command("history")
@period_options
@click.option("--verbose", "-v", is_flag=True, help="Show the full summary of each register")
@click.pass_context
def register_history(ctx, start_date, end_date, verbose: bool, **flags):
    """List past cash registers.

    Examples:
        tillbook register history
        tillbook register history --this-month
        tillbook register history --start-date 2024-01-01 --end-date 2024-01-31 -v
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(flags)
    )
    service = load_register_service_or_exit(ctx)

    try:
        registers = service.list_registers(start_date=start, end_date=end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not registers:
        click.echo("No cash registers found.")
        return

    click.echo(f"\nFound {len(registers)} cash register(s):")
    click.echo("-" * 78)
    for register in registers:
        closing = money(register.closing_balance) if register.closing_balance is not None else "OPEN"
        click.echo(
            f"ID: {register.id:4d} | {register.date.isoformat()} | "
            f"Opening: {money(register.opening_balance):>14s} | Closing: {closing:>14s}"
        )
        if verbose:
            try:
                stats = service.get_register_stats(register.id)
            except DomainError as e:
                handle_domain_error(ctx, e)
            click.echo()
            echo_stats(stats)
            click.echo()


def register_commands(cli):
    """Register cash register commands with main CLI."""
    cli.add_command(register_group, name="register")
