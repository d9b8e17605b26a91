"""CLI helpers for loading the register service and parsing money arguments."""

from __future__ import annotations

from decimal import Decimal

import click

from tillbook.domain.cash_register import CashRegisterService
from tillbook.domain.errors import DomainError
from tillbook.utils.amount_parser import parse_amount
from tillbook.cli.error_handling import handle_domain_error


def load_register_service_or_exit(ctx: click.Context) -> CashRegisterService:
    """Build and initialize the register service for today, or exit with a CLI error.

    The service is cached on the context so every helper in one invocation
    shares the same register state.
    """
    service = ctx.obj.get("register_service")
    if service is not None:
        return service

    service = CashRegisterService(ctx.obj["db"])
    try:
        service.initialize()
    except DomainError as exc:
        handle_domain_error(ctx, exc)
    ctx.obj["register_service"] = service
    return service


def parse_amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> Decimal:
    """Parse a money argument, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)
