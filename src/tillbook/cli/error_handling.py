"""CLI error handling helpers."""

import logging

import click

from tillbook.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print ``Error: <message>`` to stderr and exit with status 1.

    The command path and error type are logged at DEBUG so a log file shows
    which command was refused and why.
    """
    logger.debug("%s refused with %s: %s", ctx.command_path, type(error).__name__, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
