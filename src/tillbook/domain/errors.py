"""Shared domain error messages and error types."""

from datetime import date
from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a second register for the same day."""


class InvalidTransitionError(DomainError):
    """Operation attempted in the wrong register lifecycle state."""


class StoreError(DomainError):
    """The record store rejected a read or write."""


def no_open_register() -> str:
    """Return message for operations that need an open register."""
    return "No cash register is open"


def register_already_open(day: date) -> str:
    """Return message when today's register is already open."""
    return f"Cash register for {day.isoformat()} is already open"


def register_already_closed(day: date) -> str:
    """Return message when today's register exists and was closed."""
    return f"Cash register for {day.isoformat()} was already closed"


def register_not_found(register_id: int) -> str:
    """Return message for missing cash register."""
    return f"Cash register {register_id} not found"


def sale_not_found(sale_id: int) -> str:
    """Return message for missing sale."""
    return f"Sale {sale_id} not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def negative_amount(field: str, amount: Decimal) -> str:
    """Return message for an amount that must not be negative."""
    return f"{field} cannot be negative (got {amount})"


def non_positive_amount(field: str, amount: Decimal) -> str:
    """Return message for an amount that must be greater than zero."""
    return f"{field} must be greater than zero (got {amount})"


def fractional_cents(field: str, amount: Decimal) -> str:
    """Return message for an amount with more than two decimal places."""
    return f"{field} cannot have fractions of a cent (got {amount})"


def cash_sale_needs_register(day: date) -> str:
    """Return message for a cash sale dated on a day without an open register."""
    return f"The cash register for {day.isoformat()} must be open to record cash sales"


def unknown_payment_method(value: str) -> str:
    """Return message for an unsupported payment method."""
    return f"Unknown payment method '{value}'"
