"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY_MARKS = re.compile(r"[$€£¥]|\b(?:COP|USD|EUR)\b", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money string into a Decimal.

    Handles various formats:
    - "50000"
    - "$50,000.00"
    - "-1500.50"
    - "COP 20000"
    - "(10000)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is not a finite number
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = cleaned.startswith("(") and cleaned.endswith(")")
    if is_negative:
        cleaned = cleaned[1:-1]

    cleaned = _CURRENCY_MARKS.sub("", cleaned).replace(",", "").replace(" ", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e

    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return -amount if is_negative else amount
