from decimal import ROUND_HALF_EVEN, Context, Decimal, InvalidOperation
from typing import Any

CENTS = Decimal("0.01")

# Wide enough that cent amounts and their sums are never rounded.
# Amounts that do not fit raise InvalidOperation on quantize.
MONEY_CONTEXT = Context(prec=60, rounding=ROUND_HALF_EVEN)


def quantize_cents(amount: Decimal) -> Decimal:
    """Reduce to 2 decimal places with banker's rounding.

    Raises:
        InvalidOperation: The amount has too many digits to hold in cents.
    """
    return MONEY_CONTEXT.quantize(amount, CENTS)


def add_amounts(a: Decimal, b: Decimal) -> Decimal:
    return MONEY_CONTEXT.add(a, b)


def parse_amount(raw: str) -> Decimal | None:
    """Parse a decimal string. Returns None if it is not a finite number."""
    try:
        value = Decimal(raw.strip())
    except (InvalidOperation, AttributeError):
        return None
    if not value.is_finite():
        return None
    return value


def parse_cents(raw: str) -> Decimal | None:
    """Parse a decimal string and round it to cents.

    Returns None if it is not a finite number or is too large to hold.
    """
    value = parse_amount(raw)
    if value is None:
        return None
    try:
        return quantize_cents(value)
    except InvalidOperation:
        return None


def cell_to_amount(value: Any) -> Decimal | None:
    """Convert an amount cell (decimal text or number) to Decimal."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, (int, float)):
        # str() keeps the shortest repr, so 7.49 stays 7.49
        return parse_amount(str(value))
    if isinstance(value, str):
        return parse_amount(value)
    return None


def format_amount(amount: Decimal) -> str:
    """Format an amount for display with exactly 2 decimals, e.g. '19.99'."""
    return f"{quantize_cents(amount):f}"
