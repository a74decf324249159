"""Exact decimal helpers for balances, prices and quantities.

All money and quantity math uses decimal.Decimal. No float anywhere on the
matching or settlement path.
"""

from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")


def to_decimal(value: object) -> Decimal:
    """Convert str/int/Decimal to Decimal. Floats go through str() to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)  # type: ignore[arg-type]
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Not a decimal value: {value!r}") from exc


def display(amount: Decimal) -> str:
    """Plain (non-scientific) string without trailing zeros: Decimal('0.0500') -> '0.05'."""
    if amount == ZERO:
        return "0"
    normalized = amount.normalize()
    return format(normalized, "f")


# Scale of the NUMERIC(38,18) balance and transaction columns.
STORAGE_SCALE = 18


def decimal_places(value: Decimal) -> int:
    """Significant fractional digits: Decimal('1.2500') -> 2, Decimal('100') -> 0."""
    exponent = value.normalize().as_tuple().exponent
    return max(-exponent, 0) if isinstance(exponent, int) else 0


def fits_storage_scale(value: Decimal) -> bool:
    return decimal_places(value) <= STORAGE_SCALE
