from decimal import Decimal

from src.sx_common.decimals import fits_storage_scale
from src.sx_common.errors import InvalidPriceError, InvalidQuantityError


def check_order_params(quantity: Decimal, price: Decimal) -> None:
    """Raise InvalidQuantityError / InvalidPriceError for non-positive or non-finite values.

    Values with more fractional digits than the ledger stores are rejected too,
    so a resting quantity never differs from what settlement writes.
    """
    if not quantity.is_finite() or quantity <= 0 or not fits_storage_scale(quantity):
        raise InvalidQuantityError(quantity)
    if not price.is_finite() or price <= 0 or not fits_storage_scale(price):
        raise InvalidPriceError(price)
