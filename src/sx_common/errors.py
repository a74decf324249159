"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Caller identity
  2xxx: Wallet / balances
  3xxx: Trading pair
  4xxx: Order
  6xxx: Swap / pricing
  9xxx: System
"""

from decimal import Decimal


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Identity ---

class MissingIdentityError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Missing X-User-Id header", 401)


# --- 2xxx: Wallet ---

class InsufficientBalanceError(AppError):
    def __init__(self, currency: str, required: Decimal, available: Decimal) -> None:
        super().__init__(
            2001,
            f"Insufficient {currency} balance: required {required}, available {available}",
            422,
        )


class WalletNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(2002, f"Wallet not found for user {user_id}", 404)


class UnsupportedCurrencyError(AppError):
    def __init__(self, currency: str) -> None:
        super().__init__(2003, f"Unsupported currency: {currency}", 422)


class InvalidAmountError(AppError):
    def __init__(self, amount: Decimal) -> None:
        super().__init__(2004, f"Amount must be positive, got {amount}", 422)


# --- 3xxx: Trading pair ---

class TradingPairNotFoundError(AppError):
    def __init__(self, pair: str) -> None:
        super().__init__(3001, f"Invalid trading pair: {pair}", 422)


class SameCurrencyPairError(AppError):
    def __init__(self, pair: str) -> None:
        super().__init__(3002, f"Base and quote currency must differ: {pair}", 422)


# --- 4xxx: Order ---

class InvalidPriceError(AppError):
    def __init__(self, price: Decimal) -> None:
        super().__init__(4001, f"Price must be positive, got {price}", 422)


class InvalidQuantityError(AppError):
    def __init__(self, quantity: Decimal) -> None:
        super().__init__(4002, f"Quantity must be positive, got {quantity}", 422)


class InvalidOrderSideError(AppError):
    def __init__(self, side: str) -> None:
        super().__init__(4003, f"Invalid order side: {side}", 422)


class OrderNotFoundError(AppError):
    def __init__(self, order_id: str) -> None:
        super().__init__(4004, f"Order not found: {order_id}", 404)


class OrderOwnershipError(AppError):
    def __init__(self, order_id: str) -> None:
        super().__init__(4005, f"Order {order_id} is not owned by the requesting user", 403)


# --- 6xxx: Swap ---

class SameCurrencySwapError(AppError):
    def __init__(self, currency: str) -> None:
        super().__init__(6001, f"Cannot swap between the same currency: {currency}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class MissingLedgerError(AppError):
    """A matched order references an account with no wallet (data corruption)."""

    def __init__(self, user_id: str) -> None:
        super().__init__(9003, f"Ledger integrity error: no wallet for user {user_id}", 500)


class StoreUnavailableError(AppError):
    def __init__(self, detail: str = "Storage temporarily unavailable") -> None:
        super().__init__(9004, detail, 503)
