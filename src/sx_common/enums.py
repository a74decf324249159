"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class OrderSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class TransactionType(str, Enum):
    TRADE = "TRADE"
    SWAP = "SWAP"
    DEPOSIT = "DEPOSIT"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
