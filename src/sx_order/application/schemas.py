# src/sx_order/application/schemas.py
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, field_validator


class PlaceOrderRequest(BaseModel):
    pair: str
    side: Literal["BUY", "SELL"]
    quantity: Decimal
    price: Decimal

    @field_validator("side", mode="before")
    @classmethod
    def upper_side(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("pair")
    @classmethod
    def normalize_pair(cls, v: str) -> str:
        return v.strip().upper()


class PlaceOrderResponse(BaseModel):
    accepted: bool = True
    order_id: str
    pair: str
    side: str
    price: Decimal
    quantity: Decimal
    remaining_quantity: Decimal
    resting: bool


class CancelOrderResponse(BaseModel):
    order_id: str
    pair: str
    side: str
    cancelled_quantity: Decimal
