from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

OrderStatus = Literal["pending", "dispatched", "delivered", "canceled"]


def _non_empty(field: str, v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError(f"Invalid {field}. It must be a non-empty string.")
    return v


def _positive(v: Optional[float]) -> Optional[float]:
    if v is not None and v <= 0:
        raise ValueError("Invalid totalAmount. It must be a positive number.")
    return v


class OrderCreate(BaseModel):
    model_config = {"populate_by_name": True}

    customer_name: str = Field(alias="customerName")
    delivery_address: str = Field(alias="deliveryAddress")
    order_status: OrderStatus = Field("pending", alias="orderStatus")
    total_amount: float = Field(alias="totalAmount")

    @field_validator("customer_name")
    @classmethod
    def check_customer_name(cls, v):
        return _non_empty("customerName", v)

    @field_validator("delivery_address")
    @classmethod
    def check_delivery_address(cls, v):
        return _non_empty("deliveryAddress", v)

    @field_validator("total_amount")
    @classmethod
    def check_total_amount(cls, v):
        return _positive(v)


class OrderPatch(BaseModel):
    model_config = {"populate_by_name": True}

    customer_name: Optional[str] = Field(None, alias="customerName")
    delivery_address: Optional[str] = Field(None, alias="deliveryAddress")
    order_status: Optional[OrderStatus] = Field(None, alias="orderStatus")
    total_amount: Optional[float] = Field(None, alias="totalAmount")

    @field_validator("customer_name")
    @classmethod
    def check_customer_name(cls, v):
        return _non_empty("customerName", v)

    @field_validator("delivery_address")
    @classmethod
    def check_delivery_address(cls, v):
        return _non_empty("deliveryAddress", v)

    @field_validator("total_amount")
    @classmethod
    def check_total_amount(cls, v):
        return _positive(v)


class OrderOut(BaseModel):
    model_config = {"populate_by_name": True}

    order_id: str = Field(alias="orderId")
    customer_name: str = Field(alias="customerName")
    delivery_address: str = Field(alias="deliveryAddress")
    order_status: OrderStatus = Field(alias="orderStatus")
    total_amount: float = Field(alias="totalAmount")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
