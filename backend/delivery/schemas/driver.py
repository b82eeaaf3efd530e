import re
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

DriverStatus = Literal["active", "inactive"]

DRIVER_ID_RE = re.compile(r"^[a-zA-Z0-9]{5,10}$")
PHONE_RE = re.compile(r"^\d{10}$")
EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


class DriverUpdate(BaseModel):
    model_config = {"populate_by_name": True}

    name: str = Field(min_length=1)
    email: str
    phone: str
    vehicle_type: str = Field(alias="vehicleType", min_length=1)
    status: DriverStatus

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        if not PHONE_RE.match(v):
            raise ValueError("Invalid phone number. It must be exactly 10 digits long.")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        if not EMAIL_RE.search(v):
            raise ValueError("Please enter a valid email")
        return v


class DriverCreate(DriverUpdate):
    driver_id: str = Field(alias="driverId")
    distance_traveled: float = Field(0, alias="distanceTraveled", ge=0)

    @field_validator("driver_id")
    @classmethod
    def check_driver_id(cls, v: str) -> str:
        if not DRIVER_ID_RE.match(v):
            raise ValueError("Invalid driverId. It must be alphanumeric and between 5 to 10 characters long.")
        return v


class DriverOut(BaseModel):
    model_config = {"populate_by_name": True}

    driver_id: str = Field(alias="driverId")
    name: str
    email: str
    phone: str
    vehicle_type: str = Field(alias="vehicleType")
    status: DriverStatus
    completed_orders: int = Field(0, alias="completedOrders")
    online_time: int = Field(0, alias="onlineTime")
    last_active_at: Optional[datetime] = Field(None, alias="lastActiveAt")
    distance_traveled: float = Field(0, alias="distanceTraveled")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class PaymentDetails(BaseModel):
    model_config = {"populate_by_name": True}

    orders_payment: float = Field(alias="ordersPayment")
    online_time_payment: float = Field(alias="onlineTimePayment")
    distance_payment: float = Field(alias="distancePayment")
    total_payment: float = Field(alias="totalPayment")


class DriverPaymentOut(BaseModel):
    model_config = {"populate_by_name": True}

    driver_id: str = Field(alias="driverId")
    name: str
    payment_details: PaymentDetails = Field(alias="paymentDetails")
