from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, Field, field_validator

RouteStatus = Literal["pending", "in-progress", "completed"]

# statuses a route may be created in
CREATABLE_STATUSES = ("pending", "in-progress")


class Step(BaseModel):
    location: str = Field(min_length=1)
    timestamp: datetime


class RouteIn(BaseModel):
    model_config = {"populate_by_name": True}

    route_id: str = Field(alias="routeId")
    order_id: str = Field(alias="orderId")
    driver_id: str = Field(alias="driverId")
    steps: List[Step]
    status: RouteStatus

    @field_validator("route_id", "order_id", "driver_id")
    @classmethod
    def check_present(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("All fields are required")
        return v


class RouteOut(BaseModel):
    model_config = {"populate_by_name": True}

    route_id: str = Field(alias="routeId")
    order_id: str = Field(alias="orderId")
    driver_id: str = Field(alias="driverId")
    steps: List[Step]
    status: RouteStatus
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
