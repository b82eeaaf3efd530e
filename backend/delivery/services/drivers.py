import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from delivery.core.config import Settings


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _minutes_between(start: datetime, end: datetime) -> int:
    return math.floor((_as_utc(end) - _as_utc(start)).total_seconds() / 60)


def accumulate_online_time(driver: dict, now: datetime) -> dict:
    """Work out the online-time fields a driver should have at `now`.

    Returns only the fields the reconciliation touches. Nothing is written.

    - active with ``lastActiveAt``: adds the minutes since ``lastActiveAt``.
      ``lastActiveAt`` stays as it is, so the same interval is counted again
      on the next reconciliation.
    - inactive with ``lastActiveAt``: adds ``lastActiveAt - updatedAt`` minutes
      (not ``now - lastActiveAt``) and clears ``lastActiveAt``.
    - active without ``lastActiveAt``: starts the clock at ``now``.
    """
    status = driver.get("status")
    last_active_at = driver.get("lastActiveAt")
    online_time = driver.get("onlineTime", 0)

    if status == "active" and last_active_at:
        return {"onlineTime": online_time + _minutes_between(last_active_at, now)}

    if status == "inactive" and last_active_at:
        spent = _minutes_between(driver["updatedAt"], last_active_at)
        return {"onlineTime": online_time + spent, "lastActiveAt": None}

    if status == "active" and not last_active_at:
        return {"lastActiveAt": now}

    return {}


async def reconcile_online_time(database, driver: dict, now: Optional[datetime] = None) -> dict:
    """Apply accumulate_online_time to `driver` and write it back.

    The write always happens; ``updatedAt`` only moves when a value changed.
    """
    now = now or datetime.now(timezone.utc)
    changes = accumulate_online_time(driver, now)
    changed = any(driver.get(k) != v for k, v in changes.items())

    driver.update(changes)
    fields = {
        "onlineTime": driver.get("onlineTime", 0),
        "lastActiveAt": driver.get("lastActiveAt"),
    }
    if changed:
        fields["updatedAt"] = now
        driver["updatedAt"] = now

    await database.drivers.update_one({"driverId": driver["driverId"]}, {"$set": fields})
    return driver


def _dec(value) -> Decimal:
    return Decimal(str(value or 0))


def calculate_payment(driver: dict, settings: Settings) -> dict:
    orders_payment = _dec(driver.get("completedOrders")) * settings.payment_per_order
    online_time_payment = _dec(driver.get("onlineTime")) * settings.payment_per_minute
    distance_payment = _dec(driver.get("distanceTraveled")) * settings.payment_per_km
    total = orders_payment + online_time_payment + distance_payment

    return {
        "ordersPayment": float(orders_payment),
        "onlineTimePayment": float(online_time_payment),
        "distancePayment": float(distance_payment),
        "totalPayment": float(total),
    }
