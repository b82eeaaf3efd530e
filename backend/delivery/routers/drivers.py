import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends
from pymongo import ReturnDocument

from delivery.auth.deps import get_settings, require_permission
from delivery.core.config import Settings
from delivery.core.errors import Conflict, NotFound
from delivery.db.mongo import db
from delivery.schemas.driver import DriverCreate, DriverOut, DriverPaymentOut, DriverUpdate
from delivery.services.drivers import calculate_payment, reconcile_online_time

logger = logging.getLogger("delivery.drivers")

router = APIRouter(tags=["drivers"])


async def _get_driver(database, driver_id: str) -> dict:
    driver = await database.drivers.find_one({"driverId": driver_id}, {"_id": 0})
    if not driver:
        raise NotFound("Driver not found")
    return driver


async def existing_driver(driver_id: str, database=Depends(db)) -> dict:
    """Resolve the path driver before the request body is validated."""
    return await _get_driver(database, driver_id)


@router.post("/drivers", response_model=DriverOut, status_code=201)
async def create_driver(body: DriverCreate, user=Depends(require_permission("drivers:create")), database=Depends(db)):
    existing = await database.drivers.find_one({"$or": [{"email": body.email}, {"driverId": body.driver_id}]})
    if existing:
        raise Conflict("Driver with this email or driverId already exists")

    now = datetime.now(timezone.utc)
    doc = body.model_dump(by_alias=True)
    doc.update({
        "completedOrders": 0,
        "onlineTime": 0,
        "lastActiveAt": now if body.status == "active" else None,
        "createdAt": now,
        "updatedAt": now,
    })

    await database.drivers.insert_one(doc)
    doc.pop("_id", None)
    logger.info(f"[Driver] created {body.driver_id} ({body.status})")
    return doc


@router.get("/drivers", response_model=List[DriverOut])
async def list_drivers(user=Depends(require_permission("drivers:list")), database=Depends(db)):
    cursor = database.drivers.find({}, {"_id": 0}, sort=[("createdAt", 1)])
    return await cursor.to_list(length=500)


@router.get("/drivers/{driver_id}", response_model=DriverOut)
async def get_driver(driver_id: str, user=Depends(require_permission("drivers:read")), database=Depends(db)):
    driver = await _get_driver(database, driver_id)
    return await reconcile_online_time(database, driver)


@router.put("/drivers/{driver_id}", response_model=DriverOut)
async def update_driver(
    driver_id: str,
    body: DriverUpdate,
    user=Depends(require_permission("drivers:update")),
    driver: dict = Depends(existing_driver),
    database=Depends(db),
):
    if body.email != driver.get("email"):
        if await database.drivers.find_one({"email": body.email, "driverId": {"$ne": driver_id}}):
            raise Conflict("Driver with this email already exists")

    await reconcile_online_time(database, driver)

    update = body.model_dump(by_alias=True)
    update["updatedAt"] = datetime.now(timezone.utc)

    updated = await database.drivers.find_one_and_update(
        {"driverId": driver_id},
        {"$set": update},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise NotFound("Driver not found")
    return updated


@router.delete("/drivers/{driver_id}")
async def delete_driver(driver_id: str, user=Depends(require_permission("drivers:delete")), database=Depends(db)):
    deleted = await database.drivers.find_one_and_delete({"driverId": driver_id})
    if not deleted:
        raise NotFound("Driver not found")
    logger.info(f"[Driver] deleted {driver_id}")
    return {"message": "Driver deleted successfully"}


@router.get("/drivers/{driver_id}/payment", response_model=DriverPaymentOut)
async def driver_payment(
    driver_id: str,
    user=Depends(require_permission("drivers:payment")),
    database=Depends(db),
    settings: Settings = Depends(get_settings),
):
    driver = await _get_driver(database, driver_id)
    driver = await reconcile_online_time(database, driver)

    return {
        "driverId": driver["driverId"],
        "name": driver["name"],
        "paymentDetails": calculate_payment(driver, settings),
    }
