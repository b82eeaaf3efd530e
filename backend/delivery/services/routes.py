"""Route lifecycle: pending -> in-progress -> completed.

A completed route stays completed.

Creating or updating a route also moves the linked order and driver:

- a route in ``in-progress`` marks its order ``dispatched``
- the first time a route reaches ``completed`` the driver's
  ``completedOrders`` goes up by one and the order becomes ``delivered``

The route write is a compare-and-swap on the status read at the start of the
update, so two concurrent completions cannot both count. The order/driver
writes that follow are separate documents. If one fails, the writes already
made are reverted and the route is put back; a process crash in between
still leaves partial state, since no multi-document transaction is used.
"""
import logging
from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from delivery.core.errors import Conflict, NotFound, ValidationFailed
from delivery.schemas.route import CREATABLE_STATUSES, RouteIn, Step

logger = logging.getLogger("delivery.routes")


async def _set_order_status(database, order_id: str, status: str) -> None:
    await database.orders.update_one(
        {"orderId": order_id},
        {"$set": {"orderStatus": status, "updatedAt": datetime.now(timezone.utc)}},
    )


async def _find_driver(database, driver_id: str) -> dict:
    driver = await database.drivers.find_one({"driverId": driver_id}, {"_id": 0})
    if not driver:
        raise NotFound("Driver not found")
    return driver


async def create_route(database, payload: RouteIn) -> dict:
    order = await database.orders.find_one({"orderId": payload.order_id}, {"_id": 0})
    if not order:
        raise NotFound("Order not found")

    driver = await _find_driver(database, payload.driver_id)

    if await database.routes.find_one({"orderId": payload.order_id}):
        raise Conflict(f"Order {payload.order_id} is already assigned to a Driver")

    if driver.get("status") != "active":
        raise Conflict("Driver must be active to create a route")

    if await database.routes.find_one({"routeId": payload.route_id}):
        raise Conflict("this routeId already exists")

    if await database.routes.find_one({"driverId": payload.driver_id}):
        raise Conflict("Driver already has a route assigned")

    if payload.status not in CREATABLE_STATUSES:
        raise ValidationFailed("You cannot set the status to completed while creating a route")

    if payload.status == "in-progress":
        await _set_order_status(database, payload.order_id, "dispatched")
        logger.info(f"[Route] order {payload.order_id} dispatched")

    now = datetime.now(timezone.utc)
    doc = payload.model_dump(by_alias=True)
    doc["createdAt"] = now
    doc["updatedAt"] = now

    await database.routes.insert_one(doc)
    doc.pop("_id", None)
    logger.info(f"[Route] created {payload.route_id} for order {payload.order_id} / driver {payload.driver_id}")
    return doc


async def _complete(database, payload: RouteIn) -> None:
    await database.drivers.update_one(
        {"driverId": payload.driver_id},
        {"$inc": {"completedOrders": 1}, "$set": {"updatedAt": datetime.now(timezone.utc)}},
    )
    try:
        await _set_order_status(database, payload.order_id, "delivered")
    except PyMongoError:
        await database.drivers.update_one({"driverId": payload.driver_id}, {"$inc": {"completedOrders": -1}})
        raise
    logger.info(f"[Route] {payload.route_id} completed, order {payload.order_id} delivered")


async def _apply_status_effects(database, previous: dict, payload: RouteIn) -> None:
    if payload.status == "in-progress":
        await _set_order_status(database, payload.order_id, "dispatched")
    elif payload.status == "completed" and previous.get("status") != "completed":
        await _complete(database, payload)


async def update_route(database, route_id: str, payload: RouteIn) -> dict:
    driver = await _find_driver(database, payload.driver_id)
    if driver.get("status") != "active":
        raise Conflict("Driver must be active to update the route")

    existing = await database.routes.find_one({"routeId": route_id}, {"_id": 0})
    if not existing:
        raise NotFound("Route not found")

    if existing.get("status") == "completed" and payload.status != "completed":
        raise Conflict("A completed route cannot change status")

    if payload.route_id != route_id and await database.routes.find_one({"routeId": payload.route_id}):
        raise Conflict("this routeId already exists")

    fields = payload.model_dump(by_alias=True)
    fields["updatedAt"] = datetime.now(timezone.utc)

    previous = await database.routes.find_one_and_update(
        {"routeId": route_id, "status": existing.get("status")},
        {"$set": fields},
        projection={"_id": 0},
        return_document=ReturnDocument.BEFORE,
    )
    if previous is None:
        logger.warning(f"[Route] {route_id} changed status during update")
        raise Conflict("Route was modified by another request, retry the update")

    try:
        await _apply_status_effects(database, previous, payload)
    except PyMongoError:
        logger.error(f"[Route] side effects failed for {route_id}, restoring previous state")
        await database.routes.update_one({"routeId": payload.route_id}, {"$set": previous})
        raise

    return await database.routes.find_one({"routeId": payload.route_id}, {"_id": 0})


async def add_step(database, route_id: str, step: Step) -> dict:
    updated = await database.routes.find_one_and_update(
        {"routeId": route_id},
        {"$push": {"steps": step.model_dump()}, "$set": {"updatedAt": datetime.now(timezone.utc)}},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise NotFound("Route not found")
    return updated
