import logging
from datetime import datetime, timezone
from typing import List
from uuid import uuid4

from fastapi import APIRouter, Depends
from pymongo import ReturnDocument

from delivery.auth.deps import require_permission
from delivery.core.errors import NotFound
from delivery.db.mongo import db
from delivery.schemas.order import OrderCreate, OrderOut, OrderPatch

logger = logging.getLogger("delivery.orders")

router = APIRouter(tags=["orders"])


async def _new_order_id(database) -> str:
    order_id = uuid4().hex[:6]
    while await database.orders.find_one({"orderId": order_id}):
        order_id = uuid4().hex[:6]
    return order_id


@router.post("/orders", response_model=OrderOut, status_code=201)
async def create_order(body: OrderCreate, user=Depends(require_permission("orders:create")), database=Depends(db)):
    now = datetime.now(timezone.utc)
    doc = body.model_dump(by_alias=True)
    doc["orderId"] = await _new_order_id(database)
    doc["createdAt"] = now
    doc["updatedAt"] = now

    await database.orders.insert_one(doc)
    doc.pop("_id", None)
    logger.info(f"[Order] created {doc['orderId']} by {user['id']}")
    return doc


@router.get("/orders", response_model=List[OrderOut])
async def list_orders(user=Depends(require_permission("orders:list")), database=Depends(db)):
    cursor = database.orders.find({}, {"_id": 0}, sort=[("createdAt", 1)])
    return await cursor.to_list(length=500)


@router.get("/orders/{order_id}", response_model=OrderOut)
async def get_order(order_id: str, user=Depends(require_permission("orders:read")), database=Depends(db)):
    order = await database.orders.find_one({"orderId": order_id}, {"_id": 0})
    if not order:
        raise NotFound("Order not found")
    return order


@router.put("/orders/{order_id}", response_model=OrderOut)
async def update_order(
    order_id: str,
    patch: OrderPatch,
    user=Depends(require_permission("orders:update")),
    database=Depends(db),
):
    update = patch.model_dump(by_alias=True, exclude_none=True)
    update["updatedAt"] = datetime.now(timezone.utc)

    updated = await database.orders.find_one_and_update(
        {"orderId": order_id},
        {"$set": update},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise NotFound("Order not found")
    return updated


@router.delete("/orders/{order_id}")
async def delete_order(order_id: str, user=Depends(require_permission("orders:delete")), database=Depends(db)):
    deleted = await database.orders.find_one_and_delete({"orderId": order_id})
    if not deleted:
        raise NotFound("Order not found")
    return {"message": "Order deleted successfully"}
