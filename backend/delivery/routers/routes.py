from typing import List

from fastapi import APIRouter, Depends

from delivery.auth.deps import require_permission
from delivery.core.errors import NotFound
from delivery.db.mongo import db
from delivery.schemas.route import RouteIn, RouteOut, Step
from delivery.services import routes as lifecycle

router = APIRouter(tags=["routes"])


@router.post("/routes", response_model=RouteOut, status_code=201)
async def create_route(payload: RouteIn, user=Depends(require_permission("routes:create")), database=Depends(db)):
    return await lifecycle.create_route(database, payload)


@router.get("/routes", response_model=List[RouteOut])
async def list_routes(user=Depends(require_permission("routes:list")), database=Depends(db)):
    return await database.routes.find({}, {"_id": 0}).to_list(length=500)


@router.get("/routes/{route_id}", response_model=RouteOut)
async def get_route(route_id: str, user=Depends(require_permission("routes:read")), database=Depends(db)):
    route = await database.routes.find_one({"routeId": route_id}, {"_id": 0})
    if not route:
        raise NotFound("Route not found")
    return route


@router.put("/routes/{route_id}", response_model=RouteOut)
async def update_route(
    route_id: str,
    payload: RouteIn,
    user=Depends(require_permission("routes:update")),
    database=Depends(db),
):
    return await lifecycle.update_route(database, route_id, payload)


@router.delete("/routes/{route_id}")
async def delete_route(route_id: str, user=Depends(require_permission("routes:delete")), database=Depends(db)):
    deleted = await database.routes.find_one_and_delete({"routeId": route_id})
    if not deleted:
        raise NotFound("Route not found")
    return {"message": "Route deleted successfully"}


@router.post("/routes/{route_id}/steps", response_model=RouteOut)
async def add_step(route_id: str, step: Step, user=Depends(require_permission("routes:add_step")), database=Depends(db)):
    return await lifecycle.add_step(database, route_id, step)
