import logging

import certifi
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from delivery.core.config import Settings

logger = logging.getLogger("delivery.db")


def create_client(settings: Settings) -> AsyncIOMotorClient:
    if settings.mongo_tls:
        return AsyncIOMotorClient(settings.mongo_url, tz_aware=True, tlsCAFile=certifi.where())
    return AsyncIOMotorClient(settings.mongo_url, tz_aware=True)


def db(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.db


async def ensure_indexes(database) -> None:
    await database.users.create_index([("email", 1)], unique=True)

    await database.drivers.create_index([("driverId", 1)], unique=True)
    await database.drivers.create_index([("email", 1)], unique=True)

    await database.orders.create_index([("orderId", 1)], unique=True)

    await database.routes.create_index([("routeId", 1)], unique=True)
    await database.routes.create_index([("orderId", 1)], unique=True)
    await database.routes.create_index([("driverId", 1)])

    logger.info(f"Indexes ready on '{database.name}'")
