import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from delivery.core.config import Settings
from delivery.core.errors import register_exception_handlers
from delivery.db.mongo import create_client, ensure_indexes
from delivery.routers import auth, drivers, orders, routes

logger = logging.getLogger("delivery")


def create_app(settings: Optional[Settings] = None, client=None) -> FastAPI:
    """Build the API. Raises RuntimeError when required config is missing.

    `client` is an already-built async Mongo client; when omitted one is
    created from `settings` on startup and closed on shutdown.
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="[%(levelname)s] %(message)s")

    app = FastAPI(title="Delivery Management API")
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for module in (auth, drivers, orders, routes):
        app.include_router(module.router, prefix="/api")

    @app.on_event("startup")
    async def startup():
        app.state.client = client or create_client(settings)
        app.state.db = app.state.client[settings.mongo_db]
        await ensure_indexes(app.state.db)
        logger.info(f"Delivery API ready (db={settings.mongo_db})")

    @app.on_event("shutdown")
    async def shutdown():
        if client is None:
            app.state.client.close()

    @app.get("/")
    async def root():
        return {"message": "API is running. Go to /docs"}

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


def run():
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
