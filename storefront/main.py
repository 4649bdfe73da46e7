# storefront/main.py
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from storefront.api.errors import register_error_handlers
from storefront.api.routers import admin_inventory, admin_orders, cart, health, orders
from storefront.data.database import init_db
from storefront.utils.settings import APP_VERSION
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # tabele tworzymy przy starcie aplikacji, nie przy imporcie modulu
    init_db()
    logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Order Service",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        return response

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(admin_orders.router)
    app.include_router(admin_inventory.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
