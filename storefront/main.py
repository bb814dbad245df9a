# storefront/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from storefront.data.database import engine, init_db
from storefront.api.errors import register_error_handlers
from storefront.api.routers import health, products, carts, favorites, orders
from storefront.utils.settings import FRONTEND_ORIGIN, HOST, PORT, LOG_LEVEL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    init_db()
    logger.info("Database ready")

    yield

    logger.info("Shutting down, disposing database engine")
    engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(favorites.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    logger.info(f"Server listening on http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
