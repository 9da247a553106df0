# storefront/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from storefront.data.database import Base, engine, SessionLocal
from storefront.data.seed import seed_catalog
from storefront.api.routers import health, products, orders, admin
from storefront.utils.settings import (
    API_PREFIX,
    ALLOWED_ORIGINS,
    ALLOWED_ORIGIN_REGEX,
    SEED_CATALOG,
)
from storefront.utils.logging import get_logger

# import all models before create_all so they are in Base.metadata
from storefront.data.models import ProductModel, OrderModel, OrderItemModel  # noqa: F401

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    if SEED_CATALOG:
        db = SessionLocal()
        try:
            seed_catalog(db)
        finally:
            db.close()


def create_app() -> FastAPI:
    init_db()

    app = FastAPI(
        title="Don Pico Storefront API",
        version="1.0.0",
    )

    #requests without an Origin header (curl, server-to-server) are not affected by CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_origin_regex=ALLOWED_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router, prefix=API_PREFIX)
    app.include_router(products.router, prefix=API_PREFIX)
    app.include_router(orders.router, prefix=API_PREFIX)
    app.include_router(admin.router, prefix=API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=5000)
