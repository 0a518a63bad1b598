# Main application file


import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stockroom.core.config import settings
from stockroom.core.errors import (
    InsufficientStockError,
    InvalidInputError,
    NotFoundError,
    StoreNotInitializedError,
)
from stockroom.database import Store
from stockroom.routers import (
    customers,
    inventory,
    orders,
    products,
    reports,
    store,
    suppliers,
    warehouses,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("stockroom")


# STORE LIFECYCLE

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.store.open()
    logger.info("Store ready")

    yield

    app.state.store.close()


# ERROR HANDLERS

async def store_not_initialized_handler(request: Request, exc: StoreNotInitializedError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": exc.message},
    )


async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": exc.message},
    )


async def insufficient_stock_handler(request: Request, exc: InsufficientStockError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": exc.message,
            "shortfalls": [shortfall.model_dump() for shortfall in exc.shortfalls],
        },
    )


# APP INIT

def create_app(store_handle: Store | None = None) -> FastAPI:
    app = FastAPI(
        title="Stockroom Inventory API",
        description="Inventory and warehouse management over an in-memory SQL store",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.store = store_handle or Store()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(StoreNotInitializedError, store_not_initialized_handler)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InsufficientStockError, insufficient_stock_handler)

    # REQUEST LOGGING MIDDLEWARE

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = round((time.time() - start_time) * 1000, 2)

        logger.info(
            f"{request.method} {request.url.path} "
            f"Status: {response.status_code} "
            f"Time: {duration}ms"
        )

        return response

    # ROUTERS

    app.include_router(products.router)
    app.include_router(suppliers.router)
    app.include_router(warehouses.router)
    app.include_router(inventory.router)
    app.include_router(customers.router)
    app.include_router(orders.router)
    app.include_router(reports.router)
    app.include_router(store.router)

    # ROOT

    @app.get("/")
    def root():
        logger.info("Health check endpoint called")
        return {
            "message": "Stockroom Inventory API is running",
            "store_open": app.state.store.is_open,
        }

    return app


app = create_app()
