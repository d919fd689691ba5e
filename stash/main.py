# stash/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError

from stash.api.routers import admin, auth, cart, health, orders, payments, products, uploads
from stash.data.database import Base, engine
from stash.domain.errors import StashError, UpstreamFailure
from stash.utils.logging import get_logger
from stash.utils.settings import PORT

# all models must be imported before create_all
import stash.data.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")
    yield


async def handle_stash_error(request: Request, exc: StashError):
    if isinstance(exc, UpstreamFailure):
        return await handle_upstream_failure(request, exc)
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.msg})


async def handle_request_validation(request: Request, exc: RequestValidationError):
    # submitted values are never echoed back
    errors = [{k: v for k, v in e.items() if k != "input"} for e in exc.errors()]
    return JSONResponse(status_code=400, content={"errors": jsonable_encoder(errors)})


async def handle_upstream_failure(request: Request, exc: Exception):
    # detail stays in the log
    logger.error(f"{request.method} {request.url.path} failed: {exc!r}", exc_info=exc)
    return JSONResponse(status_code=500, content={"msg": "Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StashError, handle_stash_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(SQLAlchemyError, handle_upstream_failure)
    app.add_exception_handler(Exception, handle_upstream_failure)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Streamer Stash API",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(payments.router)
    app.include_router(uploads.router)
    app.include_router(admin.router)

    register_exception_handlers(app)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
