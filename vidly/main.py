"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

import vidly.models  # noqa: F401
from vidly.config import get_settings
from vidly.database import Base, engine
from vidly.logging_config import setup_logging
from vidly.routers.customers import router as customers_router
from vidly.routers.genres import router as genres_router
from vidly.routers.movies import router as movies_router
from vidly.routers.rentals import router as rentals_router
from vidly.routers.returns import router as returns_router
from vidly.routers.users import auth_router
from vidly.routers.users import router as users_router
from vidly.schemas.common import ValidationErrorResponse, collect_field_errors
from vidly.services.errors import VidlyError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Create the schema on startup and release the engine on shutdown.

    Yields
    ------
    None
        Runs the application lifespan.
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("%s started", settings.app_name)
    yield
    await engine.dispose()
    logger.info("%s stopped", settings.app_name)


async def handle_domain_error(_: Request, exc: VidlyError) -> JSONResponse:
    """Render a domain error with its mapped status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def handle_validation_error(
    _: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as field errors."""
    body = ValidationErrorResponse(errors=collect_field_errors(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log an unhandled fault and hide its details from the client."""
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Something failed."},
    )


app = FastAPI(title=get_settings().app_name, lifespan=lifespan)
app.add_exception_handler(VidlyError, handle_domain_error)
app.add_exception_handler(RequestValidationError, handle_validation_error)
app.add_exception_handler(Exception, handle_unexpected_error)
app.include_router(users_router)
app.include_router(auth_router)
app.include_router(genres_router)
app.include_router(customers_router)
app.include_router(movies_router)
app.include_router(rentals_router)
app.include_router(returns_router)
