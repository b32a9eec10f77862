import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator

from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.logging.logger import set_package_logger
from aws_lambda_powertools.metrics import MetricUnit
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from posts_api.api.api import router as api_router
from posts_api.db import create_pool
from posts_api.exceptions import PersistenceError
from posts_api.middlewares import CorrelationIdMiddleware
from posts_api.models.response import ErrorResponse
from posts_api.repositories.post_repository import PostRepository
from posts_api.settings import Settings

ERROR_INTERNAL_SERVER_ERROR = "Internal Server Error"
ERROR_INVALID_POST_ID = "Invalid post id"
ERROR_INVALID_REQUEST_BODY = "Invalid request body"

logger = Logger(utc=True)
metrics = Metrics(namespace="posts")


def _error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        content=jsonable_encoder(ErrorResponse(error=message)),
        status_code=status_code,
        headers=headers,
    )


async def http_exception_handler(
    request: Request, error: StarletteHTTPException
) -> JSONResponse:
    error_id = uuid.uuid4()
    logger.exception(
        f"Received http exception {error_id=}", status_code=error.status_code
    )
    metrics.add_metric(name="HttpExceptionHandler", unit=MetricUnit.Count, value=1)
    return _error_response(
        error.status_code, str(error.detail), getattr(error, "headers", None)
    )


async def request_validation_error_handler(
    request: Request, error: RequestValidationError
) -> JSONResponse:
    error_id = uuid.uuid4()
    errors = error.errors()
    logger.exception(
        f"Received request validation error {error_id=}",
        errors=errors,
    )
    metrics.add_metric(
        name="RequestValidationErrorHandler", unit=MetricUnit.Count, value=1
    )
    message = (
        ERROR_INVALID_POST_ID
        if any(e.get("loc", ())[:1] == ("path",) for e in errors)
        else ERROR_INVALID_REQUEST_BODY
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_error_handler(request: Request, error: Exception) -> JSONResponse:
    error_id = uuid.uuid4()
    logger.exception(f"Received unhandled error {error_id=}")
    metrics.add_metric(name="UnhandledErrorHandler", unit=MetricUnit.Count, value=1)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, ERROR_INTERNAL_SERVER_ERROR
    )


def create_app(settings: Settings) -> FastAPI:
    """Build the posts application.

    The connection pool is opened and the posts table bootstrapped during
    lifespan startup, so a failure there stops the server before it accepts
    any request.
    """
    if settings.debug:
        set_package_logger()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            pool = await create_pool(settings)
        except PersistenceError:
            logger.exception("Failed to connect to the database")
            raise
        try:
            await PostRepository(pool).bootstrap()
            logger.info("Database bootstrap completed")
            app.state.pool = pool
            yield
        except PersistenceError:
            logger.exception("Database bootstrap failed")
            raise
        finally:
            await pool.close()
            logger.info("Database connection pool closed")

    app = FastAPI(
        title="PostsApi",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(GZipMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(api_router)
    return app
