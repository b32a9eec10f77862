from contextlib import asynccontextmanager
from typing import AsyncIterator

import asyncpg
from aws_lambda_powertools import Logger

from posts_api.exceptions import ErrorKind, PersistenceError
from posts_api.settings import Settings

logger = Logger(utc=True)

# TimeoutError is an OSError subclass
STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


def error_kind(error: BaseException) -> ErrorKind:
    if isinstance(error, asyncpg.IntegrityConstraintViolationError):
        return ErrorKind.CONFLICT
    if isinstance(
        error,
        (
            asyncpg.CannotConnectNowError,
            asyncpg.ConnectionDoesNotExistError,
            asyncpg.PostgresConnectionError,
            OSError,
        ),
    ):
        return ErrorKind.UNAVAILABLE
    return ErrorKind.INTERNAL


@asynccontextmanager
async def translate_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise driver and network failures as :class:`PersistenceError`."""
    try:
        yield
    except STORE_ERRORS as error:
        raise PersistenceError(
            error_kind(error), f"Failed to {operation}: {error!r}"
        ) from error


async def create_pool(settings: Settings) -> asyncpg.Pool:
    async with translate_errors("create connection pool"):
        pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=settings.database_pool_min_size,
            max_size=settings.database_pool_max_size,
        )
    logger.info(
        "Database connection pool created",
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    return pool
