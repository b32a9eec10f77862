import functools

from aws_lambda_powertools import Logger

from posts_api.exceptions import PersistenceError, PostPersistenceException

logger = Logger(utc=True)


def handle_persistence_error(message: str):
    def decorator_wrapper(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except PersistenceError as error:
                logger.exception(f"{message} {error.kind=}")
                raise PostPersistenceException(message) from error

        return wrapper

    return decorator_wrapper
