import asyncio
import logging
from typing import Callable, Any, Tuple, Type
from functools import wraps

logger = logging.getLogger(__name__)

def retry_with_backoff(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    backoff_factor: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
):
    """
    decorator to retry a coroutine with exponential backoff

    usage:
        @retry_with_backoff(max_retries=5, initial_delay=2.0)
        async def init_db():
            # ... code that might fail while the database starts ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            delay = initial_delay
            last_exception = None

            for attempt in range(max_retries):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e
                    if attempt < max_retries - 1:
                        logger.warning(
                            f"{func.__name__} failed (attempt {attempt + 1}/{max_retries}): {str(e)}. "
                            f"retrying in {delay}s..."
                        )
                        await asyncio.sleep(delay)
                        delay *= backoff_factor
                    else:
                        logger.error(
                            f"{func.__name__} failed after {max_retries} attempts: {str(e)}"
                        )

            # all retries exhausted
            raise last_exception

        return wrapper
    return decorator


class PeopleApiException(Exception):
    """base exception for people-api-specific errors"""
    pass


class DatabaseUnavailableError(PeopleApiException):
    """raised when the database cannot be reached at startup"""
    pass


class UniquenessViolationError(PeopleApiException):
    """raised when a commit collides with a unique index and the collision cannot be attributed"""
    pass
