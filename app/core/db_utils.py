"""
Database utilities for connection management and error handling
"""
import asyncio
import functools
import logging
from typing import Callable, Any, TypeVar, cast, Awaitable

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

# Define a type variable for the return type of the decorated function
T = TypeVar('T')

def is_connection_error(exc: BaseException) -> bool:
    """True for errors worth retrying: dropped/invalidated connections, refused connects."""
    if isinstance(exc, OperationalError):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, (ConnectionError, OSError))

def with_db_retry(
    max_retries: int = 3,
    retry_delay: float = 0.5
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that retries read-only database operations on connection errors.

    Writes are not decorated: a retried commit could apply twice.
    
    Args:
        max_retries: Maximum number of retries before giving up
        retry_delay: Delay before the first retry in seconds, doubled each attempt
        
    Returns:
        Decorated function with retry logic
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not is_connection_error(e) or attempt >= max_retries:
                        if attempt:
                            logger.error(f"Database operation {func.__name__} failed after {attempt} retries: {e}")
                        raise
                    attempt += 1
                    delay = retry_delay * (2 ** (attempt - 1))  # Exponential backoff
                    logger.warning(
                        f"Database connection error in {func.__name__}: {str(e)}. "
                        f"Retrying in {delay:.2f}s... (Attempt {attempt}/{max_retries})"
                    )
                    await asyncio.sleep(delay)
            
        return cast(Callable[..., Awaitable[T]], wrapper)
    
    return decorator
