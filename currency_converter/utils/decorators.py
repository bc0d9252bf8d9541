"""Utility decorators for error handling and resilience."""
import asyncio
import functools
import inspect
import time
from typing import Callable, Optional, Tuple, Type

from currency_converter.utils.logging import get_logger

logger = get_logger(__name__)


def retry(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    retry_if: Optional[Callable[[Exception], bool]] = None,
):
    """
    Retry decorator with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts, including the first call
        delay: Initial delay between attempts in seconds
        backoff: Multiplier applied to the delay after each failed attempt
        exceptions: Exception types that trigger another attempt
        retry_if: Optional predicate; a matching exception for which it
            returns False is raised immediately

    Example:
        @retry(max_attempts=3, delay=0.5, exceptions=(httpx.HTTPError,))
        async def fetch_payload():
            ...
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def should_give_up(exc: Exception, attempt: int) -> bool:
        if retry_if is not None and not retry_if(exc):
            return True
        return attempt >= max_attempts

    def decorator(func: Callable):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            current_delay = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if should_give_up(e, attempt):
                        logger.error(
                            f"{func.__name__} failed after {attempt} attempt(s)",
                            extra={"error": str(e)}
                        )
                        raise
                    logger.warning(
                        f"{func.__name__} failed (attempt {attempt}/{max_attempts}), retrying in {current_delay}s",
                        extra={"error": str(e)}
                    )
                    await asyncio.sleep(current_delay)
                    current_delay *= backoff

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            current_delay = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if should_give_up(e, attempt):
                        logger.error(
                            f"{func.__name__} failed after {attempt} attempt(s)",
                            extra={"error": str(e)}
                        )
                        raise
                    logger.warning(
                        f"{func.__name__} failed (attempt {attempt}/{max_attempts}), retrying in {current_delay}s",
                        extra={"error": str(e)}
                    )
                    time.sleep(current_delay)
                    current_delay *= backoff

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def log_execution(log_args: bool = True, log_result: bool = False):
    """
    Log entry, exit and wall time of an async or sync callable.

    Args:
        log_args: Whether to include (truncated) call arguments
        log_result: Whether to include the (truncated) return value
    """
    def decorator(func: Callable):
        name = func.__qualname__

        def started(args, kwargs) -> float:
            if log_args:
                logger.debug(f"Starting {name} args={str(args)[:100]} kwargs={str(kwargs)[:100]}")
            else:
                logger.debug(f"Starting {name}")
            return time.perf_counter()

        def finished(start: float, result) -> None:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            message = f"Completed {name} in {elapsed_ms}ms"
            if log_result:
                message += f": {str(result)[:100]}"
            logger.info(message)

        def failed(start: float, exc: Exception) -> None:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.error(f"Failed {name} after {elapsed_ms}ms", extra={"error": str(exc)})

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            start = started(args, kwargs)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                failed(start, e)
                raise
            finished(start, result)
            return result

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            start = started(args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                failed(start, e)
                raise
            finished(start, result)
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
