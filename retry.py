"""
Retry decorator with exponential backoff.

Used by adapters to handle transient storage and network failures.
Never wrap the patch engine: a fixed-text match against an unchanged
document fails the same way every time.
"""

import asyncio
import time
from functools import wraps
from typing import TypeVar, Callable, Any, ParamSpec, Awaitable, cast

import httpx
from botocore.exceptions import (
    ConnectionError as BotoConnectionError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from logging_config import logger, log_retry
from models import GatewayError, ErrorKind

T = TypeVar("T")
P = ParamSpec("P")


# Exceptions that should trigger retry
RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    BotoConnectionError,
    EndpointConnectionError,
    ReadTimeoutError,
    httpx.TransportError,
)

# Exceptions reported as TIMEOUT rather than NETWORK_ERROR
TIMEOUT_EXCEPTIONS: tuple[type[Exception], ...] = (
    TimeoutError,
    ConnectTimeoutError,
    ReadTimeoutError,
    httpx.TimeoutException,
)

# HTTP status codes that should trigger retry
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({
    429,  # Rate limited
    500,  # Internal server error
    502,  # Bad gateway
    503,  # Service unavailable
    504,  # Gateway timeout
})

# S3 error codes, checked before the HTTP status
S3_ERROR_KINDS: dict[str, ErrorKind] = {
    "NoSuchKey": ErrorKind.NOT_FOUND,
    "NoSuchBucket": ErrorKind.NOT_FOUND,
    "NotFound": ErrorKind.NOT_FOUND,
    "AccessDenied": ErrorKind.PERMISSION_DENIED,
    "AllAccessDisabled": ErrorKind.PERMISSION_DENIED,
    "InvalidAccessKeyId": ErrorKind.AUTH_REQUIRED,
    "SignatureDoesNotMatch": ErrorKind.AUTH_REQUIRED,
    "QuotaExceeded": ErrorKind.QUOTA_EXCEEDED,
    "EntityTooLarge": ErrorKind.QUOTA_EXCEEDED,
    "SlowDown": ErrorKind.RATE_LIMITED,
}


def _get_http_status(exception: Exception) -> int | None:
    """
    Extract HTTP status code from exception if available.

    Works with botocore ClientError (response dict), httpx.HTTPStatusError
    (response object) and requests-style status_code attributes.
    """
    response = getattr(exception, "response", None)

    # botocore.exceptions.ClientError
    if isinstance(response, dict):
        status = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if isinstance(status, int):
            return status

    # httpx.HTTPStatusError
    elif response is not None and hasattr(response, "status_code"):
        status = response.status_code
        if isinstance(status, int):
            return status

    if hasattr(exception, "status_code"):
        status = exception.status_code
        if isinstance(status, int):
            return status

    return None


def _get_error_code(exception: Exception) -> str | None:
    """Extract the S3 error code (e.g. 'NoSuchKey') from a ClientError."""
    response = getattr(exception, "response", None)
    if isinstance(response, dict):
        code = response.get("Error", {}).get("Code")
        if isinstance(code, str):
            return code
    return None


def _should_retry(exception: Exception) -> bool:
    """Determine if an exception is retryable."""
    if isinstance(exception, GatewayError):
        return exception.retryable

    if isinstance(exception, RETRYABLE_EXCEPTIONS):
        return True

    status = _get_http_status(exception)
    if status is not None and status in RETRYABLE_STATUS_CODES:
        return True

    return False


def _convert_to_gateway_error(exception: Exception) -> GatewayError:
    """Convert an exception to a GatewayError if not already one."""
    if isinstance(exception, GatewayError):
        return exception

    # Provider error code is more specific than the status
    code = _get_error_code(exception)
    if code in S3_ERROR_KINDS:
        kind = S3_ERROR_KINDS[code]
        return GatewayError(
            kind, str(exception),
            details={"code": code},
            retryable=kind is ErrorKind.RATE_LIMITED,
        )

    status = _get_http_status(exception)
    if status is not None:
        if status == 401:
            return GatewayError(ErrorKind.AUTH_REQUIRED, str(exception))
        elif status == 403:
            return GatewayError(ErrorKind.PERMISSION_DENIED, str(exception))
        elif status == 404:
            return GatewayError(ErrorKind.NOT_FOUND, str(exception))
        elif status == 429:
            return GatewayError(ErrorKind.RATE_LIMITED, str(exception), retryable=True)
        elif status >= 500:
            return GatewayError(ErrorKind.NETWORK_ERROR, str(exception), retryable=True)

    if isinstance(exception, TIMEOUT_EXCEPTIONS):
        return GatewayError(ErrorKind.TIMEOUT, str(exception), retryable=True)
    if isinstance(exception, RETRYABLE_EXCEPTIONS):
        return GatewayError(ErrorKind.NETWORK_ERROR, str(exception), retryable=True)

    return GatewayError(ErrorKind.UNKNOWN, str(exception))


def with_retry(
    max_attempts: int = 3,
    delay_ms: int = 1000,
    backoff_multiplier: float = 2.0,
    convert_errors: bool = True,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Retry decorator with exponential backoff.

    Args:
        max_attempts: Maximum number of retry attempts
        delay_ms: Initial delay in milliseconds
        backoff_multiplier: Multiplier for exponential backoff
        convert_errors: Convert exceptions to GatewayError on final failure

    Returns:
        Decorated function with retry logic

    Example:
        @with_retry(max_attempts=3, delay_ms=1000)
        def get_object(client, bucket: str, key: str):
            return client.get_object(Bucket=bucket, Key=key)
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception: Exception | None = None

            for attempt in range(max_attempts):
                try:
                    coro = cast(Awaitable[T], func(*args, **kwargs))
                    return await coro
                except Exception as e:
                    last_exception = e

                    if not _should_retry(e) or attempt == max_attempts - 1:
                        logger.error(
                            f"{func.__name__} failed after {attempt + 1} attempts: {e}"
                        )
                        if convert_errors:
                            raise _convert_to_gateway_error(e) from e
                        raise

                    wait_ms = int(delay_ms * (backoff_multiplier ** attempt))
                    log_retry(attempt + 1, max_attempts, wait_ms, str(e))
                    await asyncio.sleep(wait_ms / 1000)

            # Should never reach here, but satisfy type checker
            assert last_exception is not None
            if convert_errors:
                raise _convert_to_gateway_error(last_exception) from last_exception
            raise last_exception

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception: Exception | None = None

            for attempt in range(max_attempts):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    last_exception = e

                    if not _should_retry(e) or attempt == max_attempts - 1:
                        logger.error(
                            f"{func.__name__} failed after {attempt + 1} attempts: {e}"
                        )
                        if convert_errors:
                            raise _convert_to_gateway_error(e) from e
                        raise

                    wait_ms = int(delay_ms * (backoff_multiplier ** attempt))
                    log_retry(attempt + 1, max_attempts, wait_ms, str(e))
                    time.sleep(wait_ms / 1000)

            # Should never reach here, but satisfy type checker
            assert last_exception is not None
            if convert_errors:
                raise _convert_to_gateway_error(last_exception) from last_exception
            raise last_exception

        if asyncio.iscoroutinefunction(func):
            return cast(Callable[P, T], async_wrapper)
        else:
            return cast(Callable[P, T], sync_wrapper)

    return decorator
