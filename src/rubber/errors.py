"""
Rubber Errors — Response Classification and Error Dispatch
==========================================================

Every facade call funnels failures through one of two paths:

    handle(e)          → log loudly, then re-raise
    handle_missing(e)  → same, except a 404 becomes None

One transient condition is swallowed without logging: a call that was in
flight while its connection pool got closed (the node was stopped under
it). That is a shutdown race, not a failure worth reporting.
"""

from typing import Any, Optional

import structlog
from elasticsearch import ApiError
from elasticsearch import ConnectionError as TransportConnectionError

logger = structlog.get_logger(__name__)

SUCCESS_CODES = frozenset({200, 201})

# urllib3 message for a request issued against a closed pool
POOL_CLOSED = "Pool is closed"


class RubberError(Exception):
    """
    A facade operation failed in a way the engine did not report as an error.

    Args:
        message: What went wrong
        **data: Structured context (response, document, index, ...)
    """

    def __init__(self, message: str, **data: Any):
        super().__init__(message)
        self.message = message
        self.data = data


class NotConnectedError(RubberError):
    """No connection is registered under the requested prefix."""


def _status(response: Any) -> Optional[int]:
    meta = getattr(response, "meta", None)
    if meta is not None:
        return meta.status
    for attr in ("status", "status_code"):
        value = getattr(response, attr, None)
        if value is not None:
            return value
    return None


def ok(response: Any) -> bool:
    """True if the response status is 200 or 201."""
    return _status(response) in SUCCESS_CODES


def status_of(e: BaseException) -> Optional[int]:
    """HTTP status carried by an exception, if any."""
    if isinstance(e, ApiError):
        return e.meta.status
    if isinstance(e, RubberError):
        return e.data.get("status")
    return None


def is_not_found(e: BaseException) -> bool:
    return status_of(e) == 404


def connector_stopped(e: BaseException) -> bool:
    """
    Check for a request that raced a connection shutdown.

    The transport raises its own ConnectionError and keeps the urllib3
    pool error in `errors`.
    """
    if not isinstance(e, TransportConnectionError):
        return False
    if POOL_CLOSED in str(getattr(e, "message", "")):
        return True
    return any(
        POOL_CLOSED in str(c) or type(c).__name__ == "ClosedPoolError"
        for c in getattr(e, "errors", ())
    )


def log_error(e: BaseException) -> None:
    """Log an exception message with its stack trace."""
    logger.error(str(e), exc_info=e)


def handle(e: BaseException) -> None:
    """
    Log an exception with all the context it carries, then re-raise it.

    Engine errors get their parsed response body logged, RubberError
    gets its structured data logged. A stopped connector is ignored and
    the call yields None.
    """
    if connector_stopped(e):
        return None
    log_error(e)
    if isinstance(e, ApiError):
        logger.error("engine error response", status=e.meta.status, body=e.body)
    data = getattr(e, "data", None)
    if data:
        logger.error("error data", data=data)
    raise e


def handle_missing(e: BaseException) -> None:
    """Like handle(), but a 404 means absent and yields None."""
    if is_not_found(e):
        return None
    return handle(e)
