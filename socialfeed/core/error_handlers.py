"""Map core error kinds onto HTTP responses."""
import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from socialfeed.core.exceptions import (
    SocialFeedError, ValidationError, NotFoundError, ForbiddenError, StoreError
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
)


def status_for(exc: SocialFeedError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    """Register the core's exception handlers on ``app``."""

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        # The cause was already logged with its traceback by store_operation
        logger.error("Store error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.exception_handler(SocialFeedError)
    async def social_feed_error_handler(request: Request, exc: SocialFeedError):
        status_code = status_for(exc)
        logger.warning(
            "%s on %s %s: %s",
            type(exc).__name__, request.method, request.url.path, exc.message,
        )
        return JSONResponse(status_code=status_code, content={"detail": exc.message})
