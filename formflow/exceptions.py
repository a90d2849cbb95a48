# =============================================================================
# formflow/exceptions.py - Bootstrap Errors and HTTP Exception Handlers
# =============================================================================
# Configuration errors are raised synchronously by bootstrap() before any
# server work happens. They are fatal to startup: no retry, no partial app.
#
# Request-time errors are handled by the framework; the only custom handler
# renders the 404 page.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)


class BootstrapError(Exception):
    """
    Base exception for formflow configuration errors.

    str(exc) is exactly the message so callers can match on it.
    """

    def __init__(
        self,
        message: str,
        code: str = "BOOTSTRAP_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a plain dict (used by the CLI error output)."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Route Exceptions
# =============================================================================

class MissingRoutesError(BootstrapError):
    """Raised when bootstrap() is called without a list of routes."""

    def __init__(self):
        super().__init__(
            message="Must be called with a list of routes",
            code="MISSING_ROUTES",
            suggestion="Pass routes=[{'steps': {'/first': {}}}] to bootstrap()",
        )


class MissingStepsError(BootstrapError):
    """Raised when a route has no steps mapping."""

    def __init__(self, index: int):
        super().__init__(
            message="Each route must define a set of one or more steps",
            code="MISSING_STEPS",
            suggestion="Add a 'steps' mapping of step path to step options",
            details={"route_index": index},
        )


# =============================================================================
# Path Exceptions
# =============================================================================

class PathNotFoundError(BootstrapError):
    """
    Raised when a views or fields directory does not exist.

    kind is one of "fields", "views", "route fields", "route views" and
    ends up verbatim in the message.
    """

    def __init__(self, kind: str, path: str):
        super().__init__(
            message=f"Cannot find {kind} at {path}",
            code="PATH_NOT_FOUND",
            suggestion=f"Create the directory or set '{kind.split()[-1]}' to False",
            details={"kind": kind, "path": path},
        )
        self.kind = kind
        self.path = path


class InvalidConfigError(BootstrapError):
    """Raised when the options object itself fails model validation."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Invalid bootstrap options: {error}",
            code="INVALID_CONFIG",
            details={"error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def not_found_handler(
    request: Request,
    exc: StarletteHTTPException
) -> Response:
    """
    Render 404.html for unknown paths.

    JSON clients (Accept: application/json) keep FastAPI's default body.
    Other HTTP errors fall through to a plain JSON response.
    """
    if exc.status_code != 404:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    if "application/json" in request.headers.get("accept", ""):
        return JSONResponse(status_code=404, content={"detail": "Not Found"})

    logger.debug(f"No step matches {request.url.path}")
    views = request.app.state.views
    return views.render(
        request,
        "404",
        {"path": request.url.path},
        status_code=404,
    )
