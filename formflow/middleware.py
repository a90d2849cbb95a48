# =============================================================================
# formflow/middleware.py - Cookie Check Middleware
# =============================================================================
# Form steps keep their state in a session cookie, so a browser that refuses
# cookies would silently lose every answer. The first cookie-less GET of a
# step gets a test cookie and a redirect carrying COOKIE_CHECK; if the
# follow-up still has no cookies the cookie-error page is rendered instead of
# the step.
#
# Only step pages are checked. Health, static assets, built-in pages and
# unknown paths (which should 404) pass straight through.
# =============================================================================

import logging
from typing import Awaitable, Callable

from fastapi import Request
from starlette.responses import RedirectResponse, Response
from starlette.routing import Match

from formflow.controllers import BaseController

logger = logging.getLogger(__name__)

COOKIE_CHECK = "hof-cookie-check"

CallNext = Callable[[Request], Awaitable[Response]]


def is_step_request(request: Request) -> bool:
    """Whether the request matches an endpoint served by a step controller."""
    for route in request.app.router.routes:
        controller = getattr(getattr(route, "endpoint", None), "__self__", None)
        if not isinstance(controller, BaseController):
            continue
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return True
    return False


def cookie_check_middleware() -> Callable[[Request, CallNext], Awaitable[Response]]:
    """
    Build the cookie check as an HTTP middleware function.

    Usage:
        app.use(cookie_check_middleware())
    """

    async def check_cookies(request: Request, call_next: CallNext) -> Response:
        if request.method != "GET" or request.cookies or not is_step_request(request):
            return await call_next(request)

        if COOKIE_CHECK not in request.query_params:
            target = request.url.include_query_params(**{COOKIE_CHECK: "1"})
            response = RedirectResponse(str(target), status_code=302)
            response.set_cookie(COOKIE_CHECK, "1", httponly=True, samesite="lax")
            return response

        logger.warning(f"Cookies disabled for {request.url.path}")
        return request.app.state.views.render(
            request,
            "cookie-error",
            {"path": request.url.path},
            status_code=400,
        )

    return check_cookies
