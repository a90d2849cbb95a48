# =============================================================================
# formflow/routers/pages.py - Built-in Pages
# =============================================================================
# Static information pages every service carries. Each is mounted only when
# its option is on (getCookies / getTerms). The templates ship in
# formflow/templates and can be overridden from the views directory.
# =============================================================================

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

cookies_router = APIRouter()
terms_router = APIRouter()


@cookies_router.get("/cookies", response_class=HTMLResponse)
async def cookies_page(request: Request):
    """Explain which cookies the service sets."""
    options = request.app.options
    return request.app.state.views.render(
        request,
        "cookies",
        {
            "session_name": options.session.name,
            "session_ttl": options.session.ttl,
        },
    )


@terms_router.get("/terms-and-conditions", response_class=HTMLResponse)
async def terms_page(request: Request):
    return request.app.state.views.render(request, "terms")
