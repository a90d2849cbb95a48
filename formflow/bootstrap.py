# =============================================================================
# formflow/bootstrap.py - Application Bootstrap
# =============================================================================
# bootstrap() validates the options, merges them with the defaults and
# builds a FormApp with sessions, cookie checking, built-in pages and one
# endpoint per configured step.
#
# Usage:
#   from formflow import bootstrap
#
#   app = bootstrap(
#       views="views",
#       routes=[{"baseUrl": "/apply", "steps": {"/name": {"next": "/done"}, "/done": {}}}],
#   )
#   app.listen()
#
# Configuration errors are raised synchronously, before any app exists.
# =============================================================================

import logging
import os
import re
from contextlib import asynccontextmanager
from typing import Any

from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from formflow import __version__
from formflow.application import FormApp
from formflow.controllers import BaseController
from formflow.core.models import BootstrapOptions, ResolvedRoute
from formflow.core.services import ConfigService, TranslationService
from formflow.defaults import get_defaults
from formflow.exceptions import not_found_handler
from formflow.lib.paths import expand_params, join_url, resolve_path
from formflow.middleware import cookie_check_middleware
from formflow.routers import health, pages
from formflow.views import ViewService

logger = logging.getLogger(__name__)

# Options whose values are dicts merged key by key with the defaults
_NESTED_OPTIONS = ("redis", "session")

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    """assetPath -> asset_path; already snake_case keys pass through."""
    return _CAMEL_RE.sub("_", key).lower()


def merge_options(defaults: dict[str, Any], options: dict[str, Any]) -> dict[str, Any]:
    """
    Merge caller options over the defaults.

    Top-level keys replace defaults; redis/session are merged per key.
    None values keep the default.
    """
    merged = dict(defaults)
    for key, value in options.items():
        if value is None:
            continue
        if key in _NESTED_OPTIONS and isinstance(value, dict):
            merged[key] = {**merged.get(key, {}), **value}
        else:
            merged[key] = value
    return merged


def bootstrap(options: dict[str, Any] | None = None, **overrides: Any) -> FormApp:
    """
    Validate the configuration and build the application.

    Nothing listens: the returned app is served by calling app.listen() or
    by any ASGI server. The "start" option is accepted and stored on
    app.options, but only the `python -m formflow` command line acts on it
    (it skips listen() when start is false).

    Args:
        options: Bootstrap options (camelCase or snake_case keys)
        **overrides: Same options as keyword arguments; win over options

    Returns:
        FormApp ready for listen()

    Raises:
        MissingRoutesError: If no routes are given
        MissingStepsError: If a route has no steps
        PathNotFoundError: If a views/fields directory does not exist
        InvalidConfigError: If an option has the wrong type, a params
            pattern is malformed, or a fields file cannot be loaded
    """
    raw = {_snake_case(k): v for k, v in {**(options or {}), **overrides}.items()}

    ConfigService.check_routes(raw.get("routes"))

    caller = raw.pop("caller", None)
    merged = merge_options(get_defaults(os.path.abspath(caller) if caller else None), raw)
    config = ConfigService.build_options(merged)
    routes = ConfigService.resolve_routes(config)

    return create_app(config, routes)


def create_app(config: BootstrapOptions, routes: list[ResolvedRoute]) -> FormApp:
    """
    Build the FormApp for validated options and resolved routes.
    """

    @asynccontextmanager
    async def lifespan(app: FormApp):
        logger.info(
            f"Starting formflow in {config.env} mode with "
            f"{sum(len(r.steps) for r in routes)} steps across {len(routes)} routes"
        )
        yield
        logger.info("Shutting down formflow")

    app = FormApp(
        options=config,
        title="formflow",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # -------------------------------------------------------------------------
    # Views and translations
    # -------------------------------------------------------------------------

    translations = []
    if config.translations:
        translations_dir = resolve_path(config.caller, config.translations)
        if os.path.isdir(translations_dir):
            translations.append(translations_dir)
    translator = TranslationService.load(translations)

    global_views = [resolve_path(config.caller, config.views)] if config.views else []
    views = ViewService(global_views, view_engine=config.view_engine, translator=translator)
    app.state.views = views

    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    # -------------------------------------------------------------------------
    # Middleware (last added runs first: sessions wrap the cookie check)
    # -------------------------------------------------------------------------

    app.use(cookie_check_middleware())
    app.use(
        SessionMiddleware,
        secret_key=config.session.secret,
        session_cookie=config.session.name,
        max_age=config.session.ttl,
        https_only=config.protocol == "https",
    )

    # -------------------------------------------------------------------------
    # Static assets and built-in pages
    # -------------------------------------------------------------------------

    if config.asset_path:
        asset_dir = resolve_path(config.caller, config.asset_path)
        if os.path.isdir(asset_dir):
            app.mount("/public", StaticFiles(directory=asset_dir), name="public")
            logger.debug(f"Serving assets from {asset_dir}")

    app.use(health.router)
    if config.get_cookies:
        app.use(pages.cookies_router)
    if config.get_terms:
        app.use(pages.terms_router)

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    for route in routes:
        route_views = views.for_route(route.views_dirs)
        suffixes = expand_params(route.params)

        for step, step_options in route.steps.items():
            controller_class = step_options.controller or config.base_controller or BaseController
            controller = controller_class(route, step, step_options, route.fields, route_views)

            for suffix in suffixes:
                path = join_url(route.base_url, step, suffix)
                app.add_route(
                    path,
                    controller.dispatch,
                    methods=["GET", "POST"],
                    include_in_schema=False,
                )
                logger.debug(f"Registered step {path} -> {controller_class.__name__}")

    return app
