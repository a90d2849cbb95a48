# =============================================================================
# formflow/views.py - View Rendering
# =============================================================================
# Thin wrapper around FastAPI's Jinja2Templates. Each route gets its own
# search path (route views, global views, built-in templates) so a route's
# own templates take precedence.
#
# Rendering is byte-exact: templates keep their trailing newline.
# =============================================================================

import logging
import os
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, select_autoescape
from starlette.responses import Response

from formflow.core.services import Translator

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATES = os.path.join(os.path.dirname(__file__), "templates")


class ViewService:
    """
    Renders step and page templates.

    Usage:
        views = ViewService(["/srv/app/views"], view_engine="html", translator=t)
        return views.render(request, "one", {"values": {}})
    """

    def __init__(
        self,
        directories: list[str],
        view_engine: str = "html",
        translator: Translator | None = None,
    ):
        self.directories = [*directories, BUILTIN_TEMPLATES]
        self.view_engine = view_engine
        self.translator = translator or Translator()

        env = Environment(
            loader=FileSystemLoader(self.directories),
            autoescape=select_autoescape(["html", "htm", "xml", view_engine]),
            keep_trailing_newline=True,
        )
        env.globals["t"] = self.translator
        self.templates = Jinja2Templates(env=env)

    def for_route(self, directories: list[str]) -> "ViewService":
        """Return a ViewService searching directories before the built-ins."""
        return ViewService(directories, self.view_engine, self.translator)

    def template_name(self, name: str) -> str:
        """
        Pick the file for a template name.

        Tries <name>.<view_engine> first, then <name>.html for the
        built-in pages.
        """
        candidates = [f"{name}.{self.view_engine}"]
        if self.view_engine != "html":
            candidates.append(f"{name}.html")
        return self.templates.env.select_template(candidates).name

    def render(
        self,
        request: Request,
        name: str,
        context: dict[str, Any] | None = None,
        status_code: int = 200,
    ) -> Response:
        """
        Render a template to an HTML response.

        Args:
            request: The current request (exposed to the template)
            name: Template name without extension
            context: Template variables
            status_code: Response status

        Raises:
            jinja2.TemplatesNotFound: If no candidate file exists
        """
        template = self.template_name(name)
        logger.debug(f"Rendering {template} for {request.url.path}")
        return self.templates.TemplateResponse(
            request,
            template,
            context or {},
            status_code=status_code,
        )
