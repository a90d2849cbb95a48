# =============================================================================
# formflow/controllers.py - Step Controllers
# =============================================================================
# One controller instance handles GET and POST for one step. Subclass
# BaseController and override a hook to customise a step:
#
#   class ConfirmController(BaseController):
#       def locals(self, request, values, errors):
#           context = super().locals(request, values, errors)
#           context["summary"] = sorted(values.items())
#           return context
#
# Pass it per step ({"controller": ConfirmController}) or for every step
# with the baseController option.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from starlette.datastructures import FormData
from starlette.responses import RedirectResponse, Response

from formflow.core.models import FieldDefinition, ResolvedRoute, StepConfig
from formflow.core.services import FieldService
from formflow.lib.paths import join_url, step_template_name
from formflow.views import ViewService

logger = logging.getLogger(__name__)

SESSION_PREFIX = "formflow"


class BaseController:
    """
    Default step controller.

    GET renders the step template. POST validates the step's fields, stores
    the values in the route's session namespace and redirects to the next
    step; on failure the errors are stored and the user is sent back.
    """

    def __init__(
        self,
        route: ResolvedRoute,
        step: str,
        options: StepConfig,
        fields: dict[str, FieldDefinition],
        views: ViewService,
    ):
        self.route = route
        self.step = step
        self.options = options
        self.fields = fields
        self.views = views
        self.template = options.template or step_template_name(step)

    # -------------------------------------------------------------------------
    # URLs / session
    # -------------------------------------------------------------------------

    @property
    def url(self) -> str:
        return join_url(self.route.base_url, self.step)

    @property
    def next_url(self) -> str | None:
        if not self.options.next:
            return None
        return join_url(self.route.base_url, self.options.next)

    @property
    def session_key(self) -> str:
        return f"{SESSION_PREFIX}-{self.route.name}"

    def session_model(self, request: Request) -> dict[str, Any]:
        """The route's slice of the session, created on first use."""
        return request.session.setdefault(
            self.session_key, {"values": {}, "errors": {}, "steps": []}
        )

    def get_values(self, request: Request) -> dict[str, Any]:
        return dict(self.session_model(request)["values"])

    def get_errors(self, request: Request) -> dict[str, str]:
        """Errors for this step, removed from the session once read."""
        errors = self.session_model(request)["errors"]
        mine = {name: errors.pop(name) for name in list(errors) if name in self.options.fields}
        return mine

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def locals(
        self,
        request: Request,
        values: dict[str, Any],
        errors: dict[str, str],
    ) -> dict[str, Any]:
        """Template context for this step."""
        return {
            "step": self.step,
            "route": self.route.name,
            "base_url": self.route.base_url,
            "next": self.next_url,
            "action": self.url,
            "fields": {name: self.fields.get(name) for name in self.options.fields},
            "values": values,
            "errors": errors,
            "path_params": dict(request.path_params),
            **self.options.locals,
        }

    def process(self, form: FormData) -> dict[str, Any]:
        """
        Pick this step's fields out of the submitted form.

        Multi-valued fields (checkbox groups, multi-selects) and names that
        were submitted more than once keep every value as a list.
        """
        values: dict[str, Any] = {}
        for name in self.options.fields:
            submitted = form.getlist(name)
            definition = self.fields.get(name)
            if len(submitted) > 1 or (definition is not None and definition.multiple):
                values[name] = [str(v) for v in submitted]
            else:
                values[name] = str(submitted[0]) if submitted else ""
        return values

    def validate(self, values: dict[str, Any]) -> dict[str, str]:
        return FieldService.validate(values, self.fields, self.options.fields)

    def save_values(self, request: Request, values: dict[str, Any]) -> None:
        model = self.session_model(request)
        model["values"].update(values)
        if self.step not in model["steps"]:
            model["steps"].append(self.step)

    def success_url(self, request: Request) -> str:
        return self.next_url or self.url

    # -------------------------------------------------------------------------
    # HTTP handlers
    # -------------------------------------------------------------------------

    async def get(self, request: Request) -> Response:
        values = self.get_values(request)
        errors = self.get_errors(request)
        return self.views.render(request, self.template, self.locals(request, values, errors))

    async def post(self, request: Request) -> Response:
        form = await request.form()
        values = self.process(form)
        errors = self.validate(values)

        if errors:
            logger.info(f"Step {self.url} failed validation: {sorted(errors)}")
            model = self.session_model(request)
            model["values"].update(values)
            model["errors"].update(errors)
            return RedirectResponse(self.url, status_code=303)

        self.save_values(request, values)
        logger.debug(f"Step {self.url} complete")
        return RedirectResponse(self.success_url(request), status_code=303)

    async def dispatch(self, request: Request) -> Response:
        """Route endpoint: GET and HEAD render, POST submits."""
        if request.method == "POST":
            return await self.post(request)
        return await self.get(request)
