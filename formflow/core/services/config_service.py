# =============================================================================
# formflow/core/services/config_service.py - Bootstrap Option Validation
# =============================================================================
# Checks the raw bootstrap options, merges them into BootstrapOptions and
# resolves every views/fields directory against the caller directory.
#
# All checks are synchronous and raise BootstrapError subclasses; nothing
# here touches the web framework.
# =============================================================================

import logging
import os
from typing import Any

from pydantic import ValidationError

from formflow.core.models import BootstrapOptions, PathOption, ResolvedRoute
from formflow.core.services.field_service import FieldService
from formflow.exceptions import (
    InvalidConfigError,
    MissingRoutesError,
    MissingStepsError,
    PathNotFoundError,
)
from formflow.lib.paths import expand_params, resolve_path

logger = logging.getLogger(__name__)


class ConfigService:
    """
    Validation and path resolution for bootstrap options.

    Check order matters and mirrors what users hit first: routes, steps,
    global fields, global views, then each route's fields and views, then
    the contents of the fields files.
    """

    @staticmethod
    def check_routes(routes: Any) -> None:
        """
        Check the raw route list before model validation.

        Args:
            routes: The "routes" value from the caller's options

        Raises:
            MissingRoutesError: If routes is missing or empty
            MissingStepsError: If any route has no "steps" key
        """
        if not routes or not isinstance(routes, (list, tuple)):
            raise MissingRoutesError()

        for index, route in enumerate(routes):
            steps = route.get("steps") if isinstance(route, dict) else getattr(route, "steps", None)
            if steps is None:
                raise MissingStepsError(index)

    @staticmethod
    def build_options(merged: dict[str, Any]) -> BootstrapOptions:
        """
        Validate the merged defaults + caller options.

        Raises:
            InvalidConfigError: If a value has the wrong type
        """
        try:
            return BootstrapOptions.model_validate(merged)
        except ValidationError as e:
            raise InvalidConfigError(str(e)) from e

    @staticmethod
    def resolve_dir(caller: str, value: PathOption, kind: str) -> str | None:
        """
        Resolve a directory option and check it exists.

        Falsy values ("" / False / None) disable the option.

        Returns:
            Absolute path, or None when the option is disabled

        Raises:
            PathNotFoundError: If the resolved path does not exist
        """
        if not value:
            return None

        path = resolve_path(caller, value)
        if not os.path.exists(path):
            raise PathNotFoundError(kind, path)
        return path

    @staticmethod
    def resolve_routes(options: BootstrapOptions) -> list[ResolvedRoute]:
        """
        Resolve the global and per-route directories.

        Args:
            options: Validated bootstrap options

        Returns:
            One ResolvedRoute per configured route, in order

        Raises:
            PathNotFoundError: For the first directory that does not exist
            InvalidConfigError: For a bad params pattern or fields file
        """
        global_fields = ConfigService.resolve_dir(options.caller, options.fields, "fields")
        global_views = ConfigService.resolve_dir(options.caller, options.views, "views")

        resolved = []
        for index, route in enumerate(options.routes):
            route_fields = ConfigService.resolve_dir(options.caller, route.fields, "route fields")
            route_views = ConfigService.resolve_dir(options.caller, route.views, "route views")

            try:
                expand_params(route.params)
            except ValueError as e:
                raise InvalidConfigError(str(e)) from e

            name = route.name or route.base_url.strip("/") or f"route-{index}"
            fields_dirs = [d for d in (route_fields, global_fields) if d]

            resolved.append(ResolvedRoute(
                index=index,
                name=name,
                base_url=route.base_url,
                params=route.params,
                steps=route.steps,
                views_dirs=[d for d in (route_views, global_views) if d],
                fields_dirs=fields_dirs,
                fields=FieldService.load(fields_dirs),
            ))

            logger.debug(
                f"Route {name}: {len(route.steps)} steps, "
                f"views={route_views or global_views}, fields={route_fields or global_fields}"
            )

        return resolved
