# =============================================================================
# formflow/core/models/route.py - Route, Step and Bootstrap Option Schemas
# =============================================================================
# These models describe the bootstrap argument object:
#
#   {
#       "views": "views",
#       "fields": "fields",
#       "routes": [
#           {
#               "baseUrl": "/app_1",
#               "params": "/:action?",
#               "views": "apps/app_1/views",
#               "steps": {"/one": {"fields": ["name"], "next": "/two"}},
#           }
#       ],
#   }
#
# camelCase keys from the config surface are accepted as aliases of the
# snake_case attribute names.
# =============================================================================

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .field import FieldDefinition

# A path option: a directory, or False to disable it
PathOption = str | Literal[False] | None


# =============================================================================
# Step / Route
# =============================================================================

class StepConfig(BaseModel):
    """
    A single routable page of a route.

    Example:
        {"fields": ["name", "email"], "next": "/confirm"}
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )

    template: str | None = Field(
        default=None,
        description="Template name without extension (defaults to the step path)"
    )

    fields: list[str] = Field(
        default_factory=list,
        description="Names of the fields collected on this step"
    )

    next: str | None = Field(
        default=None,
        description="Step path to redirect to after a successful POST"
    )

    controller: Any = Field(
        default=None,
        description="Controller class overriding the route/base controller"
    )

    locals: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra template context for this step"
    )


class RouteConfig(BaseModel):
    """
    A configured set of steps with optional view/field directory overrides.

    Per-route views and fields take precedence over the global ones.
    """

    model_config = ConfigDict(populate_by_name=True)

    steps: dict[str, StepConfig] = Field(
        ...,
        description="Mapping of step path to step options"
    )

    views: PathOption = Field(
        default=None,
        description="Views directory for this route"
    )

    fields: PathOption = Field(
        default=None,
        description="Fields directory for this route"
    )

    base_url: str = Field(
        default="",
        alias="baseUrl",
        description="URL prefix for every step of this route"
    )

    params: str = Field(
        default="",
        description="Express-style params appended to each step, e.g. '/:action?'"
    )

    name: str | None = Field(
        default=None,
        description="Session namespace (defaults to baseUrl or route-<index>)"
    )

    @field_validator("steps", mode="before")
    @classmethod
    def steps_default_to_empty_options(cls, value: Any) -> Any:
        """Allow {"/one": None} as shorthand for {"/one": {}}."""
        if isinstance(value, dict):
            return {k: ({} if v is None else v) for k, v in value.items()}
        return value


# =============================================================================
# Bootstrap Options
# =============================================================================

class RedisOptions(BaseModel):
    host: str = "127.0.0.1"
    port: int = 6379


class SessionOptions(BaseModel):
    ttl: int = Field(default=1800, ge=1)
    secret: str = "changethis"
    name: str = "hod.sid"


class BootstrapOptions(BaseModel):
    """
    Defaults merged with the caller's options.

    Built by formflow.bootstrap after the raw routes have been checked,
    so a route without steps never reaches model validation.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    routes: list[RouteConfig]

    # Directories (relative paths resolve against caller)
    caller: str
    views: PathOption = "views"
    fields: PathOption = "fields"
    asset_path: PathOption = Field(default="public", alias="assetPath")
    translations: PathOption = "translations"

    # Features
    start: bool = True
    get_cookies: bool = Field(default=True, alias="getCookies")
    get_terms: bool = Field(default=True, alias="getTerms")
    view_engine: str = Field(default="html", alias="viewEngine")
    base_controller: Any = Field(default=None, alias="baseController")

    # Server
    protocol: str = "http"
    host: str = "0.0.0.0"
    port: int = 8080
    env: str = "development"
    redis: RedisOptions = Field(default_factory=RedisOptions)
    session: SessionOptions = Field(default_factory=SessionOptions)


# =============================================================================
# Resolved Route
# =============================================================================

class ResolvedRoute(BaseModel):
    """
    A RouteConfig after path validation.

    Directory lists are ordered by precedence: route first, then global.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: int
    name: str
    base_url: str
    params: str
    steps: dict[str, StepConfig]
    views_dirs: list[str] = Field(default_factory=list)
    fields_dirs: list[str] = Field(default_factory=list)
    fields: dict[str, FieldDefinition] = Field(default_factory=dict)
