# =============================================================================
# formflow/core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for the bootstrap configuration:
# - route.py: BootstrapOptions, RouteConfig, StepConfig
# - field.py: FieldDefinition (entries of a fields directory)
# =============================================================================

from .field import FieldDefinition
from .route import (
    BootstrapOptions,
    PathOption,
    RedisOptions,
    ResolvedRoute,
    RouteConfig,
    SessionOptions,
    StepConfig,
)

__all__ = [
    "BootstrapOptions",
    "FieldDefinition",
    "PathOption",
    "RedisOptions",
    "ResolvedRoute",
    "RouteConfig",
    "SessionOptions",
    "StepConfig",
]
