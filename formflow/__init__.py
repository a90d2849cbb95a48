# =============================================================================
# formflow - Multi-step Form Service Bootstrap
# =============================================================================
# Wires routes, steps, views, fields, sessions and cookies onto FastAPI and
# returns an application ready to listen.
#
# Usage:
#   from formflow import bootstrap
#   app = bootstrap(routes=[{"steps": {"/one": {}}}])
# =============================================================================

__version__ = "1.0.0"

from .bootstrap import bootstrap
from .controllers import BaseController
from .exceptions import (
    BootstrapError,
    InvalidConfigError,
    MissingRoutesError,
    MissingStepsError,
    PathNotFoundError,
)

__all__ = [
    "BaseController",
    "BootstrapError",
    "InvalidConfigError",
    "MissingRoutesError",
    "MissingStepsError",
    "PathNotFoundError",
    "bootstrap",
    "__version__",
]
