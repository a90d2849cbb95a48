# =============================================================================
# formflow/routers/ - Route Definitions
# =============================================================================
# This package contains the FastAPI routers mounted by bootstrap():
# - health.py: Health check endpoints
# - pages.py: Built-in cookies and terms pages
#
# Step routes are not declared here; bootstrap() registers them from the
# route configuration.
# =============================================================================

from . import health
from . import pages

__all__ = [
    "health",
    "pages",
]
