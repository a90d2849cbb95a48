# =============================================================================
# formflow/core/ - Configuration Logic Package
# =============================================================================
# This package contains framework-agnostic logic:
# - models/: Pydantic schemas for bootstrap options, routes, steps and fields
# - services/: Option validation, path resolution, fields and translations
#
# Code in this package should NOT import from FastAPI directly; errors come
# from formflow.exceptions.
# =============================================================================
