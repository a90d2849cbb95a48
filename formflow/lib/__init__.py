# =============================================================================
# formflow/lib/ - Shared Utilities
# =============================================================================
# - paths.py: filesystem resolution and step URL building
# =============================================================================
