# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for formflow:
# - test_bootstrap.py: Configuration errors and served steps
# - test_controllers.py: Step GET/POST handling and custom controllers
# - test_app.py: Cookie check, built-in pages, health, FormApp helpers
# - test_services.py: Field, translation and config services
# - test_config.py / test_paths.py / test_cli.py: Settings, helpers, CLI
#
# Fixture apps live in apps/; views/, fields/, translations/ and public/ are
# the default directories for bootstrap() calls made from this package.
#
# Run tests with: pytest
# =============================================================================
