# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Acquisitions API:
# - test_token_service.py: Token signing/verification and TokenConfig
# - test_utils.py: Duration parsing and ApplicationError
# - test_config.py: Settings loading and validation
# - test_database.py: Postgres client wrapper (driver mocked)
# - test_api.py: HTTP endpoints, middleware and auth routes
#
# Run tests with: pytest
# =============================================================================
