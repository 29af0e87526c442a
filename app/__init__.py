# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - middleware.py: Request logging and security headers
# - routers/: Health endpoints
# - auth/: Token-based auth routes and dependencies
#
# The app layer is thin - it handles HTTP concerns and delegates
# token logic to the core/ package.
# =============================================================================
