"""
API package for the Hierarchy Cascade API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_cascade_service,
    get_current_user,
    get_duplication_log_repo,
    get_hierarchy_store,
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Store and services
    "get_hierarchy_store",
    "get_duplication_log_repo",
    "get_cascade_service",
    # Authentication
    "get_current_user",
]
