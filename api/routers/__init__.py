"""
Router package for the Hierarchy Cascade API.

This package contains all API routers organized by domain:
- health: Health check endpoints
- hierarchy: Delete previews, cascade deletes and week duplication
"""

from api.routers.health import router as health_router
from api.routers.hierarchy import router as hierarchy_router

__all__ = [
    "health_router",
    "hierarchy_router",
]
