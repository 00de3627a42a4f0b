"""
FastAPI dependency providers.

Providers return Protocol types so tests can swap in fakes:

    app.dependency_overrides[get_hierarchy_store] = lambda: FakeHierarchyStore()

The settings object and the Supabase client are process-wide (lru_cache);
stores and the cascade service are built per request.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

from application.ports import DuplicationLogRepository, HierarchyStore
from backend.settings import Settings, get_settings as _get_settings
from infrastructure.db import SupabaseDuplicationLogRepository, SupabaseHierarchyStore
from services.hierarchy_service import HierarchyCascadeService

BEARER_PREFIX = "Bearer "


def get_settings() -> Settings:
    return _get_settings()


# =============================================================================
# Supabase
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """Shared Supabase client, or None when credentials are missing."""
    settings = _get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        return None
    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Supabase client for endpoints that cannot work without the database.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Stores and services
# =============================================================================


def get_hierarchy_store(
    client: Client = Depends(get_supabase_client_required),
) -> HierarchyStore:
    return SupabaseHierarchyStore(client)


def get_duplication_log_repo(
    client: Client = Depends(get_supabase_client_required),
) -> DuplicationLogRepository:
    return SupabaseDuplicationLogRepository(client)


def get_cascade_service(
    store: HierarchyStore = Depends(get_hierarchy_store),
    duplication_log: DuplicationLogRepository = Depends(get_duplication_log_repo),
    settings: Settings = Depends(get_settings),
) -> HierarchyCascadeService:
    """
    Cascade engine bound to the request's store.

    The batch budget comes from settings so operators can lower it without a
    deploy.
    """
    return HierarchyCascadeService(
        store,
        batch_budget=settings.cascade_batch_budget,
        duplication_log=duplication_log,
    )


# =============================================================================
# Authentication
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Resolve the caller's user id from the Authorization header.

    Development stub: the bearer token is taken as the user id. Token
    verification belongs to the gateway in front of this service.

    Raises:
        HTTPException: 401 if the header is missing or malformed
        RuntimeError: If the stub is reached in production
    """
    if settings.is_production:
        raise RuntimeError(
            "Authentication stub cannot be used in production. "
            "Configure token validation before deploying."
        )

    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Missing or invalid authorization header")

    user_id = authorization[len(BEARER_PREFIX):].strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")
    return user_id


__all__ = [
    "get_settings",
    "get_supabase_client",
    "get_supabase_client_required",
    "get_hierarchy_store",
    "get_duplication_log_repo",
    "get_cascade_service",
    "get_current_user",
]
