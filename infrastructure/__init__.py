"""
Infrastructure layer package for the hierarchy cascade API.

This package contains concrete implementations of the port interfaces.
"""

from infrastructure.db import (
    SupabaseDuplicationLogRepository,
    SupabaseHierarchyStore,
    SupabaseWriteBatch,
)

__all__ = [
    "SupabaseDuplicationLogRepository",
    "SupabaseHierarchyStore",
    "SupabaseWriteBatch",
]
