"""
Database infrastructure package.
"""

from infrastructure.db.duplication_log_repository import SupabaseDuplicationLogRepository
from infrastructure.db.hierarchy_store import SupabaseHierarchyStore, SupabaseWriteBatch

__all__ = [
    "SupabaseDuplicationLogRepository",
    "SupabaseHierarchyStore",
    "SupabaseWriteBatch",
]
