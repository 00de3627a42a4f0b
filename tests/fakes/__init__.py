"""
Fake implementations for testing.

This package provides in-memory fake implementations of the port
interfaces for fast, isolated testing without database dependencies.
"""

from tests.fakes.duplication_log_repository import FakeDuplicationLogRepository
from tests.fakes.hierarchy_store import FakeHierarchyStore, FakeWriteBatch, operation_keys

__all__ = [
    "FakeDuplicationLogRepository",
    "FakeHierarchyStore",
    "FakeWriteBatch",
    "operation_keys",
]
