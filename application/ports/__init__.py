"""
Port interfaces (Protocols) for the hierarchy cascade API.

This package defines the interface contracts that the infrastructure
layer must implement. Using Protocols enables:
- Clean separation of concerns
- Easy testing with in-memory fakes
- Dependency inversion (depend on abstractions, not concretions)
"""

from application.ports.duplication_log_repository import DuplicationLogRepository
from application.ports.hierarchy_store import (
    HierarchyStore,
    WriteBatch,
    WriteOp,
    WriteOperation,
)

__all__ = [
    "DuplicationLogRepository",
    "HierarchyStore",
    "WriteBatch",
    "WriteOp",
    "WriteOperation",
]
