"""
Services package for the hierarchy cascade API.

Contains the cascade engine:
- Ownership guard (caller must own the subtree root)
- Write batching (bounded-size atomic batches committed in order)
- Copy naming ("<base> Copy <N>" with gap filling)
- Descendant counting (fail-open delete previews)
- Cascade deletion (bottom-up, retryable)
- Week duplication (top-down deep copy)
"""

from services.cascade_deleter import CascadeDeleter
from services.copy_naming import extract_base_name, generate_copy_name
from services.descendant_counter import DescendantCounter, require_delete_scope
from services.hierarchy_service import HierarchyCascadeService
from services.ownership_guard import OwnershipGuard
from services.week_duplicator import WeekDuplicator, copy_document, copy_set
from services.write_batching import BatchWriter, batch_count, partition_operations

__all__ = [
    # Batching
    "BatchWriter",
    "batch_count",
    "partition_operations",
    # Naming
    "extract_base_name",
    "generate_copy_name",
    # Engine
    "CascadeDeleter",
    "DescendantCounter",
    "HierarchyCascadeService",
    "OwnershipGuard",
    "WeekDuplicator",
    "copy_document",
    "copy_set",
    "require_delete_scope",
]
