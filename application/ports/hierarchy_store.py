"""
Hierarchical store port (interface).

This Protocol defines the contract the cascade engine needs from the document
store: keyed reads, ordered child listings, server-side child counts and an
atomic write batch with a published operation ceiling.
Infrastructure implementations (e.g., Supabase) must satisfy this interface.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol

from models.hierarchy import DocumentRef, EntityKind


class WriteOp(str, Enum):
    """Kinds of write staged in a batch."""

    CREATE = "create"
    DELETE = "delete"


@dataclass(frozen=True)
class WriteOperation:
    """A single staged create or delete."""

    op: WriteOp
    ref: DocumentRef
    data: Dict = field(default_factory=dict)

    @classmethod
    def create(cls, ref: DocumentRef, data: Dict) -> "WriteOperation":
        return cls(WriteOp.CREATE, ref, data)

    @classmethod
    def delete(cls, ref: DocumentRef) -> "WriteOperation":
        return cls(WriteOp.DELETE, ref)


class WriteBatch(Protocol):
    """
    An atomic group of writes.

    Either every staged operation lands on commit or none does.
    """

    def stage(self, operation: WriteOperation) -> None:
        """
        Add an operation to the batch.

        Raises:
            StoreError: If the batch already holds the store's maximum
        """
        ...

    def __len__(self) -> int:
        ...

    async def commit(self) -> None:
        """
        Commit all staged operations atomically.

        Deleting a document that does not exist is a no-op.

        Raises:
            StoreError: If the commit fails; nothing from this batch is written
        """
        ...


class HierarchyStore(Protocol):
    """
    Repository interface for the Program -> Week -> Workout -> Exercise -> Set tree.

    Documents are plain dictionaries. Every document stores its ancestor-id
    chain and its owner's ``user_id``.
    """

    # Hard ceiling of operations per WriteBatch
    max_batch_operations: int

    async def get(self, ref: DocumentRef) -> Optional[Dict]:
        """
        Fetch a single document.

        Args:
            ref: Composite key of the document

        Returns:
            Document dictionary if found, None otherwise
        """
        ...

    async def list_children(self, parent: DocumentRef, kind: EntityKind) -> List[Dict]:
        """
        List the children of a document.

        Args:
            parent: Composite key of the parent
            kind: Kind of child to list (one level below the parent)

        Returns:
            Child documents ordered by the kind's order field
        """
        ...

    async def list_child_refs(
        self, parent: DocumentRef, kind: EntityKind
    ) -> List[DocumentRef]:
        """
        List child keys without fetching document payloads.

        Args:
            parent: Composite key of the parent
            kind: Kind of child to list

        Returns:
            Child keys in the same order as list_children
        """
        ...

    async def count_children(self, parent: DocumentRef, kind: EntityKind) -> int:
        """
        Count children using a server-side aggregate.

        Args:
            parent: Composite key of the parent
            kind: Kind of child to count

        Returns:
            Number of children
        """
        ...

    def new_batch(self) -> WriteBatch:
        """Start an empty write batch."""
        ...
