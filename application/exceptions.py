"""
Application-layer exceptions.

These exceptions are used across application, service and infrastructure
layers. API routers translate them into HTTP responses.
"""

from typing import Optional

from models.hierarchy import DocumentRef


class CascadeError(Exception):
    """Base class for cascade engine errors."""

    pass


class PermissionDeniedError(CascadeError):
    """The caller does not own the root of the targeted subtree."""

    def __init__(self, resource: str, user_id: str):
        super().__init__(f"User {user_id} does not own {resource}")
        self.resource = resource
        self.user_id = user_id


class DocumentNotFoundError(CascadeError):
    """The document an operation starts from does not exist."""

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")
        self.resource = resource


class InvalidScopeError(CascadeError, ValueError):
    """A reference of the wrong entity kind was passed as an operation scope."""

    pass


class StoreError(CascadeError):
    """
    Error raised by the hierarchical store.

    Covers transient conditions (network, availability) as well as permanent
    ones (quota, validation). The engine never retries internally.
    """

    pass


class BatchCommitError(StoreError):
    """
    A write batch failed to commit.

    Earlier batches of the same invocation are not rolled back. ``partial``
    tells the caller whether anything was already written.
    """

    def __init__(
        self,
        message: str,
        batch_index: int,
        total_batches: int,
        committed_operations: int,
    ):
        super().__init__(message)
        self.batch_index = batch_index
        self.total_batches = total_batches
        self.committed_operations = committed_operations

    @property
    def committed_batches(self) -> int:
        return self.batch_index

    @property
    def partial(self) -> bool:
        return self.batch_index > 0


class WeekDuplicationError(BatchCommitError):
    """
    Duplication of a week failed while committing.

    When ``partial`` is true, ``new_week`` addresses the incomplete copy; it is
    a connected subtree and can be removed with a cascade delete.
    """

    def __init__(
        self,
        message: str,
        batch_index: int,
        total_batches: int,
        committed_operations: int,
        new_week: Optional[DocumentRef] = None,
    ):
        super().__init__(message, batch_index, total_batches, committed_operations)
        self.new_week = new_week
