"""
Ownership check run before any read or write of a subtree.
"""

import logging
from typing import Dict, Optional

from application.exceptions import PermissionDeniedError
from application.ports import HierarchyStore
from models.hierarchy import OWNER_FIELD, DocumentRef

logger = logging.getLogger(__name__)


class OwnershipGuard:
    """
    Verifies that the caller owns the root of a subtree.

    ``user_id`` is identical across every node of a subtree, so checking the
    root is sufficient.
    """

    def __init__(self, store: HierarchyStore):
        self._store = store

    async def verify(self, ref: DocumentRef, user_id: str) -> Optional[Dict]:
        """
        Fetch the root document and compare its owner to the caller.

        Args:
            ref: Root of the subtree
            user_id: Authenticated caller

        Returns:
            The root document, or None if it does not exist

        Raises:
            PermissionDeniedError: If the stored owner is not the caller
            StoreError: If the fetch fails
        """
        document = await self._store.get(ref)
        if document is None:
            return None

        if document.get(OWNER_FIELD) != user_id:
            logger.warning(f"Ownership check failed for {ref} (user {user_id})")
            raise PermissionDeniedError(str(ref), user_id)

        return document
