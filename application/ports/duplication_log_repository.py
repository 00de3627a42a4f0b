"""
Duplication audit log port (interface).

Stores one entry per successful week duplication for debugging and support.
"""

from typing import Dict, Protocol


class DuplicationLogRepository(Protocol):
    """Repository interface for duplication audit entries."""

    async def record(self, entry: Dict) -> None:
        """
        Persist an audit entry.

        Args:
            entry: Entry dictionary (type, source/new ids, user, timestamp)
        """
        ...
