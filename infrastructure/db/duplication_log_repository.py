"""
Supabase implementation of DuplicationLogRepository.
"""

import asyncio
from typing import Dict

from supabase import Client

from application.exceptions import StoreError
from core.constants import DUPLICATION_LOGS_TABLE


class SupabaseDuplicationLogRepository:
    """Inserts duplication audit entries into the duplication_logs table."""

    def __init__(self, client: Client):
        self._client = client

    async def record(self, entry: Dict) -> None:
        """
        Insert an audit entry.

        Args:
            entry: Entry dictionary

        Raises:
            StoreError: If the insert fails
        """
        try:
            await asyncio.get_event_loop().run_in_executor(
                None,
                self._client.table(DUPLICATION_LOGS_TABLE).insert(entry).execute,
            )
        except Exception as e:
            raise StoreError(f"Duplication log insert failed: {e}") from e
