"""
Per-account job serialization.

Deletion and export of the same account must not interleave. The job
services themselves take no lock; the trigger surface holds one of these
around each invocation. Locks are in-process only.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

logger = logging.getLogger(__name__)


class AccountLockRegistry:
    """One ``asyncio.Lock`` per account id, dropped once nobody holds or waits on it."""
    
    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._holders: Dict[str, int] = {}
    
    def is_locked(self, account_id: str) -> bool:
        lock = self._locks.get(account_id)
        return bool(lock and lock.locked())
    
    @asynccontextmanager
    async def hold(self, account_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(account_id, asyncio.Lock())
        self._holders[account_id] = self._holders.get(account_id, 0) + 1
        
        if lock.locked():
            logger.info(f"Waiting for running job on account {account_id}")
        
        try:
            async with lock:
                yield
        finally:
            self._holders[account_id] -= 1
            if not self._holders[account_id]:
                del self._holders[account_id]
                del self._locks[account_id]
