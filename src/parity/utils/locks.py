"""Per-launch locking for deploy lifecycle transitions.

Confirm, recover and status sync all read a launch, check the chain and
then write the launch back. Two of them racing on the same launch could
both pass the status check, so they run under the launch's lock.
"""

import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Global lock registry: launch_id -> asyncio.Lock
_launch_locks: dict[str, asyncio.Lock] = {}


def get_launch_lock(launch_id: str) -> asyncio.Lock:
    """Get or create the lock for a launch."""
    lock = _launch_locks.get(launch_id)
    if lock is None:
        lock = _launch_locks.setdefault(launch_id, asyncio.Lock())
    return lock


class LockTimeoutError(Exception):
    """Raised when a lock cannot be acquired within the timeout period."""

    pass


class LaunchLock:
    """Async context manager giving exclusive access to one launch.

    Example:
        async with LaunchLock(launch_id, operation="confirm_deploy"):
            launch = await repo.get_launch_for_owner(launch_id, user_id)
            ...
    """

    def __init__(
        self,
        launch_id: str,
        timeout: Optional[float] = 30.0,
        operation: str = "launch_operation",
    ):
        """Initialize the lock.

        Args:
            launch_id: Launch ID
            timeout: Maximum time to wait for lock (None = wait forever)
            operation: Description of the operation for logging
        """
        self.launch_id = launch_id
        self.timeout = timeout
        self.operation = operation
        self._lock: Optional[asyncio.Lock] = None
        self._acquired = False

    async def __aenter__(self) -> "LaunchLock":
        self._lock = get_launch_lock(self.launch_id)

        try:
            if self.timeout:
                await asyncio.wait_for(self._lock.acquire(), timeout=self.timeout)
            else:
                await self._lock.acquire()
        except asyncio.TimeoutError:
            logger.warning(
                f"Lock timeout for launch {self.launch_id} after {self.timeout}s: {self.operation}"
            )
            raise LockTimeoutError(
                f"Launch {self.launch_id} is busy, try again shortly"
            ) from None

        self._acquired = True
        logger.debug(f"Lock acquired for launch {self.launch_id}: {self.operation}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._acquired and self._lock:
            self._lock.release()
            self._acquired = False
            logger.debug(f"Lock released for launch {self.launch_id}: {self.operation}")
        return False


def release_launch_lock(launch_id: str) -> None:
    """Forget the lock of a deleted launch if nobody holds it."""
    lock = _launch_locks.get(launch_id)
    if lock is not None and not lock.locked():
        del _launch_locks[launch_id]


def clear_launch_locks() -> None:
    """Clear all launch locks (useful for testing)."""
    _launch_locks.clear()
