"""Utility modules for Parity."""

from parity.utils.locks import LaunchLock, LockTimeoutError, get_launch_lock

__all__ = ["LaunchLock", "LockTimeoutError", "get_launch_lock"]
