"""
Cancellation and deadline propagation for a single ``process`` call.
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from .errors import OperationCancelled


class RunContext:
    """
    Carries a cancellation flag and an optional deadline through the provider
    call and every tool invocation of one run.

    ``cancel()`` may be called from any thread.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._cancelled = threading.Event()
        self._reason: Optional[str] = None
        self.deadline: Optional[float] = time.monotonic() + timeout if timeout is not None else None

    def cancel(self, reason: str = "operation cancelled") -> None:
        self._reason = reason
        self._cancelled.set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set() or self.expired

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """Raise OperationCancelled if the run must stop."""
        if self._cancelled.is_set():
            raise OperationCancelled(self._reason or "operation cancelled")
        if self.expired:
            raise OperationCancelled("deadline exceeded")


def background() -> RunContext:
    """Return a fresh context that is never cancelled and has no deadline."""
    return RunContext()
