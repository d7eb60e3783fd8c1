"""
core/cancellation.py - Cooperative cancellation for batch computations

Long-running batches (hydrostatic tables, curve generation) check a token
between draft evaluations and stop with a partial result when it is set.
"""

from __future__ import annotations
from typing import Optional
import threading


class CancellationToken:
    """Thread-safe cancel flag backed by threading.Event."""

    def __init__(self):
        self._event = threading.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: str = "cancelled") -> None:
        """Request cancellation."""
        self._reason = reason
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason


def is_cancelled(token: Optional[CancellationToken]) -> bool:
    """True if a token was supplied and has been cancelled."""
    return token is not None and token.is_cancelled
