"""Cooperative cancellation shared between the controller and the worker."""

import threading


class CancellationToken:
    """A one-way stop signal.

    The controlling thread calls ``cancel()``; the reorganizer polls
    ``cancelled`` between filesystem operations. Once set, it stays set.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request that the run stops at the next checkpoint."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"
