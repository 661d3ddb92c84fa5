"""
Cancellation state for the Similar Image Scanner.

A CancellationToken is created per scan and passed by reference to the
orchestrator and its workers. It is checked between files, never mid-read.
"""

import threading


class ScanCancelled(Exception):
    """Raised when a scan stops because its token was cancelled."""


class CancellationToken:
    """
    Thread-safe, one-way cancellation flag.

    Examples:
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    def __init__(self):
        self._cancel_requested = False
        self._lock = threading.Lock()

    @property
    def cancelled(self) -> bool:
        """Check if cancel has been requested."""
        with self._lock:
            return self._cancel_requested

    def cancel(self):
        """Request cancellation. Idempotent."""
        with self._lock:
            self._cancel_requested = True

    def raise_if_cancelled(self):
        if self.cancelled:
            raise ScanCancelled("Scan cancelled")
