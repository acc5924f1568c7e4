"""Cooperative cancellation tokens.

A ``CancellationTokenSource`` owns the right to cancel; the ``CancellationToken``
it hands out is read-only and can be shared with any number of workers.
"""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

CancellationCallback = Callable[[], None]


class Disposable:
    """Handle that removes a registration when disposed."""

    def __init__(self, on_dispose: Callable[[], None] | None = None) -> None:
        self._on_dispose = on_dispose

    def dispose(self) -> None:
        """Remove the registration. Safe to call more than once."""
        if self._on_dispose is not None:
            callback, self._on_dispose = self._on_dispose, None
            callback()


class CancellationToken:
    """Read-only view of a cancellation flag."""

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[CancellationCallback] = []

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    def on_cancellation_requested(self, callback: CancellationCallback) -> Disposable:
        """Register a callback fired once when cancellation is requested.

        If cancellation was already requested the callback runs immediately.

        Returns:
            Disposable that unregisters the callback.
        """
        if self._cancelled:
            callback()
            return Disposable()

        self._callbacks.append(callback)

        def remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return Disposable(remove)

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.warning("Cancellation callback failed: %s", e)


class CancellationTokenSource:
    """Creates and controls a ``CancellationToken``."""

    def __init__(self) -> None:
        self.token = CancellationToken()

    def cancel(self) -> None:
        """Request cancellation. Subsequent calls have no effect."""
        self.token._fire()

    @property
    def is_cancellation_requested(self) -> bool:
        return self.token.is_cancellation_requested


# Token that is never cancelled, for callers without a cancel button.
NONE_TOKEN = CancellationToken()
