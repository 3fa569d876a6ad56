"""Cooperative cancellation for definition requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class CancellationToken:
    """Flag a host flips when a pending request is no longer wanted.

    The resolver only reads :attr:`is_cancellation_requested`; callbacks
    registered with :meth:`on_cancel` run once, on the first :meth:`cancel`.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        for callback in self._callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Cancellation callback failed")

    def on_cancel(self, callback: Callable[[], None]) -> None:
        if self._cancelled:
            callback()
            return
        self._callbacks.append(callback)


def is_cancelled(token: object | None) -> bool:
    """Return True when ``token`` reports a cancellation request."""
    return bool(token is not None and getattr(token, "is_cancellation_requested", False))


__all__ = ["CancellationToken", "is_cancelled"]
