"""Cooperative cancellation checks for long-running searches."""

from __future__ import annotations

import time
from typing import Callable, Optional

CancellationCheck = Callable[[], bool]


def deadline(seconds: Optional[float]) -> Optional[CancellationCheck]:
    """Return a check that turns true once ``seconds`` have elapsed, or None for no limit."""

    if seconds is None:
        return None
    expires_at = time.monotonic() + seconds

    def _expired() -> bool:
        return time.monotonic() >= expires_at

    return _expired


def cancelled(should_stop: Optional[CancellationCheck]) -> bool:
    return should_stop is not None and should_stop()
