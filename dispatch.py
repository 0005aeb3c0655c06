"""Handoff primitives that serialize work onto the UI-affinity context.

Recognizer and audio callbacks arrive on background threads.  Anything that
touches session state must go through ``Dispatcher.post`` first.  The Qt app
uses a signal bridge (see ``window.QtDispatcher``); the classes here cover
headless runs and tests.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Deque

logger = logging.getLogger(__name__)


class ImmediateDispatcher:
    """Run posted callables inline, one at a time."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def post(self, fn: Callable[[], None]) -> None:
        with self._lock:
            fn()


class SerialDispatcher:
    """FIFO of callables drained by the thread that owns the UI context."""

    def __init__(self) -> None:
        self._pending: Deque[Callable[[], None]] = deque()
        self._lock = threading.Lock()

    def post(self, fn: Callable[[], None]) -> None:
        with self._lock:
            self._pending.append(fn)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    def drain(self) -> int:
        """Run everything queued so far, in order. Returns the count run."""
        ran = 0
        while True:
            with self._lock:
                if not self._pending:
                    return ran
                fn = self._pending.popleft()
            fn()
            ran += 1
