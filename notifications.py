"""Transient status messages (snackbar style)."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from interfaces import NotificationView
from models import Notification

logger = logging.getLogger(__name__)

DEFAULT_VISIBLE_MS = 1500

Scheduler = Callable[[int, Callable[[], None]], None]


class NotificationCenter:
    """Shows one notification at a time and hides it when it expires.

    ``schedule(delay_ms, fn)`` must run ``fn`` on the UI context after the
    delay; the Qt app passes ``QTimer.singleShot``.
    """

    def __init__(
        self,
        view: NotificationView,
        schedule: Scheduler,
        default_duration_ms: int = DEFAULT_VISIBLE_MS,
    ) -> None:
        self._view = view
        self._schedule = schedule
        self._default_duration_ms = default_duration_ms
        self._current: Optional[Notification] = None
        self._token = 0

    @property
    def current(self) -> Optional[Notification]:
        return self._current

    def show(self, text: str, duration_ms: Optional[int] = None) -> Notification:
        notification = Notification(
            text=text,
            visible_duration_ms=duration_ms or self._default_duration_ms,
        )
        self._token += 1
        token = self._token
        self._current = notification
        self._view.show_notification(notification)
        logger.debug("Notification shown: %s", text)
        self._schedule(notification.visible_duration_ms, lambda: self._expire(token))
        return notification

    def dismiss(self) -> None:
        if self._current is None:
            return
        self._token += 1
        self._current = None
        self._view.hide_notification()

    def _expire(self, token: int) -> None:
        # a newer notification owns the view
        if token != self._token:
            return
        self._current = None
        self._view.hide_notification()
