from __future__ import annotations

from models import Notification
from notifications import DEFAULT_VISIBLE_MS, NotificationCenter


class FakeView:
    def __init__(self) -> None:
        self.visible: Notification | None = None
        self.hide_calls = 0

    def show_notification(self, notification: Notification) -> None:
        self.visible = notification

    def hide_notification(self) -> None:
        self.visible = None
        self.hide_calls += 1


def _center():  # noqa: ANN202
    view = FakeView()
    timers: list[tuple[int, object]] = []
    center = NotificationCenter(view=view, schedule=lambda ms, fn: timers.append((ms, fn)))
    return center, view, timers


def test_show_uses_default_duration_and_expires() -> None:
    center, view, timers = _center()

    notification = center.show("Text copied to clipboard")

    assert notification.visible_duration_ms == DEFAULT_VISIBLE_MS
    assert view.visible == notification
    assert timers[0][0] == DEFAULT_VISIBLE_MS

    timers[0][1]()

    assert view.visible is None
    assert center.current is None


def test_custom_duration() -> None:
    center, _, timers = _center()

    center.show("Network failed, please retry.", duration_ms=3000)

    assert timers[0][0] == 3000


def test_expiry_of_replaced_notification_keeps_newer_visible() -> None:
    center, view, timers = _center()

    center.show("first")
    second = center.show("second")
    timers[0][1]()  # first one's timer fires late

    assert view.visible == second
    assert view.hide_calls == 0

    timers[1][1]()
    assert view.visible is None


def test_dismiss_hides_and_cancels_pending_expiry() -> None:
    center, view, timers = _center()

    center.show("bye")
    center.dismiss()
    timers[0][1]()

    assert view.hide_calls == 1
    assert center.current is None


def test_dismiss_without_notification_is_noop() -> None:
    center, view, _ = _center()

    center.dismiss()

    assert view.hide_calls == 0
