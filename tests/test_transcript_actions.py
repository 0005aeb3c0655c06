from __future__ import annotations

from unittest.mock import MagicMock

import transcript_actions
from errors import EMPTY_TRANSCRIPT, ERROR_MESSAGES, NOTHING_TO_CLEAR
from models import CopyResult, Notification, SessionState
from notifications import NotificationCenter
from transcript_actions import CLEARED_MESSAGE, COPIED_MESSAGE, PyperclipClipboard, TranscriptActions


class FakeSession:
    def __init__(self, transcript: str = "", state: SessionState = SessionState.IDLE) -> None:
        self.transcript = transcript
        self.state = state
        self.calls: list[str] = []

    def start(self) -> None:
        self.calls.append("start")

    def stop(self) -> None:
        self.calls.append("stop")

    def clear_transcript(self) -> None:
        self.transcript = ""


class FakeClipboard:
    def __init__(self, success: bool = True) -> None:
        self.success = success
        self.copied: list[str] = []

    def copy(self, text: str) -> CopyResult:
        if not self.success:
            return CopyResult(success=False, reason="no display")
        self.copied.append(text)
        return CopyResult(success=True, reason="ok")


class FakeView:
    def __init__(self) -> None:
        self.shown: list[Notification] = []
        self.hidden = 0

    def show_notification(self, notification: Notification) -> None:
        self.shown.append(notification)

    def hide_notification(self) -> None:
        self.hidden += 1


class FakeScheduler:
    def __init__(self) -> None:
        self.pending: list[tuple[int, object]] = []

    def __call__(self, delay_ms: int, fn) -> None:  # noqa: ANN001
        self.pending.append((delay_ms, fn))

    def fire_all(self) -> None:
        pending, self.pending = self.pending, []
        for _, fn in pending:
            fn()


def _make(transcript: str = "", clipboard: FakeClipboard | None = None):  # noqa: ANN202
    session = FakeSession(transcript)
    clipboard = clipboard or FakeClipboard()
    view = FakeView()
    scheduler = FakeScheduler()
    actions = TranscriptActions(
        session=session,
        clipboard=clipboard,
        notifications=NotificationCenter(view=view, schedule=scheduler),
    )
    return actions, session, clipboard, view, scheduler


def test_copy_with_empty_transcript_shows_validation_and_leaves_clipboard() -> None:
    actions, _, clipboard, view, _ = _make(transcript="")

    result = actions.copy()

    assert result.success is False
    assert result.reason == EMPTY_TRANSCRIPT
    assert clipboard.copied == []
    assert [n.text for n in view.shown] == [ERROR_MESSAGES[EMPTY_TRANSCRIPT]]


def test_copy_puts_transcript_on_clipboard() -> None:
    actions, _, clipboard, view, _ = _make(transcript="Hola mundo")

    result = actions.copy()

    assert result.success is True
    assert clipboard.copied == ["Hola mundo"]
    assert [n.text for n in view.shown] == [COPIED_MESSAGE]


def test_copy_failure_is_reported_as_notification() -> None:
    actions, _, _, view, _ = _make(transcript="Hola", clipboard=FakeClipboard(success=False))

    result = actions.copy()

    assert result.success is False
    assert len(view.shown) == 1


def test_clear_empties_transcript_and_auto_dismisses() -> None:
    actions, session, _, view, scheduler = _make(transcript="Hola")

    assert actions.clear() is True

    assert session.transcript == ""
    assert [n.text for n in view.shown] == [CLEARED_MESSAGE]
    assert len(scheduler.pending) == 1
    delay_ms, _ = scheduler.pending[0]
    assert 1000 <= delay_ms <= 1500

    scheduler.fire_all()
    assert view.hidden == 1


def test_clear_with_empty_transcript_shows_validation() -> None:
    actions, _, _, view, _ = _make(transcript="")

    assert actions.clear() is False
    assert [n.text for n in view.shown] == [ERROR_MESSAGES[NOTHING_TO_CLEAR]]


def test_clear_with_whitespace_transcript_shows_validation() -> None:
    actions, session, _, view, _ = _make(transcript="   ")

    assert actions.clear() is False
    assert session.transcript == "   "
    assert [n.text for n in view.shown] == [ERROR_MESSAGES[NOTHING_TO_CLEAR]]


def test_toggle_recording_starts_and_stops() -> None:
    actions, session, _, _, _ = _make()

    actions.toggle_recording()
    session.state = SessionState.RECORDING
    actions.toggle_recording()

    assert session.calls == ["start", "stop"]


def test_toggle_while_waiting_for_final_restarts() -> None:
    actions, session, _, _, _ = _make()
    session.state = SessionState.STOPPING

    actions.toggle_recording()

    assert session.calls == ["start"]


def test_pyperclip_clipboard_copies(monkeypatch) -> None:  # noqa: ANN001
    fake = MagicMock()
    monkeypatch.setattr(transcript_actions, "pyperclip", fake)

    result = PyperclipClipboard().copy("Hola")

    assert result.success is True
    fake.copy.assert_called_once_with("Hola")


def test_pyperclip_clipboard_missing_dependency(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(transcript_actions, "pyperclip", None)

    result = PyperclipClipboard().copy("Hola")

    assert result.success is False


def test_pyperclip_clipboard_error(monkeypatch) -> None:  # noqa: ANN001
    fake = MagicMock()
    fake.copy.side_effect = RuntimeError("no copy mechanism")
    monkeypatch.setattr(transcript_actions, "pyperclip", fake)

    result = PyperclipClipboard().copy("Hola")

    assert result.success is False
    assert "no copy mechanism" in result.reason
