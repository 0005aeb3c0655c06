"""Copy / clear / record-toggle actions behind the window buttons."""

from __future__ import annotations

import logging

from errors import CLIPBOARD_UNAVAILABLE, EMPTY_TRANSCRIPT, ERROR_MESSAGES, NOTHING_TO_CLEAR
from interfaces import Clipboard
from models import CopyResult, SessionState
from notifications import NotificationCenter
from recognition_session import RecognitionSession

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore

logger = logging.getLogger(__name__)

COPIED_MESSAGE = "Text copied to clipboard"
CLEARED_MESSAGE = "Text cleared"


class PyperclipClipboard:
    def copy(self, text: str) -> CopyResult:
        if pyperclip is None:
            return CopyResult(success=False, reason="pyperclip is not installed")
        try:
            pyperclip.copy(text)
        except Exception as exc:
            return CopyResult(success=False, reason=str(exc))
        return CopyResult(success=True, reason="ok")


class TranscriptActions:
    def __init__(
        self,
        session: RecognitionSession,
        clipboard: Clipboard,
        notifications: NotificationCenter,
    ) -> None:
        self._session = session
        self._clipboard = clipboard
        self._notifications = notifications

    def toggle_recording(self) -> None:
        if self._session.state in (SessionState.STARTING, SessionState.RECORDING):
            self._session.stop()
        else:
            self._session.start()

    def copy(self) -> CopyResult:
        text = self._session.transcript
        if not text.strip():
            self._notifications.show(ERROR_MESSAGES[EMPTY_TRANSCRIPT])
            return CopyResult(success=False, reason=EMPTY_TRANSCRIPT)
        result = self._clipboard.copy(text)
        if result.success:
            self._notifications.show(COPIED_MESSAGE)
        else:
            logger.warning("Copy failed: %s", result.reason)
            self._notifications.show(ERROR_MESSAGES[CLIPBOARD_UNAVAILABLE])
        return result

    def clear(self) -> bool:
        if not self._session.transcript.strip():
            self._notifications.show(ERROR_MESSAGES[NOTHING_TO_CLEAR])
            return False
        self._session.clear_transcript()
        self._notifications.show(CLEARED_MESSAGE)
        return True
