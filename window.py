"""Main window: transcript view, record/copy/clear buttons and snackbar."""

from __future__ import annotations

from typing import Callable, Optional

from models import Notification, SessionState

try:
    from PySide6.QtCore import QObject, Qt, Signal
    from PySide6.QtGui import QTextCursor
    from PySide6.QtWidgets import (
        QHBoxLayout,
        QLabel,
        QPlainTextEdit,
        QPushButton,
        QVBoxLayout,
        QWidget,
    )
except Exception:  # pragma: no cover
    QObject = object  # type: ignore
    Qt = None  # type: ignore
    Signal = None  # type: ignore
    QTextCursor = None  # type: ignore
    QHBoxLayout = object  # type: ignore
    QLabel = object  # type: ignore
    QPlainTextEdit = object  # type: ignore
    QPushButton = object  # type: ignore
    QVBoxLayout = object  # type: ignore
    QWidget = object  # type: ignore

ERROR_VISIBLE_MS = 3000

_STATUS_TEXT = {
    SessionState.IDLE: "Ready",
    SessionState.STARTING: "Starting...",
    SessionState.RECORDING: "Listening...",
    SessionState.STOPPING: "Finishing...",
    SessionState.FINISHED: "Done",
    SessionState.FAILED: "Stopped with an error",
}

_RECORD_STYLE = "color: white; font-weight: bold; padding: 10px; border-radius: 8px; background: %s;"


class QtDispatcher(QObject):
    """Queues callables onto the GUI thread through a signal."""

    if Signal is not None:
        _invoke = Signal(object)

    def __init__(self) -> None:
        if Qt is None:
            raise RuntimeError("PySide6 is not installed")
        super().__init__()
        self._invoke.connect(self._run)

    def post(self, fn: Callable[[], None]) -> None:
        self._invoke.emit(fn)

    def _run(self, fn: Callable[[], None]) -> None:
        fn()


class TranscriptWindow(QWidget):
    def __init__(self) -> None:
        if Qt is None:
            raise RuntimeError("PySide6 is not installed")
        super().__init__()
        self.setWindowTitle("Live Dictation")
        self.resize(480, 640)

        self._status = QLabel(_STATUS_TEXT[SessionState.IDLE])
        self._text = QPlainTextEdit()
        self._text.setReadOnly(True)
        self._text.setPlaceholderText("Recognized text")

        self.record_button = QPushButton()
        self.copy_button = QPushButton("Copy")
        self.clear_button = QPushButton("Clear")

        buttons = QHBoxLayout()
        buttons.addWidget(self.record_button)
        buttons.addWidget(self.copy_button)
        buttons.addWidget(self.clear_button)

        self._snackbar = QLabel("")
        self._snackbar.setAlignment(Qt.AlignCenter)
        self._snackbar.setStyleSheet(
            "color: white; padding: 12px; background: rgba(0,0,0,200); border-radius: 10px;"
        )
        self._snackbar.hide()

        layout = QVBoxLayout()
        layout.addWidget(self._status)
        layout.addWidget(self._text, 1)
        layout.addLayout(buttons)
        layout.addWidget(self._snackbar)
        self.setLayout(layout)

        self._on_error: Optional[Callable[[str], None]] = None
        self._set_recording_look(False)

    def bind(
        self,
        on_toggle: Callable[[], None],
        on_copy: Callable[[], object],
        on_clear: Callable[[], object],
        on_error: Callable[[str], None],
    ) -> None:
        self.record_button.clicked.connect(on_toggle)
        self.copy_button.clicked.connect(on_copy)
        self.clear_button.clicked.connect(on_clear)
        self._on_error = on_error

    # ------------------------------------------------------------------
    # UI sink
    # ------------------------------------------------------------------

    def on_transcript_changed(self, text: str) -> None:
        self._text.setPlainText(text)
        self._text.moveCursor(QTextCursor.End)

    def on_session_state_changed(self, state: SessionState) -> None:
        self._status.setText(_STATUS_TEXT.get(state, state.value))
        self._set_recording_look(state in (SessionState.STARTING, SessionState.RECORDING))

    def on_error(self, message: str) -> None:
        if self._on_error is not None:
            self._on_error(message)

    # ------------------------------------------------------------------
    # Notification view
    # ------------------------------------------------------------------

    def show_notification(self, notification: Notification) -> None:
        self._snackbar.setText(notification.text)
        self._snackbar.show()

    def hide_notification(self) -> None:
        self._snackbar.hide()

    def _set_recording_look(self, recording: bool) -> None:
        if recording:
            self.record_button.setText("Stop")
            self.record_button.setStyleSheet(_RECORD_STYLE % "#E53935")
        else:
            self.record_button.setText("Record")
            self.record_button.setStyleSheet(_RECORD_STYLE % "#43A047")
