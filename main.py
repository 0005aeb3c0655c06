"""Application entrypoint."""

from __future__ import annotations

import logging
import sys

from config import JsonConfigStore
from hotkey import GlobalHotkeyToggle
from logging_config import setup_logging
from notifications import NotificationCenter
from recognition_session import RecognitionSession
from recognizer import DashscopeSpeechRecognizer
from recorder import SoundDeviceMicrophone
from transcript_actions import PyperclipClipboard, TranscriptActions
from window import ERROR_VISIBLE_MS, QtDispatcher, TranscriptWindow

try:
    from PySide6.QtCore import Qt, QTimer
    from PySide6.QtGui import QAction, QKeySequence
    from PySide6.QtWidgets import QApplication, QInputDialog, QLineEdit
except Exception as exc:  # pragma: no cover
    raise SystemExit(f"PySide6 is required to run the desktop app: {exc}")

logger = logging.getLogger(__name__)


class App:
    def __init__(self) -> None:
        self.config_store = JsonConfigStore()
        setup_logging(self.config_store.get_log_level())

        self.app = QApplication(sys.argv)
        self.window = TranscriptWindow()
        self.dispatcher = QtDispatcher()

        self.session = RecognitionSession(
            microphone=SoundDeviceMicrophone(),
            recognizer=self._make_recognizer(self.config_store.get_api_key()),
            sink=self.window,
            dispatcher=self.dispatcher,
        )
        self.notifications = NotificationCenter(
            view=self.window,
            schedule=lambda delay_ms, fn: QTimer.singleShot(delay_ms, fn),
        )
        self.actions = TranscriptActions(
            session=self.session,
            clipboard=PyperclipClipboard(),
            notifications=self.notifications,
        )
        self.window.bind(
            on_toggle=self.actions.toggle_recording,
            on_copy=self.actions.copy,
            on_clear=self.actions.clear,
            on_error=lambda message: self.notifications.show(message, ERROR_VISIBLE_MS),
        )
        self._setup_shortcuts()

        self.hotkey = GlobalHotkeyToggle(hotkey_name=self.config_store.get_hotkey())

        self.app.applicationStateChanged.connect(self._on_application_state)
        self.app.aboutToQuit.connect(self._on_about_to_quit)

    def _make_recognizer(self, api_key: str) -> DashscopeSpeechRecognizer:
        return DashscopeSpeechRecognizer(
            api_key=api_key,
            locale=self.config_store.get_locale(),
            model=self.config_store.get_model(),
        )

    def _setup_shortcuts(self) -> None:
        api_action = QAction("Set API Key", self.window)
        api_action.setShortcut(QKeySequence("Ctrl+K"))
        api_action.triggered.connect(self._set_api_key)
        self.window.addAction(api_action)

    def _set_api_key(self) -> None:
        value, ok = QInputDialog.getText(
            self.window, "API Key", "DashScope API Key", QLineEdit.Password
        )
        if not ok:
            return
        self.config_store.set_api_key(value)
        self.session.replace_recognizer(self._make_recognizer(value))
        self.notifications.show("API key saved")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _on_hotkey(self) -> None:
        # pynput thread -> GUI thread
        self.dispatcher.post(self.actions.toggle_recording)

    def _on_application_state(self, state: object) -> None:
        if state in (Qt.ApplicationHidden, Qt.ApplicationSuspended):
            self.session.cancel("app moved to background")

    def _on_about_to_quit(self) -> None:
        self.hotkey.stop()
        self.session.cancel("app quit")

    def run(self) -> int:
        try:
            self.hotkey.start(on_toggle=self._on_hotkey)
        except Exception as exc:
            logger.warning("Global hotkey disabled: %s", exc)
            self.notifications.show(f"Hotkey disabled: {exc}", ERROR_VISIBLE_MS)
        self.window.show()
        return self.app.exec()


def main() -> int:
    app = App()
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
