"""Global hotkey that toggles recording, based on pynput."""

from __future__ import annotations

import threading
from typing import Callable, Optional

try:
    from pynput import keyboard
except Exception:  # pragma: no cover
    keyboard = None  # type: ignore


class GlobalHotkeyToggle:
    """Calls ``on_toggle`` once per press; auto-repeat while held is ignored."""

    def __init__(self, hotkey_name: str = "Key.f9") -> None:
        self._hotkey_name = hotkey_name
        self._listener: Optional[object] = None
        self._pressed = False
        self._lock = threading.Lock()

    @property
    def hotkey_name(self) -> str:
        return self._hotkey_name

    def handle_press(self, key: object, on_toggle: Callable[[], None]) -> None:
        if str(key) != self._hotkey_name:
            return
        with self._lock:
            if self._pressed:
                return
            self._pressed = True
        on_toggle()

    def handle_release(self, key: object) -> None:
        if str(key) != self._hotkey_name:
            return
        with self._lock:
            self._pressed = False

    def start(self, on_toggle: Callable[[], None]) -> None:
        if keyboard is None:
            raise RuntimeError("pynput is not installed")
        self._listener = keyboard.Listener(
            on_press=lambda key: self.handle_press(key, on_toggle),
            on_release=self.handle_release,
        )
        self._listener.start()

    def stop(self) -> None:
        listener = self._listener
        if listener is not None:
            listener.stop()
            self._listener = None
