"""Protocol interfaces used by RecognitionSession and the UI actions."""

from __future__ import annotations

from typing import Callable, Protocol

from models import AudioFrame, CopyResult, Notification, RecognitionEvent, SessionState

FrameConsumer = Callable[[AudioFrame], None]
EventCallback = Callable[[RecognitionEvent], None]


class Microphone(Protocol):
    sample_rate: int

    @property
    def active(self) -> bool: ...

    def configure(self) -> None: ...

    def install_tap(self, consumer: FrameConsumer) -> None: ...

    def remove_tap(self) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...


class AudioRequest(Protocol):
    def append(self, frame: AudioFrame) -> None: ...

    def end_audio(self) -> None: ...


class RecognitionTask(Protocol):
    def cancel(self) -> None: ...


class SpeechRecognizer(Protocol):
    @property
    def locale(self) -> str: ...

    def recognition_task(
        self,
        request: AudioRequest,
        on_event: EventCallback,
    ) -> RecognitionTask: ...


class UISink(Protocol):
    def on_transcript_changed(self, text: str) -> None: ...

    def on_session_state_changed(self, state: SessionState) -> None: ...

    def on_error(self, message: str) -> None: ...


class Dispatcher(Protocol):
    def post(self, fn: Callable[[], None]) -> None: ...


class Clipboard(Protocol):
    def copy(self, text: str) -> CopyResult: ...


class NotificationView(Protocol):
    def show_notification(self, notification: Notification) -> None: ...

    def hide_notification(self) -> None: ...

