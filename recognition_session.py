"""State-machine based recognition session.

One ``RecognitionSession`` owns at most one microphone tap and one recognizer
task at a time.  ``start``/``stop``/``cancel`` are called on the UI context;
recognizer results arrive on a background thread and are handed over through
the dispatcher before they touch ``transcript`` or ``state``.
"""

from __future__ import annotations

import logging
from typing import Optional

from errors import ASR_PROTOCOL_ERROR, SessionSetupError, SetupError, user_message
from interfaces import Dispatcher, Microphone, RecognitionTask, SpeechRecognizer, UISink
from models import RecognitionEvent, SessionState
from recognizer import RecognitionRequest

logger = logging.getLogger(__name__)

_ACTIVE_STATES = (SessionState.STARTING, SessionState.RECORDING, SessionState.STOPPING)


class RecognitionSession:
    def __init__(
        self,
        microphone: Microphone,
        recognizer: SpeechRecognizer,
        sink: UISink,
        dispatcher: Dispatcher,
    ) -> None:
        self._microphone = microphone
        self._recognizer = recognizer
        self._sink = sink
        self._dispatcher = dispatcher

        self._state = SessionState.IDLE
        self._transcript = ""
        self._generation = 0
        self._request: Optional[RecognitionRequest] = None
        self._task: Optional[RecognitionTask] = None
        self._tap_installed = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def transcript(self) -> str:
        return self._transcript

    @property
    def is_active(self) -> bool:
        return self._state in _ACTIVE_STATES

    def start(self) -> None:
        if self._task is not None or self._tap_installed or self._microphone.active:
            logger.info("Restart requested while a session is active, releasing it first")
            self._release()

        self._generation += 1
        generation = self._generation
        self._transition(SessionState.STARTING)

        try:
            self._microphone.configure()
        except SessionSetupError as exc:
            self._abort_start(exc)
            return

        request = RecognitionRequest(
            partial_results=True,
            sample_rate=self._microphone.sample_rate,
        )
        try:
            self._task = self._recognizer.recognition_task(
                request,
                lambda event: self._on_recognition_event(generation, event),
            )
        except SessionSetupError as exc:
            self._abort_start(exc)
            return
        self._request = request

        try:
            self._microphone.install_tap(request.append)
            self._tap_installed = True
            self._microphone.start()
        except SessionSetupError as exc:
            self._abort_start(exc)
            return
        except Exception as exc:
            self._abort_start(SetupError(str(exc)))
            return

        self._transition(SessionState.RECORDING)
        logger.info("Recording started (locale=%s)", self._recognizer.locale)

    def stop(self) -> None:
        """Stop capturing and ask the recognizer to finalize.

        The task is left running so a final result that is still in flight
        gets applied; handles are released when it arrives.
        """
        if self._state not in (SessionState.STARTING, SessionState.RECORDING):
            return
        self._safe_stop_microphone()
        if self._request is not None:
            self._request.end_audio()
        self._transition(SessionState.STOPPING)
        logger.info("Recording stopped, awaiting final result")

    def cancel(self, reason: str = "") -> None:
        """Drop the current attempt without waiting for a final result."""
        if self._task is None and not self._tap_installed and not self._microphone.active:
            return
        logger.info("Session cancelled: %s", reason or "no reason given")
        self._release()
        self._generation += 1
        self._transition(SessionState.IDLE)

    def replace_recognizer(self, recognizer: SpeechRecognizer) -> None:
        """Use ``recognizer`` from the next ``start()`` on."""
        self._recognizer = recognizer

    def clear_transcript(self) -> None:
        if not self._transcript:
            return
        self._transcript = ""
        self._sink.on_transcript_changed("")

    # ------------------------------------------------------------------
    # Recognizer results
    # ------------------------------------------------------------------

    def _on_recognition_event(self, generation: int, event: RecognitionEvent) -> None:
        # Called on the recognizer's thread.
        self._dispatcher.post(lambda: self._apply_event(generation, event))

    def _apply_event(self, generation: int, event: RecognitionEvent) -> None:
        if generation != self._generation or self._task is None:
            logger.debug("Dropping %s event from a superseded task", event.kind)
            return

        if event.is_error:
            logger.warning("Recognition error %s: %s", event.code, event.message)
            self._release()
            self._transition(SessionState.FAILED)
            self._sink.on_error(user_message(event.code or ASR_PROTOCOL_ERROR, event.message))
            return

        if event.text:
            self._transcript = event.text
            self._sink.on_transcript_changed(event.text)

        if event.is_final:
            self._release()
            self._transition(SessionState.FINISHED)
            logger.info("Recognition finished (%d chars)", len(self._transcript))

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def _abort_start(self, exc: SessionSetupError) -> None:
        logger.error("Could not start session: %s", exc)
        self._release()
        self._transition(SessionState.FAILED)
        self._sink.on_error(user_message(exc.code, exc.detail))

    def _release(self) -> None:
        self._safe_stop_microphone()
        if self._tap_installed:
            try:
                self._microphone.remove_tap()
            except Exception:  # pragma: no cover - defensive
                logger.exception("Failed to remove microphone tap")
            self._tap_installed = False
        request, self._request = self._request, None
        if request is not None:
            request.end_audio()
        task, self._task = self._task, None
        if task is not None:
            try:
                task.cancel()
            except Exception:  # pragma: no cover - defensive
                logger.exception("Failed to cancel recognition task")

    def _safe_stop_microphone(self) -> None:
        try:
            self._microphone.stop()
        except Exception:  # pragma: no cover - defensive
            logger.exception("Failed to stop microphone")

    def _transition(self, to_state: SessionState) -> None:
        if self._state == to_state:
            return
        logger.debug("Session %s -> %s", self._state.value, to_state.value)
        self._state = to_state
        self._sink.on_session_state_changed(to_state)
