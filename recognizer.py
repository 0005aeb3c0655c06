"""Streaming ASR adapter using DashScope real-time recognition.

Audio frames are pushed into a ``RecognitionRequest`` by the microphone tap.
A worker thread forwards them, in order, to ``dashscope.audio.asr.Recognition``
and calls ``stop()`` once the request receives end-of-audio.  The service
reports one sentence at a time; the task folds finished sentences and the
sentence in progress into a single whole-utterance hypothesis, so every
partial event carries the complete text so far.
"""

from __future__ import annotations

import logging
import os
import threading
from queue import Empty, Queue
from typing import Any, List, Optional

from errors import ASR_PROTOCOL_ERROR, AUTH_FAILED, NETWORK_ERROR, RecognizerUnavailable
from interfaces import EventCallback
from models import AudioFrame, RecognitionEvent, RecognitionKind

try:
    import dashscope
    from dashscope.audio.asr import Recognition, RecognitionCallback, RecognitionResult
except Exception:  # pragma: no cover
    dashscope = None  # type: ignore
    Recognition = None  # type: ignore
    RecognitionCallback = object  # type: ignore
    RecognitionResult = None  # type: ignore

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "paraformer-realtime-v2"
DEFAULT_LOCALE = "es-ES"


def language_hint(locale: str) -> str:
    """``es-ES`` / ``es_ES`` -> ``es``."""
    return locale.replace("_", "-").split("-")[0].lower()


class RecognitionRequest:
    """Ordered, thread-safe buffer of audio frames for one recognition task."""

    def __init__(self, partial_results: bool = True, sample_rate: int = 16000) -> None:
        self.partial_results = partial_results
        self.sample_rate = sample_rate
        self._frames: Queue[AudioFrame | None] = Queue()
        self._ended = threading.Event()

    @property
    def ended(self) -> bool:
        return self._ended.is_set()

    def append(self, frame: AudioFrame) -> None:
        if self._ended.is_set():
            return
        self._frames.put(frame)

    def end_audio(self) -> None:
        if self._ended.is_set():
            return
        self._ended.set()
        self._frames.put(None)

    def next_frame(self, timeout: float) -> AudioFrame | None:
        """Block for the next frame; ``None`` marks end-of-audio."""
        return self._frames.get(timeout=timeout)


class DashscopeSpeechRecognizer:
    def __init__(
        self,
        api_key: str = "",
        locale: str = DEFAULT_LOCALE,
        model: str = DEFAULT_MODEL,
    ) -> None:
        self._api_key = api_key
        self._locale = locale
        self._model = model

    @property
    def locale(self) -> str:
        return self._locale

    def recognition_task(
        self,
        request: RecognitionRequest,
        on_event: EventCallback,
    ) -> "DashscopeRecognitionTask":
        if Recognition is None or dashscope is None:
            raise RecognizerUnavailable("dashscope is not installed")
        api_key = self._api_key or os.getenv("DASHSCOPE_API_KEY", "")
        if not api_key:
            raise RecognizerUnavailable("No API key configured")
        if not language_hint(self._locale):
            raise RecognizerUnavailable(f"unsupported locale {self._locale!r}")
        dashscope.api_key = api_key
        task = DashscopeRecognitionTask(
            request=request,
            on_event=on_event,
            model=self._model,
            language=language_hint(self._locale),
        )
        task.start()
        logger.info("Recognition task opened (model=%s, locale=%s)", self._model, self._locale)
        return task


class _TaskCallback(RecognitionCallback):
    """Bridges DashScope callbacks back to the owning task."""

    def __init__(self, task: "DashscopeRecognitionTask") -> None:
        super().__init__()
        self._task = task

    def on_open(self) -> None:
        logger.debug("Recognition stream opened")

    def on_close(self) -> None:
        logger.debug("Recognition stream closed")

    def on_event(self, result: Any) -> None:
        sentence = result.get_sentence()
        if isinstance(sentence, dict):
            self._task.on_sentence(
                str(sentence.get("text", "")),
                bool(RecognitionResult.is_sentence_end(sentence)),
            )

    def on_complete(self) -> None:
        self._task.on_complete()

    def on_error(self, result: Any) -> None:
        message = str(getattr(result, "message", "") or result)
        self._task.on_failure(RuntimeError(message))


class DashscopeRecognitionTask:
    def __init__(
        self,
        request: RecognitionRequest,
        on_event: EventCallback,
        model: str = DEFAULT_MODEL,
        language: str = "es",
        poll_timeout_s: float = 0.2,
    ) -> None:
        self._request = request
        self._on_event = on_event
        self._model = model
        self._language = language
        self._poll_timeout_s = poll_timeout_s
        self._cancelled = threading.Event()
        self._emit_lock = threading.Lock()
        self._terminated = False
        self._sentences: List[str] = []
        self._current = ""
        self._thread: Optional[threading.Thread] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def hypothesis(self) -> str:
        parts = [s for s in self._sentences if s]
        if self._current:
            parts.append(self._current)
        return " ".join(parts)

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._thread = threading.Thread(target=self._worker, daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        """Stop delivering events immediately; the worker winds down on its own."""
        self._cancelled.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    # ------------------------------------------------------------------
    # Callbacks from the DashScope thread
    # ------------------------------------------------------------------

    def on_sentence(self, text: str, sentence_end: bool) -> None:
        with self._emit_lock:
            if sentence_end:
                self._sentences.append(text.strip())
                self._current = ""
            else:
                self._current = text.strip()
            hypothesis = self.hypothesis
        if hypothesis and self._request.partial_results:
            self._emit(RecognitionEvent(kind=RecognitionKind.PARTIAL.value, text=hypothesis))

    def on_complete(self) -> None:
        self._emit(
            RecognitionEvent(kind=RecognitionKind.FINAL.value, text=self.hypothesis),
            terminal=True,
        )

    def on_failure(self, exc: Exception) -> None:
        self._emit(_to_error_event(exc), terminal=True)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _emit(self, event: RecognitionEvent, terminal: bool = False) -> None:
        with self._emit_lock:
            if self._terminated or self._cancelled.is_set():
                return
            if terminal:
                self._terminated = True
            self._on_event(event)

    def _worker(self) -> None:
        """Forward frames until end-of-audio or cancel, then close the stream."""
        try:
            recognition = Recognition(
                model=self._model,
                callback=_TaskCallback(self),
                format="pcm",
                sample_rate=self._request.sample_rate,
                language_hints=[self._language],
            )
            recognition.start()
        except Exception as exc:
            logger.warning("Could not open recognition stream: %s", exc)
            self.on_failure(exc)
            return

        try:
            while not self._cancelled.is_set():
                try:
                    frame = self._request.next_frame(timeout=self._poll_timeout_s)
                except Empty:
                    continue
                if frame is None:
                    break
                recognition.send_audio_frame(frame.pcm16_bytes)
        except Exception as exc:
            logger.warning("Sending audio failed: %s", exc)
            self.on_failure(exc)
        finally:
            try:
                recognition.stop()
            except Exception as exc:
                self.on_failure(exc)


def _to_error_event(exc: Exception) -> RecognitionEvent:
    """Map an SDK/network exception to a standard error event."""
    message = str(exc)
    low = message.lower()
    if "401" in low or "auth" in low or "api key" in low or "apikey" in low:
        code = AUTH_FAILED
        retryable = False
    elif "timeout" in low or "network" in low or "connection" in low:
        code = NETWORK_ERROR
        retryable = True
    else:
        code = ASR_PROTOCOL_ERROR
        retryable = True
    return RecognitionEvent(
        kind=RecognitionKind.ERROR.value,
        code=code,
        message=message,
        retryable=retryable,
    )
