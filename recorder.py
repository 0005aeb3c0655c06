"""Microphone input stream adapter."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Optional

from errors import SetupError
from interfaces import FrameConsumer
from models import AudioFrame

try:
    import numpy as np
except Exception:  # pragma: no cover
    np = None  # type: ignore

try:
    import sounddevice as sd
except Exception:  # pragma: no cover
    sd = None  # type: ignore

logger = logging.getLogger(__name__)


class SoundDeviceMicrophone:
    """Capture-only int16 input stream with a single consumer tap."""

    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        chunk_ms: int = 100,
        device: Optional[int] = None,
    ) -> None:
        self.sample_rate = sample_rate
        self.channels = channels
        self.chunk_ms = chunk_ms
        self.device = device
        self._stream: Any = None
        self._consumer: Optional[FrameConsumer] = None
        self._lock = threading.Lock()
        self.delivered_frames = 0

    @property
    def active(self) -> bool:
        return self._stream is not None

    @property
    def blocksize(self) -> int:
        return int(self.sample_rate * (self.chunk_ms / 1000.0))

    def configure(self) -> None:
        if sd is None or np is None:
            raise SetupError("sounddevice is not installed")
        try:
            sd.check_input_settings(
                device=self.device,
                channels=self.channels,
                dtype="int16",
                samplerate=self.sample_rate,
            )
        except Exception as exc:
            raise SetupError(str(exc)) from exc

    def install_tap(self, consumer: FrameConsumer) -> None:
        with self._lock:
            if self._consumer is not None:
                raise SetupError("a consumer is already installed on the input")
            self._consumer = consumer

    def remove_tap(self) -> None:
        with self._lock:
            self._consumer = None

    def start(self) -> None:
        with self._lock:
            if self._stream is not None:
                return
            if sd is None:
                raise SetupError("sounddevice is not installed")
            try:
                stream = sd.InputStream(
                    samplerate=self.sample_rate,
                    channels=self.channels,
                    dtype="int16",
                    blocksize=self.blocksize,
                    device=self.device,
                    callback=self._on_audio,
                )
                stream.start()
            except Exception as exc:
                raise SetupError(str(exc)) from exc
            self._stream = stream
            self.delivered_frames = 0
        logger.debug("Input stream started (%d Hz, %d ms blocks)", self.sample_rate, self.chunk_ms)

    def stop(self) -> None:
        with self._lock:
            stream = self._stream
            self._stream = None
        if stream is None:
            return
        try:
            stream.stop()
            stream.close()
        except Exception:
            logger.exception("Failed to close input stream")
        logger.debug("Input stream stopped after %d frames", self.delivered_frames)

    def _on_audio(self, indata: Any, frames: int, time_info: Any, status: Any) -> None:
        if status:
            logger.debug("Input status: %s", status)
        with self._lock:
            consumer = self._consumer if self._stream is not None else None
        if consumer is None or np is None:
            return
        payload = np.asarray(indata, dtype=np.int16).tobytes()
        frame = AudioFrame(
            pcm16_bytes=payload,
            sample_rate=self.sample_rate,
            channels=self.channels,
            timestamp_ms=int(time.time() * 1000),
        )
        self.delivered_frames += 1
        consumer(frame)
