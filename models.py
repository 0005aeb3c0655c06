"""Core data models for the app."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SessionState(str, Enum):
    IDLE = "IDLE"
    STARTING = "STARTING"
    RECORDING = "RECORDING"
    STOPPING = "STOPPING"
    FINISHED = "FINISHED"
    FAILED = "FAILED"


class RecognitionKind(str, Enum):
    PARTIAL = "partial"
    FINAL = "final"
    ERROR = "error"


@dataclass
class AudioFrame:
    pcm16_bytes: bytes
    sample_rate: int = 16000
    channels: int = 1
    timestamp_ms: int = 0


@dataclass
class RecognitionEvent:
    kind: str
    text: str = ""
    code: str = ""
    message: str = ""
    retryable: bool = False

    @property
    def is_final(self) -> bool:
        return self.kind == RecognitionKind.FINAL.value

    @property
    def is_error(self) -> bool:
        return self.kind == RecognitionKind.ERROR.value


@dataclass(frozen=True)
class Notification:
    text: str
    visible_duration_ms: int = 1500


@dataclass
class CopyResult:
    success: bool
    reason: str
