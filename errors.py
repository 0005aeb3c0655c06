"""Shared error codes, user-facing messages and setup exceptions."""

from __future__ import annotations

AUDIO_SETUP_FAILED = "AUDIO_SETUP_FAILED"
RECOGNIZER_UNAVAILABLE = "RECOGNIZER_UNAVAILABLE"
NETWORK_ERROR = "NETWORK_ERROR"
AUTH_FAILED = "AUTH_FAILED"
ASR_PROTOCOL_ERROR = "ASR_PROTOCOL_ERROR"
EMPTY_TRANSCRIPT = "EMPTY_TRANSCRIPT"
NOTHING_TO_CLEAR = "NOTHING_TO_CLEAR"
CLIPBOARD_UNAVAILABLE = "CLIPBOARD_UNAVAILABLE"

ERROR_MESSAGES = {
    AUDIO_SETUP_FAILED: "Could not configure the microphone.",
    RECOGNIZER_UNAVAILABLE: "Speech recognition is not available.",
    NETWORK_ERROR: "Network failed, please retry.",
    AUTH_FAILED: "API key is invalid.",
    ASR_PROTOCOL_ERROR: "Speech recognition failed.",
    EMPTY_TRANSCRIPT: "There is no text to copy.",
    NOTHING_TO_CLEAR: "There is no text to clear.",
    CLIPBOARD_UNAVAILABLE: "Clipboard is not available.",
}


def user_message(code: str, detail: str = "") -> str:
    base = ERROR_MESSAGES.get(code, ERROR_MESSAGES[ASR_PROTOCOL_ERROR])
    if detail:
        return f"{base} ({detail})"
    return base


class SessionSetupError(RuntimeError):
    """Base class for failures that abort ``RecognitionSession.start``."""

    code = ASR_PROTOCOL_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or ERROR_MESSAGES[self.code])
        self.detail = detail


class SetupError(SessionSetupError):
    """Audio input could not be configured or activated."""

    code = AUDIO_SETUP_FAILED


class RecognizerUnavailable(SessionSetupError):
    """The recognizer cannot be constructed for the configured locale."""

    code = RECOGNIZER_UNAVAILABLE
