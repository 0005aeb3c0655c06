"""Simple JSON-based config store."""

from __future__ import annotations

import json
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "live_dictation"

DEFAULTS = {
    "api_key": "",
    "locale": "es-ES",
    "model": "paraformer-realtime-v2",
    "hotkey": "Key.f9",
    "log_level": "INFO",
}


class JsonConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or CONFIG_DIR / "config.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def get_api_key(self) -> str:
        return self._get("api_key")

    def set_api_key(self, key: str) -> None:
        self._set("api_key", key)

    def get_locale(self) -> str:
        return self._get("locale")

    def set_locale(self, locale: str) -> None:
        self._set("locale", locale)

    def get_model(self) -> str:
        return self._get("model")

    def get_hotkey(self) -> str:
        return self._get("hotkey")

    def set_hotkey(self, hotkey: str) -> None:
        self._set("hotkey", hotkey)

    def get_log_level(self) -> str:
        return self._get("log_level")

    def _get(self, key: str) -> str:
        data = self._read_all()
        value = data.get(key) or DEFAULTS[key]
        return str(value)

    def _set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
