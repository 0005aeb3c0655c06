from __future__ import annotations

import pytest

import hotkey
from hotkey import GlobalHotkeyToggle


def test_press_toggles_once_until_release() -> None:
    toggles: list[int] = []
    toggle = GlobalHotkeyToggle(hotkey_name="Key.f9")

    toggle.handle_press("Key.f9", lambda: toggles.append(1))
    toggle.handle_press("Key.f9", lambda: toggles.append(1))  # auto-repeat
    toggle.handle_release("Key.f9")
    toggle.handle_press("Key.f9", lambda: toggles.append(1))

    assert len(toggles) == 2


def test_other_keys_are_ignored() -> None:
    toggles: list[int] = []
    toggle = GlobalHotkeyToggle(hotkey_name="Key.f9")

    toggle.handle_press("Key.f8", lambda: toggles.append(1))

    assert toggles == []


def test_start_requires_pynput(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(hotkey, "keyboard", None)

    with pytest.raises(RuntimeError, match="pynput is not installed"):
        GlobalHotkeyToggle().start(lambda: None)
