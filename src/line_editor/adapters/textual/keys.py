"""Translate Textual key names into keymap tokens."""

from __future__ import annotations

from typing import Optional, Tuple

NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
    "page_up": "PAGEUP",
    "page_down": "PAGEDOWN",
}

_CHORD_MODIFIERS = {"ctrl", "alt", "meta", "super"}

NormalizedKey = Tuple[str, Optional[str], Tuple[str, ...]]


def normalize_key_event(key: str, character: Optional[str]) -> Optional[NormalizedKey]:
    """Return ``(key, text, modifiers)`` for a Textual ``events.Key``.

    Textual reports chords as ``"ctrl+f"`` or ``"shift+f3"``; the last part is
    the key and the rest are modifiers. Plain printable characters are passed
    through as typed text without a shift modifier.
    """

    if not key:
        return None
    parts = key.split("+") if key != "+" else ["+"]
    name, modifiers = parts[-1], tuple(part.lower() for part in parts[:-1])
    if name.lower() in NAMED_KEYS:
        return NAMED_KEYS[name.lower()], None, modifiers
    if (
        character
        and len(character) == 1
        and character.isprintable()
        and not _CHORD_MODIFIERS.intersection(modifiers)
    ):
        return character, character, ()
    if name == "space":
        name = " "
    return name, None, modifiers


__all__ = ["normalize_key_event", "NAMED_KEYS"]
