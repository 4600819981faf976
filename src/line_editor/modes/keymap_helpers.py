"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from line_editor.keymaps.models import make_token
from line_editor.keymaps.resolver import KeymapResolver

from .base_mode import KeyInput, ModeContext


def key_to_token(key: KeyInput) -> str:
    return make_token(key.key, key.modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def printable_text(key: KeyInput) -> str | None:
    """Return the single character a key types, if it types one."""

    if not key.text or len(key.text) != 1:
        return None
    if {mod.lower() for mod in key.modifiers} & {"ctrl", "alt", "meta", "super"}:
        return None
    if key.text == "\t" or key.text.isprintable():
        return key.text
    return None


__all__ = [
    "key_to_token",
    "printable_text",
    "require_keymap_resolver",
]
