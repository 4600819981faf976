"""Textual front-end; ``app`` is imported on demand because it needs textual."""

from .controller import TextualEditorAdapter, TextualUIHooks
from .keys import normalize_key_event

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "normalize_key_event"]
