"""Search mode: typed characters edit the query instead of the buffer."""

from __future__ import annotations

from line_editor.commands import Command

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import printable_text
from .normal_mode import KeymapMode


class SearchMode(KeymapMode):
    name = "search"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.bus.emit("search.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.bus.emit("search.end", None)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        char = printable_text(key)
        if char is None:
            return super().handle_unbound(key)
        outcome = self.context.session.execute(Command.search_input(char))
        self.context.bus.emit("search.query", self.context.session.search.query)
        status = "search_match" if outcome.match else "search_miss"
        return ModeResult(consumed=True, status=status)
