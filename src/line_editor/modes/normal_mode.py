"""Normal mode: navigation and buffer edits."""

from __future__ import annotations

from line_editor.commands import Command
from line_editor.keymaps.resolver import ResolutionMatch
from line_editor.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, printable_text, require_keymap_resolver


class KeymapMode(Mode):
    """Resolves each key against the mode's bindings before falling back."""

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"line_editor.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, key_to_token(key))
        if result.status == "match" and result.match:
            return self._execute_match(result.match)
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


class NormalMode(KeymapMode):
    name = "normal"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        char = printable_text(key)
        if char is None:
            return super().handle_unbound(key)
        self.context.session.execute(Command.insert_char(char))
        self.context.bus.emit("buffer.changed", self.context.session.buffer.version)
        return ModeResult(consumed=True, status="insert_char")
