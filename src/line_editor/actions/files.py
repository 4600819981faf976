"""Document lifecycle actions.

The core never touches the filesystem: these actions publish bus events
that the host shell answers (see ``line_editor.adapters.textual``).
"""

from __future__ import annotations

from typing import MutableMapping, cast

from line_editor.keymaps.resolver import ResolutionMatch
from line_editor.modes.base_mode import ModeContext, ModeResult


def _file_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(MutableMapping[str, object], context.extras.setdefault("file_state", {}))
    state.setdefault("confirm_new", False)
    return state


def save_document(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    session = context.session
    payload = {"path": session.save_target(), "text": session.to_text()}
    context.bus.emit("file.save", payload)
    return ModeResult(consumed=True, status="file_save", message=str(payload["path"]))


def new_document(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Start a new document; a second press discards unsaved changes."""

    del match
    state = _file_state(context)
    force = bool(state["confirm_new"])
    if not context.session.new_document(force=force):
        state["confirm_new"] = True
        return ModeResult(
            consumed=True,
            status="file_new_blocked",
            message="unsaved changes: press again to discard",
        )
    state["confirm_new"] = False
    context.bus.emit("file.new", None)
    return ModeResult(consumed=True, switch_to="normal", status="file_new")


def quit_editor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.bus.emit("app.quit", {"dirty": context.session.dirty})
    return ModeResult(consumed=True, status="quit")


__all__ = ["save_document", "new_document", "quit_editor"]
