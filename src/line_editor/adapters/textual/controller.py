"""Minimal Textual adapter that wires ModeManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from line_editor.modes import KeyInput, ModeResult
from line_editor.modes.mode_manager import ModeManager
from line_editor.runtime import telemetry
from line_editor.session import EditorSession, RenderLine
from line_editor.shell import DocumentError, read_document, write_document


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def _default_log() -> Callable[[str], None]:
    return telemetry.get_logger("line_editor.adapter").debug


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[List[RenderLine], Tuple[int, int]], None]
    update_status: Callable[[str], None] = _noop
    show_message: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_quit: Callable[[], None] = _noop
    log: Callable[[str], None] = field(default_factory=_default_log)


class TextualEditorAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface.

    The adapter is the only place where bus requests meet the filesystem:
    ``file.save`` events are written through ``line_editor.shell`` and any
    ``DocumentError`` becomes message text instead of an exception.
    """

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self.message = ""
        self._subscribe_events()
        self.refresh()

    @property
    def session(self) -> EditorSession:
        return self.manager.context.session

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        if result.status == "file_new_blocked" and result.message:
            self._set_message(result.message)
        self.refresh()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def set_visible_height(self, height: int) -> None:
        self.session.recompute_scroll(height)
        self.refresh()

    def open_path(self, path: Union[str, Path]) -> bool:
        """Load ``path`` into the session; failures only update the message."""

        try:
            loaded = read_document(path)
        except DocumentError as exc:
            self._set_message(f"open failed: {exc}")
            return False
        self.session.load(loaded.lines, filename=str(loaded.path))
        self.manager.sync_with_session()
        self._set_message(loaded.warning or f"opened {loaded.path}")
        self.refresh()
        return True

    def save(self, path: Optional[str] = None) -> bool:
        target = path or self.session.save_target()
        try:
            write_document(target, self.session.to_text())
        except DocumentError as exc:
            self._set_message(f"save failed: {exc}")
            return False
        self.session.mark_saved(target)
        self._set_message(f"saved {target}")
        return True

    def refresh(self) -> None:
        session = self.session
        self.hooks.update_buffer(session.visible_lines(), session.cursor)
        self.hooks.update_status(session.status_summary().format())

    def _set_message(self, message: str) -> None:
        self.message = message
        self.hooks.show_message(message)

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in (
            "buffer.changed",
            "search.start",
            "search.end",
            "search.query",
            "search.update",
            "file.save",
            "file.new",
            "app.quit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "file.save":
            path = payload.get("path") if isinstance(payload, dict) else None
            self.save(str(path) if path else None)
        elif name == "file.new":
            self._set_message("new document")
        elif name == "app.quit":
            self.hooks.request_quit()
        elif name in ("search.start", "search.end"):
            self._set_message("")

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        active_mode = self.manager.active_mode
        return {
            "mode": active_mode.name if active_mode else "?",
            "cursor": session.cursor,
            "query": session.search.query,
            "matches": session.search.match_count,
            "buffer_version": session.buffer.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
