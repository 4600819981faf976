"""Executable Textual app that hosts the line editor."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_editor.adapters.textual.app"
    ) from exc

from line_editor.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from line_editor.modes import ModeBus, ModeContext, NormalMode, SearchMode
from line_editor.modes.mode_manager import ModeManager
from line_editor.runtime import EditorSettings, telemetry
from line_editor.session import EditorSession, RenderLine

from .controller import TextualEditorAdapter, TextualUIHooks
from .keys import normalize_key_event
from .render import render_lines


def create_default_manager(session: Optional[EditorSession] = None) -> ModeManager:
    """Build a ModeManager with both modes and the default keymaps."""

    registry = KeymapRegistry(logger_name="line_editor.keymaps")
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry, logger_name="line_editor.keymaps")
    context = ModeContext(
        session=session or EditorSession(),
        bus=ModeBus(),
        extras={},
    )
    manager = ModeManager(
        context,
        keymap_registry=registry,
        keymap_resolver=resolver,
        load_defaults=False,
    )
    manager.register_mode(NormalMode)
    manager.register_mode(SearchMode)
    return manager


@dataclass
class UIState:
    status_text: str = ""
    message_text: str = ""


class LineEditorApp(App[None]):
    """Full-screen editor: buffer view, status line and message line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#message-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]

    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        *,
        path: Optional[str] = None,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._path = path
        self.settings = settings or EditorSettings.from_env()
        self.manager: ModeManager | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._buffer_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        session = EditorSession(settings=self.settings)
        self.manager = create_default_manager(session)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_message=self._show_message,
            request_quit=self.exit,
        )
        if self._status_widget:
            rows = self.settings.status_rows
            self._status_widget.display = rows > 0
            self._status_widget.styles.height = max(1, rows)
        self.adapter = TextualEditorAdapter(self.manager, hooks)
        if self._path:
            self.adapter.open_path(self._path)
        self._sync_height()

    def on_resize(self, event: events.Resize) -> None:
        del event
        self._sync_height()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_key_event(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        result = self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if result.consumed:
            event.stop()
            event.prevent_default()

    def _sync_height(self) -> None:
        if not self.adapter or not self._buffer_widget:
            return
        height = self._buffer_widget.size.height
        if height > 0:
            self.adapter.set_visible_height(height)

    def _update_buffer(self, lines: List[RenderLine], cursor: Tuple[int, int]) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_lines(lines, cursor))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_message(self, message: str) -> None:
        self._state.message_text = message
        if self._message_widget:
            self._message_widget.update(message)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text document in the terminal.")
    parser.add_argument("path", nargs="?", help="File to open (.txt, .docx or .doc)")
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        default=None,
        help="Start searches in case-sensitive mode",
    )
    parser.add_argument(
        "--default-filename",
        default=None,
        help="File name used when saving an unnamed document",
    )
    parser.add_argument(
        "--log-preset",
        default=os.environ.get(f"{telemetry.ENV_PREFIX}LOG_PRESET", "quiet"),
        choices=tuple(telemetry.PRESETS),
        help="telelog preset (default: quiet, keeps the terminal clean)",
    )
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> EditorSettings:
    base = EditorSettings.from_env()
    return EditorSettings(
        default_filename=args.default_filename or base.default_filename,
        case_sensitive=(
            base.case_sensitive if args.case_sensitive is None else args.case_sensitive
        ),
        status_rows=base.status_rows,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = LineEditorApp(path=args.path, settings=_settings_from_args(args))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
