from __future__ import annotations

from pathlib import Path
from typing import Any, List, Tuple

from line_editor.adapters.textual import TextualEditorAdapter, TextualUIHooks
from line_editor.adapters.textual.keys import normalize_key_event
from line_editor.adapters.textual.render import render_lines
from line_editor.buffer import Buffer
from line_editor.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from line_editor.modes import ModeBus, ModeContext, NormalMode, SearchMode
from line_editor.modes.mode_manager import ModeManager
from line_editor.runtime import EditorSettings
from line_editor.search import HighlightSpan
from line_editor.session import EditorSession, RenderLine


def make_manager(*lines: str, settings: EditorSettings | None = None) -> ModeManager:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    session = EditorSession(buffer=Buffer.from_lines(lines or ("",)), settings=settings)
    context = ModeContext(session=session, bus=ModeBus(), extras={})
    manager = ModeManager(
        context, keymap_registry=registry, keymap_resolver=resolver, load_defaults=False
    )
    manager.register_mode(NormalMode)
    manager.register_mode(SearchMode)
    return manager


class Recorder:
    def __init__(self) -> None:
        self.frames: List[Tuple[List[RenderLine], Tuple[int, int]]] = []
        self.statuses: List[str] = []
        self.messages: List[str] = []
        self.events: List[Tuple[str, Any]] = []
        self.logs: List[str] = []
        self.quit_requests = 0

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_buffer=lambda lines, cursor: self.frames.append((lines, cursor)),
            update_status=self.statuses.append,
            show_message=self.messages.append,
            handle_event=lambda name, payload: self.events.append((name, payload)),
            request_quit=self._quit,
            log=self.logs.append,
        )

    def _quit(self) -> None:
        self.quit_requests += 1


def test_adapter_renders_on_start_and_after_keys() -> None:
    recorder = Recorder()
    adapter = TextualEditorAdapter(make_manager("abc"), recorder.hooks())

    assert len(recorder.frames) == 1
    adapter.handle_textual_key("x", text="x")

    lines, cursor = recorder.frames[-1]
    assert [line.text for line in lines] == ["xabc"]
    assert cursor == (0, 1)
    assert "(modified)" in recorder.statuses[-1]
    assert any(entry.startswith("key ->") for entry in recorder.logs)


def test_adapter_saves_through_shell(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    recorder = Recorder()
    manager = make_manager(
        "first", "second", settings=EditorSettings(default_filename=str(target))
    )
    adapter = TextualEditorAdapter(manager, recorder.hooks())
    adapter.handle_textual_key("!", text="!")

    adapter.handle_textual_key("s", modifiers=("ctrl",))

    assert target.read_text(encoding="utf-8") == "!first\nsecond"
    assert manager.context.session.dirty is False
    assert manager.context.session.filename == str(target)
    assert recorder.messages[-1] == f"saved {target}"
    assert recorder.events[-1][0] == "file.save"


def test_adapter_reports_save_failure(tmp_path: Path) -> None:
    missing_dir = tmp_path / "missing" / "out.txt"
    recorder = Recorder()
    manager = make_manager(
        "text", settings=EditorSettings(default_filename=str(missing_dir))
    )
    adapter = TextualEditorAdapter(manager, recorder.hooks())

    adapter.handle_textual_key("s", modifiers=("ctrl",))

    assert recorder.messages[-1].startswith("save failed:")
    assert manager.context.session.filename is None


def test_adapter_opens_documents(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("alpha\nbeta\n", encoding="utf-8")
    recorder = Recorder()
    adapter = TextualEditorAdapter(make_manager(), recorder.hooks())

    assert adapter.open_path(path) is True

    lines, _cursor = recorder.frames[-1]
    assert [line.text for line in lines] == ["alpha", "beta"]
    assert recorder.messages[-1] == f"opened {path}"
    assert adapter.session.filename == str(path)

    assert adapter.open_path(tmp_path / "nope.txt") is False
    assert recorder.messages[-1].startswith("open failed:")
    assert adapter.session.filename == str(path)


def test_adapter_search_flow_highlights_current_match() -> None:
    recorder = Recorder()
    adapter = TextualEditorAdapter(make_manager("one two one"), recorder.hooks())

    adapter.handle_textual_key("f", modifiers=("ctrl",))
    for char in "one":
        adapter.handle_textual_key(char, text=char)
    adapter.handle_textual_key("F3")

    lines, cursor = recorder.frames[-1]
    assert cursor == (0, 8)
    assert [(span.start, span.current) for span in lines[0].spans] == [
        (0, False),
        (8, True),
    ]
    assert "Match 2/2" in recorder.statuses[-1]
    names = [name for name, _ in recorder.events]
    assert "search.start" in names
    assert "search.update" in names


def test_adapter_blocked_new_document_shows_message() -> None:
    recorder = Recorder()
    adapter = TextualEditorAdapter(make_manager("draft"), recorder.hooks())
    adapter.handle_textual_key("x", text="x")

    adapter.handle_textual_key("n", modifiers=("ctrl",))
    assert "unsaved changes" in recorder.messages[-1]

    adapter.handle_textual_key("n", modifiers=("ctrl",))
    assert recorder.messages[-1] == "new document"
    assert adapter.session.buffer.lines() == ("",)


def test_adapter_quit_requests_host_exit() -> None:
    recorder = Recorder()
    adapter = TextualEditorAdapter(make_manager(), recorder.hooks())

    adapter.handle_textual_key("q", modifiers=("ctrl",))

    assert recorder.quit_requests == 1


def test_set_visible_height_scrolls_window() -> None:
    recorder = Recorder()
    manager = make_manager(*[f"line {index}" for index in range(20)])
    adapter = TextualEditorAdapter(manager, recorder.hooks())
    manager.context.session.buffer.move_cursor(15, 0)

    adapter.set_visible_height(5)

    lines, _cursor = recorder.frames[-1]
    assert [line.index for line in lines] == [11, 12, 13, 14, 15]


def test_normalize_key_event() -> None:
    assert normalize_key_event("a", "a") == ("a", "a", ())
    assert normalize_key_event("ctrl+f", "\x06") == ("f", None, ("ctrl",))
    assert normalize_key_event("shift+f3", None) == ("f3", None, ("shift",))
    assert normalize_key_event("escape", "\x1b") == ("ESC", None, ())
    assert normalize_key_event("enter", "\r") == ("ENTER", None, ())
    assert normalize_key_event("pagedown", None) == ("PAGEDOWN", None, ())
    assert normalize_key_event("space", " ") == (" ", " ", ())
    assert normalize_key_event("", None) is None


def test_render_lines_styles_matches_and_cursor() -> None:
    lines = [
        RenderLine(0, "abc", (HighlightSpan(0, 0, 1, False),)),
        RenderLine(1, "de", (HighlightSpan(1, 0, 2, True),)),
    ]

    text = render_lines(lines, (1, 2))

    assert text.plain == "abc\nde "
    assert len(text.spans) == 3
