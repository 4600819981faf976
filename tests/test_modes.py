from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest

from line_editor.buffer import Buffer
from line_editor.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from line_editor.modes import KeyInput, ModeBus, ModeContext, NormalMode, SearchMode
from line_editor.modes.mode_manager import ModeManager
from line_editor.session import EditorMode, EditorSession


def make_manager(*lines: str) -> ModeManager:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    session = EditorSession(buffer=Buffer.from_lines(lines or ("",)))
    context = ModeContext(session=session, bus=ModeBus(), extras={})
    manager = ModeManager(
        context, keymap_registry=registry, keymap_resolver=resolver, load_defaults=False
    )
    manager.register_mode(NormalMode)
    manager.register_mode(SearchMode)
    return manager


def record_events(manager: ModeManager, *names: str) -> List[Tuple[str, Any]]:
    events: List[Tuple[str, Any]] = []
    for name in names:
        manager.context.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )
    return events


def press(manager: ModeManager, key: str, *mods: str, text: Optional[str] = None):
    return manager.handle_key(KeyInput(key=key, modifiers=tuple(mods), text=text))


def type_keys(manager: ModeManager, text: str) -> None:
    for char in text:
        press(manager, char, text=char)


def test_mode_requires_keymap_resolver() -> None:
    context = ModeContext(session=EditorSession(), bus=ModeBus(), extras={})

    with pytest.raises(RuntimeError):
        NormalMode(context)


def test_normal_mode_inserts_printable_text() -> None:
    manager = make_manager()
    events = record_events(manager, "buffer.changed")

    type_keys(manager, "hey")

    assert manager.context.session.buffer.lines() == ("hey",)
    assert len(events) == 3


def test_ctrl_chords_are_not_inserted() -> None:
    manager = make_manager("abc")

    result = press(manager, "x", "ctrl", text="x")

    assert result.consumed is False
    assert manager.context.session.buffer.lines() == ("abc",)


def test_named_keys_use_bindings() -> None:
    manager = make_manager("ab")

    press(manager, "RIGHT")
    press(manager, "ENTER")
    press(manager, "TAB")
    press(manager, "BACKSPACE")

    assert manager.context.session.buffer.lines() == ("a", "b")
    assert manager.context.session.cursor == (1, 0)


def test_ctrl_f_switches_to_search_mode() -> None:
    manager = make_manager("find me, find you")
    events = record_events(manager, "search.start", "search.end", "search.update")

    result = press(manager, "f", "ctrl")
    assert result.switch_to == "search"
    assert manager.active_mode is not None and manager.active_mode.name == "search"

    type_keys(manager, "find")
    press(manager, "F3")
    assert manager.context.session.cursor == (0, 9)
    press(manager, "F3", "shift")
    assert manager.context.session.cursor == (0, 0)

    press(manager, "ESC")
    assert manager.active_mode.name == "normal"
    assert manager.context.session.mode is EditorMode.NORMAL
    names = [name for name, _ in events]
    assert names[0] == "search.start"
    assert names[-1] == "search.end"
    updates = [payload for name, payload in events if name == "search.update"]
    assert updates[-1] == {"query": "find", "matches": 2, "current": 0}


def test_search_mode_typing_does_not_edit_buffer() -> None:
    manager = make_manager("abc")
    press(manager, "f", "ctrl")

    type_keys(manager, "zz")
    press(manager, "BACKSPACE")

    session = manager.context.session
    assert session.search.query == "z"
    assert session.buffer.lines() == ("abc",)
    assert session.buffer.version == 0


def test_toggle_case_action_reports_state() -> None:
    manager = make_manager("Abc abc")
    press(manager, "f", "ctrl")
    type_keys(manager, "abc")

    result = press(manager, "t", "ctrl")

    assert result.message == "case_sensitive"
    assert manager.context.session.search.match_count == 1


def test_manager_follows_session_mode_changes() -> None:
    manager = make_manager("abc")
    press(manager, "f", "ctrl")

    manager.context.session.load(["fresh"], filename="x.txt")
    manager.sync_with_session()

    assert manager.active_mode is not None
    assert manager.active_mode.name == "normal"


def test_save_action_emits_request() -> None:
    manager = make_manager("a", "b")
    events = record_events(manager, "file.save")

    result = press(manager, "s", "ctrl")

    assert result.status == "file_save"
    assert events == [("file.save", {"path": "output.txt", "text": "a\nb"})]


def test_new_document_needs_second_press_when_dirty() -> None:
    manager = make_manager("draft")
    events = record_events(manager, "file.new")
    type_keys(manager, "!")

    first = press(manager, "n", "ctrl")
    assert first.status == "file_new_blocked"
    assert manager.context.session.buffer.lines() == ("!draft",)

    second = press(manager, "n", "ctrl")
    assert second.status == "file_new"
    assert manager.context.session.buffer.lines() == ("",)
    assert events == [("file.new", None)]


def test_new_document_confirmation_expires_after_other_keys() -> None:
    manager = make_manager("draft")
    events = record_events(manager, "file.new")
    type_keys(manager, "!")

    assert press(manager, "n", "ctrl").status == "file_new_blocked"
    type_keys(manager, "more")
    again = press(manager, "n", "ctrl")

    assert again.status == "file_new_blocked"
    assert manager.context.session.buffer.lines() == ("!moredraft",)
    assert events == []

    assert press(manager, "n", "ctrl").status == "file_new"
    assert manager.context.session.buffer.lines() == ("",)


def test_quit_action_reports_dirty_flag() -> None:
    manager = make_manager()
    events = record_events(manager, "app.quit")
    type_keys(manager, "x")

    press(manager, "q", "ctrl")

    assert events == [("app.quit", {"dirty": True})]


def test_switch_to_unknown_mode_raises() -> None:
    manager = make_manager()

    with pytest.raises(KeyError):
        manager.switch_mode("visual")


def test_mode_switch_events_fire_once() -> None:
    manager = make_manager("abc")
    seen: Dict[str, int] = {"start": 0}
    manager.context.bus.subscribe(
        "search.start", lambda payload: seen.__setitem__("start", seen["start"] + 1)
    )

    press(manager, "f", "ctrl")
    press(manager, "f", "ctrl")
    press(manager, "f", "ctrl")

    assert seen["start"] == 2
    assert manager.active_mode is not None and manager.active_mode.name == "search"


def test_arrows_still_navigate_in_search_mode() -> None:
    manager = make_manager("abc", "def")
    press(manager, "f", "ctrl")

    press(manager, "RIGHT")
    press(manager, "DOWN")

    assert manager.context.session.cursor == (1, 1)
    assert manager.context.session.mode is EditorMode.SEARCH
