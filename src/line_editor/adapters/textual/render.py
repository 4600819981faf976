"""Turn session render queries into ``rich`` text for Textual widgets."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from rich.style import Style
from rich.text import Text

from line_editor.session import RenderLine

MATCH_STYLE = Style(color="black", bgcolor="yellow")
CURRENT_MATCH_STYLE = Style(color="black", bgcolor="dark_orange", bold=True)
CURSOR_STYLE = Style(reverse=True)


def render_line(line: RenderLine, *, cursor_column: Optional[int] = None) -> Text:
    text = Text(line.text, no_wrap=True, end="")
    for span in line.spans:
        style = CURRENT_MATCH_STYLE if span.current else MATCH_STYLE
        text.stylize(style, span.start, span.end)
    if cursor_column is not None:
        if cursor_column >= len(line.text):
            text.append(" ", style=CURSOR_STYLE)
        else:
            text.stylize(CURSOR_STYLE, cursor_column, cursor_column + 1)
    return text


def render_lines(
    lines: Sequence[RenderLine], cursor: Optional[Tuple[int, int]] = None
) -> Text:
    """Join visible lines; ``cursor`` is the buffer ``(row, column)``."""

    rendered = []
    for line in lines:
        column = cursor[1] if cursor is not None and cursor[0] == line.index else None
        rendered.append(render_line(line, cursor_column=column))
    return Text("\n", end="").join(rendered)


__all__ = ["render_line", "render_lines", "MATCH_STYLE", "CURRENT_MATCH_STYLE"]
