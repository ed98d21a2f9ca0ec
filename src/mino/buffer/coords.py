"""Mapping between character indices (cx) and render columns (rx).

Both directions walk the stored text and treat a tab as a jump to the next
multiple of the tab stop. Neither function reads the render cache, so the
mapping is the same whichever tab render policy the row uses.
"""

from __future__ import annotations

from typing import Protocol

from mino.config import DEFAULT_TAB_STOP


class HasChars(Protocol):
    @property
    def chars(self) -> str: ...


def _advance(rx: int, ch: str, tab_stop: int) -> int:
    if ch == "\t":
        rx += (tab_stop - 1) - (rx % tab_stop)
    return rx + 1


def char_index_to_render_index(
    row: HasChars, cx: int, tab_stop: int = DEFAULT_TAB_STOP
) -> int:
    """Return the render column at which character ``cx`` starts."""

    rx = 0
    for i, ch in enumerate(row.chars):
        if i >= cx:
            break
        rx = _advance(rx, ch, tab_stop)
    return rx


def render_index_to_char_index(
    row: HasChars, rx: int, tab_stop: int = DEFAULT_TAB_STOP
) -> int:
    """Return the character index covering render column ``rx``.

    Columns inside a tab's span resolve to the tab itself; columns past the
    end of the line resolve to the line length.
    """

    cur_rx = 0
    cx = 0
    for ch in row.chars:
        cur_rx = _advance(cur_rx, ch, tab_stop)
        if cur_rx > rx:
            return cx
        cx += 1
    return cx


__all__ = ["char_index_to_render_index", "render_index_to_char_index"]
