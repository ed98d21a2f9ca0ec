"""Editing session: one buffer, its config, the cursor, and the viewport.

The session replaces editor-wide global state. Front ends construct one,
translate keystrokes into the methods below, and draw ``view()``.
"""

from __future__ import annotations

import os
from typing import Literal, Optional

from mino.buffer import Row, ScreenSink, ScreenView, TextBuffer
from mino.config import EditorConfig

Direction = Literal[
    "up", "down", "left", "right", "home", "end", "page_up", "page_down"
]

DEFAULT_SCREEN_ROWS = 24
DEFAULT_SCREEN_COLS = 80


class EditSession:
    """Cursor-level editing on top of a ``TextBuffer``.

    ``cx``/``cy`` address characters in the buffer (``cy == num_rows`` is the
    empty line past the end). ``rx`` is the render column of the cursor and is
    refreshed by ``scroll()``.

    A session takes its config from the buffer; passing a different
    ``config`` alongside a buffer raises ``ValueError``.
    """

    def __init__(
        self,
        buffer: Optional[TextBuffer] = None,
        *,
        config: Optional[EditorConfig] = None,
        screen_rows: int = DEFAULT_SCREEN_ROWS,
        screen_cols: int = DEFAULT_SCREEN_COLS,
    ) -> None:
        if buffer is None:
            buffer = TextBuffer(config=config)
        elif config is not None and config != buffer.config:
            raise ValueError("config differs from the buffer's config")
        self.buffer = buffer
        self.config = buffer.config
        self.cx = 0
        self.cy = 0
        self.rx = 0
        self.row_offset = 0
        self.col_offset = 0
        self.screen_rows = max(screen_rows, 1)
        self.screen_cols = max(screen_cols, 1)

    @classmethod
    def open_from(
        cls,
        path: str | os.PathLike[str],
        *,
        config: Optional[EditorConfig] = None,
        screen_rows: int = DEFAULT_SCREEN_ROWS,
        screen_cols: int = DEFAULT_SCREEN_COLS,
    ) -> "EditSession":
        session = cls(config=config, screen_rows=screen_rows, screen_cols=screen_cols)
        session.open(path)
        return session

    @property
    def current_row(self) -> Optional[Row]:
        if self.cy < self.buffer.num_rows:
            return self.buffer.rows[self.cy]
        return None

    def open(self, path: str | os.PathLike[str]) -> int:
        loaded = self.buffer.open(path)
        self.cx = self.cy = self.rx = 0
        self.row_offset = self.col_offset = 0
        return loaded

    def save(self, path: str | os.PathLike[str] | None = None) -> int:
        return self.buffer.save(path)

    def resize(self, cols: int, rows: int) -> None:
        self.screen_cols = max(cols, 1)
        self.screen_rows = max(rows, 1)

    def insert_char(self, ch: str) -> None:
        if self.cy == self.buffer.num_rows:
            self.buffer.append_row("")
        self.buffer.rows[self.cy].insert_char(self.cx, ch)
        self.cx += len(ch)
        self.buffer.make_dirty()

    def insert_newline(self) -> None:
        row = self.current_row
        if row is None:
            self.buffer.append_row("")
        else:
            self.buffer.insert_row(self.cy + 1, row.split_row(self.cx))
        self.cy += 1
        self.cx = 0

    def backspace(self) -> bool:
        """Delete left of the cursor, joining with the previous line at column 0."""

        row = self.current_row
        if row is None:
            return False
        if self.cx > 0:
            row.remove_char(self.cx - 1)
            self.cx -= 1
            self.buffer.make_dirty()
            return True
        if self.cy > 0:
            prev_len = self.buffer.rows[self.cy - 1].size
            self.buffer.merge_rows(self.cy - 1, self.cy)
            self.cy -= 1
            self.cx = prev_len
            return True
        return False

    def delete(self) -> bool:
        """Delete under the cursor, pulling the next line up at end of line."""

        row = self.current_row
        if row is None:
            return False
        if self.cx < row.size:
            row.remove_char(self.cx)
            self.buffer.make_dirty()
            return True
        if self.cy < self.buffer.num_rows - 1:
            self.buffer.merge_rows(self.cy, self.cy + 1)
            return True
        return False

    def move_cursor(self, direction: Direction) -> None:
        row = self.current_row
        num_rows = self.buffer.num_rows

        if direction in ("up", "down"):
            rx = row.cx_to_rx(self.cx) if row is not None else self.cx
            if direction == "up" and self.cy > 0:
                self.cy -= 1
            elif direction == "down" and num_rows > 0 and self.cy < num_rows - 1:
                self.cy += 1
            else:
                return
            self.cx = self.buffer.rows[self.cy].rx_to_cx(rx)
        elif direction == "left":
            if self.cx > 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                self.cx = self.buffer.rows[self.cy].size
        elif direction == "right":
            if row is not None:
                if self.cx < row.size:
                    self.cx += 1
                elif self.cy < num_rows - 1:
                    self.cy += 1
                    self.cx = 0
        elif direction in ("page_up", "page_down"):
            if direction == "page_up":
                self.cy = self.row_offset
            else:
                self.cy = min(
                    self.row_offset + self.screen_rows - 1, max(num_rows - 1, 0)
                )
            step: Direction = "up" if direction == "page_up" else "down"
            for _ in range(self.screen_rows):
                self.move_cursor(step)
        elif direction == "home":
            self.cx = 0
        elif direction == "end":
            if row is not None:
                self.cx = row.size
        else:
            raise ValueError(f"Unknown direction '{direction}'.")

        row = self.current_row
        self.cx = min(self.cx, row.size if row is not None else 0)

    def scroll(self) -> None:
        """Recompute ``rx`` and shift the viewport so the cursor stays visible."""

        row = self.current_row
        self.rx = row.cx_to_rx(self.cx) if row is not None else self.cx

        if self.cy < self.row_offset:
            self.row_offset = self.cy
        elif self.cy >= self.row_offset + self.screen_rows:
            self.row_offset = self.cy - self.screen_rows + 1

        if self.rx < self.col_offset:
            self.col_offset = self.rx
        elif self.rx >= self.col_offset + self.screen_cols:
            self.col_offset = self.rx - self.screen_cols + 1

    def view(self) -> ScreenView:
        self.scroll()
        last = min(self.row_offset + self.screen_rows, self.buffer.num_rows)
        lines = tuple(
            self.buffer.rows[y].rchars_at(
                self.col_offset, self.col_offset + self.screen_cols
            )
            for y in range(self.row_offset, last)
        )
        return ScreenView(
            lines=lines,
            cursor=(self.cy - self.row_offset, self.rx - self.col_offset),
            row_offset=self.row_offset,
            col_offset=self.col_offset,
            num_rows=self.buffer.num_rows,
            file_name=self.buffer.file_name,
            dirty=self.buffer.is_dirty,
            attributes={"tab_render": self.config.tab_render},
        )

    def refresh(self, sink: ScreenSink) -> ScreenView:
        view = self.view()
        sink.draw(view)
        return view


__all__ = ["Direction", "EditSession"]
