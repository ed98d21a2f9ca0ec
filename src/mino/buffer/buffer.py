"""Ordered collection of rows backing one open file."""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from pathlib import Path
from typing import ContextManager, Iterator, List, Optional

from mino.config import DEFAULT_CONFIG, EditorConfig
from mino.errors import BufferIOError, BufferReadonlyError, NoFileNameError
from mino.runtime import telemetry

from .row import Row


class TextBuffer:
    """Rows of the open file plus its name and dirty flag.

    ``num_rows`` is tracked alongside ``rows`` and always equals its length.
    Editing methods clamp indices instead of raising.
    """

    def __init__(
        self,
        *,
        config: Optional[EditorConfig] = None,
        file_name: str = "",
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.file_name = file_name
        self.rows: List[Row] = []
        self.num_rows = 0
        self.is_dirty = False

    @classmethod
    def from_text(
        cls, text: str, *, config: Optional[EditorConfig] = None
    ) -> "TextBuffer":
        buffer = cls(config=config)
        for line in split_lines(text):
            buffer._push(Row(line, buffer.config))
        return buffer

    def __len__(self) -> int:
        return self.num_rows

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    @property
    def file_ext(self) -> Optional[str]:
        suffix = Path(self.file_name).suffix if self.file_name else ""
        return suffix[1:] or None

    def make_dirty(self) -> None:
        self.is_dirty = True

    def make_clean(self) -> None:
        self.is_dirty = False

    def row_at(self, idx: int) -> Row:
        """Return row ``idx``, falling back to the last row when out of range."""

        if not self.rows:
            raise IndexError("buffer has no rows")
        if idx >= self.num_rows:
            return self.rows[-1]
        return self.rows[max(idx, 0)]

    def _push(self, row: Row) -> None:
        self.rows.append(row)
        self.num_rows += 1

    def append_row(self, text: str = "") -> Row:
        row = Row(text, self.config)
        self._push(row)
        self.make_dirty()
        return row

    def insert_row(self, at: int, row: Row) -> Row:
        """Insert ``row`` before position ``at`` (clamped to ``[0, num_rows]``)."""

        at = min(max(at, 0), self.num_rows)
        with Transaction(self, "insert_row"):
            if row.config != self.config:
                row.config = self.config
                row.update_render()
            self.rows.insert(at, row)
            self.num_rows += 1
        return row

    def merge_rows(self, dest_i: int, moving_i: int) -> bool:
        """Append row ``moving_i`` onto row ``dest_i`` and drop ``moving_i``.

        Out-of-range or identical indices leave the buffer untouched and
        return ``False``.
        """

        if dest_i == moving_i or not (
            0 <= dest_i < self.num_rows and 0 <= moving_i < self.num_rows
        ):
            return False
        with Transaction(self, "merge_rows"):
            moving = self.rows[moving_i]
            self.rows[dest_i].append_chars(moving.chars)
            del self.rows[moving_i]
            self.num_rows -= 1
        return True

    def serialize(self) -> str:
        return "".join(f"{row.chars}\n" for row in self.rows)

    def open(self, path: str | os.PathLike[str]) -> int:
        """Replace the buffer's rows with the lines of ``path``.

        Returns the number of rows loaded.
        """

        target = os.fspath(path)
        with telemetry.span("buffer::open", metadata={"path": target}):
            try:
                with open(target, "r", encoding="utf-8", newline="") as handle:
                    text = handle.read()
            except OSError as exc:
                raise BufferIOError.from_os_error(exc, path=target) from exc

            self.rows = []
            self.num_rows = 0
            for line in split_lines(text):
                self._push(Row(line, self.config))
            self.file_name = target
            self.make_clean()

        telemetry.record_event(
            "buffer.open", data={"path": target, "rows": self.num_rows}
        )
        return self.num_rows

    def save(self, path: str | os.PathLike[str] | None = None) -> int:
        """Write the serialized rows to disk and return the byte count."""

        if self.config.readonly:
            raise BufferReadonlyError(f"{self.file_name or 'buffer'} is readonly")
        target = os.fspath(path) if path is not None else self.file_name
        if not target:
            raise NoFileNameError("no file name to save to")

        data = self.serialize().encode("utf-8")
        with telemetry.span("buffer::save", metadata={"path": target}):
            try:
                with open(target, "wb") as handle:
                    handle.write(data)
            except OSError as exc:
                raise BufferIOError.from_os_error(exc, path=target) from exc
            self.file_name = target
            self.make_clean()

        telemetry.record_event("buffer.save", data={"path": target, "bytes": len(data)})
        return len(data)

    def rename(self, path: str | os.PathLike[str]) -> None:
        """Move the backing file to ``path``; an unsaved buffer just takes the name."""

        target = os.fspath(path)
        if self.file_name and os.path.exists(self.file_name):
            with telemetry.span("buffer::rename", metadata={"path": target}):
                try:
                    os.rename(self.file_name, target)
                except OSError as exc:
                    raise BufferIOError.from_os_error(exc, path=target) from exc
        telemetry.record_event(
            "buffer.rename", data={"from": self.file_name, "to": target}
        )
        self.file_name = target


class Transaction(AbstractContextManager["Transaction"]):
    """Profiles one structural edit and marks the buffer dirty once it completes."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.file_name or "[scratch]"},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer.make_dirty()
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def split_lines(text: str) -> List[str]:
    """Split file text on ``\\n`` / ``\\r\\n``; a trailing newline adds no row."""

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


__all__ = ["TextBuffer", "Transaction", "split_lines"]
