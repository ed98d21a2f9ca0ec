"""Single buffer line with its tab-expanded render cache."""

from __future__ import annotations

from typing import Optional

from mino.config import DEFAULT_CONFIG, EditorConfig

from .coords import char_index_to_render_index, render_index_to_char_index


def expand_tabs(text: str, tab_stop: int, *, aligned: bool = False) -> str:
    """Return ``text`` with every tab replaced by spaces.

    Flat expansion emits ``tab_stop`` spaces per tab. Aligned expansion pads
    to the next multiple of ``tab_stop``.
    """

    if "\t" not in text:
        return text
    out: list[str] = []
    column = 0
    for ch in text:
        if ch == "\t":
            width = tab_stop - (column % tab_stop) if aligned else tab_stop
            out.append(" " * width)
            column += width
        else:
            out.append(ch)
            column += 1
    return "".join(out)


def _clamp_range(start: int, end: Optional[int], size: int) -> tuple[int, int]:
    start = max(start, 0)
    if start >= size:
        return 0, 0
    if end is None or end > size:
        end = size
    if end <= start:
        return 0, 0
    return start, end


class Row:
    """One line of text: stored ``chars`` plus the derived ``render``.

    ``chars`` is read-only from the outside. Every mutating method rebuilds the
    render cache before returning, so ``size``/``rsize`` always match
    ``chars``/``render``.
    """

    __slots__ = ("_chars", "_render", "_has_tabs", "config")

    def __init__(self, chars: str = "", config: Optional[EditorConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._chars = chars
        self._render = ""
        self._has_tabs = False
        self.update_render()

    @classmethod
    def new(cls, config: Optional[EditorConfig] = None) -> "Row":
        return cls("", config)

    @classmethod
    def from_chars(cls, chars: str, config: Optional[EditorConfig] = None) -> "Row":
        return cls(chars, config)

    def __repr__(self) -> str:
        return f"Row({self._chars!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._chars == other._chars and self.config == other.config

    __hash__ = None  # type: ignore[assignment]

    @property
    def chars(self) -> str:
        return self._chars

    @property
    def render(self) -> str:
        return self._render

    @property
    def size(self) -> int:
        return len(self._chars)

    @property
    def rsize(self) -> int:
        return len(self._render)

    @property
    def has_tabs(self) -> bool:
        return self._has_tabs

    def update_render(self) -> None:
        self._has_tabs = "\t" in self._chars
        self._render = expand_tabs(
            self._chars, self.config.tab_stop, aligned=self.config.aligned_tabs
        )

    def chars_at(self, start: int = 0, end: Optional[int] = None) -> str:
        """Return ``chars[start:end]`` clamped to the row; never raises."""

        lo, hi = _clamp_range(start, end, self.size)
        return self._chars[lo:hi]

    def rchars_at(self, start: int = 0, end: Optional[int] = None) -> str:
        """Return ``render[start:end]`` clamped to the rendered width."""

        lo, hi = _clamp_range(start, end, self.rsize)
        return self._render[lo:hi]

    def insert_char(self, idx: int, ch: str) -> None:
        """Insert ``ch`` before ``idx`` (clamped to the line end).

        ``ch`` is normally one character; a longer string is inserted verbatim
        and grows ``size`` by its length.
        """

        idx = min(max(idx, 0), self.size)
        self._chars = self._chars[:idx] + ch + self._chars[idx:]
        self.update_render()

    def remove_char(self, idx: int) -> None:
        """Delete ``chars[idx]``. At or past the end of the line nothing happens."""

        idx = min(max(idx, 0), self.size)
        if idx == self.size:
            return
        self._chars = self._chars[:idx] + self._chars[idx + 1 :]
        self.update_render()

    def append_chars(self, text: str) -> None:
        self._chars += text
        self.update_render()

    def split_row(self, idx: int) -> "Row":
        """Move ``chars[idx:]`` into a new row and return it.

        Splitting at or past the end leaves this row alone and returns an
        empty row.
        """

        if idx >= self.size:
            return Row.new(self.config)
        idx = max(idx, 0)
        tail = Row(self._chars[idx:], self.config)
        self._chars = self._chars[:idx]
        self.update_render()
        return tail

    def cx_to_rx(self, cx: int) -> int:
        return char_index_to_render_index(self, cx, self.config.tab_stop)

    def rx_to_cx(self, rx: int) -> int:
        return render_index_to_char_index(self, rx, self.config.tab_stop)


__all__ = ["Row", "expand_tabs"]
