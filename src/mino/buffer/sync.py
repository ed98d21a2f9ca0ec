"""Snapshot types handed to the drawing layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Tuple


@dataclass(slots=True)
class ScreenView:
    """Visible slice of the rendered buffer and the cursor's screen cell.

    ``lines`` holds one rendered string per screen row, already cut to the
    horizontal viewport. Rows past the end of the buffer are absent.
    """

    lines: Tuple[str, ...]
    cursor: Tuple[int, int]  # (screen row, screen column)
    row_offset: int
    col_offset: int
    num_rows: int
    file_name: str
    dirty: bool
    attributes: dict[str, str] = field(default_factory=dict)


class ScreenSink(Protocol):
    """What a terminal front end implements to receive buffer snapshots."""

    def draw(self, view: ScreenView) -> None:
        """Paint ``view``; called after every editing step."""
        ...
