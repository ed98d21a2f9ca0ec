"""Rows, coordinate mapping, and the text buffer."""

from .buffer import TextBuffer, Transaction, split_lines
from .coords import char_index_to_render_index, render_index_to_char_index
from .row import Row, expand_tabs
from .sync import ScreenSink, ScreenView

__all__ = [
    "Row",
    "TextBuffer",
    "Transaction",
    "ScreenSink",
    "ScreenView",
    "char_index_to_render_index",
    "expand_tabs",
    "render_index_to_char_index",
    "split_lines",
]
