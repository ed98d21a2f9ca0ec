"""Text-buffer core for the mino terminal editor."""

__all__ = [
    "buffer",
    "config",
    "errors",
    "runtime",
    "session",
]

__version__ = "0.1.0"
