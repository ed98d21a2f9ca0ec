"""Editor configuration consumed by the buffer core."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .errors import ConfigError

ENV_PREFIX = "MINO_"
DEFAULT_TAB_STOP = 4

TAB_RENDER_FLAT = "flat"
TAB_RENDER_ALIGNED = "aligned"
TAB_RENDER_MODES = (TAB_RENDER_FLAT, TAB_RENDER_ALIGNED)


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Immutable settings shared by every row of a session.

    ``tab_render`` picks how the render cache expands tabs: ``"flat"`` emits
    ``tab_stop`` spaces per tab, ``"aligned"`` pads to the next tab stop the
    same way the cursor column mapping does.
    """

    tab_stop: int = DEFAULT_TAB_STOP
    tab_render: str = TAB_RENDER_FLAT
    readonly: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.tab_stop, bool) or not isinstance(self.tab_stop, int):
            raise ConfigError(f"tab_stop must be an integer, got {self.tab_stop!r}")
        if self.tab_stop < 1:
            raise ConfigError(f"tab_stop must be at least 1, got {self.tab_stop}")
        if self.tab_render not in TAB_RENDER_MODES:
            raise ConfigError(
                f"tab_render must be one of {', '.join(TAB_RENDER_MODES)}, "
                f"got {self.tab_render!r}"
            )

    @property
    def aligned_tabs(self) -> bool:
        return self.tab_render == TAB_RENDER_ALIGNED

    def with_overrides(self, **changes: object) -> "EditorConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        raw_tab_stop = env.get(f"{ENV_PREFIX}TAB_STOP")
        if raw_tab_stop:
            try:
                values["tab_stop"] = int(raw_tab_stop)
            except ValueError as exc:
                raise ConfigError(
                    f"{ENV_PREFIX}TAB_STOP must be an integer, got {raw_tab_stop!r}"
                ) from exc

        raw_render = env.get(f"{ENV_PREFIX}TAB_RENDER")
        if raw_render:
            values["tab_render"] = raw_render.strip().lower()

        raw_readonly = env.get(f"{ENV_PREFIX}READONLY")
        if raw_readonly is not None:
            values["readonly"] = raw_readonly.lower() in {"1", "true", "yes", "on"}

        return cls(**values)  # type: ignore[arg-type]


DEFAULT_CONFIG = EditorConfig()

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_TAB_STOP",
    "EditorConfig",
    "TAB_RENDER_ALIGNED",
    "TAB_RENDER_FLAT",
    "TAB_RENDER_MODES",
]
