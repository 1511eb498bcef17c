"""Editor settings resolved from keyword arguments or ``MODAL_EDIT_*`` env vars."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "MODAL_EDIT_"

TAB_SIZE = 4
SCROLL_MARGIN = 10
GUTTER_WIDTH = 6
MAX_RECENT_FILES = 10
UNTITLED = "untitled"


def _env(name: str) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}{name}")


def _env_int(name: str, fallback: int) -> int:
    value = _env(name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_flag(name: str, fallback: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return fallback
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class EditorSettings:
    """Session-wide knobs; the toggles are flipped at runtime by commands."""

    tab_size: int = TAB_SIZE
    scroll_margin: int = SCROLL_MARGIN
    gutter_width: int = GUTTER_WIDTH
    viewport_height: int = 22
    viewport_width: int = 80
    pending_timeout_ms: int = 1000
    show_line_numbers: bool = True
    auto_indent: bool = True
    syntax_highlight: bool = True

    @classmethod
    def from_env(cls, **overrides: object) -> "EditorSettings":
        defaults = cls()
        settings = cls(
            tab_size=_env_int("TAB_SIZE", defaults.tab_size),
            scroll_margin=_env_int("SCROLL_MARGIN", defaults.scroll_margin),
            gutter_width=_env_int("GUTTER_WIDTH", defaults.gutter_width),
            viewport_height=_env_int("VIEWPORT_HEIGHT", defaults.viewport_height),
            viewport_width=_env_int("VIEWPORT_WIDTH", defaults.viewport_width),
            pending_timeout_ms=_env_int(
                "PENDING_TIMEOUT_MS", defaults.pending_timeout_ms
            ),
            show_line_numbers=_env_flag("LINE_NUMBERS", defaults.show_line_numbers),
            auto_indent=_env_flag("AUTO_INDENT", defaults.auto_indent),
            syntax_highlight=_env_flag("SYNTAX", defaults.syntax_highlight),
        )
        if overrides:
            settings = replace(settings, **overrides)  # type: ignore[arg-type]
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.tab_size <= 0:
            raise ValueError("tab_size must be positive")
        if self.viewport_height <= 0 or self.viewport_width <= 0:
            raise ValueError("viewport dimensions must be positive")
        if self.pending_timeout_ms <= 0:
            raise ValueError("pending_timeout_ms must be positive")

    @property
    def gutter(self) -> int:
        return self.gutter_width if self.show_line_numbers else 0


__all__ = [
    "EditorSettings",
    "TAB_SIZE",
    "SCROLL_MARGIN",
    "GUTTER_WIDTH",
    "MAX_RECENT_FILES",
    "UNTITLED",
]
