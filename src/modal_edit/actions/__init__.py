"""Binding handlers ``(ModeContext, ResolutionMatch) -> ModeResult``."""

from . import command, core, edit, motion, search

__all__ = ["command", "core", "edit", "motion", "search"]
