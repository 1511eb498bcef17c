"""Logging/telemetry and settings shared by every layer."""

from .settings import EditorSettings

__all__ = ["EditorSettings", "telemetry", "settings"]
