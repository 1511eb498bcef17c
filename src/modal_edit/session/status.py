"""Transient status-line message shown by the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class StatusMessage:
    text: str
    severity: Severity = Severity.INFO

    def __str__(self) -> str:
        return self.text


__all__ = ["Severity", "StatusMessage"]
