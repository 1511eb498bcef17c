"""Editor logging on top of telelog.

Everything in the editor logs through ``get_logger``; structured events go
through ``record_event`` and timed work through ``span``.  The telelog
configuration is derived from ``MODAL_EDIT_*`` environment variables unless a
preset or an explicit ``telelog.Config`` is handed to ``configure``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MODAL_EDIT_"
ROOT_LOGGER = "modal_edit"
FALLBACK_LOG_FILE = "modal_edit.log"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(slots=True)
class TelemetryEnv:
    """Snapshot of the logging-related environment variables."""

    level: str = "WARNING"
    log_file: str = ""
    json: bool = False
    console: bool = True
    color: bool = True
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def read(cls, environ: Optional[Mapping[str, str]] = None) -> "TelemetryEnv":
        source = os.environ if environ is None else environ

        def flag(name: str) -> bool:
            return source.get(ENV_PREFIX + name, "").lower() in _TRUTHY

        size = source.get(ENV_PREFIX + "LOG_BUFFER_SIZE", "")
        return cls(
            level=(source.get(ENV_PREFIX + "LOG_LEVEL") or "WARNING").upper(),
            log_file=source.get(ENV_PREFIX + "LOG_FILE", ""),
            json=flag("LOG_JSON"),
            console=not flag("DISABLE_CONSOLE"),
            color=not flag("NO_COLOR"),
            buffered=flag("LOG_BUFFERED"),
            buffer_size=int(size) if size.isdigit() else 2048,
        )


def config_from_env(env: Optional[TelemetryEnv] = None) -> Any:
    env = env or TelemetryEnv.read()
    config = tl.Config()
    config.with_min_level(env.level)
    config.with_console_output(env.console)
    if env.console:
        config.with_colored_output(env.color)
    if env.json:
        config.with_json_format(True)
    if env.log_file:
        config.with_file_output(env.log_file)
    if env.buffered:
        config.with_buffering(True)
        config.with_buffer_size(env.buffer_size)
    config.with_profiling(True)
    return config


def _development(config: Any, env: TelemetryEnv) -> None:
    config.with_min_level("DEBUG")
    config.with_console_output(True)
    config.with_colored_output(env.color)
    config.with_json_format(False)


def _production(config: Any, env: TelemetryEnv) -> None:
    # The editor owns the terminal, so production logs only go to a file.
    config.with_min_level("INFO")
    config.with_console_output(False)
    config.with_file_output(env.log_file or FALLBACK_LOG_FILE)
    config.with_buffering(True)


PRESETS: Dict[str, Callable[[Any, TelemetryEnv], None]] = {
    "development": _development,
    "production": _production,
}


def config_from_preset(preset: str, env: Optional[TelemetryEnv] = None) -> Any:
    try:
        apply = PRESETS[preset.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}'.") from None
    config = tl.Config()
    apply(config, env or TelemetryEnv.read())
    config.with_profiling(True)
    return config


class _State:
    config: Optional[Any] = None
    loggers: Dict[str, Any] = {}


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a telelog configuration and drop every cached logger.

    ``config`` and ``preset`` are mutually exclusive; with neither the
    configuration is rebuilt from the environment.
    """

    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = config_from_preset(preset)
    _State.config = config if config is not None else config_from_env()
    _State.loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or ROOT_LOGGER
    log = _State.loggers.get(logger_name)
    if log is None:
        if _State.config is None:
            _State.config = config_from_env()
        log = tl.Logger.with_config(logger_name, _State.config)
        _State.loggers[logger_name] = log
    return log


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _emit(log: Any, level: Any, message: str, payload: Mapping[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(payload)}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata reported with notes and failures."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def _report(self, level: str, message: str, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, level, message, payload)

    def fail(self, reason: str) -> None:
        self._report("error", "span::fail", reason)

    def note(self, reason: str) -> None:
        self._report("debug", "span::note", reason)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block as ``name``.

    ``component=True`` also tracks the block as a telelog component of the same
    name; a string names the component explicitly.  ``metadata`` is pushed as
    logger context while the block runs.  Exceptions are reported on the span
    and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    pushed: List[str] = []

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            pushed.append(key)
        stack.callback(lambda: [log.remove_context(key) for key in pushed])
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(log, name, cast(Optional[str], component_name), dict(context))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "TelemetryEnv",
    "config_from_env",
    "config_from_preset",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
