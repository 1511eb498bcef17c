from __future__ import annotations

import pytest

from modal_edit.runtime import telemetry


def test_env_defaults_without_variables() -> None:
    env = telemetry.TelemetryEnv.read({})

    assert env.level == "WARNING"
    assert env.console is True
    assert env.buffered is False
    assert env.log_file == ""


def test_env_reads_prefixed_flags() -> None:
    env = telemetry.TelemetryEnv.read(
        {
            "MODAL_EDIT_LOG_LEVEL": "debug",
            "MODAL_EDIT_DISABLE_CONSOLE": "yes",
            "MODAL_EDIT_LOG_JSON": "1",
            "MODAL_EDIT_LOG_BUFFERED": "on",
            "MODAL_EDIT_LOG_BUFFER_SIZE": "512",
            "MODAL_EDIT_LOG_FILE": "edit.log",
        }
    )

    assert env.level == "DEBUG"
    assert env.console is False
    assert env.json is True
    assert env.buffered is True
    assert env.buffer_size == 512
    assert env.log_file == "edit.log"


def test_env_ignores_bad_buffer_size() -> None:
    env = telemetry.TelemetryEnv.read({"MODAL_EDIT_LOG_BUFFER_SIZE": "lots"})

    assert env.buffer_size == 2048


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        telemetry.configure(preset="verbose")


def test_config_and_preset_are_exclusive() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_span_reports_and_reraises() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::boom", metadata={"row": 3}) as handle:
            handle.add_metadata("data", b"bytes")
            assert handle.metadata == {"row": "3", "data": "bytes"}
            raise RuntimeError("boom")
