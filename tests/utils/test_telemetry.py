from __future__ import annotations

from dataclasses import replace

import jsonschema
import pytest

from new_cli.settings import RuntimeSettings
from new_cli.utils.telemetry import (
    clear,
    iter_events,
    record_event,
    record_structured_event,
    summarize,
)


def test_record_and_summarize(runtime_settings: RuntimeSettings) -> None:
    record_event(runtime_settings, "file.create", {"file": "index.html"})
    record_structured_event(
        runtime_settings,
        "editor.launch.failed",
        payload={"command": "xdg-open"},
        level="warn",
        status="fail",
        component="editor",
    )

    events = list(iter_events(runtime_settings))
    assert [evt["event"] for evt in events] == ["file.create", "editor.launch.failed"]
    assert events[0]["version"] == runtime_settings.cli_version
    assert summarize(events) == {
        "total": 2,
        "by_event": {"file.create": 1, "editor.launch.failed": 1},
        "by_level": {"info": 1, "warn": 1},
    }

    clear(runtime_settings)
    assert list(iter_events(runtime_settings)) == []


def test_disabled_telemetry_writes_nothing(runtime_settings: RuntimeSettings) -> None:
    settings = replace(runtime_settings, telemetry=False)
    record_event(settings, "file.create", {})
    assert not settings.telemetry_log.exists()


def test_invalid_records_are_rejected(runtime_settings: RuntimeSettings) -> None:
    with pytest.raises(ValueError):
        record_event(runtime_settings, " ")
    with pytest.raises(ValueError):
        record_structured_event(runtime_settings, "file.create", level="debug")
    with pytest.raises(ValueError):
        record_structured_event(runtime_settings, "file.create", duration_ms=-1)


def test_schema_rejects_non_string_status(runtime_settings: RuntimeSettings) -> None:
    with pytest.raises(jsonschema.ValidationError):
        record_structured_event(runtime_settings, "file.create", status=1)  # type: ignore[arg-type]


def test_corrupt_lines_are_skipped(runtime_settings: RuntimeSettings) -> None:
    record_event(runtime_settings, "file.create", {})
    with runtime_settings.telemetry_log.open("a", encoding="utf-8") as fh:
        fh.write("{not json\n\n")
    assert len(list(iter_events(runtime_settings))) == 1


def test_unwritable_log_is_reported_not_raised(
    runtime_settings: RuntimeSettings, capsys: pytest.CaptureFixture[str]
) -> None:
    runtime_settings.log_dir.parent.mkdir(parents=True)
    runtime_settings.log_dir.write_text("", encoding="utf-8")

    record_event(runtime_settings, "file.create", {})
    assert "cannot write event log" in capsys.readouterr().err
    assert list(iter_events(runtime_settings)) == []
