from __future__ import annotations

import json
from pathlib import Path

from cinemagic_engine.runs.events import EventWriter


def test_event_writer(tmp_path: Path) -> None:
    path = tmp_path / "events.jsonl"
    writer = EventWriter(path, "session-123")
    writer.emit("session_started", language="en")
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["type"] == "session_started"
    assert payload["session_id"] == "session-123"
    assert "ts" in payload
    assert payload["language"] == "en"


def test_event_writer_omits_image_payloads(tmp_path: Path) -> None:
    path = tmp_path / "events.jsonl"
    writer = EventWriter(path, "session-123")
    event = writer.emit("transform_completed", image_uri="data:image/png;base64,AAAA", data=b"\x89PNG")
    assert event["image_uri"] == "<omitted>"
    assert event["data"] == "<omitted>"
    written = json.loads(path.read_text(encoding="utf-8"))
    assert "base64" not in json.dumps(written)


def test_event_writer_without_path_does_not_write(tmp_path: Path) -> None:
    writer = EventWriter(None, "session-123")
    event = writer.emit("session_started", language="es")
    assert event["type"] == "session_started"
    assert list(tmp_path.iterdir()) == []
