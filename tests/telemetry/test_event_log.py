import json
from pathlib import Path

from oktacreds.telemetry.event_log import EventLog


def test_track_appends_jsonl_rows(tmp_path: Path) -> None:
    log = EventLog(tmp_path / "nested" / "events.jsonl")
    assert log.track("Ran Command", user_id="alice", properties={"command": "update"})
    assert log.track("Ran Command", user_id="bob")

    rows = [json.loads(line) for line in log.path.read_text(encoding="utf-8").splitlines()]
    assert [r["user_id"] for r in rows] == ["alice", "bob"]
    assert rows[0]["properties"] == {"command": "update"}
    assert rows[1]["properties"] == {}
    assert rows[0]["event_id"] != rows[1]["event_id"]


def test_track_swallows_write_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    log = EventLog(blocker / "events.jsonl")
    assert log.track("Ran Command", user_id="alice") is False


def test_track_swallows_unserializable_properties(tmp_path: Path) -> None:
    log = EventLog(tmp_path / "events.jsonl")
    assert log.track("Ran Command", user_id="alice", properties={"bad": object()}) is False
    assert not log.path.exists()
