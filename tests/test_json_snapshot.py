"""Tests for the JSON snapshot adapter."""

import json

import pytest

from planboard.adapters.json_snapshot import JsonSnapshotReader, SnapshotError, parse_snapshot
from planboard.core.models import Snapshot


@pytest.fixture
def document():
    return {
        "actions": [
            {"id": "t1", "title": "Write report", "date": "2025-01-15", "startTime": "10:00", "duration": 90},
            {"title": "No id"},
        ],
        "events": [{"id": "e1", "title": "Standup", "date": "2025-01-15", "startTime": "09:00", "endTime": "09:15"}],
        "routines": [{"id": "r1", "title": "Gym", "frequency": "weekly", "daysOfWeek": [1, 3, 5]}],
        "routineInstances": [{"id": "i1", "fromRoutineId": "r1", "date": "2025-01-15"}],
        "goals": [{"id": "g1", "title": "Marathon", "deadline": "2025-04-01", "type": "strategic"}],
        "projects": [{"id": "p1", "title": "Website", "deadline": "2025-02-01"}],
    }


class TestParseSnapshot:
    def test_parses_all_collections(self, document):
        snapshot = parse_snapshot(document)

        assert [t.id for t in snapshot.tasks] == ["t1"]
        assert snapshot.events[0].end_time == "09:15"
        assert snapshot.routines[0].days_of_week == [1, 3, 5]
        assert snapshot.routine_instances[0].from_routine_id == "r1"
        assert snapshot.goals[0].is_strategic
        assert snapshot.projects[0].deadline == "2025-02-01"

    def test_skips_records_without_required_keys(self, document, caplog):
        snapshot = parse_snapshot(document)
        assert len(snapshot.tasks) == 1
        assert "Skipping malformed task record" in caplog.text

    def test_tasks_key_preferred(self, document):
        document["tasks"] = [{"id": "t9", "title": "Other"}]
        assert [t.id for t in parse_snapshot(document).tasks] == ["t9"]

    def test_missing_collections_are_empty(self):
        assert parse_snapshot({}) == Snapshot()


class TestJsonSnapshotReader:
    def test_reads_file(self, tmp_path, document):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(document))

        snapshot = JsonSnapshotReader(path).read()
        assert snapshot.tasks[0].title == "Write report"

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonSnapshotReader(tmp_path / "absent.json").read() == Snapshot()

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotError):
            JsonSnapshotReader(path).read()

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text("[]")
        with pytest.raises(SnapshotError):
            JsonSnapshotReader(path).read()
