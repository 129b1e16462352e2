import json

import pytest

from core import SnapshotError, TableTest
from formats import snapshot
from formats.snapshot import SNAPSHOT_VERSION, Snapshot


class TestEncode:

    def test_encode(self, forest_test):
        snap = snapshot.encode(forest_test)
        assert snap.version == SNAPSHOT_VERSION
        assert snap.next_id == 3
        assert snap.metadata == {
            "title": "Forest",
            "candidate_name": "Alice",
            "attempt_number": 2,
        }
        assert snap.lines[0] == {
            "id": 0, "source": "The forest was quiet.", "target": "La forêt était calme.",
        }

    def test_encode_is_a_copy(self, forest_test):
        snap = snapshot.encode(forest_test)
        forest_test.update_line(1, target="changed")
        assert snap.lines[1]["target"] == ""


class TestDecode:

    def test_round_trip(self, forest_test):
        assert snapshot.decode(snapshot.encode(forest_test)) == forest_test

    def test_round_trip_keeps_counter_after_delete(self, forest_test):
        forest_test.delete_by_id(2)
        restored = snapshot.decode(snapshot.encode(forest_test))
        assert restored.next_id == 3
        assert restored.append("x").line_id == 3

    def test_into_replaces_state_and_title(self, forest_test):
        target = TableTest()
        target.append("old")
        target.set_title("Old")
        assert target.canonical_title() == "SNKTEST__Old_1"
        result = snapshot.decode(snapshot.encode(forest_test), into=target)
        assert result is target
        assert target == forest_test
        assert target.canonical_title() == "SNKTEST_Alice_Forest_2"

    def test_unsupported_version(self, forest_test):
        snap = snapshot.encode(forest_test)
        snap.version = 99
        with pytest.raises(SnapshotError, match="version"):
            snapshot.decode(snap)

    def test_bool_is_not_an_id(self):
        snap = Snapshot(
            metadata={"title": "", "candidate_name": "", "attempt_number": 1},
            next_id=2,
            lines=[{"id": True, "source": "a", "target": ""}],
        )
        with pytest.raises(SnapshotError):
            snapshot.decode(snap)

    def test_failed_decode_leaves_target_untouched(self, forest_test):
        snap = Snapshot(
            metadata={"title": "", "candidate_name": "", "attempt_number": 1},
            next_id=1,
            lines=[{"id": 5, "source": "a", "target": ""}],
        )
        before = snapshot.encode(forest_test)
        with pytest.raises(SnapshotError):
            snapshot.decode(snap, into=forest_test)
        assert snapshot.encode(forest_test) == before


class TestJson:

    def test_json_round_trip(self, forest_test):
        assert snapshot.from_json(snapshot.to_json(forest_test)) == forest_test

    def test_json_keeps_non_ascii(self, forest_test):
        assert "forêt" in snapshot.to_json(forest_test)

    def test_to_dict_shape(self, forest_test):
        fields = snapshot.to_dict(forest_test)
        assert set(fields) == {"version", "metadata", "next_id", "lines"}

    @pytest.mark.parametrize("text", [
        "not json",
        "[]",
        json.dumps({"metadata": {}, "lines": [], "next_id": 0}),
        json.dumps({
            "metadata": {"title": "", "candidate_name": "", "attempt_number": 1},
            "lines": [],
        }),
        json.dumps({
            "metadata": {"title": "", "candidate_name": "", "attempt_number": 1},
            "lines": ["a"],
            "next_id": 1,
        }),
        json.dumps({
            "metadata": {"title": 3, "candidate_name": "", "attempt_number": 1},
            "lines": [],
            "next_id": 0,
        }),
        json.dumps({
            "metadata": {"title": "", "candidate_name": "", "attempt_number": 1},
            "lines": [{"id": 0, "source": "a"}],
            "next_id": 1,
        }),
        json.dumps({
            "metadata": {"title": "", "candidate_name": "", "attempt_number": 1},
            "lines": [],
            "next_id": "3",
        }),
    ])
    def test_malformed_raises(self, text):
        with pytest.raises(SnapshotError):
            snapshot.from_json(text)
