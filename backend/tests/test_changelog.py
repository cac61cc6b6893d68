"""Tests for change log reduction."""

from inspection_api.utils.changelog import field_path_key, latest_changes_per_field


def change(field, sub=None, subsub=None, ts="2025-01-01T00:00:00+00:00", new="x", id=None):
    return {
        "id": id or f"{field}-{sub}-{subsub}-{ts}",
        "inspection_id": "insp-1",
        "field_name": field,
        "sub_field_name": sub,
        "sub_sub_field_name": subsub,
        "old_value": None,
        "new_value": new,
        "changed_at": ts,
    }


T1 = "2025-05-01T08:00:00+00:00"
T2 = "2025-05-02T08:00:00+00:00"
T3 = "2025-05-03T08:00:00+00:00"


class TestFieldPathKey:
    def test_missing_components_are_empty(self):
        assert field_path_key(change("engine")) == ("engine", "", "")

    def test_none_and_empty_string_match(self):
        assert field_path_key(change("engine", "")) == field_path_key(change("engine", None))

    def test_separator_in_component_does_not_collide(self):
        a = change("vehicle-data", "odometer")
        b = change("vehicle", "data-odometer")
        assert field_path_key(a) != field_path_key(b)

    def test_top_level_differs_from_nested(self):
        assert field_path_key(change("foo")) != field_path_key(change("foo", "bar"))


class TestLatestChangesPerField:
    def test_empty_input(self):
        assert latest_changes_per_field([]) == []

    def test_keeps_most_recent_per_field(self):
        entries = [
            change("engine", ts=T3, new="9"),
            change("engine", ts=T2, new="8"),
            change("tires", "front", ts=T1, new="ok"),
        ]
        result = latest_changes_per_field(entries)
        assert len(result) == 2
        assert result[0]["field_name"] == "engine"
        assert result[0]["changed_at"] == T3
        assert result[0]["new_value"] == "9"
        assert result[1]["field_name"] == "tires"
        assert result[1]["sub_field_name"] == "front"
        assert result[1]["new_value"] == "ok"

    def test_all_same_field_keeps_first(self):
        entries = [change("odometer", ts=ts, new=ts) for ts in (T3, T2, T1)]
        result = latest_changes_per_field(entries)
        assert result == [entries[0]]

    def test_order_of_first_appearance(self):
        entries = [
            change("b", ts=T3),
            change("a", ts=T3),
            change("b", ts=T2),
            change("c", ts=T2),
            change("a", ts=T1),
        ]
        result = latest_changes_per_field(entries)
        assert [e["field_name"] for e in result] == ["b", "a", "c"]

    def test_sub_fields_distinguish_paths(self):
        entries = [
            change("detailedAssessment", "fitur", "airbag", ts=T3),
            change("detailedAssessment", "fitur", "sistemAC", ts=T2),
            change("detailedAssessment", "testDrive", "airbag", ts=T2),
            change("detailedAssessment", "fitur", "airbag", ts=T1),
        ]
        result = latest_changes_per_field(entries)
        assert len(result) == 3
        assert result[0]["changed_at"] == T3

    def test_every_input_key_present_once(self):
        entries = [
            change("a", ts=T3),
            change("b", "x", ts=T3),
            change("a", ts=T2),
            change("b", "y", ts=T2),
            change("b", "x", ts=T1),
        ]
        result = latest_changes_per_field(entries)
        keys = [field_path_key(e) for e in result]
        assert len(keys) == len(set(keys))
        assert set(keys) == {field_path_key(e) for e in entries}

    def test_result_is_most_recent_for_each_key(self):
        entries = [
            change("a", ts=T3),
            change("b", ts=T2),
            change("a", ts=T2),
            change("b", ts=T1),
            change("a", ts=T1),
        ]
        for entry in latest_changes_per_field(entries):
            same_path = [e for e in entries if field_path_key(e) == field_path_key(entry)]
            assert all(entry["changed_at"] >= e["changed_at"] for e in same_path)

    def test_idempotent(self):
        entries = [
            change("engine", ts=T3),
            change("engine", ts=T2),
            change("tires", "front", ts=T1),
        ]
        once = latest_changes_per_field(entries)
        assert latest_changes_per_field(once) == once

    def test_does_not_mutate_input(self):
        entries = [change("engine", ts=T3), change("engine", ts=T2)]
        snapshot = [dict(e) for e in entries]
        latest_changes_per_field(entries)
        assert entries == snapshot
        assert len(entries) == 2

    def test_accepts_generator(self):
        result = latest_changes_per_field(change(f, ts=T1) for f in ("a", "b", "a"))
        assert [e["field_name"] for e in result] == ["a", "b"]
