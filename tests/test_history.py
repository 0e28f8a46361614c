import dataclasses

import pytest

from tapcalc.history import HistoryEntry, HistoryLog


def test_entry_renders_as_row():
    assert str(HistoryEntry("2+3", "5")) == "2+3 = 5"


def test_entry_is_immutable():
    entry = HistoryEntry("2+3", "5")
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.result = "6"


class TestHistoryLog:
    def test_starts_empty(self):
        log = HistoryLog()
        assert len(log) == 0

    def test_insertion_order(self):
        log = HistoryLog()
        log.append(HistoryEntry("1+1", "2"))
        log.append(HistoryEntry("2×3", "6"))

        assert [entry.expression for entry in log] == ["1+1", "2×3"]
        assert log.rows() == ["1+1 = 2", "2×3 = 6"]
        assert log[1].result == "6"
        assert log[-1] == HistoryEntry("2×3", "6")

    def test_clear(self):
        log = HistoryLog([HistoryEntry("1+1", "2")])
        log.clear()
        assert len(log) == 0
        assert log.rows() == []

    def test_entries_is_a_snapshot(self):
        log = HistoryLog()
        snapshot = log.entries
        log.append(HistoryEntry("1+1", "2"))
        assert snapshot == ()
        assert len(log.entries) == 1

    def test_rejects_other_types(self):
        log = HistoryLog()
        with pytest.raises(TypeError):
            log.append(("1+1", "2"))
