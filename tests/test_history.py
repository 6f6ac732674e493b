import pytest

from Calc.History import HistoryEntry, HistoryLog, DEFAULT_CAPACITY


def fill(log, count):
    for i in range(count):
        log.push(HistoryEntry(f"{i}+0", str(i)))


def test_default_capacity():
    assert HistoryLog().capacity == DEFAULT_CAPACITY == 20


def test_newest_first():
    log = HistoryLog()
    fill(log, 3)
    assert [entry.result for entry in log] == ["2", "1", "0"]
    assert log[0] == HistoryEntry("2+0", "2")


def test_push_evicts_oldest():
    log = HistoryLog(capacity=5)
    fill(log, 8)
    assert len(log) == 5
    assert [entry.result for entry in log.entries()] == ["7", "6", "5", "4", "3"]


def test_shrinking_keeps_newest():
    log = HistoryLog()
    fill(log, 10)
    log.set_capacity(3)
    assert log.capacity == 3
    assert [entry.result for entry in log] == ["9", "8", "7"]
    log.set_capacity(6)
    fill(log, 1)
    assert [entry.result for entry in log] == ["0", "9", "8", "7"]


@pytest.mark.parametrize("capacity", [0, -1])
def test_capacity_must_be_positive(capacity):
    with pytest.raises(ValueError):
        HistoryLog(capacity)
    with pytest.raises(ValueError):
        HistoryLog().set_capacity(capacity)


def test_entry_is_immutable():
    entry = HistoryEntry("2+3*4", "14")
    with pytest.raises(AttributeError):
        entry.result = "15"


def test_entry_renders_for_list():
    assert str(HistoryEntry("2+3*4", "14")) == "2+3*4 = 14"


def test_entries_is_a_snapshot():
    log = HistoryLog()
    fill(log, 2)
    snapshot = log.entries()
    fill(log, 1)
    assert len(snapshot) == 2
    assert len(log) == 3
