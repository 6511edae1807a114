import pytest

from mask_painter import HistoryStack, Surface


def _marked(value, size=(4, 4)):
    s = Surface(*size)
    s.set(0, 0, (value, 0, 0, 255))
    return s


def _value(entry):
    return entry.get(0, 0)[0]


def test_empty_history():
    h = HistoryStack()
    assert len(h) == 0
    assert h.current is None
    assert not h.can_undo
    assert not h.can_redo
    assert h.undo() is None
    assert h.redo() is None


def test_capture_copies_the_overlay():
    h = HistoryStack()
    live = _marked(1)
    h.capture(live)
    live.set(0, 0, (99, 0, 0, 255))
    assert _value(h.current) == 1
    assert h.current.read_only


def test_undo_redo_walks_the_cursor():
    h = HistoryStack()
    for v in range(3):
        h.capture(_marked(v))
    assert h.cursor == 2
    assert _value(h.undo()) == 1
    assert _value(h.undo()) == 0
    assert h.undo() is None
    assert h.cursor == 0
    assert _value(h.redo()) == 1
    assert _value(h.redo()) == 2
    assert h.redo() is None


def test_capture_after_undo_discards_redo_branch():
    h = HistoryStack()
    for v in range(4):
        h.capture(_marked(v))
    h.undo()
    h.undo()
    assert h.can_redo
    h.capture(_marked(10))
    assert not h.can_redo
    assert len(h) == 3
    assert [_value(e) for e in (h[0], h[1], h[2])] == [0, 1, 10]


def test_capacity_keeps_most_recent_entries():
    h = HistoryStack()
    for v in range(27):
        h.capture(_marked(v))
        assert h.can_undo == (h.cursor > 0)
    assert len(h) == 20
    assert h.cursor == 19
    assert [_value(h[i]) for i in range(20)] == list(range(7, 27))
    assert _value(h.current) == 26


def test_eviction_after_undo_and_capture():
    h = HistoryStack(capacity=3)
    for v in range(3):
        h.capture(_marked(v))
    h.undo()
    h.capture(_marked(5))
    # redo branch dropped first, so nothing needs evicting
    assert [_value(h[i]) for i in range(len(h))] == [0, 1, 5]
    h.capture(_marked(6))
    assert [_value(h[i]) for i in range(len(h))] == [1, 5, 6]
    assert h.cursor == 2
    assert _value(h.current) == 6


def test_reset_starts_from_single_snapshot():
    h = HistoryStack()
    for v in range(5):
        h.capture(_marked(v))
    h.reset(_marked(42))
    assert len(h) == 1
    assert h.cursor == 0
    assert not h.can_undo and not h.can_redo
    assert _value(h.current) == 42


def test_invalid_capacity():
    with pytest.raises(ValueError):
        HistoryStack(capacity=0)
