import pytest

from pathviz.core.frontier import Frontier


def drain(f: Frontier):
    out = []
    while f:
        e = f.pop()
        out.append((e.cell, e.priority))
    return out


def test_pops_lowest_priority_first():
    f = Frontier()
    f.push((0, 0), 5)
    f.push((1, 0), 2)
    f.push((2, 0), 9)
    assert drain(f) == [((1, 0), 2), ((0, 0), 5), ((2, 0), 9)]


def test_ties_break_by_insertion_order():
    f = Frontier()
    for i in range(5):
        f.push((i, 0), 3)
    assert [c for c, _ in drain(f)] == [(i, 0) for i in range(5)]


def test_replace_drops_stale_entry():
    f = Frontier()
    f.push((0, 0), 5)
    f.push((1, 1), 3)
    f.push((0, 0), 1)
    assert len(f) == 2
    assert drain(f) == [((0, 0), 1), ((1, 1), 3)]


def test_replaced_entry_goes_behind_equal_priorities():
    f = Frontier()
    f.push((0, 0), 4)
    f.push((1, 1), 4)
    f.push((0, 0), 4)
    assert [c for c, _ in drain(f)] == [(1, 1), (0, 0)]


def test_duplicates_kept_without_replace():
    f = Frontier()
    f.push((0, 0), 5, replace=False)
    f.push((0, 0), 1, replace=False)
    assert len(f) == 2
    assert drain(f) == [((0, 0), 1), ((0, 0), 5)]


def test_contains_tracks_live_entries():
    f = Frontier()
    f.push((0, 0), 1)
    assert (0, 0) in f
    f.pop()
    assert (0, 0) not in f


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        Frontier().pop()


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        Frontier(capacity=0)


def test_overflow_evicts_worst_entry():
    f = Frontier(capacity=2)
    assert f.push((0, 0), 1) is None
    assert f.push((1, 0), 2) is None
    dropped = f.push((2, 0), 3)
    assert dropped.cell == (2, 0)
    assert len(f) == 2
    assert [c for c, _ in drain(f)] == [(0, 0), (1, 0)]


def test_overflow_evicts_newest_among_equal_worst():
    f = Frontier(capacity=2)
    f.push((0, 0), 5)
    f.push((1, 0), 5)
    dropped = f.push((2, 0), 1)
    assert dropped.cell == (1, 0)
    assert [c for c, _ in drain(f)] == [(2, 0), (0, 0)]


def test_capacity_never_exceeded():
    f = Frontier(capacity=3)
    for i in range(20):
        f.push((i, i), (i * 7) % 5)
        assert len(f) <= 3
    assert len(f.entries()) == 3


def test_entries_in_extraction_order():
    f = Frontier()
    f.push((0, 0), 3)
    f.push((1, 0), 1)
    f.push((2, 0), 2)
    assert [e.cell for e in f.entries()] == [(1, 0), (2, 0), (0, 0)]
    assert len(f) == 3


def test_contains_with_duplicates():
    f = Frontier()
    f.push((0, 0), 5, replace=False)
    f.push((0, 0), 1, replace=False)
    f.pop()
    assert (0, 0) in f
    f.pop()
    assert (0, 0) not in f


def test_dead_entries_do_not_accumulate():
    f = Frontier()
    for p in range(200, 0, -1):
        f.push((0, 0), p)
    assert len(f) == 1
    assert len(f._heap) <= 10
    assert drain(f) == [((0, 0), 1)]


def test_capacity_eviction_after_many_replacements():
    f = Frontier(capacity=2)
    for p in range(50, 0, -1):
        f.push((0, 0), p)
    f.push((1, 0), 7)
    dropped = f.push((2, 0), 9)
    assert dropped.cell == (2, 0)
    assert len(f._heap) <= 12
    assert drain(f) == [((0, 0), 1), ((1, 0), 7)]
