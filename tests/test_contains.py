import random
from dataclasses import dataclass

import pytest

from static_queue.core.ring_queue import ContainsRingQueue, RingQueue, drain_copy
from static_queue.apps.demo_cli import Record


class Opaque:
    def __init__(self, v):
        self.v = v


@dataclass(frozen=True)
class Point:
    x: int
    y: int


def test_plain_queue_has_no_contains():
    q = RingQueue(3)
    assert not hasattr(q, "contains")


def test_contains_on_empty_queue():
    q = ContainsRingQueue(3)
    assert not q.contains(1)
    assert not q.contains(None)


def test_contains_only_sees_logical_window():
    q = ContainsRingQueue(3)
    for i in range(5):
        q.push(i)
    # 0 and 1 were evicted even though stale copies may remain in storage
    assert not q.contains(0)
    assert not q.contains(1)
    assert all(q.contains(i) for i in (2, 3, 4))
    q.pop()
    assert not q.contains(2)
    q.clear()
    assert not any(q.contains(i) for i in range(5))


def test_contains_uses_element_equality():
    q = ContainsRingQueue(2, element_type=Point)
    q.push(Point(1, 2))
    assert q.contains(Point(1, 2))
    assert not q.contains(Point(2, 1))


def test_contains_with_tolerant_equality():
    q = ContainsRingQueue(5, element_type=Record)
    q.push(Record(5, 5.0, True))
    assert q.contains(Record(5, 5.000001, True))
    assert not q.contains(Record(5, 5.1, True))


def test_element_type_without_equality_is_rejected_at_construction():
    with pytest.raises(TypeError):
        ContainsRingQueue(3, element_type=Opaque)


def test_element_type_with_inherited_equality_is_accepted():
    class Tagged(Point):
        pass

    q = ContainsRingQueue(2, element_type=Tagged)
    assert q.element_type is Tagged
    assert ContainsRingQueue(2, element_type=int).element_type is int


def test_contains_numpy_backed():
    q = ContainsRingQueue(3, dtype="int32")
    for v in (10, 20, 30, 40):
        q.push(v)
    assert q.contains(40)
    assert not q.contains(10)


def test_contains_matches_reference_list():
    rng = random.Random(7)
    q = ContainsRingQueue(4)
    ref = []
    for _ in range(300):
        if rng.random() < 0.6:
            v = rng.randint(0, 9)
            q.push(v)
            ref.append(v)
            if len(ref) > 4:
                ref.pop(0)
        else:
            q.pop()
            if ref:
                ref.pop(0)
        for candidate in range(10):
            assert q.contains(candidate) == (candidate in ref)
    assert drain_copy(q) == ref
