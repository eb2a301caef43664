import random

from govind.scheduling.queue import EMPTY, PriorityQueue, SequencedComparator


def ascending(a: int, b: int) -> int:
    return a - b


def _heap_ok(q: PriorityQueue) -> bool:
    heap = q._heap
    return all(ascending(heap[(i - 1) // 2], heap[i]) <= 0 for i in range(1, len(heap)))


def test_empty_queue_returns_sentinel():
    q = PriorityQueue(ascending)
    assert q.pop() is EMPTY
    assert q.peek() is EMPTY
    assert len(q) == 0
    assert not q


def test_pops_in_rank_order():
    q = PriorityQueue(ascending, [5, 1, 4, 1, 3, 9, 2, 6])
    out = []
    while (x := q.pop()) is not EMPTY:
        out.append(x)
    assert out == [1, 1, 2, 3, 4, 5, 6, 9]


def test_peek_does_not_mutate():
    q = PriorityQueue(ascending, [3, 1, 2])
    before = list(q._heap)
    assert q.peek() == 1
    assert q.peek() == 1
    assert q._heap == before
    assert len(q) == 3


def test_interleaved_push_pop_keeps_heap_property():
    rng = random.Random(7)
    q = PriorityQueue(ascending)
    last_popped = None
    for _ in range(500):
        if rng.random() < 0.6:
            value = rng.randint(0, 100)
            q.push(value)
            # a fresh push may legitimately outrank what was popped before
            if last_popped is not None and value < last_popped:
                last_popped = None
        else:
            x = q.pop()
            if x is EMPTY:
                continue
            if last_popped is not None:
                assert x >= last_popped
            last_popped = x
        assert _heap_ok(q)


def test_descending_comparator():
    q = PriorityQueue(lambda a, b: b - a, [1, 3, 2])
    assert [q.pop(), q.pop(), q.pop(), q.pop()] == [3, 2, 1, EMPTY]


def test_sequenced_comparator_is_fifo_on_ties():
    cmp = SequencedComparator(lambda a, b: a[0] - b[0])
    q = PriorityQueue(cmp)
    for item in [(1, "a"), (0, "x"), (1, "b"), (1, "c"), (0, "y")]:
        q.push(cmp.wrap(item))
    out = [cmp.unwrap(q.pop()) for _ in range(5)]
    assert out == [(0, "x"), (0, "y"), (1, "a"), (1, "b"), (1, "c")]
    assert cmp.unwrap(q.pop()) is EMPTY
