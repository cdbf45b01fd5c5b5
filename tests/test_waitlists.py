import random

import pytest

from rehabsched.patient import Patient, PatientStatus
from rehabsched.waitlists import (
    CancellableWaitQueue,
    ReschedulingQueue,
    SortedWaitQueue,
)


class FixedRng:
    def __init__(self, index=0, delay=1):
        self.index = index
        self.delay = delay
        self.randrange_calls = []

    def randrange(self, n):
        self.randrange_calls.append(n)
        return self.index

    def randint(self, a, b):
        assert a <= self.delay <= b
        return self.delay


def gym_patient(pt=0, vt=0):
    p = Patient("N", pt, vt)
    p.add_treatment(2, "X")
    return p


def e_patient(pt=0, vt=0):
    p = Patient("N", pt, vt)
    p.add_treatment(2, "E")
    return p


def test_insert_sorted_orders_idle_by_serving_time():
    q = SortedWaitQueue()
    a, b, c = Patient("N", 10, 0), Patient("N", 5, 0), Patient("N", 7, 0)
    for p in (a, b, c):
        q.insert_sorted(p)
    assert list(q) == [b, c, a]
    assert len(q) == 3


def test_insert_sorted_keeps_arrival_for_waiting():
    q = SortedWaitQueue()
    ps = [Patient("N", t, 0) for t in (10, 5, 7)]
    for p in ps:
        p.status = PatientStatus.WAITING
        q.insert_sorted(p)
    assert list(q) == ps


def test_insert_sorted_equal_goes_to_back():
    q = SortedWaitQueue()
    a, b = Patient("N", 5, 0), Patient("N", 5, 0)
    q.insert_sorted(a)
    q.insert_sorted(b)
    assert list(q) == [a, b]


def test_treatment_latency():
    q = SortedWaitQueue()
    assert q.treatment_latency() == 0
    p1 = Patient("N", 0, 0)
    p1.add_treatment(4, "E")
    p1.add_treatment(9, "U")
    p2 = Patient("N", 0, 0)
    p2.add_treatment(6, "X")
    q.enqueue(p1)
    q.enqueue(p2)
    assert q.treatment_latency() == 4 + 6


def test_treatment_latency_counts_missing_as_minus_one():
    q = SortedWaitQueue()
    q.enqueue(Patient("N", 0, 0))
    assert q.treatment_latency() == -1


def test_cancel_empty_returns_none():
    q = CancellableWaitQueue()
    assert q.cancel_random(FixedRng()) is None
    assert q.cancel_any(FixedRng()) is None


def test_cancel_random_removes_chosen():
    q = CancellableWaitQueue()
    a, b, c = e_patient(), gym_patient(), e_patient()
    for p in (a, b, c):
        q.enqueue(p)
    assert q.cancel_random(FixedRng(index=1)) is b
    assert list(q) == [a, c]


def test_cancel_random_declines_non_cancellable():
    q = CancellableWaitQueue()
    a, b = e_patient(), gym_patient()
    q.enqueue(a)
    q.enqueue(b)
    assert q.cancel_random(FixedRng(index=0)) is None
    assert list(q) == [a, b]


def test_cancel_single_does_not_draw():
    q = CancellableWaitQueue()
    p = gym_patient()
    q.enqueue(p)
    rng = FixedRng()
    assert q.cancel_random(rng) is p
    assert rng.randrange_calls == []
    assert q.is_empty()


def test_cancel_any_wraps_around():
    q = CancellableWaitQueue()
    a, b, c = gym_patient(), e_patient(), e_patient()
    for p in (a, b, c):
        q.enqueue(p)
    assert q.cancel_any(FixedRng(index=1)) is a
    assert list(q) == [b, c]


def test_cancel_any_none_cancellable():
    q = CancellableWaitQueue()
    ps = [e_patient(), e_patient()]
    for p in ps:
        q.enqueue(p)
    assert q.cancel_any(FixedRng(index=1)) is None
    assert list(q) == ps


def test_cancel_any_with_seeded_rng_invariant():
    rng = random.Random(7)
    q = CancellableWaitQueue()
    ps = [gym_patient() if i % 2 else e_patient() for i in range(8)]
    for p in ps:
        q.enqueue(p)
    removed = []
    while (p := q.cancel_any(rng)) is not None:
        removed.append(p)
    assert sorted(x.pid for x in removed) == sorted(x.pid for x in ps if x.can_cancel())
    assert all(not p.can_cancel() for p in q)


def test_reschedule_empty():
    assert ReschedulingQueue().reschedule(FixedRng()) is None


def test_reschedule_delays_and_reorders():
    q = ReschedulingQueue()
    a, b = Patient("N", 5, 0), Patient("N", 8, 0)
    q.enqueue(a, -a.pt)
    q.enqueue(b, -b.pt)
    assert list(q) == [a, b]
    result = q.reschedule(FixedRng(index=0, delay=10))
    assert result is a
    assert a.pt == 5 + 10
    assert list(q) == [b, a]
    assert q.peek() == (b, -8)
    assert len(q) == 2


def test_reschedule_refuses_when_not_allowed():
    q = ReschedulingQueue()
    p = Patient("N", 5, 9)
    q.enqueue(p, -p.pt)
    assert q.reschedule(FixedRng(delay=3)) is None
    assert p.pt == 5
    assert len(q) == 1


@pytest.mark.parametrize("index", [0, 1, 2])
def test_reschedule_picks_index(index):
    q = ReschedulingQueue()
    ps = [Patient("N", t, 0) for t in (3, 6, 9)]
    for p in ps:
        q.enqueue(p, -p.pt)
    before = ps[index].pt
    assert q.reschedule(FixedRng(index=index, delay=25)) is ps[index]
    assert ps[index].pt == before + 25
    assert len(q) == 3