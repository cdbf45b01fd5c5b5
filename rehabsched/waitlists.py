"""Waiting lists with sorted insertion, cancellation and rescheduling."""

from __future__ import annotations

import random

from .containers import LinkedQueue, PriorityQueue
from .patient import Patient, PatientStatus

_APPEND_STATUSES = (PatientStatus.EARLY, PatientStatus.WAITING, PatientStatus.SERVING)


def _pick_index(rng: random.Random, count: int) -> int:
    return rng.randrange(count) if count != 1 else 0


class SortedWaitQueue(LinkedQueue[Patient]):
    """Waiting list that orders idle or late arrivals by serving time."""

    def insert_sorted(self, patient: Patient) -> None:
        """Append the patient, or insert before the first one served later."""
        if (
            self.is_empty()
            or patient.status in _APPEND_STATUSES
            or self._items[-1].serving_time() <= patient.serving_time()
        ):
            self.enqueue(patient)
            return
        target = patient.serving_time()
        index = next(i for i, p in enumerate(self._items) if p.serving_time() > target)
        self._items.insert(index, patient)

    def treatment_latency(self) -> int:
        """Sum of the durations of each waiting patient's next treatment."""
        return sum(p.first_required_duration() for p in self._items)

    def _remove_at(self, index: int) -> Patient:
        patient = self._items[index]
        del self._items[index]
        return patient


class CancellableWaitQueue(SortedWaitQueue):
    """Gym waiting list from which a patient may cancel the last treatment."""

    def cancel_random(self, rng: random.Random) -> Patient | None:
        """Pick one patient at random; remove and return them if they may cancel."""
        if self.is_empty():
            return None
        index = _pick_index(rng, len(self))
        if self._items[index].can_cancel():
            return self._remove_at(index)
        return None

    def cancel_any(self, rng: random.Random) -> Patient | None:
        """Start at a random patient and remove the first one, cyclically, who may cancel."""
        if self.is_empty():
            return None
        count = len(self)
        start = _pick_index(rng, count)
        for offset in range(count):
            index = (start + offset) % count
            if self._items[index].can_cancel():
                return self._remove_at(index)
        return None


class ReschedulingQueue(PriorityQueue[Patient]):
    """Early-patient list from which a patient may move their appointment later."""

    def reschedule(self, rng: random.Random) -> Patient | None:
        """Pick a patient at random and, if allowed, delay them by 1 to 25 timesteps."""
        if self.is_empty():
            return None
        index = _pick_index(rng, len(self))
        patient = self._entries[index][0]
        if not patient.can_reschedule():
            return None
        self._pop_at(index)
        patient.pt += rng.randint(1, 25)
        self.enqueue(patient, -patient.pt)
        return patient