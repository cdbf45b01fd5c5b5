"""Patients and the treatments they still require."""

from __future__ import annotations

import enum
import itertools
from typing import ClassVar, Iterator

from .containers import LinkedQueue
from .resources import Resource, ResourceType
from .treatments import Treatment, make_treatment


class PatientStatus(enum.Enum):
    IDLE = enum.auto()
    EARLY = enum.auto()
    LATE = enum.auto()
    WAITING = enum.auto()
    SERVING = enum.auto()
    FINISHED = enum.auto()


class Patient:
    """A patient with an appointment time, an arrival time and a treatment plan."""

    _ids: ClassVar[Iterator[int]] = itertools.count(1)

    def __init__(self, kind: str, pt: int, vt: int) -> None:
        if kind in ("N", "n"):
            normal = True
        elif kind in ("R", "r"):
            normal = False
        else:
            raise ValueError(f"invalid patient type: {kind!r}")
        self.pid: int = next(Patient._ids)
        self.normal = normal
        self.pt = pt  # appointment time
        self.vt = vt  # arrival time
        self.ft = 0  # finish time
        self.tt = 0  # total treatment time
        self.xt = 0  # duration of the gym treatment
        self.num_res = 0
        self.treatments: LinkedQueue[Treatment] = LinkedQueue()
        self.status = PatientStatus.IDLE
        self.canceled = False
        self.rescheduled = False

    @property
    def recovering(self) -> bool:
        return not self.normal

    def can_reschedule(self) -> bool:
        return self.vt < self.pt and self.num_res < 3

    def mark_rescheduled(self) -> None:
        self.num_res += 1
        self.rescheduled = True

    def mark_canceled(self) -> None:
        self.canceled = True

    def drop_gym_time(self) -> None:
        """Remove the gym treatment's time from the total treatment time."""
        self.tt -= self.xt

    def final_waiting_time(self) -> int:
        return self.ft - self.vt - self.tt

    def late_penalty(self) -> float:
        if self.vt <= self.pt:
            return self.pt - self.vt
        return 0.5 * (self.vt - self.pt)

    def serving_time(self) -> float:
        """Time from which the patient can be served."""
        if self.pt >= self.vt:
            return self.pt
        return self.vt + 0.5 * (self.vt - self.pt)

    def is_early(self) -> bool:
        return self.vt < self.pt

    def is_late(self) -> bool:
        return self.vt > self.pt

    def can_cancel(self) -> bool:
        """Only a patient whose last remaining treatment is a gym session may cancel."""
        if len(self.treatments) != 1:
            return False
        return self.treatments.peek().kind is ResourceType.GYM

    def first_required(self) -> Treatment | None:
        return None if self.treatments.is_empty() else self.treatments.peek()

    def first_required_duration(self) -> int:
        first = self.first_required()
        return -1 if first is None else first.duration

    def remove_first_required(self) -> Treatment | None:
        return None if self.treatments.is_empty() else self.treatments.dequeue()

    def add_treatment(self, duration: int, code: str) -> Treatment:
        treatment = make_treatment(code, duration)
        self.tt += duration
        if treatment.kind is ResourceType.GYM:
            self.xt = duration
        self.treatments.enqueue(treatment)
        return treatment

    def remove_treatment(self, treatment: Treatment) -> None:
        self.treatments = LinkedQueue(t for t in self.treatments if t is not treatment)

    def add_treatment_first(self, treatment: Treatment) -> None:
        self.treatments = LinkedQueue([treatment, *self.treatments])

    def attach_resource(self, resource: Resource) -> None:
        self.treatments.peek().assigned_resource = resource

    def attached_resource(self) -> Resource | None:
        return self.treatments.peek().assigned_resource

    def __str__(self) -> str:
        if self.status is PatientStatus.IDLE:
            return f"P{self.pid}_{self.vt}"
        if self.status is PatientStatus.SERVING:
            first = self.first_required()
            resource = first.assigned_resource if first is not None else None
            label = resource.patient_label() if resource is not None else ""
            return f"P{self.pid}_{label}"
        return str(self.pid)

    def __repr__(self) -> str:
        return f"Patient(pid={self.pid}, pt={self.pt}, vt={self.vt}, status={self.status.name})"