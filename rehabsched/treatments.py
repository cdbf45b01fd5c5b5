"""Treatments a patient needs, one kind per resource type."""

from __future__ import annotations

import abc
from typing import ClassVar, Protocol

from .resources import Resource, ResourceType


class SchedulerLike(Protocol):
    """The part of the scheduler that treatments talk to."""

    def count_x(self) -> int: ...

    def count_e(self) -> int: ...

    def count_u(self) -> int: ...

    def add_to_wait_x(self, timestep: int, patient: object) -> None: ...

    def add_to_wait_e(self, timestep: int, patient: object) -> None: ...

    def add_to_wait_u(self, timestep: int, patient: object) -> None: ...


class Treatment(abc.ABC):
    """A treatment of a given duration that needs one kind of resource."""

    kind: ClassVar[ResourceType]

    def __init__(self, duration: int) -> None:
        self.duration = duration
        self.assigned_resource: Resource | None = None

    @abc.abstractmethod
    def can_assign(self, scheduler: SchedulerLike) -> bool:
        """Whether a resource for this treatment is available now."""

    @abc.abstractmethod
    def move_to_wait(self, scheduler: SchedulerLike, patient: object, timestep: int) -> None:
        """Put the patient in the waiting list for this treatment."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(duration={self.duration})"


class ETherapyTreatment(Treatment):
    """Electro-therapy session."""

    kind = ResourceType.E_THERAPY

    def can_assign(self, scheduler: SchedulerLike) -> bool:
        return scheduler.count_e() > 0

    def move_to_wait(self, scheduler: SchedulerLike, patient: object, timestep: int) -> None:
        scheduler.add_to_wait_e(timestep, patient)


class UTherapyTreatment(Treatment):
    """Ultrasound-therapy session."""

    kind = ResourceType.U_THERAPY

    def can_assign(self, scheduler: SchedulerLike) -> bool:
        return scheduler.count_u() > 0

    def move_to_wait(self, scheduler: SchedulerLike, patient: object, timestep: int) -> None:
        scheduler.add_to_wait_u(timestep, patient)


class XTherapyTreatment(Treatment):
    """Exercise session in a gym room."""

    kind = ResourceType.GYM

    def can_assign(self, scheduler: SchedulerLike) -> bool:
        return scheduler.count_x() > 0

    def move_to_wait(self, scheduler: SchedulerLike, patient: object, timestep: int) -> None:
        scheduler.add_to_wait_x(timestep, patient)


_BY_CODE: dict[str, type[Treatment]] = {
    "X": XTherapyTreatment,
    "E": ETherapyTreatment,
    "U": UTherapyTreatment,
}


def make_treatment(code: str, duration: int) -> Treatment:
    """Build the treatment for a code letter X, E or U."""
    try:
        cls = _BY_CODE[code]
    except KeyError:
        raise ValueError(f"invalid resource type character: {code!r}") from None
    return cls(duration)