"""Treatment resources: gym rooms and electro/ultra therapy devices."""

from __future__ import annotations

import enum
import itertools
from typing import ClassVar, Iterator


class ResourceType(enum.Enum):
    """Kind of resource a treatment needs."""

    GYM = "X"
    E_THERAPY = "E"
    U_THERAPY = "U"

    @property
    def label_prefix(self) -> str:
        return {"X": "R", "E": "E", "U": "U"}[self.value]


class Resource:
    """A resource that a limited number of patients can be attached to."""

    kind: ClassVar[ResourceType]
    default_capacity: ClassVar[int] = 1
    _ids: ClassVar[Iterator[int]]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._ids = itertools.count(1)

    def __init__(self) -> None:
        self.id: int = next(type(self)._ids)
        self.capacity: int = self.default_capacity
        self.attached: int = 0

    def is_full(self) -> bool:
        return self.attached == self.capacity

    def attach(self) -> bool:
        """Attach one patient if there is room; report whether it was attached."""
        if self.attached < self.capacity:
            self.attached += 1
            return True
        return False

    def detach(self) -> bool:
        """Detach one patient if any is attached; report whether one was detached."""
        if self.attached > 0:
            self.attached -= 1
            return True
        return False

    def patient_label(self) -> str:
        """Short label shown next to a patient being served."""
        return f"{self.kind.label_prefix}{self.id}"

    def __str__(self) -> str:
        return self.patient_label()


class Gym(Resource):
    """Exercise room shared by several patients at once."""

    kind = ResourceType.GYM
    default_capacity = 0

    def __init__(self, capacity: int = 0) -> None:
        super().__init__()
        self.set_capacity(capacity)

    def set_capacity(self, n: int) -> None:
        """Set the capacity; non-positive values become zero."""
        self.capacity = n if n > 0 else 0

    def __str__(self) -> str:
        return f"{self.patient_label()}[{self.attached},{self.capacity}]"


class ETherapyDevice(Resource):
    """Electro-therapy device serving one patient."""

    kind = ResourceType.E_THERAPY


class UTherapyDevice(Resource):
    """Ultrasound-therapy device serving one patient."""

    kind = ResourceType.U_THERAPY