"""The rehabilitation-centre simulation and its report."""

from __future__ import annotations

import argparse
import random
from collections.abc import Callable
from pathlib import Path

from .containers import ArrayStack, LinkedQueue, PriorityQueue
from .patient import Patient, PatientStatus
from .resources import ETherapyDevice, Gym, Resource, ResourceType, UTherapyDevice
from .treatments import Treatment
from .ui import ConsoleUI
from .waitlists import CancellableWaitQueue, ReschedulingQueue, SortedWaitQueue

REPORT_HEADER = "PID  PType PT   VT   FT   WT   TT   Cancel Resc"


def _cell(value: int) -> str:
    if value < 10:
        pad = 4
    elif value < 100:
        pad = 3
    elif value < 1000:
        pad = 2
    else:
        pad = 1
    return f"{value}{' ' * pad}"


def _pid_cell(pid: int) -> str:
    pad = 3 if pid < 10 else 2 if pid < 100 else 1
    return f"P{pid}{' ' * pad}"


def _num(value: float) -> str:
    return f"{value:g}"


def _ratio(a: float, b: float) -> float:
    return a / b if b else float("nan")


class Scheduler:
    """Moves patients between arrival, waiting, treatment and finished lists."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.all_patients: LinkedQueue[Patient] = LinkedQueue()
        self.early_patients = ReschedulingQueue()
        self.late_patients: PriorityQueue[Patient] = PriorityQueue()
        self.e_devices: LinkedQueue[Resource] = LinkedQueue()
        self.u_devices: LinkedQueue[Resource] = LinkedQueue()
        self.x_devices: LinkedQueue[Resource] = LinkedQueue()
        self.in_treatment: PriorityQueue[Patient] = PriorityQueue()
        self.finished_patients: ArrayStack[Patient] = ArrayStack()
        self.u_waiting = SortedWaitQueue()
        self.e_waiting = SortedWaitQueue()
        self.x_waiting = CancellableWaitQueue()
        self.p_cancel = 0
        self.p_reschedule = 0
        self.total_patients = 0

    def count_x(self) -> int:
        return len(self.x_devices)

    def count_e(self) -> int:
        return len(self.e_devices)

    def count_u(self) -> int:
        return len(self.u_devices)

    def add_to_wait_u(self, timestep: int, patient: Patient) -> None:
        patient.status = PatientStatus.WAITING
        self.u_waiting.insert_sorted(patient)

    def add_to_wait_e(self, timestep: int, patient: Patient) -> None:
        patient.status = PatientStatus.WAITING
        self.e_waiting.insert_sorted(patient)

    def add_to_wait_x(self, timestep: int, patient: Patient) -> None:
        patient.status = PatientStatus.WAITING
        self.x_waiting.insert_sorted(patient)

    def load(self, text: str) -> None:
        """Read devices, probabilities and patients from the input text."""
        tokens = iter(text.split())

        def take() -> str:
            try:
                return next(tokens)
            except StopIteration:
                raise ValueError("unexpected end of input") from None

        def take_int() -> int:
            token = take()
            try:
                return int(token)
            except ValueError:
                raise ValueError(f"expected an integer, got {token!r}") from None

        e_count, u_count, x_count = take_int(), take_int(), take_int()
        for _ in range(e_count):
            self.e_devices.enqueue(ETherapyDevice())
        for _ in range(u_count):
            self.u_devices.enqueue(UTherapyDevice())
        for _ in range(x_count):
            self.x_devices.enqueue(Gym(take_int()))

        self.p_cancel = take_int()
        self.p_reschedule = take_int()

        patient_count = take_int()
        for _ in range(patient_count):
            kind = take()
            pt, vt = take_int(), take_int()
            patient = Patient(kind, pt, vt)
            for _ in range(take_int()):
                code = take()
                patient.add_treatment(take_int(), code)
            self.all_patients.enqueue(patient)
        self.total_patients += patient_count

    def read_input(self, path: str | Path) -> None:
        """Load the simulation input from a file."""
        self.load(Path(path).read_text())

    def choose_treatment(self, timestep: int, patient: Patient, treatment: Treatment) -> Treatment:
        """Pick the recovering patient's next treatment by waiting-list latency."""
        plan = list(patient.treatments)
        if not plan:
            raise ValueError("patient has no treatments left")
        if len(plan) == 1:
            treatment.move_to_wait(self, patient, timestep)
            return treatment

        waits = {
            ResourceType.E_THERAPY: self.e_waiting,
            ResourceType.U_THERAPY: self.u_waiting,
            ResourceType.GYM: self.x_waiting,
        }
        latency = dict.fromkeys(ResourceType, 0)
        for item in plan:
            latency[item.kind] = waits[item.kind].treatment_latency()

        def preferred(kind: ResourceType) -> bool:
            own = latency[kind]
            others = [latency[k] for k in ResourceType if k is not kind]
            if len(plan) == 2:
                return any(own <= other for other in others)
            if len(plan) == 3:
                return all(own <= other for other in others)
            return False

        # When no treatment qualifies, keep the current order.
        chosen = next((item for item in plan if preferred(item.kind)), plan[0])
        patient.status = PatientStatus.WAITING
        patient.remove_treatment(chosen)
        patient.add_treatment_first(chosen)
        chosen.move_to_wait(self, patient, timestep)
        return chosen

    def add_to_early_late(self, patient: Patient) -> None:
        """Move the patient at the front of the arrivals to the early or late list."""
        if self.all_patients.is_empty() or self.all_patients.peek() is not patient:
            raise ValueError("patient is not at the front of the arrivals")
        self.all_patients.dequeue()
        if patient.vt <= patient.pt:
            patient.status = PatientStatus.EARLY
            self.early_patients.enqueue(patient, -patient.serving_time())
        else:
            patient.status = PatientStatus.LATE
            self.late_patients.enqueue(patient, -patient.serving_time())

    def move_to_waiting(self, timestep: int, patient: Patient) -> None:
        """Send a patient leaving the early or late list to a waiting list."""
        treatment = patient.first_required()
        if treatment is None:
            self._finish(patient, timestep)
        elif patient.normal:
            treatment.move_to_wait(self, patient, timestep)
        else:
            patient.status = PatientStatus.WAITING
            self.choose_treatment(timestep, patient, treatment)

    def _start(self, patient: Patient, treatment: Treatment, resource: Resource, timestep: int) -> None:
        patient.status = PatientStatus.SERVING
        resource.attach()
        patient.attach_resource(resource)
        self.in_treatment.enqueue(patient, -timestep - treatment.duration)

    def assign_x(self, patient: Patient, treatment: Treatment, timestep: int) -> None:
        patient = self.x_waiting.dequeue()
        room = self.x_devices.peek()
        patient.status = PatientStatus.SERVING
        room.attach()
        if room.is_full():
            self.x_devices.dequeue()
        patient.attach_resource(room)
        self.in_treatment.enqueue(patient, -timestep - treatment.duration)

    def assign_e(self, patient: Patient, treatment: Treatment, timestep: int) -> None:
        patient = self.e_waiting.dequeue()
        self._start(patient, treatment, self.e_devices.dequeue(), timestep)

    def assign_u(self, patient: Patient, treatment: Treatment, timestep: int) -> None:
        patient = self.u_waiting.dequeue()
        self._start(patient, treatment, self.u_devices.dequeue(), timestep)

    def _finish(self, patient: Patient, timestep: int) -> None:
        patient.status = PatientStatus.FINISHED
        patient.ft = timestep
        self.finished_patients.push(patient)

    def release_from_treatment(self, timestep: int, patient: Patient) -> None:
        """Free the patient's resource and send them on to waiting or finished."""
        resource = patient.attached_resource()
        if resource is not None:
            if resource.kind is ResourceType.GYM:
                if resource.is_full():
                    self.x_devices.enqueue(resource)
                resource.detach()
            else:
                resource.detach()
                devices = self.e_devices if resource.kind is ResourceType.E_THERAPY else self.u_devices
                devices.enqueue(resource)

        patient.remove_first_required()
        following = patient.first_required()
        if following is None:
            self._finish(patient, timestep)
        elif patient.normal:
            following.move_to_wait(self, patient, timestep)
        else:
            patient.status = PatientStatus.WAITING
            self.choose_treatment(timestep, patient, following)

    def _assign_waiting(
        self,
        queue: SortedWaitQueue,
        assign: Callable[[Patient, Treatment, int], None],
        timestep: int,
    ) -> None:
        while not queue.is_empty():
            patient = queue.peek()
            treatment = patient.first_required()
            if treatment is None or not treatment.can_assign(self):
                return
            assign(patient, treatment, timestep)

    def step(self, timestep: int) -> None:
        """Advance the simulation by one timestep."""
        while not self.all_patients.is_empty() and self.all_patients.peek().vt == timestep:
            self.add_to_early_late(self.all_patients.peek())

        if self.rng.randrange(101) < self.p_cancel:
            canceled = self.x_waiting.cancel_random(self.rng)
            if canceled is not None:
                canceled.mark_canceled()
                canceled.drop_gym_time()
                self._finish(canceled, timestep)

        if self.rng.randrange(101) < self.p_reschedule:
            moved = self.early_patients.reschedule(self.rng)
            if moved is not None:
                moved.mark_rescheduled()

        while not self.early_patients.is_empty():
            patient, _ = self.early_patients.peek()
            if patient.serving_time() > timestep:
                break
            self.early_patients.dequeue()
            self.move_to_waiting(timestep, patient)

        while not self.late_patients.is_empty():
            patient, _ = self.late_patients.peek()
            if patient.serving_time() > timestep:
                break
            self.late_patients.dequeue()
            self.move_to_waiting(timestep - (patient.vt - patient.pt), patient)

        while not self.in_treatment.is_empty():
            patient, priority = self.in_treatment.peek()
            if -priority > timestep:
                break
            self.in_treatment.dequeue()
            self.release_from_treatment(timestep, patient)

        self._assign_waiting(self.e_waiting, self.assign_e, timestep)
        self._assign_waiting(self.u_waiting, self.assign_u, timestep)
        self._assign_waiting(self.x_waiting, self.assign_x, timestep)

    def is_done(self) -> bool:
        return len(self.finished_patients) >= self.total_patients

    def run(self, on_step: Callable[[int, Scheduler], None] | None = None) -> int:
        """Run until every patient has finished; return the last timestep."""
        timestep = 0
        while not self.is_done():
            self.step(timestep)
            if on_step is not None:
                on_step(timestep, self)
            timestep += 1
        return timestep - 1

    def format_report(self, timestep: int) -> str:
        """Build the per-patient table and the summary statistics."""
        lines = [REPORT_HEADER]
        total = n_count = r_count = 0.0
        w_all = w_n = w_r = t_all = t_n = t_r = 0.0
        canceled = rescheduled = early = late = late_penalty = 0.0

        for patient in self.finished_patients:
            row = [
                _pid_cell(patient.pid),
                ("N" if patient.normal else "R") + "     ",
                _cell(patient.pt),
                _cell(patient.vt),
                _cell(patient.ft),
                _cell(patient.final_waiting_time()),
                _cell(patient.tt),
                "T      " if patient.canceled else "F      ",
                "T" if patient.rescheduled else "F",
            ]
            lines.append("".join(row))

            canceled += patient.canceled
            rescheduled += patient.rescheduled
            total += 1
            wait = patient.final_waiting_time()
            w_all += wait
            t_all += patient.tt
            if patient.normal:
                n_count += 1
                w_n += wait
                t_n += patient.tt
            else:
                r_count += 1
                w_r += wait
                t_r += patient.tt
            if patient.is_early():
                early += 1
            elif patient.is_late():
                late += 1
                late_penalty += patient.late_penalty()

        avg_late_penalty = late_penalty / late if late else 0.0
        summary = [
            "",
            f"Total number of timesteps = {timestep}",
            f"Total number of All, N, R = {_num(total)}, {_num(n_count)}, {_num(r_count)}",
            "Average total waiting time of All, N, R = "
            f"{_num(_ratio(w_all, total))}, {_num(_ratio(w_n, n_count))}, {_num(_ratio(w_r, r_count))}",
            "Average total treatment time  of All, N, R = "
            f"{_num(_ratio(t_all, total))}, {_num(_ratio(t_n, n_count))}, {_num(_ratio(t_r, r_count))}",
            "Percentage of patients that accepted cancellation (%) = "
            f"{_num(_ratio(canceled, total) * 100)} %",
            "Percentage of patients that accepted rescheduling (%) = "
            f"{_num(_ratio(rescheduled, total) * 100)} %",
            f"Percentage of early patients (%) = {_num(_ratio(early, total) * 100)} %",
            f"Percentage of late patients (%) = {_num(_ratio(late, total) * 100)} %",
            f"Average late penalty = {_num(avg_late_penalty)} timestep(s)",
        ]
        return "\n".join(lines + summary) + "\n"

    def write_report(self, path: str | Path, timestep: int) -> Path:
        """Write the report to a file and return its path."""
        target = Path(path)
        target.write_text(self.format_report(timestep))
        return target


def main(argv: list[str] | None = None) -> int:
    """Run the simulation interactively."""
    parser = argparse.ArgumentParser(prog="rehabsched", description="Rehabilitation centre scheduler.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random choices")
    args = parser.parse_args(argv)

    ui = ConsoleUI()
    name, mode = ui.ask_input_file()
    scheduler = Scheduler(random.Random(args.seed))
    try:
        scheduler.read_input(Path("input files") / f"{name}.txt")
    except OSError:
        print("Error: could not open input file.")
        return 555

    last = scheduler.run(None if mode == "s" else ui.show_timestep)
    filename = ui.ask_output_file()
    try:
        scheduler.write_report(filename, last)
    except OSError:
        print("Error creating file!")
        return 0
    print(f"\nFile created at: {filename}\n")
    return 0