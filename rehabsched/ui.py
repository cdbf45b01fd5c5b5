"""Console interaction: asking for file names and showing each timestep."""

from __future__ import annotations

import itertools
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from .scheduler import Scheduler

_ALL_LIST_LIMIT = 10


def format_timestep(timestep: int, scheduler: Scheduler) -> str:
    """Render the state of every list of the scheduler at one timestep."""
    lines: list[str] = [f"Current Timestep: {timestep}"]
    lines.append("================= ALL List =================")
    waiting_to_arrive = itertools.islice(scheduler.all_patients, _ALL_LIST_LIMIT)
    arrivals = ", ".join(f"P{p.pid}_{p.vt}" for p in waiting_to_arrive)
    lines.append(f"{len(scheduler.all_patients)} patients remaining: {arrivals}")

    lines.append("================ Waiting Lists ================")
    for label, queue in (
        ("E-therapy", scheduler.e_waiting),
        ("U-therapy", scheduler.u_waiting),
        ("X-therapy", scheduler.x_waiting),
    ):
        lines.append(f"{len(queue)} {label} patients: {queue}")
        lines.append("")

    lines.append("================= Early List =================")
    lines.append(f"{len(scheduler.early_patients)} patients: {scheduler.early_patients}")
    lines.append("")
    lines.append("================= Late List =================")
    lines.append(f"{len(scheduler.late_patients)} patients: {scheduler.late_patients}")
    lines.append("")

    lines.append("================ Avail E-devices ================")
    lines.append(f"{len(scheduler.e_devices)} Electro device: {scheduler.e_devices}")
    lines.append("")
    lines.append("================ Avail U-devices ================")
    lines.append(f"{len(scheduler.u_devices)} Ultra device: {scheduler.u_devices}")
    lines.append("")
    lines.append("================ Avail X-rooms ================")
    lines.append(f"{len(scheduler.x_devices)} rooms: {scheduler.x_devices}")
    lines.append("")

    lines.append("============== In-treatment List ================")
    lines.append(f"{len(scheduler.in_treatment)} ==> {scheduler.in_treatment}")
    lines.append("")
    lines.append("------------------------------------------------")
    finished = scheduler.finished_patients
    lines.append(f"{len(finished)} finished patients: {finished}")
    return "\n".join(lines) + "\n"


class ConsoleUI:
    """Prompts the user and prints the simulation state."""

    def __init__(
        self,
        read: Callable[[], str] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._read = read
        self._stream = stream

    @property
    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _prompt(self, text: str) -> str:
        self._out.write(text)
        self._out.flush()
        reader = self._read if self._read is not None else input
        return reader()

    def ask_input_file(self) -> tuple[str, str]:
        """Ask for the input file name and the run mode; 's' means silent."""
        name = self._prompt("Enter file name (without extension): ").strip()
        mode = self._prompt("what to mode you want (s) for silent: ").strip()[:1]
        return name, mode

    def ask_output_file(self) -> str:
        """Ask for the output file name and return its path under output/."""
        name = self._prompt("Enter file name (without extension): ").strip()
        return f"output/{name}.txt"

    def show_timestep(self, timestep: int, scheduler: Scheduler) -> None:
        """Print the state at a timestep and wait for the user."""
        self._out.write(format_timestep(timestep, scheduler))
        self._prompt("Press any key to display next timestep\n")