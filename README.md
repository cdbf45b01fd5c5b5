# rehabsched

`rehabsched` simulates a rehabilitation clinic one timestep at a time. Patients
arrive, wait for treatment, are assigned to the resources they need, and finish.
When every patient has finished, it writes a report with a row for each patient
and summary figures for the whole run.

The clinic has three kinds of resource:

- **E-therapy devices** (electro). Each takes one patient at a time.
- **U-therapy devices** (ultrasound). Each takes one patient at a time.
- **X rooms** (gyms). Each takes several patients at once, up to its capacity.

Patients are either **normal (N)** or **recovering (R)**. Normal patients take
their treatments in the order given. Recovering patients with two or three
treatments left are sent to the treatment whose waiting list has the lowest
total latency, which is the sum of the next-treatment durations of the patients
already in it.

A patient who arrives no later than the appointment time goes to the *early*
list. One who arrives after it goes to the *late* list and is served at
`arrival + 0.5 * (arrival - appointment)`. At each timestep two random events can
happen:

- **Cancellation.** With the cancel probability, one patient in the gym waiting
  list is picked at random. If a gym session is their only remaining treatment,
  they cancel it and finish.
- **Rescheduling.** With the reschedule probability, one early patient is picked
  at random. If they arrived before their appointment and have been rescheduled
  fewer than three times, the appointment moves 1 to 25 timesteps later.

## Installation

```
pip install .
```

The package has no runtime dependencies and needs Python 3.10 or newer. For the
tests, install the `test` extra (`pip install .[test]`) and run `pytest`.

## Running a simulation

```
rehabsched [--seed N]
```

`--seed` fixes the random number generator so that a run can be repeated.

The command asks for:

1. The name of the input file, without extension. It is read from
   `input files/<name>.txt` under the current directory. If that file cannot be
   opened, the command prints `Error: could not open input file.` and exits with
   status 555.
2. The mode. Enter `s` for silent mode. Any other answer prints the state of
   every list at each timestep and waits for Enter before going on.
3. The name of the output file, without extension. The report is written to
   `output/<name>.txt`, and the `output` directory must already exist.

### Input file format

The input is plain whitespace-separated text:

```
<E devices> <U devices> <X rooms>
<capacity of room 1> ... <capacity of room N>
<cancel probability %> <reschedule probability %>
<number of patients>
<type N|R> <appointment time> <arrival time> <number of treatments> <code> <duration> ...
...
```

Each treatment is a code followed by its duration in timesteps. The codes are `E`
(E-therapy), `U` (U-therapy) and `X` (gym). Patients must be listed in order of
arrival time. Missing numbers, non-integer values, an unknown patient type or an
unknown treatment code raise `ValueError`. For example:

```
2 1 1
3
10 5
3
N 5 3 2 E 4 X 2
R 2 4 3 U 3 E 2 X 5
N 6 6 1 X 3
```

### Report

Each finished patient gets one row, most recently finished first, under this
header:

```
PID  PType PT   VT   FT   WT   TT   Cancel Resc
```

PT is the appointment time, VT the arrival time, FT the finish time, WT the
waiting time (`FT - VT - TT`) and TT the total treatment time. Cancel and Resc
show `T` or `F`.

After the rows come the summary figures: the total number of timesteps, the
patient counts (all, N, R), the average waiting and treatment times, the
percentages of accepted cancellations and reschedules, the percentages of early
and late patients, and the average late penalty. An average over a group with no
patients is shown as `nan`.

## Using it as a library

```python
import random

from rehabsched.scheduler import Scheduler

scheduler = Scheduler(random.Random(42))
scheduler.read_input("clinic.txt")   # or scheduler.load(text)
last_timestep = scheduler.run(None)
print(scheduler.format_report(last_timestep))
```

- `Scheduler.step(timestep)` advances the simulation by one timestep.
- `Scheduler.is_done()` reports whether every loaded patient has finished.
- `Scheduler.run(on_step)` steps until done and returns the last timestep.
  `on_step`, if not `None`, is called with the timestep and the scheduler after
  each step.
- `Scheduler.write_report(path, timestep)` writes the report to a file.
- `rehabsched.ui.format_timestep(timestep, scheduler)` renders the
  per-timestep view that the interactive mode prints, and
  `rehabsched.ui.ConsoleUI` handles the prompts.

The containers that the simulation uses are in `rehabsched.containers`:
`LinkedQueue` (FIFO), `ArrayStack` (LIFO, at most 1000 items) and
`PriorityQueue` (highest priority first, ties in arrival order). Their `dequeue`,
`pop` and `peek` raise `IndexError` when the container is empty. The waiting
lists with sorted insertion, cancellation and rescheduling are in
`rehabsched.waitlists`. Patients, treatments and resources are in
`rehabsched.patient`, `rehabsched.treatments` and `rehabsched.resources`.

## Limitations

- The input and output locations used by the `rehabsched` command are fixed:
  `input files/` and `output/` under the current directory. To use other paths,
  call `Scheduler.read_input` and `Scheduler.write_report` directly.
- At most 1000 patients can finish in one run. The finished list is an
  `ArrayStack` and raises `OverflowError` when it is full.
- Nothing is stored between runs. Each run starts from its input file.