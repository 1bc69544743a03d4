# diningphilo

A simulation of the dining philosophers problem. Each philosopher runs in its
own thread, shares a fork with each neighbour, and cycles through taking
forks, eating, sleeping and thinking. A monitor watches over the table and
ends the simulation as soon as a philosopher starves, or once every
philosopher has eaten the requested number of meals.

## Installation

```
pip install .
```

## Usage

```
philo number_of_philosophers time_to_die time_to_eat time_to_sleep [meals_required]
```

The same command is available as `python -m diningphilo.cli`.

All times are in milliseconds. There must be four or five arguments, each a
positive decimal integer (one leading `+` is accepted), and there must be
fewer than 300 philosophers.

Examples:

```
philo 5 800 200 200
philo 4 410 200 200 7
philo 1 800 200 200
```

Each event is printed on its own line as
`<timestamp_ms> <philosopher_id> <event>`, where the timestamp counts from
the start of the simulation and the event is one of:

- `has taken a fork`
- `is eating`
- `is sleeping`
- `is thinking`
- `died`

A philosopher dies when `time_to_die` milliseconds pass since the start of
its last meal (or since the table was set). Without `meals_required` the
simulation runs until someone dies.

Invalid arguments print `Error: bad arguments` (or `Error: too much threads`)
on standard error and the command exits with status 1; otherwise it exits
with status 0.

## Using it from Python

```python
import sys
from diningphilo.args import parse_args
from diningphilo.cli import run_simulation

settings = parse_args(["5", "800", "200", "200", "3"])
dead = run_simulation(settings, sys.stdout)  # id of the philosopher who died, or None
```

- `diningphilo.args`: `parse_positive`, `parse_args`, the frozen `Settings`
  dataclass, and the errors `ArgumentError` and its subclass
  `TooManyPhilosophersError`.
- `diningphilo.simulation`: `Fork`, `Table`, `Philosopher`, the `Message`
  enum of event texts, and `now_ms`.
- `diningphilo.cli`: `build_table`, `monitor`, `run_simulation` and `main`.

Any text stream can be passed as `out`, for example an `io.StringIO` to
capture the log.

## Running the tests

```
pip install .[test]
pytest
```