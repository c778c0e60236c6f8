# philosophers

A simulation of the dining philosophers problem. Each philosopher runs in
its own thread and shares one fork (a lock) with each neighbour. A
monitor thread checks the philosophers in turn and stops the simulation
when one of them has gone too long without eating.

## Installing

```
pip install .
```

## Running

```
philo number_of_philosophers time_to_die time_to_eat time_to_sleep [meals_per_philosopher]
```

All times are in milliseconds. Each argument has to be a positive whole
number written with digits only. With the optional last argument, each
philosopher stops once it has eaten that many times.

Example:

```
philo 5 800 200 200 7
```

Each state change is printed as one line: the milliseconds since the
start, the philosopher's number (counted from 1) and what the
philosopher did, for example:

```
0 1 has taken a fork
0 1 has taken a fork
0 1 is eating
200 1 is sleeping
400 1 is thinking
```

A death is reported as `<time> <seat> is died`, where the seat is counted
from 0, and the philosophers stop after that line. With a single
philosopher, that philosopher takes its one fork (reported with seat 0),
puts it down and stops.

If the arguments are wrong, one of these messages is printed and the
command exits with status 1:

- `argument invalid` – not four or five arguments
- `argument cannot be zero` – an argument whose value is not positive
- `the argument must only contain numbers` – an argument with anything but digits

## Using it from Python

```python
import sys

from philosophers.parsing import parse_settings
from philosophers.table import Table

settings = parse_settings(["4", "410", "200", "200", "3"])
Table(settings, sys.stdout).run()
```

- `philosophers.parsing.parse_settings(args)` takes the arguments after
  the program name and returns a frozen `Settings` dataclass
  (`philosophers`, `time_to_die`, `time_to_eat`, `time_to_sleep`,
  `meals_required`, the last one `None` when not given). It raises
  `philosophers.parsing.ArgumentError`, a `ValueError`, on bad input.
- `philosophers.parsing.atol(text)` reads a leading integer, skipping
  leading whitespace and accepting one sign; text without digits gives 0.
- `philosophers.table.Table(settings, out)` writes its status lines to any
  text stream; `Table.run()` blocks until every thread has stopped.
- `philosophers.timing.now_ms()` returns wall-clock time in milliseconds.
- `philosophers.cli.main(argv=None)` is the command's entry point and
  returns its exit status.

## Tests

```
pip install .[test]
pytest
```