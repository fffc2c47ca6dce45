# philosim

philosim runs the dining philosophers problem as a simulation. Each philosopher
is a thread. The philosophers sit at a round table with one fork between each
pair of neighbours. Each one thinks, takes both forks, eats, puts the forks down
and sleeps, over and over. A monitor watches the table. It stops the simulation
when a philosopher has gone longer than the time to die without a meal. It also
stops it when every philosopher has eaten the required number of meals.

## Installation

```
pip install .
```

## Usage

```
philosim NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS]
```

All times are in milliseconds. `MEALS` is optional. When you give it, the
simulation ends once every philosopher has eaten at least that many times.

Every argument must be a positive whole number no larger than 2147483647. You
may put spaces, tabs or newlines before it and a single `+` in front of it. If
there are too few or too many arguments, or one is zero, negative or not a
number, the program prints `Error` and exits with status 1.

Each event is printed on its own line. A line gives the number of milliseconds
since the start, then the philosopher's number counted from 1, then the action.
The actions are `is thinking`, `has taken a fork`, `is eating`,
`has released a fork`, `is sleeping` and `died`.

```
$ philosim 5 800 200 200
0 1 is thinking
0 1 has taken a fork
...
```

Once a philosopher has died, or everyone has eaten enough, nothing more is
printed. The program exits with status 1 if a philosopher starved and 0 if the
meal count was reached.

If there is only one philosopher, it takes the single fork on the table. It can
never take a second one, so it dies.

## Using it from Python

```python
import io
from philosim.args import parse_args
from philosim.table import Table, current_millis

settings = parse_args(["3", "400", "100", "100", "2"])
out = io.StringIO()
starved = Table(settings, out, current_millis).run()
print(out.getvalue())
```

`parse_args` takes the arguments that follow the program name and returns a
`Settings`. It raises `ArgumentError`, a subclass of `ValueError`, on bad
input. `parse_number` checks a single value by the same rules.

`Table.run` starts one thread per philosopher and runs the monitor until the
simulation ends. It returns `True` when a philosopher starved. `Table` writes
to standard output and reads the wall clock unless you pass another stream or
another clock. A clock is any callable that returns milliseconds.
`philosim.cli.main` is the function behind the `philosim` command. It takes an
optional argument list and returns the exit status.

## Running the tests

```
pip install ".[test]"
pytest
```