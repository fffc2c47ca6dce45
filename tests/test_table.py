import io
import time

from philosim.args import Settings
from philosim.table import Table, current_millis


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def _lines(output):
    return [line.split(" ", 2) for line in output.getvalue().splitlines()]


def test_current_millis_matches_wall_clock():
    before = int(time.time() * 1000)
    value = current_millis()
    after = int(time.time() * 1000)
    assert before - 1 <= value <= after + 1


def test_timestamp_is_relative_to_start():
    clock = FakeClock(5000)
    table = Table(Settings(2, 100, 10, 10), io.StringIO(), clock)
    clock.now = 5075
    assert table.timestamp() == 75


def test_print_action_format():
    clock = FakeClock(1000)
    out = io.StringIO()
    table = Table(Settings(2, 100, 10, 10), out, clock)
    clock.now = 1042
    table.print_action(table.philosophers[1], "is thinking")
    assert out.getvalue() == "42 2 is thinking\n"


def test_death_flag_and_silence_after_death():
    out = io.StringIO()
    table = Table(Settings(2, 100, 10, 10), out, FakeClock(0))
    assert table.check_death() is False
    table.mark_death()
    assert table.check_death() is True
    table.print_action(table.philosophers[0], "is sleeping")
    assert out.getvalue() == ""


def test_sleep_until_returns_when_finished():
    table = Table(Settings(2, 100, 10, 10), io.StringIO(), FakeClock(0))
    table.mark_death()
    started = time.monotonic()
    table.sleep_until(10_000)
    elapsed = time.monotonic() - started
    assert table.timestamp() == 0
    assert table.check_death() is True
    assert elapsed < 1.0


def test_sleep_until_reaches_deadline():
    table = Table(Settings(2, 100, 10, 10), io.StringIO())
    deadline = table.timestamp() + 20
    table.sleep_until(deadline)
    assert table.timestamp() >= deadline


def test_forks_are_shared_around_the_table():
    table = Table(Settings(3, 100, 10, 10), io.StringIO(), FakeClock(0))
    for i, philosopher in enumerate(table.philosophers):
        assert philosopher.left_fork is table.forks[i]
        assert philosopher.right_fork is table.forks[(i + 1) % 3]


def test_take_and_drop_forks():
    out = io.StringIO()
    table = Table(Settings(3, 100, 10, 10), out)
    philosopher = table.philosophers[1]
    philosopher.take_forks()
    assert philosopher.left_fork.locked() and philosopher.right_fork.locked()
    philosopher.drop_forks()
    assert not philosopher.left_fork.locked()
    assert not philosopher.right_fork.locked()
    actions = [parts[2] for parts in _lines(out)]
    assert actions.count("has taken a fork") == 2


def test_eat_records_meal():
    out = io.StringIO()
    table = Table(Settings(2, 100, 10, 10), out)
    philosopher = table.philosophers[0]
    philosopher.eat()
    assert philosopher.meals_eaten == 1
    assert philosopher.last_meal <= table.timestamp()
    assert [parts[1:] for parts in _lines(out)] == [["1", "is eating"]]


def test_single_philosopher_dies():
    out = io.StringIO()
    table = Table(Settings(1, 50, 10, 10), out)
    assert table.run() is True
    lines = _lines(out)
    assert lines[0][1:] == ["1", "has taken a fork"]
    assert lines[-1][1:] == ["1", "died"]
    assert int(lines[-1][0]) >= 50


def test_starvation_stops_output():
    out = io.StringIO()
    table = Table(Settings(2, 30, 100, 100), out)
    assert table.run() is True
    lines = _lines(out)
    assert lines[-1][2] == "died"
    assert sum(1 for parts in lines if parts[2] == "died") == 1


def test_meal_limit_ends_without_death():
    out = io.StringIO()
    table = Table(Settings(4, 400, 20, 20, 3), out)
    assert table.run() is False
    lines = _lines(out)
    assert all(parts[2] != "died" for parts in lines)
    for philosopher in table.philosophers:
        assert philosopher.meals_eaten >= 3
    stamps = [int(parts[0]) for parts in lines]
    assert stamps == sorted(stamps)