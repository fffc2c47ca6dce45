"""The dining table: philosophers, forks and the monitor that watches them."""

from __future__ import annotations

import sys
import threading
import time
from typing import Callable, List, Optional, TextIO

from .args import Settings

_POLL_SECONDS = 0.001


def current_millis() -> int:
    """Wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


class Philosopher:
    """One diner who thinks, takes two forks, eats, releases them and sleeps."""

    def __init__(
        self,
        index: int,
        table: "Table",
        left_fork: threading.Lock,
        right_fork: threading.Lock,
    ) -> None:
        self.index = index
        self.table = table
        self.left_fork = left_fork
        self.right_fork = right_fork
        self.meal_lock = threading.Lock()
        self.last_meal = table.timestamp()
        self.meals_eaten = 0

    @property
    def number(self) -> int:
        """The one-based number shown in the output."""
        return self.index + 1

    def take_forks(self) -> None:
        """Pick up both forks; even seats start left, odd seats start right."""
        if self.index % 2 == 0:
            first, second = self.left_fork, self.right_fork
        else:
            first, second = self.right_fork, self.left_fork
        first.acquire()
        self.table.print_action(self, "has taken a fork")
        second.acquire()
        self.table.print_action(self, "has taken a fork")

    def eat(self) -> None:
        """Record the meal and eat for the configured time."""
        with self.meal_lock:
            self.last_meal = self.table.timestamp()
            self.meals_eaten += 1
        self.table.print_action(self, "is eating")
        self.table.sleep_until(self.table.timestamp() + self.table.settings.time_eat)

    def drop_forks(self) -> None:
        """Put both forks back on the table."""
        self.left_fork.release()
        self.right_fork.release()
        self.table.print_action(self, "has released a fork")
        self.table.print_action(self, "has released a fork")

    def _dine_alone(self) -> None:
        # A single fork can never become two: hold it until the end.
        with self.left_fork:
            self.table.print_action(self, "has taken a fork")
            deadline = self.last_meal + self.table.settings.time_die + 1
            self.table.sleep_until(deadline)
            while not self.table.check_death():
                time.sleep(_POLL_SECONDS)

    def run(self) -> None:
        """The philosopher's life, repeated until the simulation stops."""
        if self.left_fork is self.right_fork:
            self._dine_alone()
            return
        if self.index % 2 == 0:
            time.sleep(_POLL_SECONDS)
        while not self.table.check_death():
            self.table.print_action(self, "is thinking")
            self.take_forks()
            self.eat()
            self.drop_forks()
            self.table.print_action(self, "is sleeping")
            self.table.sleep_until(
                self.table.timestamp() + self.table.settings.time_sleep
            )


class Table:
    """Shared state of one simulation run."""

    def __init__(
        self,
        settings: Settings,
        output: Optional[TextIO] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.settings = settings
        self.output = output if output is not None else sys.stdout
        self.clock = clock if clock is not None else current_millis
        self.start_time = self.clock()
        self.print_lock = threading.Lock()
        self.death_lock = threading.Lock()
        self.someone_died = False
        self.starved = False
        count = settings.n_philo
        self.forks: List[threading.Lock] = [threading.Lock() for _ in range(count)]
        self.philosophers: List[Philosopher] = [
            Philosopher(i, self, self.forks[i], self.forks[(i + 1) % count])
            for i in range(count)
        ]

    def timestamp(self) -> int:
        """Milliseconds elapsed since the table was set."""
        return self.clock() - self.start_time

    def mark_death(self) -> None:
        """Flag the simulation as finished."""
        with self.death_lock:
            self.someone_died = True

    def check_death(self) -> bool:
        """True once the simulation has been flagged as finished."""
        with self.death_lock:
            return self.someone_died

    def print_action(self, philosopher: Philosopher, action: str) -> None:
        """Write one status line unless the simulation has finished."""
        with self.print_lock:
            if not self.check_death():
                self.output.write(
                    f"{self.timestamp()} {philosopher.number} {action}\n"
                )
                self.output.flush()

    def sleep_until(self, deadline: int) -> None:
        """Wait until the timestamp reaches deadline or the simulation ends."""
        while not self.check_death() and self.timestamp() < deadline:
            time.sleep(_POLL_SECONDS)

    def monitor(self) -> None:
        """Watch for starvation or for every philosopher having eaten enough."""
        settings = self.settings
        while not self.check_death():
            finished = 0
            for philosopher in self.philosophers:
                with philosopher.meal_lock:
                    if self.timestamp() - philosopher.last_meal > settings.time_die:
                        self.print_action(philosopher, "died")
                        self.starved = True
                        self.mark_death()
                        return
                    if (
                        settings.meal_limit_set
                        and philosopher.meals_eaten >= settings.meals_required
                    ):
                        finished += 1
            if settings.meal_limit_set and finished == settings.n_philo:
                self.mark_death()
                return
            time.sleep(_POLL_SECONDS)

    def run(self) -> bool:
        """Run the simulation to its end; True when a philosopher starved."""
        threads = [
            threading.Thread(target=philosopher.run, name=f"philosopher-{philosopher.number}")
            for philosopher in self.philosophers
        ]
        for thread in threads:
            thread.start()
        try:
            self.monitor()
        finally:
            self.mark_death()
            for thread in threads:
                thread.join()
        return self.starved