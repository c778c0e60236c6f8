"""The dining table: forks, philosophers and the monitor that watches them."""

from __future__ import annotations

import itertools
import threading
import time
from typing import TextIO

from philosophers.parsing import Settings
from philosophers.timing import now_ms

# Pause between two monitor checks, and the head start odd-numbered seats get.
MONITOR_INTERVAL = 0.0006
EVEN_SEAT_DELAY = 0.0006


class Table:
    """Shared state of one simulation: forks, philosophers and the death flag."""

    def __init__(self, settings: Settings, out: TextIO) -> None:
        self.settings = settings
        self._out = out
        self._print_lock = threading.Lock()
        self._dead_lock = threading.Lock()
        self._wait_lock = threading.Lock()
        self._dead = False
        self.start = now_ms()
        count = settings.philosophers
        self.forks = [threading.Lock() for _ in range(count)]
        self.philosophers = [
            Philosopher(self, index, self.forks[index], self.forks[(index + 1) % count])
            for index in range(count)
        ]

    def has_dead(self) -> bool:
        """Return whether some philosopher has died."""
        with self._dead_lock:
            return self._dead

    def announce(self, number: int, message: str) -> None:
        """Write one timestamped status line for philosopher ``number``."""
        with self._print_lock:
            self._out.write(f"{now_ms() - self.start} {number} {message}\n")
            self._out.flush()

    def _declare_death(self, number: int) -> None:
        with self._dead_lock:
            self.announce(number, "is died")
            self._dead = True

    def _finished(self, philosopher: Philosopher) -> bool:
        required = self.settings.meals_required
        return required is not None and philosopher.meals() == required

    def monitor(self) -> None:
        """Check the philosophers in turn until one dies or the one in view is done eating."""
        for philosopher in itertools.cycle(self.philosophers):
            if self.has_dead() or self._finished(philosopher):
                return
            philosopher.check_dead()
            time.sleep(MONITOR_INTERVAL)

    def run(self) -> None:
        """Start the monitor and every philosopher, and wait for all of them to stop."""
        self.start = now_ms()
        monitor = threading.Thread(target=self.monitor, name="monitor")
        monitor.start()
        threads = []
        for philosopher in self.philosophers:
            with philosopher._lock:
                philosopher.last_meal = self.start
            thread = threading.Thread(
                target=philosopher.run, name=f"philosopher-{philosopher.number}"
            )
            thread.start()
            threads.append(thread)
        for thread in threads:
            thread.join()
        monitor.join()


class Philosopher:
    """One seat at the table, with the two forks on either side of it."""

    def __init__(
        self,
        table: Table,
        index: int,
        left_fork: threading.Lock,
        right_fork: threading.Lock,
    ) -> None:
        self.table = table
        self.index = index
        self.left_fork = left_fork
        self.right_fork = right_fork
        self.last_meal = now_ms()
        self._meals = 0
        self._meal_lock = threading.Lock()
        self._lock = threading.Lock()

    @property
    def number(self) -> int:
        """The one-based number used in status lines."""
        return self.index + 1

    def meals(self) -> int:
        """Return how many meals this philosopher has started."""
        with self._meal_lock:
            return self._meals

    def take_forks(self) -> None:
        """Pick up both forks, odd seats left first and even seats right first."""
        if self.index % 2:
            order = (self.left_fork, self.right_fork)
        else:
            order = (self.right_fork, self.left_fork)
        for fork in order:
            fork.acquire()
            self.table.announce(self.number, "has taken a fork")

    def eat(self) -> None:
        """Eat with both forks held, then put them down."""
        with self._meal_lock:
            self._meals += 1
        self.table.announce(self.number, "is eating")
        with self._lock:
            self.last_meal = now_ms()
        time.sleep(self.table.settings.time_to_eat / 1000)
        self.right_fork.release()
        self.left_fork.release()

    def sleep(self) -> None:
        """Sleep for the configured time unless someone has died."""
        if self.table.has_dead():
            return
        self.table.announce(self.number, "is sleeping")
        time.sleep(self.table.settings.time_to_sleep / 1000)

    def think(self) -> None:
        """Think, waiting until shortly before hunger becomes fatal."""
        if self.table.has_dead():
            return
        self.table.announce(self.number, "is thinking")
        settings = self.table.settings
        slack = settings.time_to_die - (settings.time_to_eat + settings.time_to_sleep)
        if slack > 10:
            time.sleep((slack - 10) / 1000)

    def check_dead(self) -> None:
        """Declare this philosopher dead if its last meal is too long ago."""
        with self.table._wait_lock, self._lock:
            elapsed = now_ms() - self.last_meal
        if elapsed > self.table.settings.time_to_die:
            self.table._declare_death(self.index)

    def run(self) -> None:
        """Eat, sleep and think until someone dies or enough meals are eaten."""
        table = self.table
        if table.settings.philosophers == 1:
            with self.left_fork:
                table.announce(self.index, "has taken a fork")
            return
        if self.index % 2 == 0:
            time.sleep(EVEN_SEAT_DELAY)
        while not table.has_dead() and not table._finished(self):
            self.take_forks()
            self.eat()
            self.sleep()
            self.think()