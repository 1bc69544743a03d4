"""Shared state and philosopher behaviour of the simulation."""

from __future__ import annotations

import enum
import sys
import threading
import time
from typing import TextIO

POLL_INTERVAL = 0.0005


def now_ms() -> int:
    """Wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


class Message(enum.Enum):
    """State changes a philosopher reports."""

    TAKEN_FORK = "has taken a fork"
    EATING = "is eating"
    SLEEPING = "is sleeping"
    THINKING = "is thinking"
    DIED = "died"


class Fork:
    """A fork that at most one philosopher holds at a time."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.available = True

    def try_take(self) -> bool:
        """Take the fork if it is free; report whether it was taken."""
        with self._lock:
            if self.available:
                self.available = False
                return True
            return False

    def release(self) -> None:
        """Put the fork back on the table."""
        with self._lock:
            self.available = True


class Table:
    """Timings, start/end flags and the log shared by all philosophers."""

    def __init__(
        self,
        time_to_die: int,
        time_to_eat: int,
        time_to_sleep: int,
        out: TextIO | None = None,
    ) -> None:
        self.time_to_die = time_to_die
        self.time_to_eat = time_to_eat
        self.time_to_sleep = time_to_sleep
        self.out = out if out is not None else sys.stdout
        self.timestamp = 0
        self._started = False
        self._ended = False
        self._timestamp_lock = threading.Lock()
        self._start_lock = threading.Lock()
        self._end_lock = threading.Lock()

    def start(self) -> None:
        with self._start_lock:
            self._started = True

    def finish(self) -> None:
        with self._end_lock:
            self._ended = True

    def is_started(self) -> bool:
        with self._start_lock:
            return self._started

    def is_ended(self) -> bool:
        with self._end_lock:
            return self._ended

    def set_timestamp(self, value: int) -> None:
        with self._timestamp_lock:
            self.timestamp = value

    def log(self, philo_id: int, message: Message) -> bool:
        """Print a state line; return False once the simulation has ended."""
        if self.is_ended():
            return False
        with self._timestamp_lock:
            self.out.write(f"{self.timestamp} {philo_id} {message.value}\n")
        return True

    def sleep_checked(self, duration: int) -> bool:
        """Wait for duration ms; return False if the simulation ends meanwhile."""
        begin = now_ms()
        elapsed = 0
        while elapsed < duration:
            if self.is_ended():
                return False
            elapsed = now_ms() - begin
            time.sleep(POLL_INTERVAL)
        return True

    def wait_for_start(self) -> bool:
        """Block until started; return False if the simulation ends first."""
        while not self.is_started():
            if self.is_ended():
                return False
            time.sleep(POLL_INTERVAL)
        return True


class Philosopher:
    """One diner who alternates between eating, sleeping and thinking."""

    def __init__(
        self,
        philo_id: int,
        table: Table,
        left: Fork,
        right: Fork,
        last_meal: int | None = None,
    ) -> None:
        self.philo_id = philo_id
        self.table = table
        self.left = left
        self.right = right
        self._last_meal = now_ms() if last_meal is None else last_meal
        self._meals = 0
        self._meal_lock = threading.Lock()
        self._count_lock = threading.Lock()

    @property
    def is_even(self) -> bool:
        return self.philo_id % 2 == 0

    def last_meal(self) -> int:
        """Time in ms at which the last meal started."""
        with self._meal_lock:
            return self._last_meal

    def meals_eaten(self) -> int:
        with self._count_lock:
            return self._meals

    def take_forks(self) -> bool:
        """Pick up both forks.

        Returns False at once if the first fork is busy, or if the simulation
        ends while waiting for the second one.
        """
        first, second = (self.left, self.right) if self.is_even else (self.right, self.left)
        if not first.try_take():
            return False
        if not self.table.log(self.philo_id, Message.TAKEN_FORK):
            return False
        while True:
            if self.table.is_ended():
                return False
            if second.try_take():
                return self.table.log(self.philo_id, Message.TAKEN_FORK)
            time.sleep(POLL_INTERVAL)

    def eat(self) -> bool:
        with self._meal_lock:
            self._last_meal = now_ms()
        if not self.table.log(self.philo_id, Message.EATING):
            return False
        with self._count_lock:
            self._meals += 1
        if not self.table.sleep_checked(self.table.time_to_eat):
            return False
        self.left.release()
        self.right.release()
        return True

    def sleep(self) -> bool:
        if not self.table.log(self.philo_id, Message.SLEEPING):
            return False
        return self.table.sleep_checked(self.table.time_to_sleep)

    def think(self) -> bool:
        if not self.table.log(self.philo_id, Message.THINKING):
            return False
        self.table.sleep_checked(self.table.time_to_eat)
        return True

    def run(self) -> None:
        """Main loop of the philosopher's thread."""
        if not self.table.wait_for_start():
            return
        if self.is_even:
            self.table.sleep_checked(self.table.time_to_eat)
        while not self.table.is_ended():
            if not self.take_forks():
                time.sleep(POLL_INTERVAL)
                continue
            if not (self.eat() and self.sleep() and self.think()):
                return