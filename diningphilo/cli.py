"""Entry point: sets the table, runs the philosophers and watches them."""

from __future__ import annotations

import sys
import threading
import time
from typing import TextIO

from diningphilo.args import ArgumentError, Settings, parse_args
from diningphilo.simulation import POLL_INTERVAL, Fork, Message, Philosopher, Table, now_ms


def build_table(settings: Settings, out: TextIO) -> tuple[Table, list[Philosopher]]:
    """Create the table and seat the philosophers between their forks."""
    count = settings.philo_count
    forks = [Fork() for _ in range(count)]
    table = Table(settings.time_to_die, settings.time_to_eat, settings.time_to_sleep, out)
    philosophers = [
        Philosopher(index + 1, table, forks[index], forks[(index + 1) % count])
        for index in range(count)
    ]
    return table, philosophers


def monitor(table: Table, philosophers: list[Philosopher], min_meals: int | None) -> int | None:
    """Watch until someone starves or everyone has eaten enough.

    Returns the id of the philosopher who died, or None.
    """
    start = now_ms()
    while True:
        current = now_ms()
        table.set_timestamp(current - start)
        for philo in philosophers:
            if current - philo.last_meal() >= table.time_to_die:
                table.log(philo.philo_id, Message.DIED)
                table.finish()
                return philo.philo_id
        if min_meals is not None and all(p.meals_eaten() >= min_meals for p in philosophers):
            table.finish()
            return None
        time.sleep(POLL_INTERVAL)


def run_simulation(settings: Settings, out: TextIO) -> int | None:
    """Run one complete simulation; return the id of the dead philosopher, if any."""
    table, philosophers = build_table(settings, out)
    threads = [threading.Thread(target=philo.run, daemon=True) for philo in philosophers]
    try:
        for thread in threads:
            thread.start()
        table.start()
        return monitor(table, philosophers, settings.min_meals)
    finally:
        table.finish()
        for thread in threads:
            if thread.is_alive() or thread.ident is not None:
                thread.join()


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    try:
        settings = parse_args(args)
    except ArgumentError as error:
        sys.stderr.write(f"{error}\n")
        return 1
    run_simulation(settings, sys.stdout)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())