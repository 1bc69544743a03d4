import io
import threading
import time

from diningphilo.simulation import Fork, Message, Philosopher, Table, now_ms


def make_table(die=1000, eat=1, sleep=1):
    out = io.StringIO()
    return Table(die, eat, sleep, out), out


def test_now_ms_matches_clock():
    before = int(time.time() * 1000)
    value = now_ms()
    after = int(time.time() * 1000)
    assert before - 1 <= value <= after + 1


def test_fork_take_and_release():
    fork = Fork()
    assert fork.try_take() is True
    assert fork.try_take() is False
    fork.release()
    assert fork.try_take() is True


def test_log_format():
    table, out = make_table()
    table.set_timestamp(125)
    assert table.log(2, Message.TAKEN_FORK) is True
    assert out.getvalue() == "125 2 has taken a fork\n"


def test_log_after_finish_is_silent():
    table, out = make_table()
    table.finish()
    assert table.log(1, Message.EATING) is False
    assert out.getvalue() == ""


def test_start_and_finish_flags():
    table, _ = make_table()
    assert (table.is_started(), table.is_ended()) == (False, False)
    table.start()
    table.finish()
    assert (table.is_started(), table.is_ended()) == (True, True)


def test_sleep_checked_waits():
    table, _ = make_table()
    begin = now_ms()
    assert table.sleep_checked(20) is True
    assert now_ms() - begin >= 20


def test_sleep_checked_stops_on_end():
    table, _ = make_table()
    table.finish()
    begin = now_ms()
    assert table.sleep_checked(5000) is False
    assert now_ms() - begin < 1000


def test_wait_for_start():
    table, _ = make_table()
    table.start()
    assert table.wait_for_start() is True
    other, _ = make_table()
    other.finish()
    assert other.wait_for_start() is False


def test_odd_philosopher_takes_right_fork_first():
    table, out = make_table()
    left, right = Fork(), Fork()
    right.try_take()
    philo = Philosopher(1, table, left, right)
    assert philo.take_forks() is False
    assert left.available is True
    assert out.getvalue() == ""


def test_even_philosopher_takes_left_fork_first():
    table, _ = make_table()
    left, right = Fork(), Fork()
    left.try_take()
    philo = Philosopher(2, table, left, right)
    assert philo.take_forks() is False
    assert right.available is True


def test_take_both_forks():
    table, out = make_table()
    left, right = Fork(), Fork()
    philo = Philosopher(3, table, left, right)
    assert philo.take_forks() is True
    assert (left.available, right.available) == (False, False)
    assert out.getvalue().splitlines() == ["0 3 has taken a fork"] * 2


def test_eat_counts_and_releases():
    table, out = make_table(eat=2)
    left, right = Fork(), Fork()
    philo = Philosopher(1, table, left, right, last_meal=0)
    assert philo.take_forks() is True
    before = now_ms()
    assert philo.eat() is True
    assert philo.meals_eaten() == 1
    assert philo.last_meal() >= before
    assert left.available and right.available
    assert out.getvalue().splitlines()[-1] == "0 1 is eating"


def test_sleep_and_think_log():
    table, out = make_table()
    philo = Philosopher(4, table, Fork(), Fork())
    assert philo.sleep() is True
    assert philo.think() is True
    assert out.getvalue().splitlines() == ["0 4 is sleeping", "0 4 is thinking"]


def test_single_fork_blocks_until_end():
    table, _ = make_table()
    fork = Fork()
    philo = Philosopher(1, table, fork, fork)
    result = []
    worker = threading.Thread(target=lambda: result.append(philo.take_forks()))
    worker.start()
    time.sleep(0.02)
    assert worker.is_alive()
    table.finish()
    worker.join(timeout=2)
    assert result == [False]


def test_run_returns_when_ended_before_start():
    table, out = make_table()
    table.finish()
    philo = Philosopher(1, table, Fork(), Fork())
    worker = threading.Thread(target=philo.run)
    worker.start()
    worker.join(timeout=2)
    assert not worker.is_alive()
    assert out.getvalue() == ""