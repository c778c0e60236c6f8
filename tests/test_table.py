import io

from philosophers.parsing import Settings
from philosophers.table import Table
from philosophers.timing import now_ms


def _lines(out):
    return out.getvalue().splitlines()


def _parts(line):
    stamp, number, message = line.split(" ", 2)
    return int(stamp), number, message


def test_forks_are_shared_between_neighbours():
    table = Table(Settings(5, 100, 10, 10), io.StringIO())
    seats = table.philosophers
    assert len(seats) == 5
    for index, philosopher in enumerate(seats):
        assert philosopher.right_fork is seats[(index + 1) % 5].left_fork
        assert philosopher.left_fork is table.forks[index]


def test_take_forks_and_eat():
    out = io.StringIO()
    table = Table(Settings(2, 1000, 1, 1), out)
    philosopher = table.philosophers[1]
    philosopher.take_forks()
    philosopher.eat()
    assert philosopher.meals() == 1
    messages = [_parts(line)[1:] for line in _lines(out)]
    assert messages == [
        ("2", "has taken a fork"),
        ("2", "has taken a fork"),
        ("2", "is eating"),
    ]
    assert philosopher.left_fork.acquire(blocking=False)
    assert philosopher.right_fork.acquire(blocking=False)


def test_check_dead_declares_death():
    out = io.StringIO()
    table = Table(Settings(2, 100, 10, 10), out)
    philosopher = table.philosophers[0]
    philosopher.last_meal = now_ms() - 500
    philosopher.check_dead()
    assert table.has_dead()
    assert _lines(out)[-1].endswith(" 0 is died")


def test_check_dead_keeps_fed_philosopher_alive():
    out = io.StringIO()
    table = Table(Settings(2, 1000, 10, 10), out)
    table.philosophers[1].last_meal = now_ms()
    table.philosophers[1].check_dead()
    assert not table.has_dead()
    assert out.getvalue() == ""


def test_sleep_and_think_silent_after_death():
    out = io.StringIO()
    table = Table(Settings(2, 100, 10, 10), out)
    table.philosophers[0].last_meal = now_ms() - 1000
    table.philosophers[0].check_dead()
    before = out.getvalue()
    table.philosophers[1].sleep()
    table.philosophers[1].think()
    assert out.getvalue() == before


def test_sleep_and_think_announce_when_alive():
    out = io.StringIO()
    table = Table(Settings(2, 20, 10, 10), out)
    table.philosophers[0].sleep()
    table.philosophers[0].think()
    messages = [_parts(line)[1:] for line in _lines(out)]
    assert messages == [("1", "is sleeping"), ("1", "is thinking")]


def test_monitor_stops_when_meals_done():
    out = io.StringIO()
    table = Table(Settings(2, 1000, 1, 1, 1), out)
    for philosopher in table.philosophers:
        philosopher.take_forks()
        philosopher.eat()
    table.monitor()
    assert not table.has_dead()
    assert all(p.meals() == 1 for p in table.philosophers)


def test_single_philosopher_dies():
    out = io.StringIO()
    table = Table(Settings(1, 50, 10, 10), out)
    table.run()
    lines = _lines(out)
    assert table.has_dead()
    assert len(lines) == 2
    assert _parts(lines[0])[1:] == ("0", "has taken a fork")
    stamp, number, message = _parts(lines[1])
    assert (number, message) == ("0", "is died")
    assert stamp >= 50


def test_run_until_meals_eaten():
    out = io.StringIO()
    table = Table(Settings(4, 500, 50, 50, 1), out)
    table.run()
    lines = _lines(out)
    assert not table.has_dead()
    assert not any("died" in line for line in lines)
    eaters = sorted(_parts(line)[1] for line in lines if line.endswith("is eating"))
    assert eaters == ["1", "2", "3", "4"]
    assert all(p.meals() == 1 for p in table.philosophers)
    stamps = [_parts(line)[0] for line in lines]
    assert stamps == sorted(stamps)


def test_run_starving_philosophers_report_one_death():
    out = io.StringIO()
    table = Table(Settings(2, 50, 200, 50), out)
    table.run()
    deaths = [line for line in _lines(out) if line.endswith("is died")]
    assert table.has_dead()
    assert len(deaths) == 1