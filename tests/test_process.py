import pytest

from core.exceptions import InvalidProcessError, SimulationError
from core.process import Process, ProcessState, create_process_copy


def test_new_process_defaults():
    p = Process(7, 2, 5)
    assert p.priority == 0
    assert p.remaining_time == 5
    assert p.queue_level == 0
    assert p.time_in_cpu == 0
    assert p.state == ProcessState.NEW
    assert p.response_time is None


@pytest.mark.parametrize("arrival, burst", [(-1, 3), (0, 0), (0, -2), (1.5, 3), (0, "3")])
def test_invalid_parameters_rejected(arrival, burst):
    with pytest.raises(InvalidProcessError):
        Process(1, arrival, burst)


def test_invalid_process_error_is_value_error():
    with pytest.raises(ValueError):
        Process(1, -5, 3)


def test_execute_and_complete():
    p = Process(1, 2, 2)
    assert p.execute(3) is False
    assert p.start_time == 3
    assert p.execute(4) is True
    p.complete(5)
    assert p.turnaround_time == 3
    assert p.waiting_time == 1
    assert p.response_time == 1
    assert p.state == ProcessState.TERMINATED


def test_complete_twice_raises():
    p = Process(1, 0, 1)
    p.execute(0)
    p.complete(1)
    with pytest.raises(SimulationError):
        p.complete(2)
    with pytest.raises(SimulationError):
        p.execute(1)


def test_copy_is_independent():
    p = Process(1, 0, 4, priority=2)
    copy = create_process_copy(p)
    copy.execute(0)
    assert p.remaining_time == 4
    assert copy.remaining_time == 3


def test_copy_resets_run_state():
    p = Process(1, 2, 3, priority=1)
    p.execute(2)
    p.execute(3)
    p.execute(4)
    p.complete(5)

    copy = create_process_copy(p)

    assert copy.state is ProcessState.NEW
    assert copy.remaining_time == 3
    assert copy.start_time is None and copy.finish_time is None
    assert (copy.pid, copy.arrival_time, copy.burst_time, copy.priority) == (1, 2, 3, 1)
