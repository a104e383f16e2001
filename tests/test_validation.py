import pytest

from schedsim.algorithms import ALGORITHMS, run_algorithm
from schedsim.errors import InvalidInputError, InvalidQuantumError, SchedulerError
from schedsim.models import IDLE, Process


@pytest.mark.parametrize(
    "processes",
    [
        [],
        [Process("P1", 0, 2), Process("P1", 1, 3)],
        [Process("", 0, 2)],
        [Process(IDLE, 0, 2)],
        [Process("P1", -1, 2)],
        [Process("P1", 0, 0)],
        [Process("P1", 0, 2, priority=-1)],
        [Process("P1", 0, 2.5)],
    ],
)
@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_invalid_input_rejected(name, processes):
    with pytest.raises(InvalidInputError):
        run_algorithm(name, processes, quantum=2)


def test_errors_are_value_errors():
    assert issubclass(InvalidInputError, SchedulerError)
    assert issubclass(InvalidQuantumError, ValueError)


def test_rr_requires_quantum():
    with pytest.raises(InvalidQuantumError):
        run_algorithm("rr", [Process("P1", 0, 2)])


def test_quantum_ignored_by_other_algorithms():
    res = run_algorithm("sjf", [Process("P1", 0, 2)], quantum=0)
    assert res.processes[0].completion_time == 2
