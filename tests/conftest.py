import matplotlib

matplotlib.use("Agg")

import pytest

from core.process import Process


@pytest.fixture
def sample_processes():
    return [
        Process(1, 0, 5),
        Process(2, 1, 3),
        Process(3, 2, 8),
        Process(4, 3, 6),
    ]


@pytest.fixture
def mixed_processes():
    return [
        Process(1, 0, 10, priority=3),
        Process(2, 1, 1, priority=1),
        Process(3, 2, 2, priority=4),
        Process(4, 3, 1, priority=5),
        Process(5, 4, 5, priority=2),
        Process(6, 30, 4, priority=0),
    ]
