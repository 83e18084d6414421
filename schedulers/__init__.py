"""
CPU Scheduling Algorithms
"""

from typing import Optional

from core.events import EventLog
from core.exceptions import UnknownPolicyError
from core.scheduler_base import BaseScheduler
from .basic_schedulers import FCFSScheduler, SJFScheduler, RoundRobinScheduler
from .advanced_schedulers import PriorityScheduler, SRTFScheduler, MLFQScheduler


# 알고리즘 매핑 (이름은 대소문자 구분)
ALGORITHM_MAP = {
    'FCFS': {
        'class': FCFSScheduler,
        'params': {},
        'description': 'FCFS (First-Come, First-Served)',
    },
    'SJF': {
        'class': SJFScheduler,
        'params': {},
        'description': 'SJF (Shortest Job First - Non-preemptive)',
    },
    'RR': {
        'class': RoundRobinScheduler,
        'params': {'time_slice': 4},
        'description': 'Round Robin (Time Slice = 4)',
    },
    'Priority': {
        'class': PriorityScheduler,
        'params': {},
        'description': 'Priority Scheduling (Static, Non-preemptive)',
    },
    'SRTF': {
        'class': SRTFScheduler,
        'params': {},
        'description': 'SRTF (Shortest Remaining Time First)',
    },
    'MLFQ': {
        'class': MLFQScheduler,
        'params': {'time_slices': (4, 8, 16)},
        'description': 'Multi-Level Feedback Queue (4/8/16)',
    },
}


def create_scheduler(name: str, events: Optional[EventLog] = None, **overrides) -> BaseScheduler:
    """
    이름으로 스케줄러 인스턴스 생성

    Args:
        name: 알고리즘 이름 (FCFS, SJF, RR, Priority, SRTF, MLFQ)
        events: 이벤트 로그 (None이면 새로 생성)
        overrides: 기본 파라미터 덮어쓰기 (예: time_slice=2)
    """
    if name not in ALGORITHM_MAP:
        raise UnknownPolicyError(name, ALGORITHM_MAP)

    algo_info = ALGORITHM_MAP[name]
    params = algo_info['params'].copy()
    params.update(overrides)
    return algo_info['class'](events, **params)


__all__ = [
    'ALGORITHM_MAP',
    'create_scheduler',
    'FCFSScheduler',
    'SJFScheduler',
    'RoundRobinScheduler',
    'PriorityScheduler',
    'SRTFScheduler',
    'MLFQScheduler'
]
