"""
Core modules for CPU Scheduling Simulator
"""

from .exceptions import SchedulerError, InvalidProcessError, UnknownPolicyError, SimulationError
from .process import Process, ProcessState, create_process_copy
from .events import Event, EventLog, EventType
from .scheduler_base import BaseScheduler, GanttEntry, IDLE_PID
from .metrics import Metrics, calculate_metrics

__all__ = [
    'SchedulerError',
    'InvalidProcessError',
    'UnknownPolicyError',
    'SimulationError',
    'Process',
    'ProcessState',
    'create_process_copy',
    'Event',
    'EventLog',
    'EventType',
    'BaseScheduler',
    'GanttEntry',
    'IDLE_PID',
    'Metrics',
    'calculate_metrics'
]
