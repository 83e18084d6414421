"""
기본 스케줄링 알고리즘 구현
- FCFS (First-Come, First-Served)
- SJF (Shortest Job First - Non-preemptive)
- Round Robin
"""

from collections import deque
from typing import Deque, Optional

from core.events import EventLog, EventType
from core.process import Process
from core.scheduler_base import BaseScheduler


class FCFSScheduler(BaseScheduler):
    """
    FCFS (First-Come, First-Served) 스케줄러
    비선점형: 먼저 도착한 프로세스를 먼저 처리
    """

    def __init__(self, events: Optional[EventLog] = None):
        super().__init__(events, "First-Come, First-Served")

    def select_next_process(self) -> Optional[Process]:
        """도착 시간이 가장 빠른 프로세스 선택"""
        if not self.ready_queue:
            return None

        return min(self.ready_queue, key=lambda p: (p.arrival_time, p.pid))


class SJFScheduler(BaseScheduler):
    """
    SJF (Shortest Job First) 스케줄러
    비선점형: 전체 버스트 시간이 가장 짧은 프로세스 우선
    """

    def __init__(self, events: Optional[EventLog] = None):
        super().__init__(events, "Shortest Job First")

    def select_next_process(self) -> Optional[Process]:
        """버스트 시간이 가장 짧은 프로세스 선택"""
        if not self.ready_queue:
            return None

        return min(self.ready_queue, key=lambda p: (p.burst_time, p.pid))


class RoundRobinScheduler(BaseScheduler):
    """
    Round Robin 스케줄러
    선점형: 타임 슬라이스를 모두 사용하면 Ready 큐의 끝으로 이동
    """

    preemptive = True

    def __init__(self, events: Optional[EventLog] = None, time_slice: int = 4):
        if time_slice <= 0:
            raise ValueError(f"타임 슬라이스는 양수여야 합니다: {time_slice}")
        super().__init__(events, f"Round Robin (q={time_slice})")
        self.time_slice = time_slice
        self.ready_queue: Deque[Process] = deque()

    def select_next_process(self) -> Optional[Process]:
        """Ready 큐의 첫 번째 프로세스 선택 (FIFO)"""
        if not self.ready_queue:
            return None

        return self.ready_queue[0]

    def advance_one_tick(self) -> Optional[Process]:
        self.release_completed()

        # 타임 슬라이스 만료 확인
        if (self.running_process is not None and
                self.running_process.time_in_cpu >= self.time_slice):
            process = self.preempt(EventType.QUANTUM_EXPIRED,
                                   "time slice expired → Ready Queue")
            if process.remaining_time > 0:
                self.ready_queue.append(process)

        if self.running_process is None and self.ready_queue:
            self.dispatch(self.ready_queue.popleft())

        return self.run_current()
