"""
고급 스케줄링 알고리즘 구현
- Priority Scheduling (정적 우선순위, 비선점형)
- SRTF (Shortest Remaining Time First)
- Multi-Level Feedback Queue (MLFQ)
"""

from collections import deque
from typing import Deque, List, Optional, Sequence

from core.events import EventLog, EventType
from core.process import Process, ProcessState
from core.scheduler_base import BaseScheduler


class PriorityScheduler(BaseScheduler):
    """
    우선순위 스케줄러 (정적 우선순위)
    비선점형: 낮은 우선순위 값이 높은 우선순위
    """

    def __init__(self, events: Optional[EventLog] = None):
        super().__init__(events, "Priority Scheduling")

    def select_next_process(self) -> Optional[Process]:
        """우선순위가 가장 높은 프로세스 선택"""
        if not self.ready_queue:
            return None

        # 숫자가 낮을수록 높은 우선순위
        return min(self.ready_queue, key=lambda p: (p.priority, p.pid))


class SRTFScheduler(BaseScheduler):
    """
    SRTF (Shortest Remaining Time First) 스케줄러
    선점형: 남은 시간이 더 짧은 프로세스가 Ready 큐에 들어오면 즉시 선점
    """

    preemptive = True

    def __init__(self, events: Optional[EventLog] = None):
        super().__init__(events, "Shortest Remaining Time First")

    def select_next_process(self) -> Optional[Process]:
        """남은 시간이 가장 짧은 프로세스 선택"""
        if not self.ready_queue:
            return None

        return min(self.ready_queue, key=lambda p: (p.remaining_time, p.pid))

    def check_preemption(self, candidate: Process) -> bool:
        """선점 가능 여부 확인 (동률이면 선점하지 않음)"""
        return candidate.remaining_time < self.running_process.remaining_time

    def advance_one_tick(self) -> Optional[Process]:
        self.release_completed()

        candidate = self.select_next_process()
        if candidate is not None:
            if self.running_process is None:
                self.ready_queue.remove(candidate)
                self.dispatch(candidate)
            elif self.check_preemption(candidate):
                self.ready_queue.remove(candidate)
                displaced = self.preempt(
                    EventType.PREEMPTION,
                    f"preempted by P{candidate.pid} (remaining "
                    f"{candidate.remaining_time} < {self.running_process.remaining_time}) → Ready Queue")
                self.ready_queue.append(displaced)
                self.dispatch(candidate)

        return self.run_current()


class MLFQScheduler(BaseScheduler):
    """
    Multi-Level Feedback Queue 스케줄러
    - Queue 0 (Highest): RR with time slice 4
    - Queue 1 (Medium): RR with time slice 8
    - Queue 2 (Lowest): RR with time slice 16

    타임 슬라이스를 모두 사용하면 한 단계 아래 큐로 강등 (최하위는 유지).
    상위 큐에 프로세스가 있으면 하위 큐에서 실행 중인 프로세스를 선점한다.
    """

    preemptive = True

    def __init__(self, events: Optional[EventLog] = None, time_slices: Sequence[int] = (4, 8, 16)):
        if not time_slices or any(q <= 0 for q in time_slices):
            raise ValueError(f"타임 슬라이스는 모두 양수여야 합니다: {tuple(time_slices)}")
        super().__init__(events, "Multi-Level Feedback Queue")
        self.time_slices = tuple(time_slices)
        self.queues: List[Deque[Process]] = [deque() for _ in self.time_slices]

    @property
    def lowest_level(self) -> int:
        return len(self.queues) - 1

    def admit(self, process: Process):
        """프로세스 도착 처리 - 모두 최상위 큐에 삽입"""
        process.state = ProcessState.READY
        process.queue_level = 0
        self.queues[0].append(process)
        self.log_event(EventType.ARRIVAL, f"P{process.pid} arrived → Queue 0", process)

    def ready_processes(self) -> List[Process]:
        return [p for queue in self.queues for p in queue]

    def highest_ready_level(self) -> Optional[int]:
        for level, queue in enumerate(self.queues):
            if queue:
                return level
        return None

    def select_next_process(self) -> Optional[Process]:
        """우선순위가 높은 큐부터 프로세스 선택"""
        level = self.highest_ready_level()
        if level is None:
            return None
        return self.queues[level][0]

    def advance_one_tick(self) -> Optional[Process]:
        self.release_completed()

        # 타임 슬라이스 만료 확인 - 하위 큐로 이동
        if self.running_process is not None:
            level = self.running_process.queue_level
            if self.running_process.time_in_cpu >= self.time_slices[level]:
                new_level = min(self.lowest_level, level + 1)
                process = self.preempt(EventType.DEMOTION, f"demoted → Queue {new_level}")
                process.queue_level = new_level
                self.queues[new_level].append(process)

        # 선점 검사: 상위 큐에 대기 중인 프로세스가 있으면 선점
        if self.running_process is not None:
            level = self.running_process.queue_level
            ready_level = self.highest_ready_level()
            if ready_level is not None and ready_level < level:
                process = self.preempt(EventType.PREEMPTION, f"preempted → Queue {level}")
                self.queues[level].append(process)

        if self.running_process is None:
            level = self.highest_ready_level()
            if level is not None:
                self.dispatch(self.queues[level].popleft())

        return self.run_current()
