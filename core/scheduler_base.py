"""
스케줄러 기본 프레임워크
"""

from typing import List, Optional
from dataclasses import dataclass

from .events import EventLog, EventType
from .process import Process, ProcessState

# Gantt Chart에서 CPU 유휴 구간을 나타내는 특수 PID
IDLE_PID = -1


@dataclass
class GanttEntry:
    """Gantt Chart 엔트리"""
    pid: int
    start_time: int
    end_time: int
    state: ProcessState  # Running 또는 유휴(Ready)

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def to_dict(self):
        return {
            'pid': self.pid,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'state': self.state.value,
        }


class BaseScheduler:
    """
    기본 스케줄러 클래스
    모든 스케줄링 알고리즘의 공통 기능 제공

    시뮬레이터는 admit(), select_next_process(), advance_one_tick() 세 가지만 호출한다.
    기본 advance_one_tick()은 비선점형: 한 번 선택된 프로세스는 완료될 때까지 실행된다.
    """

    preemptive = False

    def __init__(self, events: Optional[EventLog] = None, name: str = "Base Scheduler"):
        self.name = name
        self.events = events if events is not None else EventLog()
        self.ready_queue: List[Process] = []
        self.running_process: Optional[Process] = None
        self.previous_process: Optional[Process] = None  # 이전 실행 프로세스 추적
        self.context_switches = 0

    def log_event(self, event_type: EventType, message: str, process: Optional[Process] = None):
        """이벤트 로그 기록"""
        self.events.record(event_type, message, process.pid if process is not None else None)

    def admit(self, process: Process):
        """도착한 프로세스를 Ready 큐에 삽입"""
        process.state = ProcessState.READY
        self.ready_queue.append(process)
        self.log_event(EventType.ARRIVAL, f"P{process.pid} arrived → Ready Queue", process)

    def ready_processes(self) -> List[Process]:
        """Ready 상태 프로세스 스냅샷"""
        return list(self.ready_queue)

    def select_next_process(self) -> Optional[Process]:
        """
        다음 실행할 프로세스 선택 (하위 클래스에서 구현)
        상태를 변경하지 않는 조회 연산

        Returns:
            선택된 프로세스 또는 None
        """
        raise NotImplementedError("Subclasses must implement select_next_process()")

    def release_completed(self):
        """완료된 프로세스를 CPU에서 내린다. 완료된 프로세스는 다시 선택되지 않는다."""
        if self.running_process is not None and self.running_process.is_completed():
            self.running_process = None

    def dispatch(self, process: Process):
        """
        프로세스에 CPU 할당 (Ready 구조에서는 호출 전에 제거되어 있어야 함)
        """
        if self.previous_process is not None and self.previous_process is not process:
            self.context_switches += 1
            self.log_event(EventType.DISPATCH,
                           f"Context Switch: P{self.previous_process.pid} → P{process.pid}", process)

        process.state = ProcessState.RUNNING
        process.time_in_cpu = 0
        self.running_process = process
        self.previous_process = process
        self.log_event(EventType.DISPATCH, f"P{process.pid} → Running", process)

    def preempt(self, event_type: EventType, reason: str) -> Process:
        """
        실행 중인 프로세스를 CPU에서 내린다 (Ready 구조 복귀는 호출자가 담당)

        Returns:
            내려진 프로세스
        """
        process = self.running_process
        process.state = ProcessState.READY
        self.running_process = None
        self.log_event(event_type, f"P{process.pid} {reason}", process)
        return process

    def run_current(self) -> Optional[Process]:
        """이번 tick에 실행할 프로세스 반환 및 연속 실행 시간 증가"""
        if self.running_process is not None:
            self.running_process.time_in_cpu += 1
        return self.running_process

    def advance_one_tick(self) -> Optional[Process]:
        """
        한 tick 진행: 필요하면 새 프로세스를 선택하고 이번 tick에 실행될 프로세스 반환
        """
        self.release_completed()

        if self.running_process is None:
            next_process = self.select_next_process()
            if next_process is not None:
                self.ready_queue.remove(next_process)
                self.dispatch(next_process)

        return self.run_current()

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"
