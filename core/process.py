"""
프로세스 및 PCB (Process Control Block) 관리 모듈
"""

from enum import Enum
from typing import Optional

from .exceptions import InvalidProcessError, SimulationError


class ProcessState(Enum):
    """프로세스 상태"""
    NEW = "New"
    READY = "Ready"
    RUNNING = "Running"
    TERMINATED = "Terminated"


class Process:
    """
    프로세스 제어 블록 (PCB)
    각 프로세스의 정보와 시뮬레이션 상태를 관리
    """

    def __init__(self, pid: int, arrival_time: int, burst_time: int, priority: int = 0):
        """
        프로세스 초기화

        Args:
            pid: 프로세스 ID
            arrival_time: 도착 시간 (0 이상)
            burst_time: 총 CPU 버스트 시간 (양수)
            priority: 우선순위 (낮을수록 높은 우선순위)
        """
        if isinstance(arrival_time, bool) or not isinstance(arrival_time, int):
            raise InvalidProcessError(f"도착 시간은 정수여야 합니다: {arrival_time!r}")
        if isinstance(burst_time, bool) or not isinstance(burst_time, int):
            raise InvalidProcessError(f"버스트 시간은 정수여야 합니다: {burst_time!r}")
        if arrival_time < 0:
            raise InvalidProcessError(f"도착 시간은 0 이상이어야 합니다: {arrival_time}")
        if burst_time <= 0:
            raise InvalidProcessError(f"버스트 시간은 양수여야 합니다: {burst_time}")

        self.pid = pid
        self.arrival_time = arrival_time
        self.burst_time = burst_time
        self.priority = priority

        # 실행 상태 추적
        self.state = ProcessState.NEW
        self.remaining_time = burst_time
        self.time_in_cpu = 0  # 마지막 디스패치 이후 연속 실행 시간

        # MLFQ용 큐 레벨
        self.queue_level = 0  # 0: 최상위, 1: 중간, 2: 최하위

        # 통계 정보
        self.start_time: Optional[int] = None  # 첫 실행 시간
        self.finish_time: Optional[int] = None  # 완료 시간
        self.waiting_time = 0  # 대기 시간
        self.turnaround_time = 0  # 반환 시간

    @property
    def response_time(self) -> Optional[int]:
        """응답 시간 (첫 실행 시간 - 도착 시간)"""
        if self.start_time is None:
            return None
        return self.start_time - self.arrival_time

    def execute(self, current_time: int) -> bool:
        """
        프로세스를 1 tick 실행 (남은 시간 감소)

        Args:
            current_time: 실행이 시작된 tick

        Returns:
            실행 후 완료되었는지 여부
        """
        if self.state == ProcessState.TERMINATED:
            raise SimulationError(f"종료된 프로세스 P{self.pid}는 실행할 수 없습니다")

        if self.start_time is None:
            self.start_time = current_time
        self.remaining_time -= 1
        return self.is_completed()

    def is_completed(self) -> bool:
        """남은 실행 시간이 없는지 확인"""
        return self.remaining_time <= 0

    def complete(self, finish_time: int):
        """
        완료 처리: 반환 시간과 대기 시간을 한 번만 기록

        Args:
            finish_time: 완료 tick
        """
        if self.state == ProcessState.TERMINATED:
            raise SimulationError(f"P{self.pid}가 두 번 완료 처리되었습니다")

        self.state = ProcessState.TERMINATED
        self.finish_time = finish_time
        self.turnaround_time = finish_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time

    def __repr__(self):
        return f"P{self.pid}[{self.state.value}]"

    def __str__(self):
        return f"Process {self.pid}: State={self.state.value}, Priority={self.priority}, " \
               f"Remaining={self.remaining_time}"


def create_process_copy(process: Process) -> Process:
    """
    실행 상태를 초기화한 새 프로세스 생성
    이미 실행된 프로세스가 들어와도 각 시뮬레이션은 NEW 상태에서 시작한다
    """
    return Process(process.pid, process.arrival_time, process.burst_time, process.priority)
