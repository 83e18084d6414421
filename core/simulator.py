"""
시뮬레이션 드라이버: 전역 clock을 tick 단위로 진행하며 스케줄러에 실행을 위임
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from schedulers import create_scheduler
from .events import EventLog, EventType
from .exceptions import InvalidProcessError, SimulationError
from .metrics import Metrics, calculate_metrics
from .process import Process, ProcessState, create_process_copy
from .scheduler_base import GanttEntry, IDLE_PID


@dataclass
class SimulationResult:
    """시뮬레이션 결과"""
    algorithm: str
    name: str
    metrics: Metrics
    processes: List[Process]  # 완료 순서
    gantt_chart: List[GanttEntry] = field(default_factory=list)
    event_log: List[str] = field(default_factory=list)
    context_switches: int = 0

    @property
    def average_response_time(self) -> float:
        times = [p.response_time for p in self.processes if p.response_time is not None]
        return sum(times) / len(times) if times else 0.0

    def to_dict(self) -> Dict:
        return {
            'algorithm': self.algorithm,
            'name': self.name,
            'statistics': {
                **self.metrics.to_dict(),
                'average_response_time': self.average_response_time,
                'context_switches': self.context_switches,
            },
            'processes': [
                {
                    'pid': p.pid,
                    'arrival_time': p.arrival_time,
                    'burst_time': p.burst_time,
                    'priority': p.priority,
                    'start_time': p.start_time,
                    'finish_time': p.finish_time,
                    'waiting_time': p.waiting_time,
                    'turnaround_time': p.turnaround_time,
                    'response_time': p.response_time,
                }
                for p in self.processes
            ],
            'gantt_chart': [entry.to_dict() for entry in self.gantt_chart],
            'event_log': list(self.event_log),
        }


def validate_processes(processes: Sequence[Process]):
    """드라이버 종료 조건이 성립하는 프로세스 목록인지 검사"""
    if not processes:
        raise InvalidProcessError("프로세스 목록이 비어 있습니다")

    seen = set()
    for process in processes:
        if not isinstance(process, Process):
            raise InvalidProcessError(f"Process 객체가 아닙니다: {process!r}")
        if process.pid in seen:
            raise InvalidProcessError(f"중복된 PID: {process.pid}")
        seen.add(process.pid)
        # 버스트가 0이면 실행 전에 완료되어 완료 카운트가 어긋난다
        if process.burst_time <= 0:
            raise InvalidProcessError(f"P{process.pid}: 버스트 시간은 양수여야 합니다")
        if process.arrival_time < 0:
            raise InvalidProcessError(f"P{process.pid}: 도착 시간은 0 이상이어야 합니다")


class Simulator:
    """
    tick 기반 시뮬레이션 드라이버

    매 tick마다:
        1. 도착 시간이 현재 clock과 같은 프로세스를 스케줄러에 admit
        2. 스케줄러의 advance_one_tick()으로 이번 tick에 실행할 프로세스 결정
        3. clock 1 증가
        4. 실행된 프로세스의 남은 시간을 1 감소, 0 이하가 되면 완료 처리
    """

    def __init__(self, algorithm: str, processes: Sequence[Process], **params):
        self.algorithm = algorithm
        self.events = EventLog()
        self.scheduler = create_scheduler(algorithm, self.events, **params)

        validate_processes(processes)
        # 입력 목록은 그대로 두고 복사본으로 시뮬레이션
        self.processes = [create_process_copy(p) for p in processes]

        self.current_time = 0
        self.completed_count = 0
        self.cpu_busy_time = 0
        self.terminated_processes: List[Process] = []
        self.gantt_chart: List[GanttEntry] = []

        # 작업 보존형 스케줄러는 이 시각 전에 반드시 끝난다
        self.time_limit = (max(p.arrival_time for p in self.processes) +
                           sum(p.burst_time for p in self.processes))

    def is_simulation_complete(self) -> bool:
        """시뮬레이션 완료 여부 확인"""
        return self.completed_count >= len(self.processes)

    def handle_process_arrival(self):
        """프로세스 도착 처리 (입력 순서대로 admit)"""
        for process in self.processes:
            if process.arrival_time == self.current_time:
                self.scheduler.admit(process)

    def add_to_gantt_chart(self, pid: int, tick: int):
        """Gantt Chart에 1 tick 기록 (같은 프로세스의 연속 구간은 병합)"""
        if self.gantt_chart:
            last = self.gantt_chart[-1]
            if last.pid == pid and last.end_time == tick:
                last.end_time = tick + 1
                return

        state = ProcessState.READY if pid == IDLE_PID else ProcessState.RUNNING
        self.gantt_chart.append(GanttEntry(pid, tick, tick + 1, state))

    def terminate_process(self, process: Process):
        """프로세스 종료 처리"""
        process.complete(self.current_time)
        self.terminated_processes.append(process)
        self.completed_count += 1

        self.events.time = self.current_time
        self.events.record(EventType.COMPLETION,
                           f"P{process.pid} → Terminated "
                           f"(WT={process.waiting_time}, TT={process.turnaround_time})",
                           process.pid)

    def step(self) -> bool:
        """
        한 tick 실행

        Returns:
            모든 프로세스가 완료되었는지 여부
        """
        if self.is_simulation_complete():
            return True

        if self.current_time >= self.time_limit:
            raise SimulationError(
                f"{self.algorithm}: T={self.current_time}까지 "
                f"{len(self.processes) - self.completed_count}개 프로세스가 완료되지 않았습니다")

        self.events.time = self.current_time
        self.handle_process_arrival()

        process = self.scheduler.advance_one_tick()
        tick = self.current_time
        self.current_time += 1

        if process is None:
            if not self.gantt_chart or self.gantt_chart[-1].pid != IDLE_PID:
                self.events.record(EventType.IDLE, "CPU idle")
            self.add_to_gantt_chart(IDLE_PID, tick)
        else:
            self.cpu_busy_time += 1
            self.add_to_gantt_chart(process.pid, tick)
            if process.execute(tick):
                self.terminate_process(process)

        return self.is_simulation_complete()

    def run(self, verbose: bool = False) -> SimulationResult:
        """
        스케줄링 시뮬레이션 실행

        Args:
            verbose: 상세 로그 출력 여부

        Returns:
            시뮬레이션 결과
        """
        while not self.step():
            pass

        if verbose:
            for line in self.events.lines():
                print(line)

        return self.get_results()

    def get_results(self) -> SimulationResult:
        """
        시뮬레이션 결과 반환

        Returns:
            결과 (지표, Gantt Chart, 로그 등)
        """
        return SimulationResult(
            algorithm=self.algorithm,
            name=self.scheduler.name,
            metrics=calculate_metrics(self.terminated_processes, self.current_time),
            processes=list(self.terminated_processes),
            gantt_chart=list(self.gantt_chart),
            event_log=self.events.lines(),
            context_switches=self.scheduler.context_switches,
        )

    def snapshot(self) -> Dict:
        """
        현재 시뮬레이션 상태 스냅샷 반환 (실시간 뷰어용)

        Returns:
            현재 상태 딕셔너리
        """
        return {
            'time': self.current_time,
            'running': self.scheduler.running_process,
            'ready_queue': self.scheduler.ready_processes(),
            'terminated': list(self.terminated_processes),
            'context_switches': self.scheduler.context_switches,
            'cpu_busy_time': self.cpu_busy_time,
            'latest_gantt_entry': self.gantt_chart[-1] if self.gantt_chart else None,
            'latest_log': self.events.events[-1].format() if self.events.events else "",
        }


def run_simulation(policy_name: str, processes: Sequence[Process], **params) -> Metrics:
    """
    지정한 알고리즘으로 시뮬레이션을 실행하고 지표 반환

    Args:
        policy_name: FCFS, SJF, RR, Priority, SRTF, MLFQ 중 하나 (대소문자 구분)
        processes: 프로세스 목록

    Returns:
        Metrics
    """
    return Simulator(policy_name, processes, **params).run().metrics
