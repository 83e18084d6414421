"""
스케줄링 성능 지표 계산
"""

from dataclasses import dataclass, asdict
from typing import Dict, Sequence

from .process import Process


@dataclass
class Metrics:
    """스케줄링 통계"""
    average_waiting_time: float
    average_turnaround_time: float
    cpu_utilization: float  # %
    throughput: float  # processes / tick
    total_time: int
    process_count: int

    def to_dict(self) -> Dict:
        return asdict(self)


def calculate_metrics(processes: Sequence[Process], total_time: int) -> Metrics:
    """
    완료된 프로세스 목록과 총 경과 시간으로 지표 계산

    Args:
        processes: 완료된 프로세스 리스트
        total_time: 시뮬레이션 총 tick 수

    Returns:
        Metrics
    """
    if not processes:
        raise ValueError("프로세스가 없으면 지표를 계산할 수 없습니다")
    if total_time <= 0:
        raise ValueError(f"총 시뮬레이션 시간은 양수여야 합니다: {total_time}")

    count = len(processes)
    return Metrics(
        average_waiting_time=sum(p.waiting_time for p in processes) / count,
        average_turnaround_time=sum(p.turnaround_time for p in processes) / count,
        cpu_utilization=sum(p.burst_time for p in processes) / total_time * 100,
        throughput=count / total_time,
        total_time=total_time,
        process_count=count,
    )
