"""
시뮬레이션 이벤트 로그
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class EventType(Enum):
    """이벤트 타입"""
    ARRIVAL = "Process Arrival"  # 프로세스 도착
    DISPATCH = "Dispatch"  # CPU 할당
    PREEMPTION = "Preemption"  # 선점
    QUANTUM_EXPIRED = "Quantum Expired"  # 타임 슬라이스 종료
    DEMOTION = "Demotion"  # MLFQ 하위 큐 이동
    COMPLETION = "Completion"  # 프로세스 종료
    IDLE = "Idle"  # CPU 유휴


@dataclass
class Event:
    """시뮬레이션 이벤트"""
    time: int
    event_type: EventType
    pid: Optional[int] = None
    description: str = ""

    def format(self) -> str:
        return f"[T={self.time:3d}] {self.description}"


class EventLog:
    """
    tick 단위 이벤트 기록
    시뮬레이터가 매 tick 시작 시 time을 갱신하고, 스케줄러는 record()로 기록만 한다
    """

    def __init__(self):
        self.time = 0
        self.events: List[Event] = []

    def record(self, event_type: EventType, description: str, pid: Optional[int] = None) -> Event:
        event = Event(self.time, event_type, pid, description)
        self.events.append(event)
        return event

    def filter(self, event_type: EventType) -> List[Event]:
        return [e for e in self.events if e.event_type == event_type]

    def lines(self) -> List[str]:
        return [e.format() for e in self.events]

    def __len__(self):
        return len(self.events)
