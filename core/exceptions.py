"""
시뮬레이터 예외 정의
"""


class SchedulerError(Exception):
    """시뮬레이터 예외의 기본 클래스"""


class InvalidProcessError(SchedulerError, ValueError):
    """잘못된 프로세스 파라미터 (음수 도착 시간, 0 이하의 버스트 등)"""


class UnknownPolicyError(SchedulerError, ValueError):
    """등록되지 않은 스케줄링 알고리즘 이름"""

    def __init__(self, name: str, known=()):
        self.name = name
        self.known = tuple(known)
        message = f"Unknown algorithm: {name}"
        if self.known:
            message += f" (available: {', '.join(self.known)})"
        super().__init__(message)


class SimulationError(SchedulerError, RuntimeError):
    """시뮬레이션 중 불변식 위반"""
