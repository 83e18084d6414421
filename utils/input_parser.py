"""
입력 데이터 파서 및 프로세스 생성 모듈
"""

import csv
import random
from typing import List, Optional

from core.exceptions import InvalidProcessError
from core.process import Process


# 기본 예제 프로세스 (PID, 도착 시간, 버스트 시간)
SAMPLE_PROCESSES = [
    (1, 0, 5),
    (2, 1, 3),
    (3, 2, 8),
    (4, 3, 6),
]


class InputParser:
    """입력 파일 파서"""

    @staticmethod
    def parse_file(filename: str) -> List[Process]:
        """
        CSV 파일에서 프로세스 정보 읽기

        파일 형식: PID,도착시간,버스트시간[,우선순위]
        예: 1,0,5,2

        Args:
            filename: 입력 파일 경로

        Returns:
            프로세스 리스트
        """
        processes = []

        try:
            with open(filename, 'r', encoding='utf-8', newline='') as f:
                for line_no, row in enumerate(csv.reader(f), 1):
                    # 주석 및 빈 줄 제거
                    if not row or not ''.join(row).strip() or row[0].strip().startswith('#'):
                        continue

                    try:
                        processes.append(InputParser.parse_row(row))
                    except ValueError as e:
                        print(f"경고: {line_no}번째 라인 파싱 실패: {','.join(row)}")
                        print(f"오류: {e}")
                        continue

            print(f"{filename}에서 {len(processes)}개의 프로세스를 성공적으로 로드했습니다")
            return processes

        except FileNotFoundError:
            print(f"오류: 파일 '{filename}'을 찾을 수 없습니다")
            return []

    @staticmethod
    def parse_row(parts: List[str]) -> Process:
        """파싱된 필드에서 프로세스 객체 생성"""
        parts = [p.strip() for p in parts]
        if len(parts) not in (3, 4):
            raise InvalidProcessError(f"잘못된 형식: 3~4개 필드가 필요하지만 {len(parts)}개가 있습니다")

        try:
            pid = int(parts[0])
            arrival_time = int(parts[1])
            burst_time = int(parts[2])
            priority = int(parts[3]) if len(parts) == 4 else 0
        except ValueError as e:
            raise InvalidProcessError(f"숫자 필드 변환 오류: {e}")

        if pid <= 0:
            raise InvalidProcessError(f"PID는 양수여야 합니다: {pid}")

        return Process(pid, arrival_time, burst_time, priority)

    @staticmethod
    def sample_processes() -> List[Process]:
        """기본 예제 프로세스 목록"""
        return [Process(pid, arrival, burst) for pid, arrival, burst in SAMPLE_PROCESSES]

    @staticmethod
    def generate_random_processes(num_processes: int = 10,
                                  max_arrival: int = 20,
                                  max_burst: int = 15,
                                  max_priority: int = 10,
                                  seed: Optional[int] = None) -> List[Process]:
        """
        랜덤 프로세스 생성

        Args:
            num_processes: 생성할 프로세스 수
            max_arrival: 최대 도착 시간
            max_burst: 최대 CPU 버스트 시간
            max_priority: 최대 우선순위 값
            seed: 랜덤 시드

        Returns:
            프로세스 리스트
        """
        rng = random.Random(seed)

        processes = []
        for pid in range(1, num_processes + 1):
            arrival_time = rng.randint(0, max_arrival)
            # 짧은 작업과 긴 작업을 섞는다
            if rng.random() < 0.5:
                burst_time = rng.randint(1, max(1, max_burst // 3))
            else:
                burst_time = rng.randint(max(1, max_burst // 2), max_burst)
            priority = rng.randint(0, max_priority)
            processes.append(Process(pid, arrival_time, burst_time, priority))

        print(f"{num_processes}개의 랜덤 프로세스를 생성했습니다")
        return processes

    @staticmethod
    def save_processes_to_file(processes: List[Process], filename: str):
        """
        프로세스 리스트를 파일로 저장

        Args:
            processes: 저장할 프로세스 리스트
            filename: 출력 파일 경로
        """
        with open(filename, 'w', encoding='utf-8', newline='') as f:
            f.write("# CPU Scheduler Input Data\n")
            f.write("# Format: PID,ArrivalTime,BurstTime,Priority\n")

            writer = csv.writer(f, lineterminator='\n')
            for process in processes:
                writer.writerow([process.pid, process.arrival_time,
                                 process.burst_time, process.priority])

        print(f"{len(processes)}개의 프로세스를 {filename}에 성공적으로 저장했습니다")

    @staticmethod
    def print_process_summary(processes: List[Process]):
        """프로세스 요약 정보 출력"""
        print("\n" + "="*60)
        print("프로세스 요약")
        print("="*60)
        print(f"{'PID':<6} {'도착시간':>10} {'버스트':>10} {'우선순위':>10}")
        print("-"*60)

        for p in sorted(processes, key=lambda x: x.pid):
            print(f"{p.pid:<6} {p.arrival_time:>10} {p.burst_time:>10} {p.priority:>10}")

        print("="*60)
        print(f"전체 프로세스: {len(processes)}개, 총 CPU 시간: {sum(p.burst_time for p in processes)}\n")
