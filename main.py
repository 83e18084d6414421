#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CPU 스케줄러 시뮬레이터 - 메인 실행 파일
알고리즘 선택 기능 포함
"""

import os
import sys
from typing import List, Optional

from core.exceptions import SchedulerError
from core.metrics import Metrics
from core.process import Process
from core.simulator import Simulator, SimulationResult
from schedulers import ALGORITHM_MAP
from utils.input_parser import InputParser
from utils.visualization import Visualizer


OUTPUT_DIR = "simulation_results"

# 메뉴 번호 → 알고리즘 이름
MENU = {
    '1': 'FCFS',
    '2': 'SJF',
    '3': 'RR',
    '4': 'Priority',
    '5': 'SRTF',
    '6': 'MLFQ',
}


def print_banner():
    """배너 출력"""
    print("\n" + "="*80)
    print(" "*25 + "CPU 스케줄러 시뮬레이터")
    print("="*80 + "\n")


def print_algorithm_menu():
    """알고리즘 선택 메뉴 출력"""
    print("\n" + "="*80)
    print("스케줄링 알고리즘 선택")
    print("="*80)
    for key, name in MENU.items():
        print(f"  {key}. {ALGORITHM_MAP[name]['description']}")
    print("\n  all. 모든 알고리즘 실행")
    print("  0. 종료")
    print("="*80)


def get_user_choice() -> str:
    """사용자 선택 입력"""
    while True:
        choice = input("\n선택하세요 (1-6): ").strip()

        if choice == '0':
            print("\n프로그램을 종료합니다...")
            sys.exit(0)

        if choice in MENU or choice == 'all':
            return choice

        print("[오류] 잘못된 선택입니다. 다시 시도하세요.")


def format_metrics(algorithm: str, metrics: Metrics) -> str:
    """지표를 소수점 둘째 자리까지 단위와 함께 포맷"""
    return "\n".join([
        f"Results for {algorithm}:",
        f"Average Waiting Time: {metrics.average_waiting_time:.2f} ms",
        f"Average Turnaround Time: {metrics.average_turnaround_time:.2f} ms",
        f"CPU Utilization: {metrics.cpu_utilization:.2f}%",
        f"Throughput: {metrics.throughput:.2f} processes/ms",
    ])


def run_single_algorithm(algorithm: str, processes: List[Process],
                         verbose: bool = True) -> Optional[SimulationResult]:
    """단일 알고리즘 실행"""
    print(f"\n{'='*80}")
    print(f"실행 중: {ALGORITHM_MAP[algorithm]['description']}")
    print(f"{'='*80}\n")

    try:
        result = Simulator(algorithm, processes).run(verbose=verbose)
    except SchedulerError as e:
        print(f"[오류] {algorithm} 실행 실패: {e}")
        return None

    print("\n" + format_metrics(algorithm, result.metrics))
    Visualizer().print_process_details(result)
    return result


def run_all_algorithms(processes: List[Process], verbose: bool = False) -> List[SimulationResult]:
    """모든 알고리즘 실행"""
    results = []

    print("\n" + "="*80)
    print("모든 스케줄링 알고리즘 실행")
    print("="*80 + "\n")

    for index, algorithm in enumerate(MENU.values(), 1):
        print(f"[{index}/{len(MENU)}] {ALGORITHM_MAP[algorithm]['description']} 실행 중...")
        try:
            results.append(Simulator(algorithm, processes).run(verbose=verbose))
            print(f"[완료] {algorithm} 완료\n")
        except SchedulerError as e:
            print(f"[오류] {algorithm} 실패: {e}\n")

    return results


def save_results(results: List[SimulationResult], output_dir: str = OUTPUT_DIR):
    """결과 저장 (Gantt 차트, 비교 차트, 텍스트 보고서)"""
    os.makedirs(output_dir, exist_ok=True)
    visualizer = Visualizer()

    print("Gantt 차트 생성 중...")
    for result in results:
        save_path = os.path.join(output_dir, f"gantt_{result.algorithm}.png")
        visualizer.draw_gantt_chart(result.gantt_chart, result.name,
                                    save_path=save_path, show=False)

    # 비교 그래프 (2개 이상일 때만)
    if len(results) > 1:
        visualizer.compare_algorithms(results, save_path=os.path.join(output_dir, "comparison.png"),
                                      show=False)

    save_results_to_file(results, os.path.join(output_dir, "results.txt"))
    print(f"\n결과가 '{output_dir}/' 디렉토리에 저장되었습니다")


def save_results_to_file(results: List[SimulationResult], filename: str):
    """결과를 텍스트 파일로 저장"""
    with open(filename, 'w', encoding='utf-8') as f:
        f.write("="*100 + "\n")
        f.write("CPU 스케줄러 시뮬레이션 결과\n")
        f.write("="*100 + "\n\n")

        for result in results:
            f.write(format_metrics(result.algorithm, result.metrics) + "\n")
            f.write(f"Total Time: {result.metrics.total_time}, "
                    f"Context Switches: {result.context_switches}\n\n")

            f.write(f"{'PID':<6} {'도착':>6} {'버스트':>8} {'시작':>6} {'완료':>6} "
                    f"{'대기':>6} {'반환':>6}\n")
            f.write("-"*60 + "\n")
            for p in sorted(result.processes, key=lambda p: p.pid):
                f.write(f"{p.pid:<6} {p.arrival_time:>6} {p.burst_time:>8} {p.start_time:>6} "
                        f"{p.finish_time:>6} {p.waiting_time:>6} {p.turnaround_time:>6}\n")
            f.write("\n")

    print(f"[완료] 결과가 {filename}에 저장되었습니다")


def select_processes() -> List[Process]:
    """입력 프로세스 선택"""
    print("\n[입력 옵션]")
    print("  0. 예제 데이터 (P1~P4)")
    print("  1. 랜덤 데이터 (자동 생성)")
    print("  2. 파일에서 읽기")

    while True:
        choice = input("\n입력 옵션 선택 (0-2, 기본값=0): ").strip() or '0'

        if choice == '0':
            return InputParser.sample_processes()
        elif choice == '1':
            return InputParser.generate_random_processes()
        elif choice == '2':
            filename = input("파일 경로: ").strip()
            processes = InputParser.parse_file(filename)
            if processes:
                return processes
            print("[오류] 프로세스 로드 실패 또는 파일이 비어있습니다.")
        else:
            print("[오류] 잘못된 선택입니다. 0, 1, 또는 2를 입력하세요.")


def main():
    """메인 함수"""
    print_banner()

    processes = select_processes()
    InputParser.print_process_summary(processes)

    # 알고리즘 선택 루프
    while True:
        print_algorithm_menu()
        choice = get_user_choice()

        if choice == 'all':
            results = run_all_algorithms(processes)
            if results:
                Visualizer().print_statistics_table(results)
        else:
            result = run_single_algorithm(MENU[choice], processes, verbose=True)
            results = [result] if result else []

        if results and input("\n차트와 보고서를 저장하시겠습니까? (y/n): ").strip().lower() == 'y':
            save_results(results)

        print("\n" + "="*80)
        continue_choice = input("다른 시뮬레이션을 실행하시겠습니까? (y/n): ").strip().lower()
        if continue_choice != 'y':
            print("\nCPU 스케줄러 시뮬레이터를 사용해 주셔서 감사합니다!")
            print("="*80 + "\n")
            break


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n사용자에 의해 시뮬레이션이 중단되었습니다.")
        sys.exit(0)
