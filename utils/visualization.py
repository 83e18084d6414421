"""
시각화 모듈: Gantt Chart 및 통계 그래프 생성
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import List, Optional

from core.scheduler_base import GanttEntry, IDLE_PID
from core.simulator import SimulationResult


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        # 프로세스별 색상 설정
        self.colors = plt.cm.Set3.colors
        self.idle_color = '#CCCCCC'

    def color_for(self, pid: int):
        return self.colors[pid % len(self.colors)]

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         save_path: Optional[str] = None, show: bool = True):
        """
        Gantt Chart 그리기

        Args:
            gantt_data: Gantt Chart 데이터
            algorithm_name: 알고리즘 이름
            save_path: 저장 경로 (None이면 저장 안 함)
            show: 화면에 표시할지 여부
        """
        if not gantt_data:
            print(f"{algorithm_name}에 대한 Gantt 차트 데이터가 없습니다")
            return

        fig, ax = plt.subplots(figsize=(16, 4))

        for entry in gantt_data:
            if entry.pid == IDLE_PID:
                color, label = self.idle_color, 'Idle'
            else:
                color, label = self.color_for(entry.pid), f'P{entry.pid}'

            ax.barh(0, entry.duration, left=entry.start_time, height=0.6,
                    color=color, edgecolor='black', linewidth=0.5)
            ax.text(entry.start_time + entry.duration / 2, 0, label,
                    ha='center', va='center', fontsize=8, fontweight='bold')

        # 구간 경계 시각 표시
        boundaries = sorted({e.start_time for e in gantt_data} | {gantt_data[-1].end_time})
        ax.set_xticks(boundaries)
        ax.set_yticks([])
        ax.set_xlabel('Time', fontsize=12)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        pids = sorted({e.pid for e in gantt_data if e.pid != IDLE_PID})
        legend_elements = [mpatches.Patch(color=self.color_for(pid), label=f'P{pid}') for pid in pids]
        if any(e.pid == IDLE_PID for e in gantt_data):
            legend_elements.append(mpatches.Patch(color=self.idle_color, label='Idle'))
        ax.legend(handles=legend_elements, loc='upper right', ncol=min(len(legend_elements), 8))

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Gantt 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def compare_algorithms(self, results: List[SimulationResult],
                           save_path: Optional[str] = None, show: bool = True):
        """
        여러 알고리즘의 성능 비교 그래프

        Args:
            results: 각 알고리즘의 결과 리스트
            save_path: 저장 경로
            show: 화면에 표시할지 여부
        """
        if not results:
            print("비교할 결과가 없습니다")
            return

        algorithms = [r.algorithm for r in results]
        panels = [
            ('Average Waiting Time (ms)', [r.metrics.average_waiting_time for r in results], 'skyblue', '{:.2f}'),
            ('Average Turnaround Time (ms)', [r.metrics.average_turnaround_time for r in results], 'lightcoral', '{:.2f}'),
            ('CPU Utilization (%)', [r.metrics.cpu_utilization for r in results], 'lightgreen', '{:.1f}%'),
            ('Throughput (processes/ms)', [r.metrics.throughput for r in results], 'plum', '{:.3f}'),
        ]

        # 2x2 서브플롯 생성
        fig, axes = plt.subplots(2, 2, figsize=(14, 10))
        fig.suptitle('Scheduling Algorithms Performance Comparison',
                     fontsize=16, fontweight='bold')

        for ax, (title, values, color, fmt) in zip(axes.flat, panels):
            bars = ax.bar(range(len(algorithms)), values, color=color, edgecolor='black')
            ax.set_xticks(range(len(algorithms)))
            ax.set_xticklabels(algorithms, fontsize=10)
            ax.set_title(title, fontsize=12, fontweight='bold')
            ax.grid(axis='y', alpha=0.3)

            # 값 표시
            for bar, value in zip(bars, values):
                ax.text(bar.get_x() + bar.get_width() / 2., bar.get_height(),
                        fmt.format(value), ha='center', va='bottom', fontsize=9)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"비교 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def print_statistics_table(self, results: List[SimulationResult]):
        """
        통계를 표 형식으로 출력

        Args:
            results: 각 알고리즘의 결과 리스트
        """
        print("\n" + "="*100)
        print("스케줄링 알고리즘 성능 비교")
        print("="*100)
        print(f"{'알고리즘':<10} {'평균 대기(ms)':>14} {'평균 반환(ms)':>14} {'CPU 이용률(%)':>14} "
              f"{'처리량(p/ms)':>14} {'문맥전환':>10}")
        print("-"*100)

        for result in results:
            m = result.metrics
            print(f"{result.algorithm:<10} "
                  f"{m.average_waiting_time:>14.2f} "
                  f"{m.average_turnaround_time:>14.2f} "
                  f"{m.cpu_utilization:>14.2f} "
                  f"{m.throughput:>14.2f} "
                  f"{result.context_switches:>10}")

        print("="*100 + "\n")

    def print_process_details(self, result: SimulationResult):
        """
        개별 프로세스의 상세 정보 출력

        Args:
            result: 알고리즘 실행 결과
        """
        print(f"\n{'='*80}")
        print(f"프로세스 상세 - {result.name}")
        print(f"{'='*80}")
        print(f"{'PID':<6} {'도착':>6} {'버스트':>8} {'우선순위':>8} {'시작':>6} {'종료':>6} "
              f"{'대기':>6} {'반환':>6} {'응답':>6}")
        print(f"{'-'*80}")

        for process in sorted(result.processes, key=lambda p: p.pid):
            print(f"{process.pid:<6} "
                  f"{process.arrival_time:>6} "
                  f"{process.burst_time:>8} "
                  f"{process.priority:>8} "
                  f"{process.start_time:>6} "
                  f"{process.finish_time:>6} "
                  f"{process.waiting_time:>6} "
                  f"{process.turnaround_time:>6} "
                  f"{process.response_time:>6}")

        print(f"{'='*80}\n")
