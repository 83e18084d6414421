"""
CPU 스케줄러 시뮬레이터 - FastAPI 백엔드
"""

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Dict, Any
import asyncio

from core.exceptions import SchedulerError
from core.process import Process
from core.simulator import Simulator
from schedulers import ALGORITHM_MAP, RoundRobinScheduler
from utils.input_parser import SAMPLE_PROCESSES

app = FastAPI(
    title="CPU Scheduler Simulator",
    description="CPU 스케줄링 알고리즘 시뮬레이터 (FCFS, SJF, RR, Priority, SRTF, MLFQ)",
    version="1.0.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic 모델
class ProcessInput(BaseModel):
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


class SimulationRequest(BaseModel):
    processes: List[ProcessInput]
    algorithms: List[str] = ['FCFS']
    time_slice: int = 4


def create_process_objects(process_inputs: List[ProcessInput]) -> List[Process]:
    """ProcessInput을 Process 객체로 변환"""
    return [
        Process(
            pid=p.pid,
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            priority=p.priority
        )
        for p in process_inputs
    ]


def create_simulator(processes: List[Process], algorithm: str, time_slice: int = 4) -> Simulator:
    """알고리즘별 파라미터를 반영해 시뮬레이터 생성"""
    params = {}
    if algorithm in ALGORITHM_MAP and ALGORITHM_MAP[algorithm]['class'] is RoundRobinScheduler:
        params['time_slice'] = time_slice
    return Simulator(algorithm, processes, **params)


def run_scheduler(processes: List[Process], algorithm: str, time_slice: int = 4) -> Dict:
    """스케줄러 실행 및 결과 반환"""
    return create_simulator(processes, algorithm, time_slice).run().to_dict()


@app.get("/")
async def root():
    return {"message": "CPU Scheduler Simulator API", "version": "1.0.0"}


@app.get("/algorithms")
async def get_algorithms():
    """사용 가능한 알고리즘 목록 반환"""
    return {
        "algorithms": [
            {
                "id": name,
                "name": info['description'],
                "preemptive": info['class'].preemptive,
            }
            for name, info in ALGORITHM_MAP.items()
        ]
    }


@app.post("/simulate")
async def simulate(request: SimulationRequest):
    """스케줄링 시뮬레이션 실행"""
    try:
        results = []

        for algorithm in request.algorithms:
            processes = create_process_objects(request.processes)
            results.append(run_scheduler(processes, algorithm, request.time_slice))

        return {"success": True, "results": results}

    except (SchedulerError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/simulate/compare")
async def compare_algorithms(request: SimulationRequest):
    """여러 알고리즘 비교 시뮬레이션"""
    try:
        results = []
        comparison = {
            'algorithms': [],
            'average_waiting_time': [],
            'average_turnaround_time': [],
            'cpu_utilization': [],
            'throughput': [],
            'context_switches': []
        }

        for algorithm in request.algorithms:
            processes = create_process_objects(request.processes)
            result = run_scheduler(processes, algorithm, request.time_slice)
            results.append(result)

            # 비교 데이터 수집
            stats = result['statistics']
            comparison['algorithms'].append(algorithm)
            for key in ('average_waiting_time', 'average_turnaround_time',
                        'cpu_utilization', 'throughput', 'context_switches'):
                comparison[key].append(stats[key])

        return {
            "success": True,
            "results": results,
            "comparison": comparison
        }

    except (SchedulerError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


# WebSocket을 통한 실시간 시뮬레이션
class RealtimeSimulator:
    def __init__(self, processes: List[Process], algorithm: str, time_slice: int = 4):
        self.algorithm = algorithm
        self.simulator = create_simulator(processes, algorithm, time_slice)
        self.is_complete = False
        self.last_gantt_index = 0
        self.last_log_index = 0

    def step(self) -> Dict[str, Any]:
        """한 스텝 실행 및 상태 반환"""
        if self.is_complete:
            return {'complete': True}

        is_complete = self.simulator.step()
        snapshot = self.simulator.snapshot()

        # 새로운 Gantt 엔트리 (마지막 엔트리는 병합으로 늘어날 수 있으므로 다시 보낸다)
        gantt_chart = self.simulator.gantt_chart
        start = max(0, min(self.last_gantt_index, len(gantt_chart) - 1))
        new_gantt = [entry.to_dict() for entry in gantt_chart[start:]]
        self.last_gantt_index = len(gantt_chart)

        # 새로운 로그
        log_lines = self.simulator.events.lines()
        new_logs = log_lines[self.last_log_index:]
        self.last_log_index = len(log_lines)

        running = None
        if snapshot['running'] is not None:
            p = snapshot['running']
            running = {
                'pid': p.pid,
                'remaining': p.remaining_time,
                'priority': p.priority,
                'queue_level': p.queue_level
            }

        ready_queue = [
            {'pid': p.pid, 'remaining': p.remaining_time}
            for p in snapshot['ready_queue']
        ]

        stats = {
            'current_time': snapshot['time'],
            'context_switches': snapshot['context_switches'],
            'cpu_busy_time': snapshot['cpu_busy_time'],
            'completed': len(snapshot['terminated']),
            'total': len(self.simulator.processes)
        }

        if is_complete:
            self.is_complete = True
            stats['final'] = self.simulator.get_results().to_dict()['statistics']

        return {
            'complete': is_complete,
            'running': running,
            'ready_queue': ready_queue,
            'new_gantt': new_gantt,
            'new_logs': new_logs,
            'stats': stats
        }


@app.websocket("/ws/realtime")
async def websocket_realtime(websocket: WebSocket):
    """실시간 시뮬레이션 WebSocket 엔드포인트"""
    await websocket.accept()
    simulator = None

    try:
        while True:
            message = await websocket.receive_json()
            action = message.get('action')

            try:
                if action == 'init':
                    processes = [
                        Process(
                            pid=p['pid'],
                            arrival_time=p['arrival_time'],
                            burst_time=p['burst_time'],
                            priority=p.get('priority', 0)
                        )
                        for p in message['processes']
                    ]
                    simulator = RealtimeSimulator(processes, message['algorithm'],
                                                  message.get('time_slice', 4))

                    await websocket.send_json({
                        'type': 'initialized',
                        'algorithm': message['algorithm'],
                        'process_count': len(processes)
                    })

                elif action in ('step', 'run') and simulator is None:
                    await websocket.send_json({'type': 'error', 'message': 'Simulator not initialized'})

                elif action == 'step':
                    await websocket.send_json({'type': 'step_result', **simulator.step()})

                elif action == 'run':
                    # 자동 실행 (속도 조절 가능)
                    speed = message.get('speed', 1.0)
                    if isinstance(speed, bool) or not isinstance(speed, (int, float)) or speed <= 0:
                        raise ValueError(f'speed must be a positive number: {speed!r}')
                    delay = 1.0 / speed

                    while not simulator.is_complete:
                        result = simulator.step()
                        await websocket.send_json({'type': 'step_result', **result})
                        if result['complete']:
                            break
                        await asyncio.sleep(delay)

                else:
                    await websocket.send_json({'type': 'error', 'message': f'Unknown action: {action}'})

            except (SchedulerError, ValueError, KeyError) as e:
                await websocket.send_json({'type': 'error', 'message': str(e)})

    except WebSocketDisconnect:
        pass


@app.get("/sample-processes")
async def get_sample_processes():
    """샘플 프로세스 데이터 반환"""
    return {
        "samples": [
            {
                "name": "기본 예제 (4개 프로세스)",
                "processes": [
                    {"pid": pid, "arrival_time": arrival, "burst_time": burst, "priority": 0}
                    for pid, arrival, burst in SAMPLE_PROCESSES
                ]
            },
            {
                "name": "우선순위 및 선점 비교 (5개 프로세스)",
                "processes": [
                    {"pid": 1, "arrival_time": 0, "burst_time": 10, "priority": 3},
                    {"pid": 2, "arrival_time": 1, "burst_time": 1, "priority": 1},
                    {"pid": 3, "arrival_time": 2, "burst_time": 2, "priority": 4},
                    {"pid": 4, "arrival_time": 3, "burst_time": 1, "priority": 5},
                    {"pid": 5, "arrival_time": 4, "burst_time": 5, "priority": 2}
                ]
            },
            {
                "name": "CPU 유휴 구간 포함 (3개 프로세스)",
                "processes": [
                    {"pid": 1, "arrival_time": 0, "burst_time": 3, "priority": 0},
                    {"pid": 2, "arrival_time": 6, "burst_time": 20, "priority": 0},
                    {"pid": 3, "arrival_time": 8, "burst_time": 2, "priority": 0}
                ]
            }
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
