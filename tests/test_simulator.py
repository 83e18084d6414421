import pytest

from core.events import EventType
from core.exceptions import InvalidProcessError, UnknownPolicyError
from core.process import Process, ProcessState
from core.scheduler_base import IDLE_PID
from core.simulator import Simulator, run_simulation
from schedulers import ALGORITHM_MAP


def spans(result):
    return [(e.pid, e.start_time, e.end_time) for e in result.gantt_chart]


def by_pid(result):
    return {p.pid: p for p in result.processes}


def test_fcfs_end_to_end(sample_processes):
    result = Simulator('FCFS', sample_processes).run()
    procs = by_pid(result)

    assert [procs[pid].finish_time for pid in (1, 2, 3, 4)] == [5, 8, 16, 22]
    assert [procs[pid].turnaround_time for pid in (1, 2, 3, 4)] == [5, 7, 14, 19]
    assert [procs[pid].waiting_time for pid in (1, 2, 3, 4)] == [0, 4, 6, 13]

    metrics = result.metrics
    assert metrics.average_waiting_time == pytest.approx(5.75)
    assert metrics.average_turnaround_time == pytest.approx(11.25)
    assert metrics.total_time == 22
    assert metrics.cpu_utilization == pytest.approx(100.0)
    assert metrics.throughput == pytest.approx(4 / 22)
    assert result.context_switches == 3


def test_run_simulation_returns_metrics(sample_processes):
    metrics = run_simulation('FCFS', sample_processes)
    assert metrics.average_waiting_time == pytest.approx(5.75)
    assert metrics.process_count == 4


def test_input_processes_not_mutated(sample_processes):
    run_simulation('RR', sample_processes)
    assert all(p.remaining_time == p.burst_time for p in sample_processes)
    assert all(p.finish_time is None for p in sample_processes)


@pytest.mark.parametrize("algorithm", list(ALGORITHM_MAP))
def test_invariants_hold_for_every_policy(algorithm, mixed_processes):
    simulator = Simulator(algorithm, mixed_processes)
    result = simulator.run()

    assert simulator.completed_count == len(mixed_processes)
    assert sorted(p.pid for p in result.processes) == [1, 2, 3, 4, 5, 6]
    for p in result.processes:
        assert p.waiting_time + p.burst_time == p.turnaround_time
        assert p.waiting_time >= 0
        assert p.turnaround_time >= 0


@pytest.mark.parametrize("algorithm", list(ALGORITHM_MAP))
def test_no_process_completes_twice(algorithm, sample_processes):
    simulator = Simulator(algorithm, sample_processes)
    result = simulator.run()

    completions = simulator.events.filter(EventType.COMPLETION)
    assert sorted(e.pid for e in completions) == [1, 2, 3, 4]
    assert result.metrics.total_time == 22
    # 완료 후 step()은 아무것도 하지 않는다
    assert simulator.step() is True
    assert simulator.current_time == 22


@pytest.mark.parametrize("algorithm", list(ALGORITHM_MAP))
def test_gantt_chart_is_contiguous(algorithm, mixed_processes):
    result = Simulator(algorithm, mixed_processes).run()
    chart = result.gantt_chart

    assert chart[0].start_time == 0
    assert chart[-1].end_time == result.metrics.total_time
    for prev, cur in zip(chart, chart[1:]):
        assert prev.end_time == cur.start_time
    busy = sum(e.duration for e in chart if e.pid != IDLE_PID)
    assert busy == sum(p.burst_time for p in mixed_processes)


def test_fcfs_completion_order_follows_arrival(mixed_processes):
    result = Simulator('FCFS', mixed_processes).run()
    arrivals = [p.arrival_time for p in result.processes]
    assert arrivals == sorted(arrivals)


def test_sjf_sample():
    procs = [Process(1, 0, 5), Process(2, 1, 3), Process(3, 2, 8), Process(4, 3, 6)]
    result = Simulator('SJF', procs).run()

    assert spans(result) == [(1, 0, 5), (2, 5, 8), (4, 8, 14), (3, 14, 22)]
    assert result.metrics.average_waiting_time == pytest.approx(5.25)


def test_priority_with_idle_gap(mixed_processes):
    result = Simulator('Priority', mixed_processes).run()

    assert spans(result) == [
        (1, 0, 10), (2, 10, 11), (5, 11, 16), (3, 16, 18), (4, 18, 19),
        (IDLE_PID, 19, 30), (6, 30, 34),
    ]
    assert result.metrics.total_time == 34
    assert result.metrics.cpu_utilization == pytest.approx(23 / 34 * 100)
    assert len([line for line in result.event_log if "CPU idle" in line]) == 1


def test_round_robin_interleaving():
    result = Simulator('RR', [Process(1, 0, 6), Process(2, 0, 6)]).run()
    assert spans(result) == [(1, 0, 4), (2, 4, 8), (1, 8, 10), (2, 10, 12)]


@pytest.mark.parametrize("burst", [1, 3, 4])
def test_round_robin_short_job_alone_not_preempted(burst):
    simulator = Simulator('RR', [Process(1, 0, burst)])
    result = simulator.run()

    assert simulator.events.filter(EventType.QUANTUM_EXPIRED) == []
    assert result.processes[0].finish_time == burst


def test_round_robin_custom_time_slice():
    result = Simulator('RR', [Process(1, 0, 3), Process(2, 0, 3)], time_slice=1).run()
    assert [pid for pid, _, _ in spans(result)] == [1, 2, 1, 2, 1, 2]


def test_srtf_preempts_on_next_tick():
    procs = [Process(1, 0, 8), Process(2, 1, 4), Process(3, 2, 9), Process(4, 3, 5)]
    simulator = Simulator('SRTF', procs)
    result = simulator.run()

    assert spans(result) == [(1, 0, 1), (2, 1, 5), (4, 5, 10), (1, 10, 17), (3, 17, 26)]
    assert result.metrics.average_waiting_time == pytest.approx(6.5)
    preemptions = simulator.events.filter(EventType.PREEMPTION)
    assert [(e.time, e.pid) for e in preemptions] == [(1, 1)]


def test_mlfq_demotion_on_next_selection():
    simulator = Simulator('MLFQ', [Process(1, 0, 10)])
    for _ in range(4):
        simulator.step()

    running = simulator.scheduler.running_process
    assert running.queue_level == 0
    assert running.time_in_cpu == 4

    simulator.step()
    assert running.queue_level == 1
    assert running.time_in_cpu == 1


def test_mlfq_demotion_capped_at_lowest_level():
    simulator = Simulator('MLFQ', [Process(1, 0, 30)])
    result = simulator.run()

    demotions = simulator.events.filter(EventType.DEMOTION)
    assert [e.time for e in demotions] == [4, 12, 28]
    assert result.processes[0].queue_level == 2
    assert result.processes[0].finish_time == 30


def test_mlfq_new_arrival_preempts_demoted_process():
    result = Simulator('MLFQ', [Process(1, 0, 10), Process(2, 5, 2)]).run()
    procs = by_pid(result)

    assert spans(result) == [(1, 0, 5), (2, 5, 7), (1, 7, 12)]
    assert procs[2].waiting_time == 0
    assert procs[1].finish_time == 12


def test_snapshot_tracks_progress(sample_processes):
    simulator = Simulator('FCFS', sample_processes)
    simulator.step()
    simulator.step()

    snapshot = simulator.snapshot()
    assert snapshot['time'] == 2
    assert snapshot['running'].pid == 1
    assert [p.pid for p in snapshot['ready_queue']] == [2]
    assert snapshot['latest_gantt_entry'].end_time == 2


def test_event_log_format(sample_processes):
    result = Simulator('FCFS', sample_processes).run()
    assert result.event_log[0] == "[T=  0] P1 arrived → Ready Queue"
    assert "[T=  5] P1 → Terminated (WT=0, TT=5)" in result.event_log


def test_verbose_prints_event_log(sample_processes, capsys):
    Simulator('FCFS', sample_processes).run(verbose=True)
    assert "P4 → Terminated" in capsys.readouterr().out


def test_result_to_dict(sample_processes):
    data = Simulator('FCFS', sample_processes).run().to_dict()
    assert data['algorithm'] == 'FCFS'
    assert data['statistics']['average_waiting_time'] == pytest.approx(5.75)
    assert data['statistics']['context_switches'] == 3
    assert data['gantt_chart'][0] == {'pid': 1, 'start_time': 0, 'end_time': 5, 'state': 'Running'}
    assert len(data['processes']) == 4


def test_rerun_completed_processes(sample_processes):
    done = Simulator('FCFS', sample_processes).run().processes

    metrics = run_simulation('FCFS', done)

    assert metrics.total_time == 22
    assert metrics.average_waiting_time == pytest.approx(5.75)
    assert all(p.state is ProcessState.TERMINATED for p in done)


@pytest.mark.parametrize("name", ['fcfs', 'Round Robin', 'EDF'])
def test_unknown_policy(name, sample_processes):
    with pytest.raises(UnknownPolicyError):
        run_simulation(name, sample_processes)


def test_empty_process_list():
    with pytest.raises(InvalidProcessError):
        run_simulation('FCFS', [])


def test_duplicate_pid_rejected():
    with pytest.raises(InvalidProcessError):
        run_simulation('FCFS', [Process(1, 0, 2), Process(1, 3, 2)])


def test_zero_burst_rejected():
    p = Process(1, 0, 2)
    p.burst_time = 0
    with pytest.raises(InvalidProcessError):
        run_simulation('FCFS', [p])
