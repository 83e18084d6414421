from core.process import Process
from core.simulator import Simulator
from schedulers import ALGORITHM_MAP
from utils.visualization import Visualizer


def run_every_policy(processes):
    return [Simulator(name, processes).run() for name in ALGORITHM_MAP]


def test_gantt_chart_saved(tmp_path, sample_processes):
    result = Simulator('RR', sample_processes).run()
    path = tmp_path / "gantt.png"

    Visualizer().draw_gantt_chart(result.gantt_chart, result.name, save_path=str(path), show=False)

    assert path.exists() and path.stat().st_size > 0


def test_gantt_chart_with_idle(tmp_path):
    result = Simulator('FCFS', [Process(1, 0, 2), Process(2, 5, 2)]).run()
    path = tmp_path / "idle.png"

    Visualizer().draw_gantt_chart(result.gantt_chart, result.name, save_path=str(path), show=False)

    assert path.exists()


def test_empty_gantt_chart(capsys):
    Visualizer().draw_gantt_chart([], "FCFS", show=False)
    assert "FCFS" in capsys.readouterr().out


def test_compare_algorithms(tmp_path, sample_processes):
    path = tmp_path / "comparison.png"
    Visualizer().compare_algorithms(run_every_policy(sample_processes), save_path=str(path), show=False)
    assert path.exists()


def test_print_tables(capsys, sample_processes):
    results = run_every_policy(sample_processes)
    visualizer = Visualizer()
    visualizer.print_statistics_table(results)
    visualizer.print_process_details(results[0])

    out = capsys.readouterr().out
    for name in ('FCFS', 'SJF', 'RR', 'Priority', 'SRTF', 'MLFQ'):
        assert name in out
    assert "5.75" in out
