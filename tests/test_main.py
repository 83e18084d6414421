import os

import main
from core.process import Process


def test_format_metrics(sample_processes):
    result = main.run_single_algorithm('FCFS', sample_processes, verbose=False)
    text = main.format_metrics('FCFS', result.metrics)

    assert text.splitlines() == [
        "Results for FCFS:",
        "Average Waiting Time: 5.75 ms",
        "Average Turnaround Time: 11.25 ms",
        "CPU Utilization: 100.00%",
        "Throughput: 0.18 processes/ms",
    ]


def test_menu_covers_all_algorithms():
    assert list(main.MENU.values()) == ['FCFS', 'SJF', 'RR', 'Priority', 'SRTF', 'MLFQ']


def test_run_single_algorithm_reports_errors(capsys):
    result = main.run_single_algorithm('FCFS', [Process(1, 0, 1), Process(1, 0, 1)], verbose=False)
    assert result is None
    assert "[오류]" in capsys.readouterr().out


def test_get_user_choice_retries(monkeypatch, capsys):
    answers = iter(['9', 'x', '3'])
    monkeypatch.setattr('builtins.input', lambda _: next(answers))

    assert main.get_user_choice() == '3'
    assert capsys.readouterr().out.count("잘못된 선택") == 2


def test_save_results(tmp_path, sample_processes):
    results = main.run_all_algorithms(sample_processes)
    output_dir = str(tmp_path / "out")

    main.save_results(results, output_dir)

    files = set(os.listdir(output_dir))
    assert {'comparison.png', 'results.txt', 'gantt_FCFS.png', 'gantt_MLFQ.png'} <= files
    with open(os.path.join(output_dir, 'results.txt'), encoding='utf-8') as f:
        assert "Average Waiting Time: 5.75 ms" in f.read()


def test_run_single_algorithm_prints_process_details(capsys, sample_processes):
    main.run_single_algorithm('SJF', sample_processes, verbose=False)

    out = capsys.readouterr().out
    assert "Results for SJF:" in out
    assert "프로세스 상세 - Shortest Job First" in out
