import subprocess
from unittest import mock

import pytest

from aoc_toolkit import runner
from aoc_toolkit.day import Day


def test_format_duration_single_sample():
    assert runner.format_duration(1_500_000, 1) == " (1.5ms)"


def test_format_duration_with_samples():
    assert runner.format_duration(2_000_000_000, 10) == " (2.0s @ 10 samples)"


def test_format_duration_units_are_consistent():
    assert runner.format_duration(999, 1).endswith("ns)")
    assert runner.format_duration(1_000, 1).endswith("µs)")
    assert runner.format_duration(1_000_000, 1).endswith("ms)")
    assert "@ 7 samples" in runner.format_duration(5, 7)


def test_average_duration_of_equal_values():
    assert runner.average_duration([123, 123, 123]) == 123


def test_average_duration_within_bounds():
    values = [5, 17, 40, 3]
    assert min(values) <= runner.average_duration(values) <= max(values)


def test_run_timed_without_time_flag_runs_once():
    calls = []
    hooked = []

    def func(text):
        calls.append(text)
        return text.upper()

    result, duration, samples = runner.run_timed(func, "abc", hooked.append, ["prog"])
    assert result == "ABC"
    assert samples == 1
    assert duration >= 0
    assert calls == ["abc"]
    assert hooked == ["ABC"]


def test_run_timed_with_time_flag_benches(capsys):
    calls = []
    result, _, samples = runner.run_timed(
        lambda text: calls.append(text) or len(text), "abcd", lambda _: None, ["prog", "--time"]
    )
    assert result == 4
    assert 10 <= samples <= 10_000
    assert len(calls) == samples + 1
    assert "benching" in capsys.readouterr().out


def test_bench_clamps_iterations(capsys):
    _, slow_samples = runner.bench(lambda text: text, "x", 10**12)
    _, fast_samples = runner.bench(lambda text: text, "x", 0)
    assert slow_samples == 10
    assert fast_samples == 10_000


def test_print_result_none(capsys):
    runner.print_result(None, "Part 1", " (1.0ns)")
    out = capsys.readouterr().out
    assert out.startswith("\r")
    assert "Part 1: ✖" in out


def test_print_result_intermediate_has_no_newline(capsys):
    runner.print_result(42, "Part 2", "")
    out = capsys.readouterr().out
    assert "\n" not in out
    assert f"Part 2: {runner.ANSI_BOLD}42{runner.ANSI_RESET}" == out


def test_print_result_multiline(capsys):
    runner.print_result("a\nb", "Part 1", " (x)")
    out = capsys.readouterr().out
    assert "Part 1: ▼  (x)" in out
    assert out.endswith("a\nb\n")


def test_submit_result_without_flag():
    assert runner.submit_result(5, Day(1), 1, ["prog", "1"]) is None


def test_submit_result_other_part():
    assert runner.submit_result(5, Day(1), 1, ["prog", "--submit", "2"]) is None


def test_submit_result_bad_part_number():
    with pytest.raises(SystemExit):
        runner.submit_result(5, Day(1), 1, ["prog", "--submit", "x"])


def test_submit_result_too_few_args():
    with pytest.raises(SystemExit):
        runner.submit_result(5, Day(1), 1, ["--submit"])


def test_submit_result_missing_client():
    with mock.patch("aoc_toolkit.aoc_cli.subprocess.run", side_effect=FileNotFoundError):
        with pytest.raises(SystemExit):
            runner.submit_result(5, Day(1), 1, ["prog", "--submit", "1"])


def test_submit_result_submits():
    day = Day(6)
    with mock.patch("aoc_toolkit.aoc_cli.subprocess.run") as run:
        run.side_effect = lambda args, **kwargs: subprocess.CompletedProcess(args, 0)
        output = runner.submit_result(99, day, 2, ["prog", "--submit", "2"])
    assert output.returncode == 0
    assert run.call_args[0][0][-3:] == ["submit", "2", "99"]


def test_run_day_runs_given_parts(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    day = Day(5)
    inputs = tmp_path / "data" / "inputs"
    inputs.mkdir(parents=True)
    (inputs / f"{day}.txt").write_text("hello", encoding="utf-8")

    runner.run_day(day, str.upper, None, ["prog"])
    out = capsys.readouterr().out
    assert f"Part 1: {runner.ANSI_BOLD}HELLO{runner.ANSI_RESET}" in out
    assert "Part 2" not in out


def test_run_part_none_result(capsys):
    runner.run_part(lambda text: None, "in", Day(2), 2, ["prog", "--submit", "2"])
    out = capsys.readouterr().out
    assert "Part 2: ✖" in out
    assert "Submitting" not in out