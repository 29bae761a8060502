import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from aoc_toolkit import commands
from aoc_toolkit.day import Day
from aoc_toolkit.readme_benchmarks import MARKER
from aoc_toolkit.timings import Timing, Timings


@pytest.fixture(autouse=True)
def _no_year(monkeypatch):
    monkeypatch.delenv("AOC_YEAR", raising=False)


def _completed(returncode):
    return subprocess.CompletedProcess(args=["aoc"], returncode=returncode)


def _fake_popen(lines):
    def factory(command, **kwargs):
        process = MagicMock()
        process.__enter__.return_value = process
        process.__exit__.return_value = False
        process.stdout = iter(lines)
        process.stderr = iter([])
        return process

    return factory


def test_download_without_aoc_exits(capsys):
    with patch("subprocess.run", side_effect=FileNotFoundError):
        with pytest.raises(SystemExit) as info:
            commands.handle_download(Day(5))
    assert info.value.code == 1
    assert 'command "aoc" not found' in capsys.readouterr().err


def test_download_failure_exits(capsys):
    with patch("subprocess.run", return_value=_completed(1)):
        with pytest.raises(SystemExit) as info:
            commands.handle_download(Day(5))
    assert info.value.code == 1
    assert (
        "failed to call aoc-cli: aoc-cli exited with a non-zero status."
        in capsys.readouterr().err
    )


def test_download_success_reports_paths(capsys):
    with patch("subprocess.run", return_value=_completed(0)):
        commands.handle_download(Day(5))
    out = capsys.readouterr().out
    assert 'Successfully wrote input to "data/inputs/05.txt"' in out
    assert 'Successfully wrote puzzle to "data/puzzles/05.md"' in out


def test_read_failure_exits_after_calling_read_subcommand(capsys):
    with patch("subprocess.run", return_value=_completed(1)) as run:
        with pytest.raises(SystemExit) as info:
            commands.handle_read(Day(5))
    assert info.value.code == 1
    assert "failed to call aoc-cli" in capsys.readouterr().err
    args = run.call_args_list[-1].args[0]
    assert args[0] == "aoc"
    assert args[-1] == "read"
    assert args[-3:-1] == ["--day", "05"]


def test_read_without_aoc_exits():
    with patch("subprocess.run", side_effect=FileNotFoundError):
        with pytest.raises(SystemExit) as info:
            commands.handle_read(Day(5))
    assert info.value.code == 1


def test_solve_release_with_submit():
    with patch("subprocess.run", return_value=_completed(0)) as run:
        status = commands.handle_solve(Day(18), True, False, 2)
    command = run.call_args.args[0]
    assert status == 0
    assert "-O" in command
    assert "aoc_toolkit.solutions.day18" in command
    assert command[-2:] == ["--submit", "2"]


def test_solve_dhat_skips_release():
    with patch("subprocess.run", return_value=_completed(3)) as run:
        status = commands.handle_solve(Day(18), True, True, None)
    command = run.call_args.args[0]
    assert status == 3
    assert "-O" not in command
    assert "tracemalloc" in command
    assert "--submit" not in command


def test_time_stores_timings_and_readme(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "data").mkdir()
    Timings([Timing(Day(2), "1ms", "2ms", 3e6)]).store_file("data/timings.json")
    Path("README.md").write_text(f"intro\n{MARKER}{MARKER}\n", encoding="utf-8")

    commands.handle_time(Day(1), False, True)

    stored = Timings.read_from_file("data/timings.json")
    assert [timing.day for timing in stored.data] == [Day(2)]
    readme = Path("README.md").read_text(encoding="utf-8")
    assert "[Day 2](./src/bin/02.rs)" in readme
    assert readme.count(MARKER) == 2
    assert "Stored updated benchmarks." in capsys.readouterr().out


def test_time_without_readme_reports_failure(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "data").mkdir()

    commands.handle_time(Day(1), False, True)

    assert Timings.read_from_file("data/timings.json").data == []
    assert "Failed to store updated benchmarks." in capsys.readouterr().err


def test_time_without_store_writes_nothing(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "data").mkdir()
    commands.handle_time(Day(1), False, False)
    out = capsys.readouterr().out
    assert "Day 01" in out
    assert "Not solved." in out
    assert not (tmp_path / "data" / "timings.json").exists()
    assert Timings.read_from_file("data/timings.json").data == []


def test_all_runs_solutions_in_release(capsys):
    with patch(
        "subprocess.Popen", side_effect=_fake_popen(["Part 1: 7 (1.0ms)\n"])
    ) as popen:
        commands.handle_all(True)
    commands_run = [call.args[0] for call in popen.call_args_list]
    assert commands_run
    assert all("-O" in cmd and "--time" not in cmd for cmd in commands_run)
    out = capsys.readouterr().out
    assert "Day 01" in out
    assert "Day 25" in out
    assert "Not solved." in out
    assert "Part 1: 7 (1.0ms)" in out