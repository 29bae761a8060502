# aoc_toolkit

Solutions to the puzzles of days 15 to 18 of a daily puzzle calendar, and a
command-line tool for fetching puzzle inputs, running solutions, benchmarking
them and keeping a benchmark table in your `README.md` up to date.

## Installation

```
pip install .
```

With the test suite:

```
pip install ".[test]"
pytest
```

## Data layout

Everything works relative to the current directory:

- `data/inputs/<DD>.txt`: puzzle inputs
- `data/examples/<DD>.txt` and `data/examples/<DD>-<part>.txt`: example inputs
- `data/puzzles/<DD>.md`: puzzle descriptions
- `data/timings.json`: stored benchmark results

Days are numbers from 1 to 25 and are always written as two digits, `01` to `25`.

## Command line

```
aoc-toolkit <command> [options]
```

| Command | What it does |
| --- | --- |
| `download <day>` | Fetch the input and description for a day into `data/inputs/` and `data/puzzles/` with the `aoc` client |
| `read <day>` | Show a day's puzzle description with the `aoc` client |
| `solve <day> [--release] [--dhat] [--submit <part>]` | Run one day's solution in a child Python process |
| `all [--release]` | Run every day in turn; days without a solution print `Not solved.` |
| `time [<day>] [--all] [--store]` | Benchmark solutions and print the total time |

`solve` options: `--release` runs Python with `-O`; `--dhat` runs it with
`-X tracemalloc` instead; `--submit <part>` submits that part's answer through
the `aoc` client.

`time` options: with a day, only that day is benchmarked; without one, only
days not yet fully benchmarked in `data/timings.json` are run, unless `--all`
is given. `--store` merges the new results into `data/timings.json` and
rewrites the benchmark table in `README.md`.

An unknown or missing command exits with status 1; unrecognised extra
arguments are reported as a warning.

`download`, `read` and `--submit` need the `aoc` client installed and on your
`PATH`. Set `AOC_YEAR` to choose the puzzle year.

### Running one solution directly

```
python -m aoc_toolkit.solutions.day15
python -m aoc_toolkit.solutions.day15 --time
python -m aoc_toolkit.solutions.day15 --submit 1
```

This reads `data/inputs/15.txt` and prints both parts. With `--time` each part
is repeated for about a second (between 10 and 10000 runs) and the mean time is
shown.

### Benchmark table

`time --store` replaces everything from the first to the last of these two
marker lines in `README.md`, markers included, with a fresh table:

```
<!--- benchmarking table --->
<!--- benchmarking table --->
```

Having more than two markers is an error.

## Solutions

| Module | Puzzle |
| --- | --- |
| `aoc_toolkit.solutions.day15` | A robot pushing boxes in a warehouse, normal and double width |
| `aoc_toolkit.solutions.day16` | Cheapest path through a maze, and the tiles on the best paths |
| `aoc_toolkit.solutions.day17` | A three-bit computer, and the register value that makes it print itself |
| `aoc_toolkit.solutions.day18` | Shortest path through falling memory bytes, and the byte that blocks it |

Each module has `part_one` and `part_two`, which take the puzzle input as a
string, and `main`. Day 18 uses the example's fixed size: a 7 by 7 grid with
12 fallen bytes for part one. Day 17's `part_two` assumes the specific program
in the puzzle input.

## Using the library

```python
from aoc_toolkit.day import Day
from aoc_toolkit.files import read_file
from aoc_toolkit.solutions import day15

day = Day.parse("15")
print(day15.part_one(read_file("inputs", day)))
```

Other useful pieces: `aoc_toolkit.day.all_days()`, `aoc_toolkit.timings.Timings`
(JSON storage, `merge`, `total_millis`, `is_day_complete`),
`aoc_toolkit.readme_benchmarks.update_content` and
`aoc_toolkit.run_multi.parse_exec_time`.

## What it does not do

There is no command that creates the files for a new day: solution modules and
their input and example files have to be added by hand. There is no `today`
shortcut either, although `Day.today()` returns the current December day.