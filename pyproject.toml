[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aoc_toolkit"
version = "0.1.0"
description = "Daily puzzle solutions with a command-line tool for fetching inputs, running solutions and benchmarking them"
requires-python = ">=3.10"
dependencies = []
keywords = ["puzzles", "advent", "benchmark", "cli", "solutions"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
aoc-toolkit = "aoc_toolkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["aoc_toolkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
