"""Daily puzzle solutions and a toolkit for fetching, running and benchmarking them."""

__version__ = "0.1.0"