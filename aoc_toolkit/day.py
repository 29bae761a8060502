"""Days of advent: integers from 1 to 25 that display as two digits."""

from __future__ import annotations

import functools
import re
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

FIRST_DAY = 1
LAST_DAY = 25

SERVER_UTC_OFFSET_HOURS = -5

_DAY_PATTERN = re.compile(r"\+?[0-9]+")


class DayParseError(ValueError):
    """Raised when a value is not a valid day of advent."""

    def __init__(self, message: str = "expecting a day number between 1 and 25") -> None:
        super().__init__(message)


@functools.total_ordering
class Day:
    """A valid day of advent, an integer from 1 to 25."""

    __slots__ = ("_value",)

    def __init__(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DayParseError()
        if not FIRST_DAY <= value <= LAST_DAY:
            raise DayParseError()
        self._value = value

    @property
    def value(self) -> int:
        """The day number."""
        return self._value

    @classmethod
    def parse(cls, text: str) -> Day:
        """Parse a day number such as ``"8"`` or ``"08"``."""
        if not isinstance(text, str) or not _DAY_PATTERN.fullmatch(text):
            raise DayParseError()
        return cls(int(text))

    @classmethod
    def today(cls) -> Day | None:
        """The current day if it is between the 1st and 25th of December, else None."""
        now = datetime.now(timezone(timedelta(hours=SERVER_UTC_OFFSET_HOURS)))
        if now.month == 12 and now.day <= LAST_DAY:
            return cls(now.day)
        return None

    def __int__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return f"{self._value:02}"

    def __repr__(self) -> str:
        return f"Day({self._value})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Day):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Day):
            return self._value < other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


def all_days() -> Iterator[Day]:
    """Yield every day of advent from the 1st to the 25th."""
    for number in range(FIRST_DAY, LAST_DAY + 1):
        yield Day(number)