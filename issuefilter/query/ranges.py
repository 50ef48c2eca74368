# issuefilter/query/ranges.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class _Range[T: (int, date)](ABC):
    """Interval with optional bounds; at least one bound must be present."""

    start: T | None = None
    end: T | None = None
    start_inclusive: bool = True
    end_inclusive: bool = True

    def __post_init__(self) -> None:
        if self.start is None and self.end is None:
            raise ValueError("A range needs at least one bound")
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError(f"Range start {self.start} is after its end {self.end}")

    def encloses(self, value: T) -> bool:
        if self.start is not None:
            if value < self.start or (value == self.start and not self.start_inclusive):
                return False
        if self.end is not None:
            if value > self.end or (value == self.end and not self.end_inclusive):
                return False
        return True

    @abstractmethod
    def _step(self, value: T, amount: int) -> T:
        """``value`` moved ``amount`` units along the range's type."""
        ...

    def _format(self, value: T) -> str:
        return str(value)

    def __str__(self) -> str:
        s, e = self.start, self.end
        if s is not None and e is not None:
            # The grammar only has inclusive closed ranges; both types are discrete.
            if not self.start_inclusive:
                s = self._step(s, 1)
            if not self.end_inclusive:
                e = self._step(e, -1)
            return f"{self._format(s)}..{self._format(e)}"
        elif s is not None:
            return f"{'>=' if self.start_inclusive else '>'}{self._format(s)}"
        else:
            return f"{'<=' if self.end_inclusive else '<'}{self._format(e)}"


@dataclass(frozen=True)
class NumberRange(_Range[int]):
    """Integer range, e.g. ``1..5``, ``<3`` or ``>=10``."""

    def _step(self, value: int, amount: int) -> int:
        return value + amount


@dataclass(frozen=True)
class DateRange(_Range[date]):
    """Calendar date range, e.g. ``2015-01-01..2015-02-01`` or ``>2015-03-10``."""

    def encloses(self, value: date) -> bool:
        # datetime is a date subclass but does not compare with plain dates
        if isinstance(value, datetime):
            value = value.date()
        return super().encloses(value)

    def _step(self, value: date, amount: int) -> date:
        return value + timedelta(days=amount)

    def _format(self, value: date) -> str:
        return value.isoformat()
