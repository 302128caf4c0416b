"""
calendar period navigation on top of datetime.date

every function takes a date (datetime / pandas.Timestamp work too, they
inherit from date) and returns a NEW plain date: the first day of the
adjacent period (next_*, previous_*, beginning_of_*) or the last day of the
current one (end_of_*)

results that would fall outside date.min .. date.max come back as None, never
wrapped or clamped. use `unwrap` when an exception suits the caller better

# usage
```python
from datetime import date

from impl_period import next_quarter, previous_quarter, Period, shift

next_quarter(date(2021, 12, 15))       # date(2022, 1, 1)
previous_quarter(date(2021, 1, 31))    # date(2020, 10, 1)
shift(date(2021, 5, 9), Period.MONTH, -3)  # date(2021, 2, 1)
```
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
import enum
import logging
from typing import Callable, Generator

log = logging.getLogger(__name__)

# =============================================================================
# scaffolding

type MaybeDate = date | None
type Shift = Callable[[date], MaybeDate]
type Dates = Generator[date, None, None]

DEFAULT_WEEK_START = calendar.SUNDAY
MONTHS_PER_QUARTER = 3
_MIN_ORDINAL = date.min.toordinal()
_MAX_ORDINAL = date.max.toordinal()


class RangeOverflow(ValueError):
    """the target period lies outside the range datetime.date can represent"""


def unwrap(maybe: MaybeDate, what: str = "date") -> date:
    """the date itself, or RangeOverflow if the navigation fell off the calendar"""
    if maybe is None:
        raise RangeOverflow(f"{what} outside {date.min} .. {date.max}")
    return maybe


def _as_date(d: date) -> date:
    # datetime.date(...) comparisons against datetime raise TypeError
    if isinstance(d, datetime):
        return d.date()
    return d


def _ymd(year: int, month: int, day: int = 1) -> MaybeDate:
    if not date.min.year <= year <= date.max.year:
        log.debug("year %s out of range", year)
        return None
    return date(year, month, day)


def _from_ordinal(ordinal: int) -> MaybeDate:
    if not _MIN_ORDINAL <= ordinal <= _MAX_ORDINAL:
        log.debug("ordinal %s out of range", ordinal)
        return None
    return date.fromordinal(ordinal)


def _check_week_start(week_start: int):
    if not isinstance(week_start, int) or week_start not in range(7):
        raise ValueError(f"week_start must be a weekday 0..6, got {week_start!r}")

# =============================================================================
# weeks

def beginning_of_week(d: date, week_start: int = DEFAULT_WEEK_START) -> MaybeDate:
    """the latest `week_start` weekday on or before d"""
    _check_week_start(week_start)
    return _from_ordinal(d.toordinal() - (d.weekday() - week_start) % 7)


def end_of_week(d: date, week_start: int = DEFAULT_WEEK_START) -> MaybeDate:
    start = beginning_of_week(d, week_start)
    return None if start is None else _from_ordinal(start.toordinal() + 6)


def next_week(d: date, week_start: int = DEFAULT_WEEK_START) -> MaybeDate:
    start = beginning_of_week(d, week_start)
    return None if start is None else _from_ordinal(start.toordinal() + 7)


def previous_week(d: date, week_start: int = DEFAULT_WEEK_START) -> MaybeDate:
    start = beginning_of_week(d, week_start)
    return None if start is None else _from_ordinal(start.toordinal() - 7)

# =============================================================================
# months

def beginning_of_month(d: date) -> date:
    return date(d.year, d.month, 1)


def end_of_month(d: date) -> date:
    _, last_day = calendar.monthrange(d.year, d.month)
    return date(d.year, d.month, last_day)


def next_month(d: date) -> MaybeDate:
    if d.month == 12:
        return next_year(d)
    return date(d.year, d.month + 1, 1)


def previous_month(d: date) -> MaybeDate:
    if d.month == 1:
        return _ymd(d.year - 1, 12)
    return date(d.year, d.month - 1, 1)

# =============================================================================
# quarters: Jan-Mar, Apr-Jun, Jul-Sep, Oct-Dec

def _quarter_index(d: date) -> int:
    return (d.month - 1) // MONTHS_PER_QUARTER


def quarter(d: date) -> int:
    """1..4"""
    return 1 + _quarter_index(d)


def beginning_of_quarter(d: date) -> date:
    return date(d.year, 1 + MONTHS_PER_QUARTER * _quarter_index(d), 1)


def end_of_quarter(d: date) -> date:
    last_month = MONTHS_PER_QUARTER * (_quarter_index(d) + 1)
    return end_of_month(date(d.year, last_month, 1))


def next_quarter(d: date) -> MaybeDate:
    """first day of the following quarter, Q4 carries into the next year"""
    q = _quarter_index(d)
    if q == 3:
        return _ymd(d.year + 1, 1)
    return date(d.year, (q + 1) * MONTHS_PER_QUARTER + 1, 1)


def previous_quarter(d: date) -> MaybeDate:
    """first day of the preceding quarter, Q1 borrows from the previous year"""
    q = _quarter_index(d)
    if q == 0:
        return _ymd(d.year - 1, 10)
    return date(d.year, (q - 1) * MONTHS_PER_QUARTER + 1, 1)

# =============================================================================
# years

def beginning_of_year(d: date) -> date:
    return date(d.year, 1, 1)


def end_of_year(d: date) -> date:
    return date(d.year, 12, 31)


def next_year(d: date) -> MaybeDate:
    return _ymd(d.year + 1, 1)


def previous_year(d: date) -> MaybeDate:
    return _ymd(d.year - 1, 1)

# =============================================================================
# the same rules behind a single period-parametrised interface

class Period(enum.Enum):
    WEEK = enum.auto()
    MONTH = enum.auto()
    QUARTER = enum.auto()
    YEAR = enum.auto()

    def _apply(self, table: dict, d: date, week_start: int) -> MaybeDate:
        f = table[self]
        if self is Period.WEEK:
            return f(d, week_start)
        return f(d)

    def beginning(self, d: date, week_start: int = DEFAULT_WEEK_START) -> MaybeDate:
        return self._apply(_BEGINNING, d, week_start)

    def end(self, d: date, week_start: int = DEFAULT_WEEK_START) -> MaybeDate:
        return self._apply(_END, d, week_start)

    def next(self, d: date, week_start: int = DEFAULT_WEEK_START) -> MaybeDate:
        return self._apply(_NEXT, d, week_start)

    def previous(self, d: date, week_start: int = DEFAULT_WEEK_START) -> MaybeDate:
        return self._apply(_PREVIOUS, d, week_start)


_BEGINNING = {
    Period.WEEK    : beginning_of_week,
    Period.MONTH   : beginning_of_month,
    Period.QUARTER : beginning_of_quarter,
    Period.YEAR    : beginning_of_year,
}
_END = {
    Period.WEEK    : end_of_week,
    Period.MONTH   : end_of_month,
    Period.QUARTER : end_of_quarter,
    Period.YEAR    : end_of_year,
}
_NEXT = {
    Period.WEEK    : next_week,
    Period.MONTH   : next_month,
    Period.QUARTER : next_quarter,
    Period.YEAR    : next_year,
}
_PREVIOUS = {
    Period.WEEK    : previous_week,
    Period.MONTH   : previous_month,
    Period.QUARTER : previous_quarter,
    Period.YEAR    : previous_year,
}
_MONTHS_IN = {
    Period.MONTH   : 1,
    Period.QUARTER : MONTHS_PER_QUARTER,
    Period.YEAR    : 12,
}


def shift(d: date, period: Period, steps: int, week_start: int = DEFAULT_WEEK_START) -> MaybeDate:
    """
    first day of the period `steps` periods away from the one holding d

    steps > 0 moves forward, steps < 0 backward, 0 gives the current period's
    start. shift(d, p, 1) == p.next(d) and shift(d, p, -1) == p.previous(d)
    """
    start = period.beginning(d, week_start)
    if start is None:
        return None
    if period is Period.WEEK:
        return _from_ordinal(start.toordinal() + 7 * steps)
    # months counted from year 0 so that carry/borrow is plain divmod
    index = start.year * 12 + start.month - 1 + steps * _MONTHS_IN[period]
    year, month0 = divmod(index, 12)
    return _ymd(year, month0 + 1)


def period_starts(start: date, stop: date, period: Period, week_start: int = DEFAULT_WEEK_START) -> Dates:
    """
    lazily yield consecutive period starts, from the period containing `start`
    up to (excluding) `stop`; ends quietly at the edge of the calendar
    """
    stop = _as_date(stop)
    current = period.beginning(start, week_start)
    while current is not None and current < stop:
        yield current
        current = period.next(current, week_start)
