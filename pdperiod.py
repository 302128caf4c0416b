"""
impl_period navigation over pandas columns

```python
import pandas as pd

from impl_period import next_quarter
from pdperiod import with_period_column

df = pd.DataFrame({"booked": pd.to_datetime(["2021-12-15", "2021-06-10"])})
df.pipe(with_period_column, "booked", next_quarter)
#       booked booked_next_quarter
# 0 2021-12-15          2022-01-01
# 1 2021-06-10          2021-07-01
```
"""

import datetime
import functools
from typing import Callable

import pandas as pd
from pandas import DataFrame as DF, Series

from impl_period import MaybeDate, Shift


def _pipable(f: Callable):
    """decorator for functions fed to pandas.pipe"""
    @functools.wraps(f)
    def inner(df: DF, *args, **kwargs) -> DF:
        if not isinstance(df, DF):
            raise TypeError(f"{f.__name__} expects a DataFrame, got {type(df).__name__}")
        return f(df, *args, **kwargs)
    return inner


# pandas.Timestamp inherits from datetime.datetime
def _as_date(x) -> datetime.date | None:
    if pd.isna(x):
        return None
    if isinstance(x, datetime.datetime):
        return x.date()
    return x


def _apply_shift(f: Shift, x) -> MaybeDate:
    d = _as_date(x)
    return None if d is None else f(d)


def shift_series(s: Series, f: Shift, as_datetime: bool = False) -> Series:
    """
    apply a navigation function element-wise, keeping the index

    missing inputs and results outside the calendar both end up missing.
    as_datetime=True hands back datetime64 (NaT for missing) instead of
    an object column of datetime.date
    """
    out = Series(
        [_apply_shift(f, x) for x in s],
        index = s.index,
        name  = s.name,
        dtype = object,
    )
    if as_datetime:
        return pd.to_datetime(out, errors="coerce")
    return out


@_pipable
def with_period_column(df: DF, column: str, f: Shift, into: str | None = None, as_datetime: bool = False) -> DF:
    """copy of df with `column` shifted by f stored in `into` (default: <column>_<f name>)"""
    if column not in df.columns:
        raise KeyError(f"column {column} not found")
    target = into or f"{column}_{getattr(f, '__name__', 'shifted')}"
    return df.assign(**{target: shift_series(df[column], f, as_datetime=as_datetime)})
