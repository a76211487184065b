"""Load daily precipitation series from CSV files."""

from pathlib import Path
from typing import IO, List, Union

import pandas as pd
from loguru import logger

from dryspell.core.exceptions import DataSourceError
from dryspell.core.models import DailyRecord


def series_from_frame(
    df: pd.DataFrame,
    date_column: str = "date",
    value_column: str = "precipitation_mm",
) -> List[DailyRecord]:
    """Convert a frame with a date and a precipitation column to DailyRecords.

    Rows are sorted by date; duplicate dates are rejected. Empty cells become
    missing observations.
    """
    for col in (date_column, value_column):
        if col not in df.columns:
            raise DataSourceError(f"column {col!r} not found; have {list(df.columns)}")

    frame = pd.DataFrame({
        "date": pd.to_datetime(df[date_column], errors="coerce"),
        "value": pd.to_numeric(df[value_column], errors="coerce"),
    })

    bad_dates = frame["date"].isna().sum()
    if bad_dates:
        raise DataSourceError(f"{bad_dates} rows have unparseable dates")

    frame = frame.sort_values("date", kind="stable")
    dupes = frame["date"].duplicated()
    if dupes.any():
        first = frame.loc[dupes, "date"].iloc[0].date()
        raise DataSourceError(f"duplicate date in series: {first}")

    return [
        DailyRecord(date=d.date(), precipitation_mm=None if pd.isna(v) else float(v))
        for d, v in zip(frame["date"], frame["value"])
    ]


def load_daily_csv(
    source: Union[str, Path, IO],
    date_column: str = "date",
    value_column: str = "precipitation_mm",
) -> List[DailyRecord]:
    """Read a CSV with one row per day from a path or an open file (e.g. an upload)."""
    if hasattr(source, "read"):
        name = getattr(source, "name", "uploaded file")
    else:
        source = Path(source)
        name = source.name

    try:
        df = pd.read_csv(source)
    except (OSError, ValueError) as e:
        # ParserError, EmptyDataError and UnicodeDecodeError are ValueErrors
        raise DataSourceError(f"cannot read {name}: {e}") from e

    records = series_from_frame(df, date_column, value_column)
    logger.info(f"Loaded {len(records)} days from {name}")
    return records
