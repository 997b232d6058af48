"""
Date normalizer for era5-merge.

The parser emits the timestamp as a ``DD-MM-YYYY`` string. The master
table carries it as three integer columns instead: ``day``, ``month``,
``year``.
"""

from __future__ import annotations

import pandas as pd

from era5_merge.exceptions import TransformError


def split_date(
    df: pd.DataFrame,
    column: str = "date",
    date_format: str = "%d-%m-%Y",
) -> pd.DataFrame:
    """Replace *column* with integer ``day``, ``month`` and ``year`` columns.

    The new columns are appended at the end; the final order is set later
    by the column reorderer.

    Raises:
        TransformError: If the column is absent or any value does not
            match *date_format* exactly.
    """
    if column not in df.columns:
        raise TransformError(f"Date column {column!r} not found")

    try:
        parsed = pd.to_datetime(df[column], format=date_format, errors="raise")
    except (ValueError, TypeError) as exc:
        raise TransformError(
            f"Cannot parse {column!r} with format {date_format!r}: {exc}"
        ) from exc
    if parsed.isna().any():
        raise TransformError(f"{int(parsed.isna().sum())} missing value(s) in {column!r}")

    df = df.drop(columns=[column])
    df["day"] = parsed.dt.day.astype("int64")
    df["month"] = parsed.dt.month.astype("int64")
    df["year"] = parsed.dt.year.astype("int64")
    return df
