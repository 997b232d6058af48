"""
Wide-table assembler for era5-merge.

Merges N single-variable tables into one wide table:

    date | lon | lat | <var 1> | <var 2> | ... | <var N>

The base columns (date, lon, lat) are taken from the first table. Every
other table contributes only its value column.

Two alignment strategies:

- ``positional`` (default): row i of every table is assumed to describe
  the same (date, lon, lat) as row i of the base table. The tables' own
  key columns are never compared. Only the row counts are checked, and a
  mismatch is fatal; nothing is truncated or padded.
- ``key``: tables are joined on (date, lon, lat). Every table must carry
  exactly the base table's key set with no duplicates. The base row order
  is kept. This is stricter than the positional merge and is opt-in.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Literal

import pandas as pd

from era5_merge.exceptions import AlignmentError, ColumnCollisionError, NoInputError
from era5_merge.parsers.base import VariableTable
from era5_merge.variables import KEY_COLUMNS

logger = logging.getLogger(__name__)


def check_unique_names(tables: list[VariableTable]) -> None:
    """Fail if two tables share a variable name.

    Raises:
        ColumnCollisionError: Listing every clashing name and its files.
    """
    sources: dict[str, list[str]] = defaultdict(list)
    for table in tables:
        sources[table.name].append(table.source_path.name)

    clashes = {name: files for name, files in sources.items() if len(files) > 1}
    if clashes:
        details = "\n".join(f"  {name!r}: {files}" for name, files in clashes.items())
        raise ColumnCollisionError(
            f"Several input files map to the same variable name:\n{details}"
        )


def _assemble_positional(tables: list[VariableTable]) -> pd.DataFrame:
    base = tables[0]
    n_rows = len(base)

    for table in tables[1:]:
        if len(table) != n_rows:
            raise AlignmentError(
                f"Row count mismatch: {table.source_path.name} ({table.name}) has "
                f"{len(table)} rows, base table {base.source_path.name} has {n_rows}. "
                "Positional merge requires identical row counts."
            )

    columns = {col: base.df[col].to_numpy() for col in KEY_COLUMNS}
    for table in tables:
        columns[table.name] = table.df[table.name].to_numpy()
    return pd.DataFrame(columns)


def _assemble_by_key(tables: list[VariableTable]) -> pd.DataFrame:
    base = tables[0]
    base_index = pd.MultiIndex.from_frame(base.df[KEY_COLUMNS])
    if base_index.has_duplicates:
        raise AlignmentError(
            f"Base table {base.source_path.name} has duplicate (date, lon, lat) keys; "
            "key merge requires unique keys."
        )

    wide = base.df[KEY_COLUMNS].reset_index(drop=True)
    for table in tables:
        indexed = table.df.set_index(KEY_COLUMNS)[table.name]
        if indexed.index.has_duplicates:
            raise AlignmentError(
                f"{table.source_path.name} has duplicate (date, lon, lat) keys"
            )
        if len(indexed) != len(base_index) or not indexed.index.isin(base_index).all():
            raise AlignmentError(
                f"{table.source_path.name} does not cover the same (date, lon, lat) "
                f"keys as base table {base.source_path.name}"
            )
        wide[table.name] = indexed.reindex(base_index).to_numpy()
    return wide


def assemble_wide_table(
    tables: list[VariableTable],
    strategy: Literal["positional", "key"] = "positional",
) -> pd.DataFrame:
    """Merge variable tables into one wide table.

    Args:
        tables: Successfully parsed tables, in file-processing order. The
            first one is the base table.
        strategy: ``"positional"`` or ``"key"`` (see module docstring).

    Returns:
        DataFrame with ``3 + len(tables)`` columns and the base table's
        row count.

    Raises:
        NoInputError: If *tables* is empty.
        ColumnCollisionError: If two tables share a variable name.
        AlignmentError: If the tables cannot be aligned.
    """
    if not tables:
        raise NoInputError(
            "No variable tables to merge: no input file was parsed successfully."
        )
    check_unique_names(tables)

    logger.info(
        "Merging %d variable table(s) (%s), base table: %s",
        len(tables),
        strategy,
        tables[0].source_path.name,
    )
    if strategy == "positional":
        wide = _assemble_positional(tables)
    elif strategy == "key":
        wide = _assemble_by_key(tables)
    else:
        raise ValueError(f"Unknown merge strategy: {strategy!r}")

    logger.info("Wide table: %d rows x %d cols", len(wide), len(wide.columns))
    return wide
