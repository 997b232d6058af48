"""
Column reorderer for era5-merge.

Arranges the master table into its fixed column sequence:
lon, lat, day, month, year, then the known variables in catalogue order
(see ``variables.MASTER_COLUMN_ORDER``).

A listed column that is missing means the set of input files does not
match the expected variable set, so it is fatal rather than silently
producing a partial table.
"""

from __future__ import annotations

import logging

import pandas as pd

from era5_merge.exceptions import MissingColumnError
from era5_merge.variables import MASTER_COLUMN_ORDER

logger = logging.getLogger(__name__)


def reorder_columns(
    df: pd.DataFrame,
    order: list[str] | None = None,
    keep_extra: bool = False,
) -> pd.DataFrame:
    """Return *df* with exactly the columns in *order*, in that order.

    Args:
        df: Transformed table.
        order: Target column sequence. Defaults to ``MASTER_COLUMN_ORDER``.
        keep_extra: If ``True``, columns not in *order* are appended after
            it (in their current order) instead of being dropped.

    Raises:
        MissingColumnError: If any column in *order* is absent from *df*.
    """
    if order is None:
        order = MASTER_COLUMN_ORDER

    missing = [c for c in order if c not in df.columns]
    if missing:
        raise MissingColumnError(
            f"{len(missing)} required column(s) missing from the merged table: "
            f"{missing}. Check that an input file exists (and parsed) for each."
        )

    listed = set(order)
    extra = [c for c in df.columns if c not in listed]
    if extra:
        if keep_extra:
            logger.info("Keeping %d extra column(s) after the fixed order: %s", len(extra), extra)
        else:
            logger.warning("Dropping %d column(s) not in the fixed order: %s", len(extra), extra)

    columns = list(order) + (extra if keep_extra else [])
    return df.loc[:, columns].copy()
