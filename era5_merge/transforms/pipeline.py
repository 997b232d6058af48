"""
Transform pipeline orchestrator for era5-merge.

Turns the wide table into the master table. The order is fixed:

1. **split_date**: ``date`` -> ``day``, ``month``, ``year``.
2. **convert_units**: K -> degC, m/day -> mm/day for known variables.
3. **recode_categories**: soil type code -> label.
4. **reorder_columns**: fixed final column order.

Returns a ``TransformResult`` with the master table and a record of which
columns each step touched (logged by the driver).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pandas as pd

from era5_merge.config import PipelineConfig
from era5_merge.transforms.categories import CATEGORY_RECODES, CategoricalRecode, recode_categories
from era5_merge.transforms.dates import split_date
from era5_merge.transforms.reorder import reorder_columns
from era5_merge.transforms.units import UNIT_CONVERSIONS, LinearConversion, convert_units
from era5_merge.variables import MASTER_COLUMN_ORDER

logger = logging.getLogger(__name__)


@dataclass
class TransformResult:
    """Output of the transform pipeline.

    Attributes:
        df: The master table.
        converted: Columns that had a unit conversion applied.
        recoded: Columns that were recoded to labels.
    """

    df: pd.DataFrame
    converted: dict[str, LinearConversion] = field(default_factory=dict)
    recoded: list[str] = field(default_factory=list)


class TransformPipeline:
    """Orchestrates the wide -> master table transforms.

    The pipeline is **stateless**: each ``run()`` works on a copy of the
    given frame. The transform tables and column order default to the
    module-level registries and can be swapped for testing or for a
    different variable set.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        conversions: dict[str, LinearConversion] | None = None,
        recodes: dict[str, CategoricalRecode] | None = None,
        column_order: list[str] | None = None,
    ) -> None:
        self.config = config or PipelineConfig()
        self.conversions = UNIT_CONVERSIONS if conversions is None else conversions
        self.recodes = CATEGORY_RECODES if recodes is None else recodes
        self.column_order = MASTER_COLUMN_ORDER if column_order is None else column_order

    def run(self, wide: pd.DataFrame) -> TransformResult:
        """Run all transforms on the wide table."""
        logger.info("Step 1/4: Splitting date into day/month/year")
        df = split_date(wide, column="date", date_format=self.config.parser.date_format)

        logger.info("Step 2/4: Converting units")
        df, converted = convert_units(df, self.conversions)
        for col, conversion in converted.items():
            logger.info("  %s: %s -> %s", col, conversion.from_unit, conversion.to_unit)

        logger.info("Step 3/4: Recoding categories")
        df, recoded = recode_categories(df, self.recodes)
        if recoded:
            logger.info("  Recoded: %s", recoded)

        logger.info("Step 4/4: Reordering %d columns", len(self.column_order))
        df = reorder_columns(
            df,
            order=self.column_order,
            keep_extra=self.config.output.keep_extra_columns,
        )

        return TransformResult(df=df, converted=converted, recoded=recoded)
