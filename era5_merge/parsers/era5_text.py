"""
Parser for ERA5 single-variable text exports (Panoply "Export as text").

Input structure:
  - Row 0: header row (names are informational only)
  - Rows 1+: one record per (time, lat, lon), delimiter-separated

Positional column contract (configurable in ``ParserConfig``):
  col 0 -> timestamp, seconds since the epoch (UTC)
  col 1 -> latitude
  col 2 -> longitude
  col 3 -> the variable's value, whatever its header says

The value column is picked by position. If an export ever changes its
column order, the wrong column is extracted without any error.

Output: a VariableTable whose DataFrame has columns
``date`` (``DD-MM-YYYY``), ``lon``, ``lat``, ``<variable name>``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pandas as pd

from era5_merge.config import ParserConfig
from era5_merge.exceptions import ParsingError
from era5_merge.naming import variable_name_from_path
from era5_merge.parsers.base import BaseParser, ParseBatch, SkippedFile, VariableTable

logger = logging.getLogger(__name__)


class Era5TextParser(BaseParser):
    """Parser for delimited ERA5 text exports, one variable per file."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def parse(self, path: str | Path) -> VariableTable:
        path = Path(path)
        cfg = self.config
        logger.info("Processing file: %s", path.name)

        variable_name = variable_name_from_path(path)
        raw = self._read(path)

        if len(raw.columns) < cfg.min_columns:
            raise ParsingError(
                f"{path.name} has {len(raw.columns)} column(s), "
                f"at least {cfg.min_columns} required"
            )
        if raw.empty:
            raise ParsingError(f"{path.name} has a header but no data rows")

        dates = self._convert_timestamps(raw.iloc[:, cfg.time_column_index], path)

        lon = self._convert_coordinates(raw.iloc[:, cfg.longitude_column_index], path)
        lat = self._convert_coordinates(raw.iloc[:, cfg.latitude_column_index], path)

        df = pd.DataFrame({
            "date": dates,
            "lon": lon,
            "lat": lat,
            variable_name: pd.to_numeric(raw.iloc[:, cfg.value_column_index].str.strip(), errors="coerce"),
        })

        logger.info(
            "Successfully processed: %s - Variable: %s (%d rows, source column %r)",
            path.name,
            variable_name,
            len(df),
            raw.columns[cfg.value_column_index],
        )
        return VariableTable(name=variable_name, source_path=path, df=df)

    def _read(self, path: Path) -> pd.DataFrame:
        """Read the whole file as strings; every reader failure becomes ParsingError."""
        try:
            df = pd.read_csv(
                path,
                sep=self.config.delimiter,
                header=0,
                encoding=self.config.encoding,
                dtype=str,
                keep_default_na=False,
                index_col=False,
            )
        except pd.errors.EmptyDataError as exc:
            raise ParsingError(f"{path.name} is empty") from exc
        except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
            raise ParsingError(f"Cannot read {path.name}: {exc}") from exc
        df.columns = [str(c).strip() for c in df.columns]
        return df

    def _convert_timestamps(self, column: pd.Series, path: Path) -> pd.Series:
        """Seconds since the epoch -> ``DD-MM-YYYY`` strings."""
        seconds = pd.to_numeric(column.str.strip(), errors="coerce")
        bad = seconds.isna()
        if bad.any():
            first_bad = column[bad].iloc[0]
            raise ParsingError(
                f"{path.name}: {int(bad.sum())} malformed timestamp(s), "
                f"first: {first_bad!r}"
            )
        try:
            timestamps = pd.to_datetime(
                seconds, unit="s", origin=pd.Timestamp(self.config.epoch)
            )
        except (ValueError, OverflowError) as exc:
            raise ParsingError(f"{path.name}: timestamp out of range: {exc}") from exc
        # strftime on numeric directives is locale-independent
        return timestamps.dt.strftime(self.config.date_format)

    def _convert_coordinates(self, column: pd.Series, path: Path) -> pd.Series:
        """Latitude or longitude strings -> floats; blanks and text are rejected."""
        values = pd.to_numeric(column.str.strip(), errors="coerce")
        bad = values.isna()
        if bad.any():
            first_bad = column[bad].iloc[0]
            raise ParsingError(
                f"{path.name}: {int(bad.sum())} non-numeric coordinate(s) "
                f"in column {column.name!r}, first: {first_bad!r}"
            )
        return values


def parse_files(
    paths: list[Path],
    config: ParserConfig | None = None,
    max_workers: int = 1,
) -> ParseBatch:
    """Parse every file, skipping (with a warning) the ones that fail.

    Files are independent, so with ``max_workers > 1`` they are parsed on
    a thread pool. Results are collected with ``executor.map`` and thus
    keep the order of *paths*, which fixes the column order of the wide
    table.

    Args:
        paths: Input files, in processing order.
        config: Parser settings (defaults if ``None``).
        max_workers: Number of parser threads.

    Returns:
        ParseBatch with the parsed tables and the skipped files.
    """
    parser = Era5TextParser(config)

    def _try_parse(path: Path) -> VariableTable | SkippedFile:
        try:
            return parser.parse(path)
        except ParsingError as exc:
            return SkippedFile(path=Path(path), reason=str(exc))

    if max_workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(_try_parse, paths))
    else:
        outcomes = [_try_parse(p) for p in paths]

    batch = ParseBatch()
    for outcome in outcomes:
        if isinstance(outcome, SkippedFile):
            logger.warning("Skipping file %s: %s", outcome.path.name, outcome.reason)
            batch.skipped.append(outcome)
        else:
            batch.tables.append(outcome)

    logger.info(
        "Parsed %d file(s), skipped %d", len(batch.tables), len(batch.skipped)
    )
    return batch
