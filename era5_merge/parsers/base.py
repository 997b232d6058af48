"""
Base parser protocol / ABC for era5-merge.

All parsers implement the same contract:
1. parse() takes a file path and returns a VariableTable.
2. Any failure is raised as ParsingError; the caller decides whether to
   skip the file (see ``parse_files``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd


@dataclass
class VariableTable:
    """One parsed input file.

    Attributes:
        name: Sanitized variable name, also the name of the value column.
        source_path: File the table was read from.
        df: DataFrame with columns ``date``, ``lon``, ``lat``, ``<name>``
            in that order. ``date`` is a ``DD-MM-YYYY`` string.
    """

    name: str
    source_path: Path
    df: pd.DataFrame

    def __len__(self) -> int:
        return len(self.df)


@dataclass
class SkippedFile:
    """A file that was not parsed, and why."""

    path: Path
    reason: str


@dataclass
class ParseBatch:
    """Result of parsing a list of files, in input order.

    Attributes:
        tables: Tables that parsed successfully, in file-processing order.
        skipped: Files that failed, in file-processing order.
    """

    tables: list[VariableTable] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)


class BaseParser(ABC):
    """Abstract base class for single-variable file parsers."""

    @abstractmethod
    def parse(self, path: str | Path) -> VariableTable:
        """Parse one exported file.

        Args:
            path: Path to the delimited text file.

        Returns:
            VariableTable with the normalized 4-column DataFrame.

        Raises:
            ParsingError: If the file cannot be read or has an unexpected shape.
        """
