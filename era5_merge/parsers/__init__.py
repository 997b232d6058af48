"""
Parsers sub-package for era5-merge.

Converts one exported ERA5 text file into a ``VariableTable``: a
DataFrame with the fixed columns (date, lon, lat, <variable>).

Design:
- base.py defines the data model (VariableTable, SkippedFile, ParseBatch)
  and the BaseParser ABC.
- era5_text.py implements Era5TextParser for Panoply's delimited text
  exports, plus ``parse_files()`` which applies the skip-on-failure policy
  to a whole directory listing.
"""

from era5_merge.parsers.base import BaseParser, ParseBatch, SkippedFile, VariableTable
from era5_merge.parsers.era5_text import Era5TextParser, parse_files

__all__ = [
    "BaseParser",
    "Era5TextParser",
    "ParseBatch",
    "SkippedFile",
    "VariableTable",
    "parse_files",
]
