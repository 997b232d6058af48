"""
Custom exception hierarchy for era5-merge.

Two classes of failure exist:
- Per-file failures (``ParsingError``) are recoverable. The offending file
  is skipped with a warning and the run continues.
- Structural failures (everything else) abort the run before any artifact
  is written, since continuing would produce a corrupted dataset.
"""


class Era5MergeError(Exception):
    """Base exception for all era5-merge errors."""


class ParsingError(Era5MergeError):
    """Raised when a single input file cannot be parsed.

    For example, the file has fewer than 4 columns, the timestamp column
    is not numeric, or the file cannot be read at all.
    """


class NoInputError(Era5MergeError):
    """Raised when there is nothing to merge.

    Either the input directory holds no matching files, or every file
    failed to parse (so there is no base table to take date/lon/lat from).
    """


class AlignmentError(Era5MergeError):
    """Raised when variable tables cannot be aligned row by row.

    In positional mode this means a row-count mismatch against the base
    table. In key mode it means the (date, lon, lat) key sets differ or
    contain duplicates.
    """


class ColumnCollisionError(Era5MergeError):
    """Raised when two input files sanitize to the same variable name."""


class MissingColumnError(Era5MergeError):
    """Raised when a column required by the final ordering is absent."""


class TransformError(Era5MergeError):
    """Raised when a column transform cannot be applied (e.g., bad dates)."""


class ConfigValidationError(Era5MergeError):
    """Raised when the configuration is invalid or unsafe.

    This includes an output directory that would put the input directory
    (or the filesystem root) at risk when its contents are cleared.
    """


class ExportError(Era5MergeError):
    """Raised when the exporter fails to write the output artifact."""
