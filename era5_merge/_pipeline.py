"""
Internal pipeline orchestration for era5-merge.

Runs the one-way sequence

    discover files -> parse -> assemble -> transform -> clear output -> export

and returns a ``PipelineResult``. Every structural error is raised before
the output directory is touched, so a failed run leaves any previous
artifact in place.

This module is **not** part of the public API; use ``era5_merge.run()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from era5_merge.assemble import assemble_wide_table
from era5_merge.config import PathsConfig, PipelineConfig
from era5_merge.exceptions import NoInputError
from era5_merge.export import clear_output_dir, export_master_table
from era5_merge.parsers.base import SkippedFile
from era5_merge.parsers.era5_text import parse_files
from era5_merge.transforms.pipeline import TransformPipeline

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of a pipeline run.

    Attributes:
        master: The master table.
        variables: Variable names merged, in file-processing order.
        skipped: Files skipped by the parser, with reasons.
        output_path: Written artifact, or ``None`` if nothing was exported.
    """

    master: pd.DataFrame
    variables: list[str] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    output_path: Path | None = None


def discover_input_files(paths: PathsConfig) -> list[Path]:
    """List input files matching the configured pattern, sorted by name.

    Sorting makes the file-processing order (and so the wide table's
    column order and base table) reproducible across platforms.

    Raises:
        NoInputError: If the input directory is missing or has no match.
    """
    input_dir = paths.input_dir
    if not input_dir.is_dir():
        raise NoInputError(f"Input directory does not exist: {input_dir}")

    files = sorted(p for p in input_dir.glob(paths.input_pattern) if p.is_file())
    if not files:
        raise NoInputError(
            f"No files matching {paths.input_pattern!r} in {input_dir}"
        )
    logger.info("Found %d input file(s) in %s", len(files), input_dir)
    return files


def build_master_table(
    files: list[Path],
    config: PipelineConfig,
) -> PipelineResult:
    """Parse, assemble and transform *files* without writing anything.

    Raises:
        NoInputError: If no file parses.
        ColumnCollisionError, AlignmentError, TransformError,
        MissingColumnError: On structural problems.
    """
    batch = parse_files(files, config.parser, max_workers=config.max_workers)
    if batch.skipped:
        logger.info(
            "%d file(s) will not be merged: %s",
            len(batch.skipped),
            [s.path.name for s in batch.skipped],
        )

    wide = assemble_wide_table(batch.tables, strategy=config.merge.strategy)
    result = TransformPipeline(config).run(wide)

    return PipelineResult(
        master=result.df,
        variables=[t.name for t in batch.tables],
        skipped=batch.skipped,
    )


def run_pipeline(config: PipelineConfig, export: bool = True) -> PipelineResult:
    """Run the whole integration and (optionally) export the artifact.

    When ``config.output.clear_output_dir`` is set, the output directory's
    existing contents are DELETED right before the artifact is written.

    Args:
        config: Validated pipeline configuration.
        export: If ``False``, stop after building the master table.

    Returns:
        PipelineResult with the master table and the written path.
    """
    paths = config.paths
    logger.info("Input directory : %s", paths.input_dir)
    logger.info("Output directory: %s", paths.output_dir)

    files = discover_input_files(paths)
    result = build_master_table(files, config)
    logger.info(
        "Master table: %d rows x %d cols", len(result.master), len(result.master.columns)
    )

    if not export:
        return result

    if config.output.clear_output_dir:
        logger.info("Cleaning output directory: %s", paths.output_dir)
        clear_output_dir(paths.output_dir, protected=[paths.input_dir])

    result.output_path = export_master_table(result.master, paths.output_dir, config.output)
    logger.info(
        "Pipeline complete: %d variable(s) merged, %d file(s) skipped",
        len(result.variables),
        len(result.skipped),
    )
    return result
