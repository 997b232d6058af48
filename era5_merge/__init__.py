"""
era5-merge: integrate single-variable ERA5 text exports into one table.

Each input file (exported from Panoply, one variable per file) holds
time / latitude / longitude / value rows. The files are merged side by
side into one wide table, units are converted (K -> degC, m/day -> mm/day),
the soil type code is recoded to a label, and the columns are put in a
fixed order. The result is written as a single spreadsheet.

Public API surface:

- ``run(config=None, config_path=None, root_dir=None)`` -- **recommended
  entry point**. Runs the whole pipeline and writes the artifact. Note:
  by default this DELETES the output directory's contents first.

- ``build(files, config=None)`` -- Parse/merge/transform an explicit list
  of files in memory; writes nothing.

Configuration: ``PipelineConfig`` (Pydantic), loadable from YAML with
``load_config()``. The root directory defaults to ``$ONCC_MAIN``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from era5_merge._pipeline import PipelineResult, build_master_table, run_pipeline
from era5_merge.config import PipelineConfig, default_config, load_config, save_config

__all__ = [
    "run",
    "build",
    "PipelineConfig",
    "PipelineResult",
    "default_config",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)


def run(
    config: PipelineConfig | None = None,
    config_path: str | Path | None = None,
    root_dir: str | None = None,
) -> PipelineResult:
    """Run the full integration and write the master table.

    Config resolution, first match wins:
      1. *config* if given.
      2. *config_path* (YAML) if given.
      3. ``default_config(root_dir)`` (``$ONCC_MAIN`` when *root_dir* is None).

    Returns:
        PipelineResult with the master table, skipped files and output path.

    Raises:
        NoInputError: If there are no input files or none could be parsed.
        ColumnCollisionError: If two files map to the same variable name.
        AlignmentError: If the files' row counts (or keys) do not match.
        MissingColumnError: If an expected variable is missing.
        ConfigValidationError: If the output directory is unsafe to clear.
        ExportError: If the artifact cannot be written.
    """
    if config is None:
        if config_path is not None:
            config = load_config(config_path)
        else:
            config = default_config(root_dir)
    logger.info("run() -- root_dir=%s", config.paths.root_dir)
    return run_pipeline(config)


def build(
    files: list[str | Path],
    config: PipelineConfig | None = None,
) -> PipelineResult:
    """Build the master table from *files* in memory; nothing is written.

    *files* are processed in the given order: the first file that parses
    provides the lon/lat/date columns.
    """
    config = config or PipelineConfig()
    return build_master_table([Path(f) for f in files], config)
