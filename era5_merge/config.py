"""
Configuration models and YAML I/O for era5-merge.

This module defines the Pydantic models that map 1:1 to an optional
``era5merge.yaml`` file, plus helpers to load, save and build a default
configuration from the environment.

Key models:
- PipelineConfig: Top-level config (paths + parser + merge + output).
- PathsConfig: Root directory and the input/output subdirectories.
- ParserConfig: Delimiter, positional column contract, timestamp epoch.
- MergeConfig: Positional (default) or key-based alignment.
- OutputConfig: Artifact name, format, spreadsheet styling, cleanup toggle.

Key functions:
- default_config() -> PipelineConfig: Defaults, root taken from ``ONCC_MAIN``.
- load_config(path) -> PipelineConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import pandas as pd
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from era5_merge.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

# Environment variable that overrides the root directory
ROOT_ENV_VAR = "ONCC_MAIN"
DEFAULT_ROOT_DIR = str(Path.home() / "ONCC_panoply_integrater")

# Excel limits sheet names to 31 characters
_MAX_SHEET_NAME = 31


class PathsConfig(BaseModel):
    """Directory layout. Input and output both live under ``root_dir``."""

    root_dir: str = Field(DEFAULT_ROOT_DIR, description="Root working directory")
    input_subdir: str = Field("Input", description="Subdirectory holding the .txt exports")
    output_subdir: str = Field("Outcome", description="Subdirectory receiving the artifact")
    input_pattern: str = Field("*.txt", description="Glob pattern for input files")

    @property
    def input_dir(self) -> Path:
        return Path(self.root_dir).expanduser() / self.input_subdir

    @property
    def output_dir(self) -> Path:
        return Path(self.root_dir).expanduser() / self.output_subdir

    @model_validator(mode="after")
    def _check_distinct_dirs(self) -> PathsConfig:
        """Input and output must not resolve to the same directory."""
        if self.input_dir.resolve() == self.output_dir.resolve():
            raise ValueError(
                f"Input and output directories are the same ({self.input_dir}). "
                "The output directory is cleared before writing."
            )
        return self

    @classmethod
    def from_env(cls, **overrides: str) -> PathsConfig:
        """Build paths with ``root_dir`` taken from ``$ONCC_MAIN`` if set."""
        root = os.environ.get(ROOT_ENV_VAR, DEFAULT_ROOT_DIR)
        values = {"root_dir": root}
        values.update(overrides)
        return cls(**values)


class ParserConfig(BaseModel):
    """How a single exported text file is read.

    Columns are addressed by position, not by header name. The default
    layout is the Panoply export: time, latitude, longitude, value.
    """

    delimiter: str = Field("\t", description="Single-character field separator")
    encoding: str = Field("utf-8-sig", description="Text encoding of the input files")
    time_column_index: int = Field(0, ge=0)
    latitude_column_index: int = Field(1, ge=0)
    longitude_column_index: int = Field(2, ge=0)
    value_column_index: int = Field(
        3,
        ge=3,
        description="Position of the variable's value column (the 4th column by default)",
    )
    epoch: str = Field("1970-01-01", description="Reference epoch of the timestamp (UTC)")
    date_format: str = Field("%d-%m-%Y", description="Format of the intermediate date string")

    @field_validator("delimiter")
    @classmethod
    def _single_char_delimiter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"delimiter must be a single character, got {v!r}")
        return v

    @field_validator("epoch")
    @classmethod
    def _parseable_epoch(cls, v: str) -> str:
        try:
            pd.Timestamp(v)
        except ValueError as exc:
            raise ValueError(f"epoch is not a valid timestamp: {v!r}") from exc
        return v

    @model_validator(mode="after")
    def _check_distinct_indices(self) -> ParserConfig:
        indices = [
            self.time_column_index,
            self.latitude_column_index,
            self.longitude_column_index,
            self.value_column_index,
        ]
        if len(set(indices)) != len(indices):
            raise ValueError(f"Column indices must be distinct, got {indices}")
        return self

    @property
    def min_columns(self) -> int:
        """Minimum number of columns a file must have to be parsed."""
        return max(
            4,
            self.time_column_index + 1,
            self.latitude_column_index + 1,
            self.longitude_column_index + 1,
            self.value_column_index + 1,
        )


class MergeConfig(BaseModel):
    """How variable tables are aligned.

    ``positional`` trusts that row i of every file describes the same
    (time, lat, lon). ``key`` joins on those values and fails on mismatch.
    """

    strategy: Literal["positional", "key"] = "positional"


class OutputConfig(BaseModel):
    """Output artifact settings."""

    file_name: str = Field("master_database", description="Artifact name without extension")
    output_format: Literal["xlsx", "csv", "parquet"] = "xlsx"
    sheet_name: str = Field("ERA5_master_database", description="Worksheet name (xlsx only)")
    creator: str = Field("ONCC", description="Workbook creator property (xlsx only)")
    tab_color: str = Field("0000FF", description="Worksheet tab colour as RGB hex (xlsx only)")
    clear_output_dir: bool = Field(
        True,
        description="If True, DELETE everything in the output directory before writing",
    )
    keep_extra_columns: bool = Field(
        False,
        description="If True, unknown variable columns are kept after the fixed order",
    )

    @field_validator("sheet_name")
    @classmethod
    def _check_sheet_name(cls, v: str) -> str:
        if not v or len(v) > _MAX_SHEET_NAME:
            raise ValueError(
                f"sheet_name must be 1-{_MAX_SHEET_NAME} characters, got {len(v)}"
            )
        return v

    @field_validator("file_name")
    @classmethod
    def _check_file_name(cls, v: str) -> str:
        if not v or Path(v).name != v:
            raise ValueError(f"file_name must be a bare file name, got {v!r}")
        return v


class PipelineConfig(BaseModel):
    """Top-level configuration for era5-merge."""

    paths: PathsConfig = Field(default_factory=PathsConfig.from_env)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    merge: MergeConfig = Field(default_factory=MergeConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    max_workers: int = Field(1, ge=1, description="Threads used to parse input files")


def default_config(root_dir: str | None = None) -> PipelineConfig:
    """Build the default config; ``root_dir`` wins over ``$ONCC_MAIN``."""
    paths = PathsConfig(root_dir=root_dir) if root_dir else PathsConfig.from_env()
    return PipelineConfig(paths=paths)


def load_config(path: str | Path) -> PipelineConfig:
    """Load and validate a YAML config into a PipelineConfig.

    Sections missing from the file fall back to defaults (``paths`` falls
    back to ``$ONCC_MAIN``).

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return PipelineConfig.model_validate(raw)


def save_config(config: PipelineConfig, path: str | Path) -> None:
    """Serialize a PipelineConfig to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# era5-merge configuration\n")
        f.write(
            "# WARNING: output.clear_output_dir deletes the output directory's contents.\n\n"
        )
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
