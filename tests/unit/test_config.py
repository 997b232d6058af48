"""
Unit tests for config models and YAML I/O (era5_merge.config).
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from era5_merge.config import (
    ROOT_ENV_VAR,
    MergeConfig,
    OutputConfig,
    ParserConfig,
    PathsConfig,
    PipelineConfig,
    default_config,
    load_config,
    save_config,
)
from era5_merge.exceptions import ConfigValidationError


class TestPathsConfig:
    """Tests for PathsConfig."""

    def test_subdirectories(self, tmp_path):
        paths = PathsConfig(root_dir=str(tmp_path))
        assert paths.input_dir == tmp_path / "Input"
        assert paths.output_dir == tmp_path / "Outcome"

    def test_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))
        assert PathsConfig.from_env().root_dir == str(tmp_path)

    def test_from_env_default(self, monkeypatch):
        monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
        assert PathsConfig.from_env().root_dir.endswith("ONCC_panoply_integrater")

    def test_same_input_and_output_rejected(self, tmp_path):
        with pytest.raises(ValidationError, match="same"):
            PathsConfig(root_dir=str(tmp_path), input_subdir="data", output_subdir="data")


class TestParserConfig:
    """Tests for ParserConfig."""

    def test_defaults(self):
        cfg = ParserConfig()
        assert cfg.delimiter == "\t"
        assert cfg.value_column_index == 3
        assert cfg.min_columns == 4

    def test_multi_char_delimiter_rejected(self):
        with pytest.raises(ValidationError, match="single character"):
            ParserConfig(delimiter="::")

    def test_value_column_before_fourth_rejected(self):
        with pytest.raises(ValidationError):
            ParserConfig(value_column_index=2)

    def test_duplicate_indices_rejected(self):
        with pytest.raises(ValidationError, match="distinct"):
            ParserConfig(time_column_index=1)

    def test_bad_epoch_rejected(self):
        with pytest.raises(ValidationError, match="epoch"):
            ParserConfig(epoch="not a date")

    def test_min_columns_follows_value_index(self):
        assert ParserConfig(value_column_index=5).min_columns == 6


class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_defaults(self):
        cfg = OutputConfig()
        assert cfg.output_format == "xlsx"
        assert cfg.sheet_name == "ERA5_master_database"
        assert cfg.clear_output_dir is True

    def test_long_sheet_name_rejected(self):
        with pytest.raises(ValidationError, match="sheet_name"):
            OutputConfig(sheet_name="x" * 32)

    def test_file_name_with_directory_rejected(self):
        with pytest.raises(ValidationError):
            OutputConfig(file_name="../elsewhere")

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationError):
            OutputConfig(output_format="json")


class TestMergeConfig:
    def test_default_positional(self):
        assert MergeConfig().strategy == "positional"

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValidationError):
            MergeConfig(strategy="nearest")


class TestDefaultConfig:
    def test_explicit_root_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ROOT_ENV_VAR, "/somewhere/else")
        assert default_config(str(tmp_path)).paths.root_dir == str(tmp_path)

    def test_env_root(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))
        assert default_config().paths.root_dir == str(tmp_path)


class TestYamlRoundTrip:
    """Tests for load_config() / save_config()."""

    def test_round_trip(self, tmp_path):
        config = PipelineConfig(
            paths=PathsConfig(root_dir=str(tmp_path)),
            parser=ParserConfig(delimiter=";"),
            merge=MergeConfig(strategy="key"),
            output=OutputConfig(output_format="csv"),
            max_workers=3,
        )
        path = tmp_path / "era5merge.yaml"
        save_config(config, path)
        loaded = load_config(path)
        assert loaded == config

    def test_tab_delimiter_survives(self, tmp_path):
        config = PipelineConfig(paths=PathsConfig(root_dir=str(tmp_path)))
        path = tmp_path / "era5merge.yaml"
        save_config(config, path)
        assert load_config(path).parser.delimiter == "\t"

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "era5merge.yaml"
        path.write_text(
            f"paths:\n  root_dir: {tmp_path.as_posix()}\nmax_workers: 2\n", encoding="utf-8"
        )
        loaded = load_config(path)
        assert loaded.max_workers == 2
        assert loaded.output.output_format == "xlsx"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_header_warns_about_cleanup(self, tmp_path):
        path = tmp_path / "era5merge.yaml"
        save_config(PipelineConfig(paths=PathsConfig(root_dir=str(tmp_path))), path)
        assert "deletes" in Path(path).read_text(encoding="utf-8")
