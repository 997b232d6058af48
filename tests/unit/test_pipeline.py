"""
Unit tests for TransformPipeline (era5_merge.transforms.pipeline).

Runs the wide -> master transforms on small synthetic wide tables.
"""

from __future__ import annotations

import pandas as pd
import pytest

from era5_merge.config import OutputConfig, PipelineConfig
from era5_merge.exceptions import MissingColumnError, TransformError
from era5_merge.transforms.pipeline import TransformPipeline
from era5_merge.variables import MASTER_COLUMN_ORDER, VARIABLE_NAMES


def _make_config(tmp_path, **output) -> PipelineConfig:
    return PipelineConfig(
        paths={"root_dir": str(tmp_path)},
        output=OutputConfig(**output),
    )


def _make_wide() -> pd.DataFrame:
    """A one-row wide table carrying every known variable."""
    data = {"date": ["01-01-1970"], "lon": [-70.0], "lat": [10.0]}
    for name in VARIABLE_NAMES:
        data[name] = [1.0]
    data["Temperatura2m"] = [300.0]
    data["Escorrentia"] = [0.002]
    data["TipoSuelo"] = [3]
    return pd.DataFrame(data)


class TestTransformPipeline:
    """Tests for TransformPipeline.run()."""

    def test_full_run(self, tmp_path):
        result = TransformPipeline(_make_config(tmp_path)).run(_make_wide())
        df = result.df
        assert list(df.columns) == MASTER_COLUMN_ORDER
        row = df.iloc[0]
        assert (row["day"], row["month"], row["year"]) == (1, 1, 1970)
        assert row["Temperatura2m"] == pytest.approx(26.85)
        assert row["Escorrentia"] == pytest.approx(2.0)
        assert row["TipoSuelo"] == "medium_fine"

    def test_untransformed_variables_pass_through(self, tmp_path):
        df = TransformPipeline(_make_config(tmp_path)).run(_make_wide()).df
        assert df["VolumenAguaSueloNivel1"].iloc[0] == 1.0
        assert df["PresionAtmosfericaSuperficial"].iloc[0] == 1.0

    def test_reports_touched_columns(self, tmp_path):
        result = TransformPipeline(_make_config(tmp_path)).run(_make_wide())
        assert len(result.converted) == 12
        assert result.recoded == ["TipoSuelo"]

    def test_missing_variable_raises(self, tmp_path):
        wide = _make_wide().drop(columns=["RadiacionSolar"])
        with pytest.raises(MissingColumnError, match="RadiacionSolar"):
            TransformPipeline(_make_config(tmp_path)).run(wide)

    def test_extra_column_kept_when_configured(self, tmp_path):
        wide = _make_wide()
        wide["Humedad"] = [0.5]
        config = _make_config(tmp_path, keep_extra_columns=True)
        df = TransformPipeline(config).run(wide).df
        assert list(df.columns) == MASTER_COLUMN_ORDER + ["Humedad"]

    def test_bad_date_raises(self, tmp_path):
        wide = _make_wide()
        wide["date"] = ["1970/01/01"]
        with pytest.raises(TransformError):
            TransformPipeline(_make_config(tmp_path)).run(wide)

    def test_custom_column_order(self, tmp_path):
        wide = pd.DataFrame({"date": ["02-03-2001"], "lon": [1.0], "lat": [2.0], "Temperatura2m": [273.15]})
        pipeline = TransformPipeline(
            _make_config(tmp_path),
            column_order=["year", "Temperatura2m"],
        )
        df = pipeline.run(wide).df
        assert list(df.columns) == ["year", "Temperatura2m"]
        assert df["Temperatura2m"].iloc[0] == pytest.approx(0.0)

    def test_does_not_mutate_input(self, tmp_path):
        wide = _make_wide()
        before = wide.copy()
        TransformPipeline(_make_config(tmp_path)).run(wide)
        pd.testing.assert_frame_equal(wide, before)
