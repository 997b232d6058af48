"""
Shared test fixtures for era5-merge tests.

All input files are synthetic and written into ``tmp_path``: a
tab-delimited header row (valid_time, latitude, longitude, <var>) followed
by one row per record, the shape Panoply produces for ERA5 exports.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from era5_merge.variables import VARIABLE_NAMES

# ---------------------------------------------------------------------------
# Sample records -- (valid_time, latitude, longitude)
# ---------------------------------------------------------------------------
# 0 s -> 01-01-1970, 2678400 s -> 01-02-1970 (31 days later)
SAMPLE_KEYS = [
    (0, 10.0, -70.0),
    (0, 10.0, -69.75),
    (2678400, 10.0, -70.0),
]

# One value per SAMPLE_KEYS row, per variable; anything not listed gets 1.0
SAMPLE_VALUES: dict[str, list[float]] = {
    "Temperatura2m": [300.0, 273.15, 280.0],
    "Escorrentia": [0.002, 0.0, 0.01],
    "PrecipitacionTotal": [0.005, 0.0, 0.001],
    "TipoSuelo": [3, 9, 0],
}


def write_export(
    path: Path,
    rows: list[tuple],
    header: tuple[str, ...] = ("valid_time", "latitude", "longitude", "value"),
    delimiter: str = "\t",
) -> Path:
    """Write a Panoply-style text export and return its path."""
    lines = [delimiter.join(header)]
    lines += [delimiter.join(str(cell) for cell in row) for row in rows]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def sample_rows(variable: str) -> list[tuple]:
    values = SAMPLE_VALUES.get(variable, [1.0] * len(SAMPLE_KEYS))
    return [(*key, value) for key, value in zip(SAMPLE_KEYS, values)]


@pytest.fixture()
def make_export(tmp_path):
    """Factory: ``make_export("Name.txt", rows, **kwargs) -> Path`` under tmp_path."""

    def _make(name: str, rows: list[tuple], **kwargs) -> Path:
        return write_export(tmp_path / name, rows, **kwargs)

    return _make


@pytest.fixture()
def root_dir(tmp_path) -> Path:
    """A root directory with one export per known variable under Input/."""
    root = tmp_path / "root"
    for variable in VARIABLE_NAMES:
        write_export(
            root / "Input" / f"{variable}.txt",
            sample_rows(variable),
            header=("valid_time", "latitude", "longitude", variable.lower()),
        )
    (root / "Outcome").mkdir(parents=True)
    return root


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs the whole pipeline on disk)",
    )
