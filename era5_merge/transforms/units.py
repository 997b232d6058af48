"""
Unit conversion transform for era5-merge.

ERA5 exports carry SI units. The master table uses the units a hydrologist
reads directly:

  temperatures          K      -> degC     (value - 273.15)
  runoff / evaporation  m/day  -> mm/day   (value * 1000)
  precipitation         m/day  -> mm/day   (value * 1000)

Every conversion is linear: ``value' = value * scale + offset``. The
conversions are keyed by canonical variable name, so a column is only
converted when its sanitized name matches a known variable.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

KELVIN_OFFSET = 273.15


@dataclass(frozen=True)
class LinearConversion:
    """Affine unit conversion ``value * scale + offset``."""

    scale: float = 1.0
    offset: float = 0.0
    from_unit: str = ""
    to_unit: str = ""

    def apply(self, series: pd.Series) -> pd.Series:
        return pd.to_numeric(series, errors="coerce") * self.scale + self.offset

    def inverse(self) -> LinearConversion:
        """The conversion that undoes this one."""
        if self.scale == 0:
            raise ValueError("A conversion with scale 0 has no inverse")
        return LinearConversion(
            scale=1.0 / self.scale,
            offset=-self.offset / self.scale,
            from_unit=self.to_unit,
            to_unit=self.from_unit,
        )


KELVIN_TO_CELSIUS = LinearConversion(
    scale=1.0, offset=-KELVIN_OFFSET, from_unit="K", to_unit="degC"
)
METERS_TO_MILLIMETERS = LinearConversion(
    scale=1000.0, offset=0.0, from_unit="m/day", to_unit="mm/day"
)

UNIT_CONVERSIONS: dict[str, LinearConversion] = {
    "Temperatura2m": KELVIN_TO_CELSIUS,
    "TemperaturaSueloNivel1": KELVIN_TO_CELSIUS,
    "TemperaturaSueloNivel2": KELVIN_TO_CELSIUS,
    "TemperaturaSueloNivel3": KELVIN_TO_CELSIUS,
    "TemperaturaSueloNivel4": KELVIN_TO_CELSIUS,
    "TemperaturaSuperficieMar": KELVIN_TO_CELSIUS,
    "Escorrentia": METERS_TO_MILLIMETERS,
    "EscorrentiaSubsuperficial": METERS_TO_MILLIMETERS,
    "EscorrentiaSuperficial": METERS_TO_MILLIMETERS,
    "Evaporacion": METERS_TO_MILLIMETERS,
    "EvaporacionPotencial": METERS_TO_MILLIMETERS,
    "PrecipitacionTotal": METERS_TO_MILLIMETERS,
}


def kelvin_to_celsius(value):
    """Convert a scalar, array or Series from Kelvin to degrees Celsius."""
    return value - KELVIN_OFFSET


def celsius_to_kelvin(value):
    """Convert a scalar, array or Series from degrees Celsius to Kelvin."""
    return value + KELVIN_OFFSET


def convert_units(
    df: pd.DataFrame,
    conversions: dict[str, LinearConversion] | None = None,
) -> tuple[pd.DataFrame, dict[str, LinearConversion]]:
    """Apply linear conversions to every column that has one.

    Columns without a registered conversion are left untouched. Missing
    values stay missing.

    Args:
        df: Wide table with numeric variable columns.
        conversions: Mapping canonical name -> conversion. Defaults to
            ``UNIT_CONVERSIONS``.

    Returns:
        Tuple of (converted copy of *df*, mapping of the columns that were
        actually converted to their conversion).
    """
    if conversions is None:
        conversions = UNIT_CONVERSIONS

    df = df.copy()
    applied: dict[str, LinearConversion] = {}
    for col in df.columns:
        conversion = conversions.get(col)
        if conversion is None:
            continue
        df[col] = conversion.apply(df[col])
        applied[col] = conversion
    return df, applied
