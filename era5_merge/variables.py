"""
Catalogue of the ERA5 variables the integrator knows about.

Each input file carries exactly one variable, and the variable's canonical
name is the sanitized base name of the file (e.g. ``Temperatura2m.txt`` ->
``Temperatura2m``). This module is the single place where those canonical
names, their ERA5 short names and their units are listed.

The order of ``VARIABLES`` is the order of the variable columns in the
exported master table.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Variable:
    """One ERA5 single-level variable as exported from Panoply.

    Attributes:
        name: Canonical (sanitized) column name.
        short_name: ERA5 short name of the source parameter.
        source_unit: Unit of the values in the input file.
        output_unit: Unit of the values in the master table.
        description: Human-readable description.
    """

    name: str
    short_name: str
    source_unit: str
    output_unit: str
    description: str


VARIABLES: tuple[Variable, ...] = (
    Variable("Temperatura2m", "t2m", "K", "degC", "2 metre temperature"),
    Variable("TemperaturaSueloNivel1", "stl1", "K", "degC", "Soil temperature level 1 (0-7 cm)"),
    Variable("TemperaturaSueloNivel2", "stl2", "K", "degC", "Soil temperature level 2 (7-28 cm)"),
    Variable("TemperaturaSueloNivel3", "stl3", "K", "degC", "Soil temperature level 3 (28-100 cm)"),
    Variable("TemperaturaSueloNivel4", "stl4", "K", "degC", "Soil temperature level 4 (100-289 cm)"),
    Variable("TemperaturaSuperficieMar", "sst", "K", "degC", "Sea surface temperature"),
    Variable("TipoSuelo", "slt", "code", "category", "Soil type"),
    Variable("Escorrentia", "ro", "m/day", "mm/day", "Runoff"),
    Variable("EscorrentiaSubsuperficial", "ssro", "m/day", "mm/day", "Sub-surface runoff"),
    Variable("EscorrentiaSuperficial", "sro", "m/day", "mm/day", "Surface runoff"),
    Variable("Evaporacion", "e", "m/day", "mm/day", "Evaporation"),
    Variable("EvaporacionPotencial", "pev", "m/day", "mm/day", "Potential evaporation"),
    Variable("PrecipitacionTotal", "tp", "m/day", "mm/day", "Total precipitation"),
    Variable("VolumenAguaSueloNivel1", "swvl1", "m3/m3", "m3/m3", "Volumetric soil water layer 1"),
    Variable("VolumenAguaSueloNivel2", "swvl2", "m3/m3", "m3/m3", "Volumetric soil water layer 2"),
    Variable("VolumenAguaSueloNivel3", "swvl3", "m3/m3", "m3/m3", "Volumetric soil water layer 3"),
    Variable("VolumenAguaSueloNivel4", "swvl4", "m3/m3", "m3/m3", "Volumetric soil water layer 4"),
    Variable("RadiacionSolar", "ssrd", "J/m2", "J/m2", "Surface solar radiation downwards"),
    Variable("PresionAtmosfericaSuperficial", "sp", "Pa", "Pa", "Surface pressure"),
)

VARIABLE_NAMES: list[str] = [v.name for v in VARIABLES]

# Columns produced by the pipeline itself (never taken from a file name)
KEY_COLUMNS: list[str] = ["date", "lon", "lat"]
DATE_PART_COLUMNS: list[str] = ["day", "month", "year"]
RESERVED_COLUMNS: frozenset[str] = frozenset(KEY_COLUMNS + DATE_PART_COLUMNS)

# Final column sequence of the master table
MASTER_COLUMN_ORDER: list[str] = ["lon", "lat", *DATE_PART_COLUMNS, *VARIABLE_NAMES]
