"""
Categorical recoding transform for era5-merge.

ERA5's soil type parameter (``slt``) is an integer code. The master table
carries the texture label instead:

  0 non-land   1 coarse     2 medium     3 medium_fine
  4 fine       5 very_fine  6 organic    7 tropical_organic

Anything else (out-of-range code, fractional value, missing value) becomes
the missing marker. This is a fallback, not an error: a bad soil code
never aborts the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

# Marker written for codes that have no label
MISSING_LABEL = None

SOIL_TYPE_LABELS: dict[int, str] = {
    0: "non-land",
    1: "coarse",
    2: "medium",
    3: "medium_fine",
    4: "fine",
    5: "very_fine",
    6: "organic",
    7: "tropical_organic",
}


@dataclass(frozen=True)
class CategoricalRecode:
    """Map integer codes to labels; unknown codes map to ``MISSING_LABEL``."""

    labels: dict[int, str] = field(default_factory=dict)

    def label_for(self, code: object) -> str | None:
        if code is None or pd.isna(code):
            return MISSING_LABEL
        try:
            number = float(code)
        except (TypeError, ValueError):
            return MISSING_LABEL
        if not number.is_integer():
            return MISSING_LABEL
        return self.labels.get(int(number), MISSING_LABEL)

    def apply(self, series: pd.Series) -> pd.Series:
        codes = pd.to_numeric(series, errors="coerce")
        return codes.map(self.label_for).astype(object)


SOIL_TYPE = CategoricalRecode(labels=SOIL_TYPE_LABELS)

CATEGORY_RECODES: dict[str, CategoricalRecode] = {
    "TipoSuelo": SOIL_TYPE,
}


def recode_categories(
    df: pd.DataFrame,
    recodes: dict[str, CategoricalRecode] | None = None,
) -> tuple[pd.DataFrame, list[str]]:
    """Replace integer codes by labels in every column that has a recode.

    Args:
        df: Wide table.
        recodes: Mapping canonical name -> recode. Defaults to
            ``CATEGORY_RECODES``.

    Returns:
        Tuple of (recoded copy of *df*, names of the recoded columns).
    """
    if recodes is None:
        recodes = CATEGORY_RECODES

    df = df.copy()
    recoded: list[str] = []
    for col in df.columns:
        recode = recodes.get(col)
        if recode is None:
            continue
        df[col] = recode.apply(df[col])
        recoded.append(col)
    return df, recoded
