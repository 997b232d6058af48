"""
Variable-name sanitization for era5-merge.

A variable's identity is derived from its file name, e.g.
``Escorrentía.txt`` -> ``Escorrentia``. File names exported by hand
may carry accents, spaces, dashes or a leading digit, none of which are
usable as a column name in every downstream tool. The sanitizer maps them
onto ``[A-Za-z0-9_]`` deterministically.

Two different files may still sanitize to the same name; detecting that
is the assembler's job (see ``assemble.py``), since only it sees all files.
"""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path

from era5_merge.exceptions import ParsingError
from era5_merge.variables import RESERVED_COLUMNS

_INVALID_CHARS_RE = re.compile(r"[^A-Za-z0-9_]")


def sanitize_variable_name(raw: str) -> str:
    """Turn an arbitrary string into a safe column identifier.

    Steps:
      1. Unicode NFKD normalization; combining marks and any remaining
         non-ASCII characters are dropped (``í`` -> ``i``).
      2. Every character outside ``[A-Za-z0-9_]`` becomes ``_``.
      3. A leading digit gets an ``X`` prefix.
      4. A name equal to a reserved column (``date``, ``lon``, ``lat``,
         ``day``, ``month``, ``year``) gets a trailing ``_``.

    Raises:
        ParsingError: If nothing usable is left after step 2.
    """
    decomposed = unicodedata.normalize("NFKD", raw.strip())
    ascii_only = "".join(
        ch for ch in decomposed if not unicodedata.combining(ch) and ord(ch) < 128
    )
    name = _INVALID_CHARS_RE.sub("_", ascii_only)

    if not name or not name.strip("_"):
        raise ParsingError(f"Cannot derive a variable name from {raw!r}")

    if name[0].isdigit():
        name = f"X{name}"
    if name in RESERVED_COLUMNS:
        name = f"{name}_"
    return name


def variable_name_from_path(path: str | Path) -> str:
    """Derive the sanitized variable name from a file's base name.

    Example: ``Input/Temperatura2m.txt`` -> ``Temperatura2m``
    """
    return sanitize_variable_name(Path(path).stem)
