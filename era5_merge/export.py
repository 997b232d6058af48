"""
Exporter for era5-merge.

Writes the master table to a single artifact in the output directory:

  {file_name}.xlsx     -- default; one worksheet, styled (tab colour, creator)
  {file_name}.csv      -- utf-8-sig so accented headers open cleanly in Excel
  {file_name}.parquet  -- preserves dtypes for downstream Python use

The artifact is first written to a temporary file in the same directory
and then moved into place with ``os.replace``, so a failed write never
leaves a half-written artifact under the final name. The temporary file
is removed on every exit path.

``clear_output_dir`` is DESTRUCTIVE: it deletes every file and folder in
the output directory. It refuses to run on paths that could contain the
input data (see its docstring).
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

import pandas as pd

from era5_merge.config import OutputConfig
from era5_merge.exceptions import ConfigValidationError, ExportError

logger = logging.getLogger(__name__)


def clear_output_dir(
    output_dir: str | Path,
    protected: list[str | Path] | tuple[str | Path, ...] = (),
) -> int:
    """Delete the contents of *output_dir* (not the directory itself).

    This is irreversible. The directory is created if it does not exist.

    Refuses to run when *output_dir* resolves to the filesystem root, the
    user's home directory, any *protected* path, or an ancestor of a
    *protected* path. Pass the input directory as *protected*.

    Returns:
        Number of top-level entries deleted.

    Raises:
        ConfigValidationError: If *output_dir* is unsafe to clear.
        ExportError: If an entry cannot be deleted.
    """
    out = Path(output_dir).expanduser().resolve()

    if out == Path(out.anchor) or out == Path.home().resolve():
        raise ConfigValidationError(f"Refusing to clear {out}: not a dedicated output directory")
    for p in protected:
        guarded = Path(p).expanduser().resolve()
        if out == guarded or out in guarded.parents:
            raise ConfigValidationError(
                f"Refusing to clear {out}: it is or contains protected path {guarded}"
            )

    if not out.exists():
        out.mkdir(parents=True)
        return 0
    if not out.is_dir():
        raise ConfigValidationError(f"Output path exists and is not a directory: {out}")

    removed = 0
    for entry in out.iterdir():
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        except OSError as exc:
            raise ExportError(f"Cannot delete {entry}: {exc}") from exc
        removed += 1

    logger.info("Cleared output directory %s (%d entr%s)", out, removed, "y" if removed == 1 else "ies")
    return removed


def _write_dataframe(df: pd.DataFrame, path: Path, config: OutputConfig) -> None:
    """Write *df* to *path* in the configured format.

    Raises:
        ExportError: If writing fails for any reason.
    """
    fmt = config.output_format
    try:
        if fmt == "xlsx":
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                df.to_excel(writer, sheet_name=config.sheet_name, index=False)
                writer.book.properties.creator = config.creator
                writer.sheets[config.sheet_name].sheet_properties.tabColor = config.tab_color
        elif fmt == "csv":
            df.to_csv(path, index=False, encoding="utf-8-sig")
        else:  # parquet
            df.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(f"Failed to write {path.name} as {fmt}: {exc}") from exc


def export_master_table(
    df: pd.DataFrame,
    output_dir: str | Path,
    config: OutputConfig | None = None,
) -> Path:
    """Write the master table to ``{output_dir}/{file_name}.{format}``.

    The output directory is created if it does not exist. An existing
    artifact with the same name is replaced.

    Returns:
        Path of the written artifact.

    Raises:
        ExportError: If the write fails.
    """
    config = config or OutputConfig()
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    final_path = out / f"{config.file_name}.{config.output_format}"
    fd, tmp_name = tempfile.mkstemp(
        dir=out, prefix=f".{config.file_name}.", suffix=f".{config.output_format}"
    )
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        _write_dataframe(df, tmp_path, config)
        os.replace(tmp_path, final_path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()

    logger.info(
        "Exported master table -> %s (%d rows, %d cols)",
        final_path,
        len(df),
        len(df.columns),
    )
    return final_path
