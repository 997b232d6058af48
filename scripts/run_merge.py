"""
Operator script: merge the ERA5 text exports under the root directory.

Usage:
    uv run python scripts/run_merge.py                       # root from $ONCC_MAIN
    uv run python scripts/run_merge.py --root D:/ONCC_panoply_integrater
    uv run python scripts/run_merge.py --config era5merge.yaml --workers 4

Reads <root>/Input/*.txt and writes <root>/Outcome/master_database.xlsx.

WARNING: everything already in <root>/Outcome is deleted before the new
file is written (unless output.clear_output_dir is false in the config).
"""

from __future__ import annotations

import argparse
import logging
import sys

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_merge")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.split("\n\n")[0])
    parser.add_argument("--config", help="YAML config file (overrides the defaults)")
    parser.add_argument("--root", help="Root directory (overrides $ONCC_MAIN)")
    parser.add_argument("--workers", type=int, help="Parser threads")
    parser.add_argument("--format", choices=["xlsx", "csv", "parquet"], help="Output format")
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    import era5_merge
    from era5_merge.config import PathsConfig
    from era5_merge.exceptions import Era5MergeError

    args = _parse_args(sys.argv[1:] if argv is None else argv)

    if args.config:
        config = era5_merge.load_config(args.config)
    else:
        config = era5_merge.default_config(args.root)
    if args.config and args.root:
        config.paths = PathsConfig(**{**config.paths.model_dump(), "root_dir": args.root})
    if args.workers:
        config.max_workers = args.workers
    if args.format:
        config.output.output_format = args.format

    log.info("=" * 70)
    log.info("Input  : %s", config.paths.input_dir)
    log.info("Output : %s", config.paths.output_dir)
    log.info("=" * 70)

    try:
        result = era5_merge.run(config)
    except Era5MergeError as exc:
        log.error("Run aborted: %s", exc)
        return 1

    for skipped in result.skipped:
        log.warning("SKIPPED  %s  (%s)", skipped.path.name, skipped.reason)
    log.info(
        "Done: %s (%s rows x %d cols)",
        result.output_path,
        f"{len(result.master):,}",
        len(result.master.columns),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
