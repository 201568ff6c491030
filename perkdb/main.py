"""
Main orchestrator for building the perk database from sheet exports.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from perkdb.common.config import load_config
from perkdb.common.database_builder import DatabaseBuilder


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Build the perk JSON database from sheet exports")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--sheets-root", default="sheets", help="Root directory with one folder per sheet group")
    parser.add_argument("--out-root", default="data", help="Directory to write JSON documents to")
    parser.add_argument("--config", default="configs/pipeline.yaml", help="Pipeline configuration file (defaults used if missing)")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    sheets_root = Path(args.sheets_root)
    out_root = Path(args.out_root)

    try:
        config = load_config(args.config)
    except ValueError as e:
        logging.error(str(e))
        return 1

    if not sheets_root.is_dir():
        logging.error(f"Sheets root directory does not exist: {sheets_root}")
        return 1

    builder = DatabaseBuilder(sheets_root, out_root, config)
    try:
        summary = builder.build()
    except OSError as e:
        logging.error(f"Build failed: {e}")
        return 1

    # Print summary
    logging.info("=== Build Summary ===")
    logging.info(
        f"{summary['folders_written']}/{summary['folders_processed']} groups written, "
        f"{summary['records_written']} records"
    )
    for output_name, count in summary["split_documents"].items():
        logging.info(f"Split document {output_name}: {count} records")
    if summary["files_failed"]:
        logging.warning(f"{summary['files_failed']} files failed to parse")
        for error in summary["errors"]:
            logging.warning(f"  {error}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
