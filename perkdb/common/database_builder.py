"""
Database builder: parses every sheet group and writes the JSON database.
"""
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

from .chapter_splitter import ChapterSplitter, GroupDocument
from .config import PipelineConfig
from .io_utils import list_group_folders, list_sheet_files, write_json_document
from .record_parser import ParseResult, RecordParser

logger = logging.getLogger(__name__)

_COPY_PREFIX = re.compile(r"^Copy of\s*", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^\w-]+", re.ASCII)
_EDGE_UNDERSCORES = re.compile(r"^_+|_+$")


def slugify(name: str) -> str:
    """Turn a folder name into a lowercase, filesystem-safe document name."""
    slug = _COPY_PREFIX.sub("", name)
    slug = slug.replace("'", "")
    slug = _WHITESPACE.sub("_", slug)
    slug = _UNSAFE.sub("", slug)
    slug = _EDGE_UNDERSCORES.sub("", slug)
    return slug.lower()


class DatabaseBuilder:
    """Builds one JSON document per sheet group, plus split chapter documents."""

    def __init__(self, sheets_root: Path, out_root: Path, config: Optional[PipelineConfig] = None):
        """
        Initialize database builder.

        Args:
            sheets_root: Directory holding one subdirectory per sheet group
            out_root: Directory the JSON documents are written to
            config: Pipeline configuration; defaults are used when omitted
        """
        self.sheets_root = Path(sheets_root)
        self.out_root = Path(out_root)
        self.config = config or PipelineConfig.default()
        self.parser = RecordParser(self.config)
        self.splitter = ChapterSplitter(self.config.split_chapters)

    def parse_group_files(self, files: List[Path]) -> Dict[int, Union[ParseResult, Exception]]:
        """
        Parse all files of a group concurrently.

        Returns:
            1-based listing position -> ParseResult, or the exception raised
            while parsing that file
        """
        results: Dict[int, Union[ParseResult, Exception]] = {}
        if not files:
            return results

        max_workers = self.config.max_workers or len(files)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(self.parser.parse_file, path) for path in files]

        for position, (path, future) in enumerate(zip(files, futures), 1):
            try:
                results[position] = future.result()
            except Exception as e:
                logger.error(f"Error parsing {path.name}: {e}")
                results[position] = e
        return results

    def build_group(self, folder: Path) -> Dict[str, Any]:
        """
        Parse, split and write one sheet group.

        Args:
            folder: Group directory

        Returns:
            Dictionary with group statistics
        """
        stats: Dict[str, Any] = {
            "folder": folder.name,
            "files_parsed": 0,
            "files_failed": 0,
            "files_empty": 0,
            "records_written": 0,
            "max_cost": 0,
            "written": False,
            "output_file": None,
            "split_documents": {},
            "errors": [],
        }

        document_name = slugify(folder.name)
        if not document_name:
            logger.warning(f"Skipping folder with no usable name: {folder.name!r}")
            return stats

        files = list_sheet_files(folder, self.config.sheet_suffix)
        results = self.parse_group_files(files)

        db: GroupDocument = {}
        for position, path in enumerate(files, 1):
            result = results[position]
            if isinstance(result, Exception):
                stats["files_failed"] += 1
                stats["errors"].append(f"{folder.name}/{path.name}: {result}")
                continue
            stats["files_parsed"] += 1
            if not result.rows:
                stats["files_empty"] += 1
                logger.warning(f"Skipping empty: {folder.name}/{path.name}")
                continue
            db[position] = result.rows
            stats["max_cost"] = max(stats["max_cost"], result.max_cost)
            logger.info(f"{folder.name}/{path.name} → {len(result.rows)} rows, max CP: {result.max_cost}")

        if not db:
            logger.warning(f"Skipping folder with no rows: {folder.name}")
            return stats

        for output_name, split_document in self.splitter.split(db).items():
            write_json_document(split_document, self.out_root / f"{output_name}.json")
            stats["split_documents"][output_name] = len(split_document[1])

        output_path = write_json_document(db, self.out_root / f"{document_name}.json")
        stats["written"] = True
        stats["output_file"] = str(output_path)
        stats["records_written"] = sum(len(rows) for rows in db.values())
        logger.info(f'Wrote "{folder.name}"')
        return stats

    def build(self) -> Dict[str, Any]:
        """
        Build the whole database from the sheets root.

        Returns:
            Dictionary with run statistics

        Raises:
            FileNotFoundError: If the sheets root does not exist
        """
        summary: Dict[str, Any] = {
            "folders_processed": 0,
            "folders_written": 0,
            "files_parsed": 0,
            "files_failed": 0,
            "files_empty": 0,
            "records_written": 0,
            "split_documents": {},
            "max_cost": 0,
            "errors": [],
        }

        folders = list_group_folders(self.sheets_root)
        logger.info(f"Found {len(folders)} sheet groups in {self.sheets_root}")

        for folder in folders:
            stats = self.build_group(folder)
            summary["folders_processed"] += 1
            summary["folders_written"] += int(stats["written"])
            for key in ("files_parsed", "files_failed", "files_empty", "records_written"):
                summary[key] += stats[key]
            summary["max_cost"] = max(summary["max_cost"], stats["max_cost"])
            summary["errors"].extend(stats["errors"])

            for output_name, count in stats["split_documents"].items():
                if output_name in summary["split_documents"]:
                    logger.warning(f"Split document {output_name}.json overwritten by {folder.name}")
                summary["split_documents"][output_name] = count

        logger.info(f"Highest CP found: {summary['max_cost']}")
        return summary
