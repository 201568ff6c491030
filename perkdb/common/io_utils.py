"""
IO utilities for reading sheet exports and writing output documents.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


def list_group_folders(sheets_root: Path) -> List[Path]:
    """
    List the dataset group folders directly under the sheets root.

    Raises:
        FileNotFoundError: If the sheets root does not exist
        NotADirectoryError: If the sheets root is not a directory
    """
    root = Path(sheets_root)
    if not root.exists():
        raise FileNotFoundError(f"Sheets root does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Sheets root is not a directory: {root}")
    return sorted((p for p in root.iterdir() if p.is_dir()), key=lambda p: p.name)


def list_sheet_files(folder: Path, suffix: str = ".csv") -> List[Path]:
    """List sheet files in a group folder, in name order."""
    return sorted(
        (p for p in Path(folder).iterdir() if p.is_file() and p.name.endswith(suffix)),
        key=lambda p: p.name,
    )


def read_sheet_lines(file_path: Path) -> List[str]:
    """Read a whole sheet as UTF-8 (BOM tolerated) and return its non-empty lines."""
    with open(file_path, 'r', encoding='utf-8-sig', newline='') as f:
        content = f.read()
    return [line for line in content.split('\n') if line]


def write_json_document(document: Dict[Any, Any], output_path: Path) -> Path:
    """Write a document as indented UTF-8 JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(document, f, indent=2, ensure_ascii=False)
    logger.debug(f"Wrote {output_path}")
    return output_path
