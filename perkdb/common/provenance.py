"""
Provenance tracking for parsed records.
"""
from pathlib import Path
from typing import Dict, Any, Union

SOURCE_KEY = "__source"
LINE_KEY = "__line"


def source_name(source_file: Union[str, Path]) -> str:
    """Name a record's originating sheet: the filename without extension."""
    return Path(source_file).stem


def enhance_provenance(record: Dict[str, Any], source_file: Union[str, Path], line: int) -> Dict[str, Any]:
    """
    Stamp origin metadata onto a record.

    Args:
        record: Transformed record
        source_file: Sheet the record was parsed from
        line: 1-based position among the sheet's accepted records

    Returns:
        The same record, with __source and __line set
    """
    if line < 1:
        raise ValueError(f"Record line must be 1-based, got {line}")
    record[SOURCE_KEY] = source_name(source_file)
    record[LINE_KEY] = line
    return record
