"""
Header resolution: maps raw CSV column labels to canonical field names.
"""
import re
from typing import Dict, Optional

_NON_ALPHA = re.compile(r"[^a-z]")


class HeaderResolver:
    """Resolves raw headers (or positional indices) against a header map."""

    def __init__(self, header_map: Dict[str, str]):
        """
        Initialize header resolver.

        Args:
            header_map: Normalized header -> canonical field. Positional
                entries use the column index as a string key ("0").
        """
        self.header_map = {str(k): v for k, v in header_map.items()}

    @staticmethod
    def normalize_header(header: Optional[str]) -> Optional[str]:
        """Lowercase a header and strip everything that is not a-z."""
        if not header:
            return None
        return _NON_ALPHA.sub("", header.lower())

    def is_known(self, header: Optional[str]) -> bool:
        """Check whether a header resolves by name alone."""
        normalized = self.normalize_header(header)
        return bool(normalized) and normalized in self.header_map

    def resolve(self, header: Optional[str], index: Optional[int] = None) -> Optional[str]:
        """
        Resolve a header to its canonical field.

        Args:
            header: Raw column label
            index: Zero-based column position, used when the label is unknown

        Returns:
            Canonical field name, or None when the column should be dropped
        """
        normalized = self.normalize_header(header)
        if normalized and normalized in self.header_map:
            return self.header_map[normalized]
        if index is not None:
            return self.header_map.get(str(index))
        return None
