"""
Record parser: turns one raw sheet export into validated perk records.
"""
import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple

from .chapter_inferrer import infer_chapter
from .config import CANONICAL_FIELDS, PipelineConfig
from .field_transformer import FieldTransformer
from .header_resolver import HeaderResolver
from .io_utils import read_sheet_lines
from .provenance import enhance_provenance

logger = logging.getLogger(__name__)

MIN_KNOWN_HEADERS = 2


@dataclass
class ParseResult:
    """Accepted records of one sheet and the highest cost among them."""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    max_cost: int = 0


class RecordParser:
    """Parses sheet exports into canonical records."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        """
        Initialize record parser.

        Args:
            config: Pipeline configuration; defaults are used when omitted
        """
        self.config = config or PipelineConfig.default()
        self.header_resolver = HeaderResolver(self.config.header_map)
        self.field_transformer = FieldTransformer(self.config.field_transforms, self.config.cost_suffix)

    def detect_headers(self, first_line: str) -> Tuple[List[str], bool]:
        """
        Decide whether the first line is a real header row.

        Returns:
            Tuple of (headers to map with, has_header_row). Without a header
            row the configured fallback headers are returned.
        """
        candidates = [h.strip() for h in first_line.split(',')]
        known = sum(1 for h in candidates if self.header_resolver.is_known(h))
        if known >= MIN_KNOWN_HEADERS:
            return candidates, True
        return list(self.config.fallback_headers), False

    def resolve_fields(self, headers: List[str]) -> List[Optional[str]]:
        """Map each header position to its canonical field (None drops the column)."""
        return [self.header_resolver.resolve(h, index) for index, h in enumerate(headers)]

    def build_record(self, fields: List[Optional[str]], cells: List[str]) -> Dict[str, Any]:
        """Transform one CSV row into a record with every canonical field set."""
        values: Dict[str, str] = {}
        for field_name, cell in zip(fields, cells):
            if field_name:
                values[field_name] = cell

        return {
            field_name: self.field_transformer.transform(field_name, values.get(field_name, ""))
            for field_name in CANONICAL_FIELDS
        }

    def parse_file(self, source_file: Path) -> ParseResult:
        """
        Parse a single sheet file.

        Args:
            source_file: Path to the CSV export

        Returns:
            ParseResult with accepted records and their maximum cost

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        source_file = Path(source_file)
        lines = read_sheet_lines(source_file)
        result = ParseResult()
        if not lines:
            logger.debug(f"{source_file} is empty")
            return result

        # Stray title row above the real header
        if len([token for token in lines[0].split(',') if token]) == 1 and len(lines) > 1:
            lines = lines[1:]

        _, has_header_row = self.detect_headers(lines[0])
        reader = csv.reader(io.StringIO('\n'.join(lines)))
        headers = next(reader, []) if has_header_row else list(self.config.fallback_headers)
        fields = self.resolve_fields(headers)

        has_chapter_column = "chapter" in fields
        fallback_chapter = infer_chapter(source_file.name)

        for cells in reader:
            record = self.build_record(fields, cells)
            if not has_chapter_column or not record["chapter"]:
                record["chapter"] = fallback_chapter
            if not record["name"] or not record["description"]:
                continue

            enhance_provenance(record, source_file, len(result.rows) + 1)
            cost = record["cost"]
            if isinstance(cost, int) and cost > result.max_cost:
                result.max_cost = cost
            result.rows.append(record)

        logger.debug(
            f"Parsed {source_file}: {len(result.rows)} records "
            f"(header row: {has_header_row}, chapter column: {has_chapter_column})"
        )
        return result
