"""
Shared parsing, splitting and build components for the perk database.
"""
from .chapter_inferrer import infer_chapter
from .chapter_splitter import ChapterSplitter
from .config import CANONICAL_FIELDS, DEFAULT_CONFIG, PipelineConfig, load_config
from .database_builder import DatabaseBuilder, slugify
from .field_transformer import FieldTransformer, clean_description, strip_text, to_integer
from .header_resolver import HeaderResolver
from .record_parser import ParseResult, RecordParser

__all__ = [
    "CANONICAL_FIELDS",
    "DEFAULT_CONFIG",
    "ChapterSplitter",
    "DatabaseBuilder",
    "FieldTransformer",
    "HeaderResolver",
    "ParseResult",
    "PipelineConfig",
    "RecordParser",
    "clean_description",
    "infer_chapter",
    "load_config",
    "slugify",
    "strip_text",
    "to_integer",
]
