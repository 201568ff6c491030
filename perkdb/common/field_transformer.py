"""
Per-field value cleanup for canonical record fields.
"""
import re
from typing import Any, Callable, Dict

_UNSIGNED_INT = re.compile(r"\+?\d+")
_CONTROL = re.compile(r"[\r\t]+")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")
_SOFT_WRAP = re.compile(r"(?<!\n)\n(?!\n)")
_WHITESPACE_RUN = re.compile(r"\s{2,}")


def to_integer(value: Any, suffix: str = "cp") -> int:
    """Parse a cost-like cell ("100cp", " 25 ") as a non-negative int, else 0."""
    if value is None:
        return 0
    text = str(value).strip()
    if suffix and text.lower().endswith(suffix.lower()):
        text = text[: -len(suffix)].strip()
    if not _UNSIGNED_INT.fullmatch(text):
        return 0
    return int(text)


def clean_description(value: Any) -> str:
    """Join soft-wrapped lines and collapse whitespace in description text."""
    text = "" if value is None else str(value)
    text = _CONTROL.sub("", text)
    text = _EXTRA_NEWLINES.sub("\n\n", text)
    text = _SOFT_WRAP.sub(" ", text)
    text = _WHITESPACE_RUN.sub(" ", text)
    return text.strip()


def strip_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


class FieldTransformer:
    """Applies the configured transform to each canonical field."""

    def __init__(self, field_transforms: Dict[str, str], cost_suffix: str = "cp"):
        """
        Initialize field transformer.

        Args:
            field_transforms: Canonical field -> transform name
                ("integer", "description" or "strip")
            cost_suffix: Unit marker stripped from integer fields

        Raises:
            ValueError: If a transform name is unknown
        """
        registry: Dict[str, Callable[[Any], Any]] = {
            "integer": lambda v: to_integer(v, cost_suffix),
            "description": clean_description,
            "strip": strip_text,
        }
        self.transforms: Dict[str, Callable[[Any], Any]] = {}
        for field_name, transform_name in field_transforms.items():
            if transform_name not in registry:
                raise ValueError(f"Unknown transform '{transform_name}' for field '{field_name}'")
            self.transforms[field_name] = registry[transform_name]

    def has_transform(self, field_name: str) -> bool:
        return field_name in self.transforms

    def transform(self, field_name: str, value: Any) -> Any:
        """Return the cleaned value; fields without a transform pass through."""
        transform = self.transforms.get(field_name)
        return transform(value) if transform else value
