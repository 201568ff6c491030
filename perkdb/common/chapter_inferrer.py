"""
Fallback chapter labels derived from sheet filenames.
"""
import os
import re

_SEPARATORS = re.compile(r"[-:_]")
_PARENTHESIZED = re.compile(r"\([^)]*\)")
_NOISE = re.compile(r"\d+|Perks", re.IGNORECASE)


def _clean_segment(segment: str) -> str:
    segment = _PARENTHESIZED.sub("", segment)
    segment = _NOISE.sub("", segment)
    return segment.replace("_", " ").strip()


def infer_chapter(filename: str) -> str:
    """
    Extract a chapter label from a sheet filename.

    "Jumpchain Perks - Waifu Catalogue.csv" -> "Waifu Catalogue",
    "set-1.csv" -> "Set". When nothing survives cleaning the
    extension-stripped filename is returned as-is.
    """
    name = os.path.splitext(os.path.basename(filename))[0]
    segments = [s.strip() for s in _SEPARATORS.split(name) if s.strip()]

    for segment in reversed(segments):
        label = _clean_segment(segment)
        if label:
            return label[0].upper() + label[1:]
    return name
