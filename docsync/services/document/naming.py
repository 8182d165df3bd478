"""Filename derivation for new and duplicated documents."""

import re
from typing import Container

STEM_MAX_LENGTH = 60
FALLBACK_STEM = "untitled"
DUPLICATE_PREFIX = "copy-of-"


def slugify(title: str) -> str:
    """Lowercase, dash-separated, filesystem-safe stem for a title."""
    stem = title.lower()
    stem = re.sub(r"[^a-z0-9\s-]", "", stem)
    stem = re.sub(r"\s+", "-", stem)
    stem = re.sub(r"-+", "-", stem)
    stem = stem.strip("-")[:STEM_MAX_LENGTH].strip("-")
    return stem or FALLBACK_STEM


def unique_filename(stem: str, taken: Container[str], extension: str = ".md") -> str:
    """
    First free filename for stem, appending -1, -2, ... on collision.

    Args:
        stem: Desired filename without extension
        taken: Filenames already in use
        extension: Document extension
    """
    candidate = f"{stem}{extension}"
    counter = 1
    while candidate in taken:
        candidate = f"{stem}-{counter}{extension}"
        counter += 1
    return candidate


def duplicate_stem(filename: str, extension: str = ".md") -> str:
    stem = filename[: -len(extension)] if filename.endswith(extension) else filename
    if not stem.startswith(DUPLICATE_PREFIX):
        stem = DUPLICATE_PREFIX + stem
    return stem[:STEM_MAX_LENGTH].rstrip("-") or FALLBACK_STEM
