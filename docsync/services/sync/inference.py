"""Metadata inference for documents discovered on disk."""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from docsync.models.document import DEFAULT_CATEGORY, DEFAULT_EMOJI, DocCategory

_H1_RE = re.compile(r"^#[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$", re.MULTILINE)


@dataclass(frozen=True)
class CategoryRule:
    """Assigns category when predicate matches a lowercased title."""

    predicate: Callable[[str], bool]
    category: DocCategory

    def matches(self, title: str) -> bool:
        return self.predicate(title.lower())


def keyword_rule(category: DocCategory, *keywords: str) -> CategoryRule:
    """Rule that fires when any keyword appears as a whole word."""
    pattern = re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")\b")
    return CategoryRule(predicate=lambda title: bool(pattern.search(title)), category=category)


# First match wins
DEFAULT_CATEGORY_RULES: tuple[CategoryRule, ...] = (
    keyword_rule(DocCategory.SECURITY, "security", "vulnerability", "vulnerabilities", "cve"),
    keyword_rule(DocCategory.AI_PULSE, "pulse", "daily"),
    keyword_rule(DocCategory.REPORT, "report", "reports"),
    keyword_rule(DocCategory.GUIDE, "guide", "tutorial", "howto", "how-to"),
)


def infer_category(
    title: str, rules: Iterable[CategoryRule] = DEFAULT_CATEGORY_RULES
) -> DocCategory:
    for rule in rules:
        if rule.matches(title):
            return rule.category
    return DEFAULT_CATEGORY


def title_from_filename(filename: str, extension: str = ".md") -> str:
    stem = filename[: -len(extension)] if filename.endswith(extension) else filename
    return re.sub(r"[-_]+", " ", stem).strip() or stem


def first_heading(body: str) -> str | None:
    """Text of the first top-level (``# ``) heading, if any."""
    match = _H1_RE.search(body)
    return match.group(1).strip() if match else None


def infer_metadata(
    filename: str,
    meta: dict[str, str],
    body: str,
    extension: str = ".md",
    rules: Sequence[CategoryRule] = DEFAULT_CATEGORY_RULES,
) -> dict[str, str]:
    """
    Derive title, emoji, and category for a document.

    Args:
        filename: Document filename, used as the last-resort title
        meta: Parsed frontmatter
        body: Document body
        extension: Document extension stripped from filename
        rules: Ordered category rules applied to the derived title

    Returns:
        Dictionary with title, emoji, and category
    """
    title = meta.get("title") or first_heading(body) or title_from_filename(filename, extension)
    emoji = meta.get("emoji") or DEFAULT_EMOJI

    category = meta.get("category")
    if not DocCategory.is_valid(category):
        category = infer_category(title, rules).value

    return {"title": title, "emoji": emoji, "category": category}
