"""Frontmatter codec for document files.

A document may start with a small header of ``key: value`` lines fenced by
``---`` lines::

    ---
    title: "Weekly Report"
    emoji: "📊"
    category: "Report"
    last_edited_by: "User"
    ---
    # Weekly Report

Parsing never fails: a missing or unterminated header means "no header".
"""

import re

DELIMITER = "---"

# Known keys are emitted first, in this order; anything else follows as found.
KNOWN_KEYS = ("title", "emoji", "category", "last_edited_by")

# Closing fence must start a line; the header between fences may be empty
_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse(raw: str) -> tuple[dict[str, str], str]:
    """Split raw file text into (metadata, body).

    Lines in the header without a colon are ignored.
    """
    match = _FRONTMATTER_RE.match(raw)
    if not match:
        return {}, raw

    meta: dict[str, str] = {}
    for line in (match.group(1) or "").splitlines():
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        meta[key] = _unquote(value.strip())

    return meta, raw[match.end():]


def strip(raw: str) -> str:
    """Return only the body of raw file text."""
    return parse(raw)[1]


def build(meta: dict[str, str | None]) -> str:
    """Render metadata as a fenced header ending in a newline.

    Keys with empty values are omitted. Values are always double-quoted and
    folded onto one line.
    """
    ordered = [k for k in KNOWN_KEYS if k in meta]
    ordered += [k for k in meta if k not in KNOWN_KEYS]

    lines = [DELIMITER]
    for key in ordered:
        value = meta[key]
        if not value or not key.strip() or ":" in key:
            continue
        text = " ".join(str(value).splitlines())
        lines.append(f'{key.strip()}: "{text}"')
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n"


def compose(meta: dict[str, str | None], body: str) -> str:
    """Header plus body, ready to write to disk."""
    return build(meta) + body
