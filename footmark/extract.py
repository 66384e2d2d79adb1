"""Footnote definition extraction.

Two marker dialects are supported. They are separate grammars and never mix:
a document is extracted with exactly one of them.

    caret    reference ^[1]   definition line  ^[1] Some citation
    bracket  reference [1]    definition line  [1] Some citation

Bracket definitions are only honoured for ids that are also referenced
inline, so numbered lists written as "[1] ..." survive when unreferenced.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from footmark._postprocess import clean_markdown, fenced_lines, normalize_newlines

logger = logging.getLogger(__name__)


class Dialect(str, Enum):
    CARET = "caret"
    BRACKET = "bracket"


@dataclass(frozen=True)
class Definition:
    """A footnote definition parsed from a definition line."""

    id: str
    content: str


# Inline reference markers, one per dialect
REFERENCE_PATTERNS: dict[Dialect, re.Pattern[str]] = {
    Dialect.CARET: re.compile(r"\^\[(\d+)\]"),
    # Not ^[1] (caret dialect), [text][1] or \[1], and not [1](url) or [1]: url
    Dialect.BRACKET: re.compile(r"(?<![\^\]\\])\[(\d+)\](?![(\[:])"),
}

DEFINITION_PATTERNS: dict[Dialect, re.Pattern[str]] = {
    Dialect.CARET: re.compile(r"^\^\[(\d+)\][ \t]+(.+?)[ \t]*$"),
    Dialect.BRACKET: re.compile(r"^\[(\d+)\][ \t]+(.+?)[ \t]*$"),
}

_CODE_SPAN_RE = re.compile(r"(`+).+?\1")


def extract_footnotes(
    text: str,
    dialect: Dialect = Dialect.CARET,
) -> tuple[str, list[Definition]]:
    """Remove footnote definition lines from a document.

    Returns:
        (cleaned_text, definitions). Definitions are in order of first
        appearance; a repeated id keeps its position but takes the content
        of the last definition.
    """
    if not text:
        return "", []

    dialect = Dialect(dialect)
    lines = normalize_newlines(text).split("\n")
    candidates = _find_definition_lines(lines, dialect)

    if dialect is Dialect.BRACKET:
        referenced = _referenced_ids(lines, candidates, dialect)
        candidates = {
            i: (fid, content)
            for i, (fid, content) in candidates.items()
            if fid in referenced
        }

    definitions: dict[str, Definition] = {}
    for fid, content in candidates.values():
        if fid in definitions:
            logger.warning("Footnote %s defined more than once, keeping the last", fid)
        definitions[fid] = Definition(id=fid, content=content)

    body = [line for i, line in enumerate(lines) if i not in candidates]
    cleaned = clean_markdown("\n".join(body))

    logger.debug("Extracted %d footnote definitions (%s)", len(definitions), dialect.value)
    return cleaned, list(definitions.values())


def definitions_from_mapping(mapping: Mapping[str, str]) -> list[Definition]:
    """Build definitions from a plain ``{id: content}`` mapping."""
    return [Definition(id=str(fid), content=content) for fid, content in mapping.items()]
# --- Private helpers ---


def _find_definition_lines(
    lines: list[str],
    dialect: Dialect,
) -> dict[int, tuple[str, str]]:
    """Map line index -> (id, content) for definition lines outside code fences."""
    pattern = DEFINITION_PATTERNS[dialect]
    found: dict[int, tuple[str, str]] = {}

    for i, (line, fenced) in enumerate(zip(lines, fenced_lines(lines))):
        if fenced:
            continue
        match = pattern.match(line)
        if match:
            found[i] = (match.group(1), match.group(2))

    return found


def _referenced_ids(
    lines: list[str],
    definition_lines: Mapping[int, tuple[str, str]],
    dialect: Dialect,
) -> set[str]:
    """Collect ids used as inline references in prose.

    Definition lines, fenced code and backtick code spans never reference
    anything: markers there are not turned into footnotes.
    """
    pattern = REFERENCE_PATTERNS[dialect]
    ids: set[str] = set()
    for i, (line, fenced) in enumerate(zip(lines, fenced_lines(lines))):
        if fenced or i in definition_lines:
            continue
        ids.update(pattern.findall(_CODE_SPAN_RE.sub("", line)))
    return ids
