"""Markdown tidy-up applied after footnote definitions are removed.

Lines inside fenced code blocks are left exactly as written.
"""

from __future__ import annotations

import re

_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")


def normalize_newlines(markdown: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return markdown.replace("\r\n", "\n").replace("\r", "\n")


def fenced_lines(lines: list[str]) -> list[bool]:
    """Flag each line that belongs to a fenced code block, delimiters included.

    An unclosed fence runs to the end of the document.
    """
    flags = []
    fence: str | None = None
    for line in lines:
        match = _FENCE_RE.match(line)
        if match:
            marker = match.group(1)
            if fence is None:
                fence = marker
                flags.append(True)
                continue
            if marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
                flags.append(True)
                continue
        flags.append(fence is not None)
    return flags


def strip_trailing_whitespace(markdown: str) -> str:
    """Remove trailing spaces and tabs from every line outside code fences.

    Lines ending in two spaces are markdown hard breaks, so those keep
    exactly two.
    """
    lines = markdown.split("\n")
    out = []
    for line, fenced in zip(lines, fenced_lines(lines)):
        if fenced:
            out.append(line)
            continue
        stripped = line.rstrip(" \t")
        if line.endswith("  ") and stripped:
            stripped += "  "
        out.append(stripped)
    return "\n".join(out)


def collapse_blank_lines(markdown: str) -> str:
    """Collapse 3+ consecutive blank lines outside code fences down to 2."""
    lines = markdown.split("\n")
    out = []
    blanks = 0
    for line, fenced in zip(lines, fenced_lines(lines)):
        if line == "" and not fenced:
            blanks += 1
            if blanks > 2:
                continue
        else:
            blanks = 0
        out.append(line)
    return "\n".join(out)


def clean_markdown(markdown: str) -> str:
    """Run all markdown tidy-up steps.

    Order matters:
    1. Normalize line endings (so later patterns only see LF)
    2. Strip trailing whitespace (blank lines become truly empty)
    3. Collapse excess blank lines left behind by removed definitions
    """
    if not markdown:
        return markdown

    markdown = normalize_newlines(markdown)
    markdown = strip_trailing_whitespace(markdown)
    markdown = collapse_blank_lines(markdown)
    return markdown.strip()
