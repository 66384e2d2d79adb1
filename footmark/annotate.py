"""Inline substitution of footnote reference markers."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from footmark.extract import REFERENCE_PATTERNS, Definition, Dialect
from footmark.nodes import FootnoteRef, FootnoteRepeat, Inline, Text

logger = logging.getLogger(__name__)


class FootnoteAnnotator:
    """Split text runs into literal text and footnote reference nodes.

    One annotator covers one transformation pass over a document. The first
    reference to each defined id carries the definition content; every
    later reference to that id is a content-free repeat, even when it sits
    in a different text run.
    """

    def __init__(
        self,
        definitions: Iterable[Definition],
        dialect: Dialect = Dialect.CARET,
    ):
        self.dialect = Dialect(dialect)
        self._contents = {d.id: d.content for d in definitions}
        self._pattern = REFERENCE_PATTERNS[self.dialect]
        self._seen: set[str] = set()

    def annotate(self, text: str) -> list[Inline]:
        nodes: list[Inline] = []
        pending = ""
        pos = 0

        for match in self._pattern.finditer(text):
            fid = match.group(1)
            if fid not in self._contents:
                logger.debug("No definition for footnote %s, leaving marker as text", fid)
                continue

            pending += text[pos:match.start()]
            if pending:
                nodes.append(Text(pending))
                pending = ""

            if fid in self._seen:
                nodes.append(FootnoteRepeat(fid))
            else:
                self._seen.add(fid)
                nodes.append(FootnoteRef(fid, self._contents[fid]))
            pos = match.end()

        pending += text[pos:]
        if pending:
            nodes.append(Text(pending))
        return nodes


def annotate_footnotes(
    text: str,
    definitions: Iterable[Definition],
    dialect: Dialect = Dialect.CARET,
) -> list[Inline]:
    """Annotate a single text in one pass."""
    return FootnoteAnnotator(definitions, dialect).annotate(text)
