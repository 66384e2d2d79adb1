"""HTML rendering of footnote references and the footnote list."""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Iterable
from enum import Enum

from footmark.annotate import FootnoteAnnotator
from footmark.extract import Definition, Dialect
from footmark.nodes import FootnoteRef, FootnoteRepeat, Text
from footmark.registry import FootnoteRegistry, definition_anchor, reference_anchor

logger = logging.getLogger(__name__)

ContentRenderer = Callable[[str], str]


class RefState(Enum):
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"
    CONTENT_MISSING = "content-missing"


class FootnoteReference:
    """An inline ``[n]`` marker bound to one reference node.

    The first ``resolve()`` registers the footnote (content-carrying node) or
    looks up its number (repeat node). The outcome is final: resolving or
    rendering again never touches the registry.
    """

    def __init__(self, node: FootnoteRef | FootnoteRepeat, registry: FootnoteRegistry):
        self.node = node
        self.registry = registry
        self.state = RefState.UNRESOLVED
        self.number: int | None = None

    @property
    def id(self) -> str:
        return self.node.id

    def resolve(self) -> RefState:
        if self.state is not RefState.UNRESOLVED:
            return self.state

        if isinstance(self.node, FootnoteRef):
            self.number = self.registry.register(self.node.id, self.node.content)
        else:
            self.number = self.registry.lookup(self.node.id)

        if self.number is None:
            logger.debug("Footnote %s referenced before it was registered", self.node.id)
            self.state = RefState.CONTENT_MISSING
        else:
            self.state = RefState.RESOLVED
        return self.state

    def render(self) -> str:
        if self.resolve() is not RefState.RESOLVED:
            return ""

        target = definition_anchor(self.id)
        # Only the content-carrying reference owns the back-link anchor
        anchor = ""
        if isinstance(self.node, FootnoteRef):
            anchor = f' id="{html.escape(reference_anchor(self.id))}"'

        return (
            f'<sup{anchor} class="footnote-ref">'
            f'<a href="#{html.escape(target)}" role="button" '
            f'data-footnote-target="{html.escape(target)}" data-footnote-block="start" '
            f'aria-label="Go to footnote {self.number}">[{self.number}]</a>'
            "</sup>"
        )


class FootnoteList:
    """The footnotes section rendered after the document body."""

    heading = "Footnotes"

    def __init__(
        self,
        registry: FootnoteRegistry,
        render_content: ContentRenderer = html.escape,
    ):
        self.registry = registry
        self.render_content = render_content

    def render(self) -> str:
        entries = self.registry.entries
        if not entries:
            return ""

        parts = [
            '<section class="footnotes" aria-labelledby="footnotes-heading">',
            f'<h3 id="footnotes-heading">{html.escape(self.heading)}</h3>',
            '<div class="footnote-list">',
        ]
        for entry in entries:
            parts.append(self._render_entry(entry.id, entry.number, entry.content))
        parts.append("</div>")
        parts.append("</section>")
        return "\n".join(parts) + "\n"

    def render_definition(self, footnote_id: str) -> str:
        """Render one definition; empty if the id was never registered."""
        number = self.registry.lookup(footnote_id)
        if number is None:
            return ""
        entry = self.registry.entries[number - 1]
        return self._render_entry(entry.id, entry.number, entry.content)

    def _render_entry(self, footnote_id: str, number: int, content: str) -> str:
        backref = reference_anchor(footnote_id)
        return (
            f'<div id="{html.escape(definition_anchor(footnote_id))}" class="footnote-definition">'
            f'<a href="#{html.escape(backref)}" class="footnote-backref" role="button" '
            f'data-footnote-target="{html.escape(backref)}" data-footnote-block="center" '
            f'aria-label="Go back to reference {number}">[{number}]</a>'
            f'<div class="footnote-content">{self.render_content(content)}</div>'
            "</div>"
        )


def render_text_with_footnotes(
    text: str,
    definitions: Iterable[Definition],
    registry: FootnoteRegistry,
    dialect: Dialect = Dialect.CARET,
    paragraph: bool = True,
    annotator: FootnoteAnnotator | None = None,
) -> str:
    """Render a plain text run with clickable footnote markers.

    Text is escaped, not parsed as markdown. The registry must be open.
    Pass the same ``annotator`` for every run of one document so only the
    first reference to an id carries content and the ``fn-ref`` anchor;
    without one, each call is treated as a document of its own.
    """
    if annotator is None:
        annotator = FootnoteAnnotator(definitions, dialect)

    parts = []
    for node in annotator.annotate(text):
        if isinstance(node, Text):
            parts.append(html.escape(node.text))
        else:
            parts.append(FootnoteReference(node, registry).render())

    body = "".join(parts)
    return f"<p>{body}</p>" if paragraph else body
