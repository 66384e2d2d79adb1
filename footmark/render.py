"""Document render pipeline.

    raw text
      -> front matter split
      -> extract_footnotes      (cleaned text, definitions)
      -> markdown-it parse      (footnote_refs rule annotates text tokens)
      -> body render            (FootnoteReference registers / looks up numbers)
      -> FootnoteList           (reads the final registry state)
      -> page wrapper

Every call gets its own FootnoteRegistry. It is open only for the duration of
the render and emptied afterwards, including when rendering raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from footmark.annotate import FootnoteAnnotator
from footmark.config import RenderOptions
from footmark.convert import ANNOTATOR_ENV_KEY, REGISTRY_ENV_KEY, build_markdown
from footmark.extract import Definition, extract_footnotes
from footmark.footnotes import FootnoteList
from footmark.registry import FootnoteRegistry, RegisteredFootnote
from footmark.template import render_page
from footmark.utils import parse_frontmatter

logger = logging.getLogger(__name__)


@dataclass
class RenderedDocument:
    """Result of rendering one document."""

    html: str
    body_html: str
    footnotes_html: str = ""
    footnotes: tuple[RegisteredFootnote, ...] = ()
    definitions: list[Definition] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    title: str | None = None

    @property
    def unused_definitions(self) -> list[Definition]:
        """Definitions that no reference in the body pointed at."""
        used = {f.id for f in self.footnotes}
        return [d for d in self.definitions if d.id not in used]

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "metadata": self.metadata,
            "footnotes": [
                {"id": f.id, "number": f.number, "content": f.content}
                for f in self.footnotes
            ],
            "unused_definitions": [
                {"id": d.id, "content": d.content} for d in self.unused_definitions
            ],
            "body_html": self.body_html,
            "footnotes_html": self.footnotes_html,
        }


def render_markdown(text: str, options: RenderOptions | None = None) -> RenderedDocument:
    """Render a markdown document with footnotes to HTML."""
    options = options or RenderOptions()
    metadata, body = parse_frontmatter(text or "")

    definitions: list[Definition] = []
    env: dict = {}
    if options.auto_footnotes:
        body, definitions = extract_footnotes(body, options.dialect)
        env[ANNOTATOR_ENV_KEY] = FootnoteAnnotator(definitions, options.dialect)

    md = build_markdown(options)
    tokens = md.parse(body, env)

    with FootnoteRegistry() as registry:
        env[REGISTRY_ENV_KEY] = registry
        try:
            body_html = md.renderer.render(tokens, md.options, env)
            # Definitions render as plain inline markdown: no nested footnotes
            footnote_list = FootnoteList(registry, render_content=md.renderInline)
            footnotes_html = footnote_list.render()
            footnotes = registry.entries
        finally:
            env.pop(REGISTRY_ENV_KEY, None)

    title = options.title or metadata.get("title")
    page = body_html + footnotes_html
    if options.standalone:
        page = render_page(
            body_html,
            footnotes_html,
            title=title,
            description=metadata.get("summary") or metadata.get("description"),
            pygments_style=options.pygments_style,
        )

    document = RenderedDocument(
        html=page,
        body_html=body_html,
        footnotes_html=footnotes_html,
        footnotes=footnotes,
        definitions=definitions,
        metadata=metadata,
        title=title,
    )
    if document.unused_definitions:
        logger.info(
            "%d footnote definition(s) never referenced: %s",
            len(document.unused_definitions),
            ", ".join(d.id for d in document.unused_definitions),
        )
    return document
