"""Markdown -> HTML conversion via markdown-it-py.

The parser is extended with a core rule that splits text tokens into
footnote reference tokens, and with render rules for headings, links,
images, blockquotes and code.

Per-render state travels in the markdown-it ``env`` dict:

    env[ANNOTATOR_ENV_KEY]   FootnoteAnnotator for this parse (optional)
    env[REGISTRY_ENV_KEY]    open FootnoteRegistry for this render (required
                             as soon as a footnote_ref token is rendered)
"""

from __future__ import annotations

import html
import logging

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from footmark.annotate import FootnoteAnnotator
from footmark.config import RenderOptions
from footmark.errors import RegistryScopeError
from footmark.footnotes import FootnoteReference
from footmark.highlight import render_code_block
from footmark.media import embed_image, image_size
from footmark.nodes import Text
from footmark.utils import slugify

logger = logging.getLogger(__name__)

ANNOTATOR_ENV_KEY = "footnote_annotator"
REGISTRY_ENV_KEY = "footnote_registry"

QUOTE_KINDS = ("note", "warning", "tip")


def build_markdown(options: RenderOptions | None = None) -> MarkdownIt:
    """Create a markdown-it parser configured for footmark documents."""
    options = options or RenderOptions()
    md = MarkdownIt("commonmark", {"html": True}).enable("table").enable("strikethrough")
    # Before text_join, so escaped markers are still text_special tokens
    md.core.ruler.before("text_join", "footnote_refs", footnote_refs_rule)

    default_fence = md.renderer.rules["fence"]
    default_code_block = md.renderer.rules["code_block"]

    def render_heading_open(tokens, idx, options_, env):
        token = tokens[idx]
        inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
        slug = _unique_slug(slugify(_plain_text(inline)), env)
        if slug:
            token.attrSet("id", slug)
        out = md.renderer.renderToken(tokens, idx, options_, env)
        if slug:
            out += f'<a href="#{html.escape(slug)}" class="anchor" aria-hidden="true"></a>'
        return out

    def render_link_open(tokens, idx, options_, env):
        token = tokens[idx]
        if is_external_href(token.attrGet("href") or ""):
            token.attrSet("target", "_blank")
            token.attrSet("rel", "noopener noreferrer")
        return md.renderer.renderToken(tokens, idx, options_, env)

    def render_image(tokens, idx, options_, env):
        token = tokens[idx]
        alt = md.renderer.renderInlineAsText(token.children or [], options_, env)
        src = token.attrGet("src") or ""
        title = token.attrGet("title")

        size = image_size(src, options.base_dir)
        if options.embed_images:
            data_uri = embed_image(src, options.base_dir, max_width=options.image_width)
            if data_uri:
                src = data_uri

        attrs = f' src="{html.escape(src)}" alt="{html.escape(alt)}"'
        if size:
            width, height = size
            attrs += (
                f' width="{width}" height="{height}"'
                f' style="max-width:{width}px;aspect-ratio:{width} / {height}"'
            )
        if title:
            attrs += f' title="{html.escape(title)}"'

        caption = f"<figcaption>{html.escape(alt)}</figcaption>" if alt else ""
        return f'<figure class="image"><img{attrs} loading="lazy">{caption}</figure>'

    def render_blockquote_open(tokens, idx, options_, env):
        tokens[idx].attrJoin("class", f"custom-blockquote {_quote_kind(tokens, idx)}")
        return md.renderer.renderToken(tokens, idx, options_, env)

    def render_code_inline(tokens, idx, options_, env):
        return f'<code class="inline-code">{html.escape(tokens[idx].content)}</code>'

    def render_fence(tokens, idx, options_, env):
        if not options.highlight:
            return default_fence(tokens, idx, options_, env)
        token = tokens[idx]
        return render_code_block(token.content, fence_language(token.info), options.pygments_style)

    def render_indented_code(tokens, idx, options_, env):
        if not options.highlight:
            return default_code_block(tokens, idx, options_, env)
        return render_code_block(tokens[idx].content, "", options.pygments_style)

    md.renderer.rules["heading_open"] = render_heading_open
    md.renderer.rules["link_open"] = render_link_open
    md.renderer.rules["image"] = render_image
    md.renderer.rules["blockquote_open"] = render_blockquote_open
    md.renderer.rules["code_inline"] = render_code_inline
    md.renderer.rules["fence"] = render_fence
    md.renderer.rules["code_block"] = render_indented_code
    md.renderer.rules["footnote_ref"] = render_footnote_ref
    return md


def footnote_refs_rule(state: StateCore) -> None:
    """Core rule: replace footnote markers in text tokens with footnote_ref tokens."""
    env = state.env if isinstance(state.env, dict) else {}
    annotator: FootnoteAnnotator | None = env.get(ANNOTATOR_ENV_KEY)
    if annotator is None:
        return

    # Document order, so the first marker in the text is the one with content
    for token in state.tokens:
        if token.type != "inline" or not token.children:
            continue
        children: list[Token] = []
        for child in token.children:
            if child.type != "text":
                children.append(child)
                continue
            for node in annotator.annotate(child.content):
                if isinstance(node, Text):
                    children.append(Token("text", "", 0, content=node.text, level=child.level))
                else:
                    ref = Token("footnote_ref", "", 0, level=child.level)
                    ref.meta = {"node": node}
                    children.append(ref)
        token.children = children


def render_footnote_ref(tokens, idx, options, env) -> str:
    registry = env.get(REGISTRY_ENV_KEY) if isinstance(env, dict) else None
    if registry is None:
        raise RegistryScopeError("footnote_ref token rendered without a footnote registry")

    token = tokens[idx]
    # One FootnoteReference per token and registry: re-rendering never re-registers
    reference = token.meta.get("reference")
    if reference is None or reference.registry is not registry:
        reference = FootnoteReference(token.meta["node"], registry)
        token.meta["reference"] = reference
    return reference.render()


def is_external_href(href: str) -> bool:
    """Links leaving the site open in a new tab."""
    if href.startswith("#"):
        return False
    return not (href.startswith("/") and not href.startswith("//"))


def fence_language(info: str) -> str:
    """Language name from a fence info string (``python``, ``language-js``)."""
    lang = info.strip().split(maxsplit=1)[0] if info.strip() else ""
    for prefix in ("language-", "lang-"):
        if lang.startswith(prefix):
            lang = lang[len(prefix):]
    return lang


# --- Private helpers ---


def _plain_text(inline: Token | None) -> str:
    if inline is None or inline.type != "inline":
        return ""
    if not inline.children:
        return inline.content
    return "".join(
        child.content for child in inline.children if child.type in ("text", "code_inline")
    )


def _unique_slug(slug: str, env) -> str:
    if not slug or not isinstance(env, dict):
        return slug
    seen = env.setdefault("heading_slugs", {})
    count = seen.get(slug, 0)
    seen[slug] = count + 1
    return slug if count == 0 else f"{slug}-{count}"


def _quote_kind(tokens: list[Token], idx: int) -> str:
    """Classify a blockquote by its first line: note, warning, tip or default."""
    for token in tokens[idx + 1:]:
        if token.type == "blockquote_close":
            break
        if token.type == "inline":
            text = token.content.strip().lower()
            for kind in QUOTE_KINDS:
                if text.startswith((f"{kind}:", f"{kind} ")):
                    return kind
            break
    return "default"
