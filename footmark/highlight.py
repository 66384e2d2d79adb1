"""Code block rendering with Pygments syntax highlighting."""

from __future__ import annotations

import html
import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("//", "#", "<!--", "/*")

_COPY_ICON = (
    '<svg class="icon-copy" width="12" height="12" fill="none" stroke="currentColor" '
    'viewBox="0 0 24 24" aria-hidden="true">'
    '<rect x="9" y="9" width="13" height="13" rx="2" ry="2" stroke-width="2"/>'
    '<path d="M5 15H4a2 2 0 01-2-2V4a2 2 0 012-2h9a2 2 0 012 2v1" stroke-width="2"/>'
    "</svg>"
)
_CHECK_ICON = (
    '<svg class="icon-check" width="12" height="12" fill="currentColor" '
    'viewBox="0 0 20 20" aria-hidden="true">'
    '<path fill-rule="evenodd" d="M16.707 5.293a1 1 0 010 1.414l-8 8a1 1 0 01-1.414 0'
    'l-4-4a1 1 0 011.414-1.414L8 12.586l7.293-7.293a1 1 0 011.414 0z" clip-rule="evenodd"/>'
    "</svg>"
)


def is_comment_line(line: str) -> bool:
    """Whether a source line is a whole-line comment (dimmed when rendered)."""
    stripped = line.strip()
    if stripped.startswith(COMMENT_PREFIXES):
        return True
    # Continuation lines of a /* ... */ block
    return stripped.startswith("*") and not stripped.startswith("*/")


def highlight_lines(code: str, language: str = "", style: str = "default") -> list[str]:
    """Highlight code and return one HTML fragment per source line.

    Unknown languages fall back to plain text. Any other highlighting
    failure is logged and the lines are returned escaped.
    """
    lines = code.split("\n")
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return []

    lexer = TextLexer(stripnl=False)
    try:
        if language.strip():
            lexer = get_lexer_by_name(language.strip(), stripnl=False)
    except ClassNotFound:
        logger.debug("No lexer for language %r, rendering as plain text", language)

    try:
        formatter = HtmlFormatter(nowrap=True, style=style)
        highlighted = highlight("\n".join(lines), lexer, formatter)
    except Exception:
        logger.exception("Syntax highlighting failed for %r block", language or "plain")
        return [html.escape(line) for line in lines]

    # HtmlFormatter closes its spans at every line end, so lines split cleanly
    out = highlighted.rstrip("\n").split("\n")
    if len(out) != len(lines):
        logger.warning("Highlighted output changed line count, using plain text")
        return [html.escape(line) for line in lines]
    return out


def render_code_block(code: str, language: str = "", style: str = "default") -> str:
    """Render a code block with line numbers, a language label and a copy button."""
    source_lines = code.rstrip("\n").split("\n") if code.strip() else []
    rendered = highlight_lines(code, language, style)
    width = len(str(len(rendered))) + 1

    rows = []
    for number, (source, markup) in enumerate(zip(source_lines, rendered), start=1):
        dim = " comment" if is_comment_line(source) else ""
        rows.append(
            f'<span class="line"><span class="line-number" style="min-width:{width}ch">'
            f'{number}</span><span class="line-content{dim}">{markup}</span></span>'
        )

    label = ""
    if language:
        label = f'<span class="code-language">{html.escape(language)}</span>'
    lang_class = f" language-{html.escape(language)}" if language else ""

    return (
        '<div class="code-block">'
        f'<div class="code-toolbar">{label}'
        '<button type="button" class="copy-button" title="Copy to clipboard" '
        f'aria-label="Copy to clipboard">{_COPY_ICON}{_CHECK_ICON}</button></div>'
        f'<pre class="highlight"><code class="code{lang_class}" '
        f'data-code="{html.escape(code.rstrip(chr(10)))}">'
        + "".join(rows)
        + "</code></pre></div>\n"
    )


def stylesheet(style: str = "default") -> str:
    """CSS rules for the given Pygments style, scoped to ``.highlight``."""
    return HtmlFormatter(style=style).get_style_defs(".highlight")
