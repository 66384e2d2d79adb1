"""Standalone HTML page around a rendered document body."""

from __future__ import annotations

import html

from footmark.highlight import stylesheet
from footmark.navigation import HIGHLIGHT_CLASSES, HIGHLIGHT_MS

PAGE_CSS = """
body { font-family: system-ui, sans-serif; line-height: 1.6; max-width: 48rem; margin: 0 auto; padding: 2rem 1rem; }
.prose h1, .prose h2, .prose h3 { position: relative; }
.prose a.anchor { position: absolute; margin-left: -1em; padding-right: 0.5em; }
.footnote-ref a, .footnote-backref { text-decoration: none; font-weight: 500; opacity: 0.8; }
.footnote-ref a:hover, .footnote-backref:hover { opacity: 1; }
.footnotes { margin-top: 3rem; padding-top: 1.5rem; border-top: 1px solid #e5e7eb; }
.footnote-definition { display: flex; gap: 0.5rem; padding: 0.5rem 0; border-bottom: 1px solid #e5e7eb; }
.footnote-definition:last-child { border-bottom: 0; }
.footnote-content { font-size: 0.875rem; }
.bg-yellow-100 { background-color: #fef9c3; transition: background-color 0.3s; }
.code-block { position: relative; }
.code-toolbar { position: absolute; top: 0.5rem; right: 0.5rem; display: flex; gap: 0.5rem; align-items: center; }
.code-language { font-family: monospace; font-size: 0.75rem; padding: 0.1rem 0.5rem; background: #e5e7eb; border-radius: 0.25rem; }
.copy-button { background: none; border: 0; cursor: pointer; }
.copy-button .icon-check, .copy-button.copied .icon-copy { display: none; }
.copy-button.copied .icon-check { display: inline; }
pre.highlight { padding: 1rem; overflow-x: auto; border: 1px solid #e5e7eb; border-radius: 0.5rem; }
.line { display: block; min-height: 1.2em; }
.line-number { display: inline-block; padding-right: 1rem; text-align: right; opacity: 0.7; user-select: none; color: #9ca3af; }
.line-content.comment { opacity: 0.6; }
.inline-code { background: #f3f4f6; padding: 0.1rem 0.35rem; border-radius: 0.25rem; font-size: 0.875em; }
figure.image { display: flex; flex-direction: column; align-items: center; margin: 1.5rem 0; }
figure.image img { border: 1px solid #d1d5db; border-radius: 0.5rem; width: 100%; height: auto; object-fit: contain; }
figure.image figcaption { font-size: 0.875rem; font-style: italic; color: #4b5563; margin-top: 0.5rem; }
.custom-blockquote.note { border-left: 4px solid #3b82f6; }
.custom-blockquote.warning { border-left: 4px solid #f59e0b; }
.custom-blockquote.tip { border-left: 4px solid #10b981; }
.print-watermark { display: none; }
@media print {
  .copy-button, .print-hide { display: none !important; }
  .print-watermark { display: block; position: fixed; bottom: 0; right: 0; font-size: 0.75rem; color: #9ca3af; }
}
"""

# Mirrors footmark.navigation.FootnoteNavigator and the copy button behaviour
PAGE_SCRIPT = """
(function () {
  var HIGHLIGHT_MS = %(highlight_ms)d;
  var HIGHLIGHT_CLASSES = %(highlight_classes)s;

  function highlight(el) {
    HIGHLIGHT_CLASSES.forEach(function (c) { el.classList.add(c); });
    clearTimeout(el._footnoteTimer);
    el._footnoteTimer = setTimeout(function () {
      HIGHLIGHT_CLASSES.forEach(function (c) { el.classList.remove(c); });
    }, HIGHLIGHT_MS);
  }

  document.addEventListener('click', function (event) {
    var link = event.target.closest('[data-footnote-target]');
    if (link) {
      var target = document.getElementById(link.getAttribute('data-footnote-target'));
      if (!target) { return; }
      event.preventDefault();
      target.scrollIntoView({ behavior: 'smooth', block: link.getAttribute('data-footnote-block') || 'start' });
      highlight(target);
      return;
    }

    var button = event.target.closest('.copy-button');
    if (!button) { return; }
    var code = button.closest('.code-block').querySelector('code[data-code]');
    navigator.clipboard.writeText(code.getAttribute('data-code')).then(function () {
      button.classList.add('copied');
      setTimeout(function () { button.classList.remove('copied'); }, HIGHLIGHT_MS);
    }).catch(function (err) {
      console.error('Failed to copy text: ', err);
    });
  });

  var mark = document.querySelector('.print-watermark');
  if (mark) {
    mark.textContent = 'Printed on: ' + new Date().toLocaleDateString('en-GB', { day: 'numeric', month: 'short', year: 'numeric' });
  }
})();
"""


def page_script() -> str:
    classes = "[" + ", ".join(f"'{name}'" for name in HIGHLIGHT_CLASSES) + "]"
    return PAGE_SCRIPT % {"highlight_ms": HIGHLIGHT_MS, "highlight_classes": classes}


def render_page(
    body_html: str,
    footnotes_html: str = "",
    title: str | None = None,
    description: str | None = None,
    pygments_style: str = "default",
) -> str:
    """Wrap a rendered body and its footnote list in a full HTML document."""
    head_title = html.escape(title) if title else "Document"
    heading = f'<h1 class="title">{html.escape(title)}</h1>\n' if title else ""
    meta = ""
    if description:
        meta = f'<meta name="description" content="{html.escape(description)}">\n'

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"{meta}<title>{head_title}</title>\n"
        f"<style>{PAGE_CSS}\n{stylesheet(pygments_style)}\n</style>\n"
        "</head>\n<body>\n<main>\n"
        f'<article class="prose">\n{heading}{body_html}{footnotes_html}</article>\n'
        '<div class="print-watermark"></div>\n'
        "</main>\n"
        f"<script>{page_script()}</script>\n"
        "</body>\n</html>\n"
    )
