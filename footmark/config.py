"""Render options shared by the library and the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from footmark.extract import Dialect


@dataclass
class RenderOptions:
    """How a document is rendered.

    Attributes:
        dialect: Footnote marker dialect used for extraction and annotation.
        auto_footnotes: Extract and annotate footnotes. When off, markers
            stay literal text.
        highlight: Syntax-highlight code blocks with Pygments.
        pygments_style: Pygments style name for highlighting and its CSS.
        embed_images: Inline images as JPEG data URIs.
        image_width: Max width for embedded images.
        base_dir: Directory relative image paths are resolved against.
        title: Page title; overrides the front matter title.
        standalone: Wrap the body in a full HTML page.
    """

    dialect: Dialect = Dialect.CARET
    auto_footnotes: bool = True
    highlight: bool = True
    pygments_style: str = "default"
    embed_images: bool = False
    image_width: int = 800
    base_dir: Path | None = None
    title: str | None = None
    standalone: bool = True
