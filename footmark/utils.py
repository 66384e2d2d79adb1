"""Utility functions for footmark."""

from __future__ import annotations

import re
from urllib.parse import urlparse


def slugify(text: str) -> str:
    """Turn heading text into a URL-friendly anchor id."""
    slug = str(text).lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = slug.replace("&", "-and-")
    slug = re.sub(r"[^\w\-]+", "", slug)
    return re.sub(r"-{2,}", "-", slug)


def source_to_slug(source: str) -> str:
    """Generate a filesystem-safe output name from a path or URL."""
    parsed = urlparse(source)
    if parsed.scheme in ("http", "https"):
        slug = parsed.netloc + parsed.path
    else:
        slug = source.rsplit("/", 1)[-1].rsplit(".", 1)[0]
    slug = re.sub(r"[^a-zA-Z0-9]+", "_", slug)
    slug = re.sub(r"_+", "_", slug).strip("_")
    return slug[:100] if slug else "document"


def parse_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Split a leading ``---`` block of ``key: value`` lines from the body.

    Returns:
        (metadata, body). Text without front matter comes back unchanged.
    """
    match = re.match(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", text, re.S)
    if not match:
        return {}, text

    metadata: dict[str, str] = {}
    for line in match.group(1).splitlines():
        key, sep, value = line.partition(":")
        if not sep or not key.strip():
            continue
        # Quoted values: title: 'My Post'
        metadata[key.strip()] = value.strip().strip("'\"")

    return metadata, text[match.end():]
