"""Document loading: local files or http(s) URLs fetched with httpx."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import httpx

from footmark.errors import SourceError


@dataclass
class Source:
    """A loaded document and where it came from."""

    text: str
    origin: str
    base_dir: Path | None = None
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def read_file(path: Path) -> Source:
    """Read a local markdown file. Relative images resolve next to it."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Could not read {path}: {e}") from e
    return Source(text=text, origin=str(path), base_dir=path.resolve().parent)


async def fetch_static(
    url: str,
    timeout: int = 30,
    follow_redirects: bool = True,
    headers: dict[str, str] | None = None,
) -> Source:
    """Fetch a raw markdown document over HTTP."""
    default_headers = {
        "User-Agent": "footmark (+https://pypi.org/project/footmark/)",
        "Accept": "text/markdown,text/plain;q=0.9,*/*;q=0.8",
    }
    if headers:
        default_headers.update(headers)

    async with httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=follow_redirects,
        headers=default_headers,
    ) as client:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise SourceError(f"Could not fetch {url}: {e}") from e
        return Source(
            text=response.text,
            origin=str(response.url),
            status=response.status_code,
            headers=dict(response.headers),
        )


async def load_source(source: str, timeout: int = 30) -> Source:
    """Load a document from a file path or an http(s) URL."""
    if is_url(source):
        return await fetch_static(source, timeout=timeout)

    path = Path(source)
    if not path.is_file():
        raise SourceError(f"Source must be a URL (http/https) or existing file: {source}")
    return read_file(path)
