"""Image probing and data URI embedding."""

from __future__ import annotations

import base64
import logging
from io import BytesIO
from pathlib import Path

import httpx
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


def is_remote(src: str) -> bool:
    return src.startswith(("http://", "https://"))


def resolve_local(src: str, base_dir: Path | None) -> Path | None:
    """Resolve an image src to an existing local file, if it is one."""
    if not src or is_remote(src) or src.startswith("data:"):
        return None
    path = Path(src.lstrip("/")) if src.startswith("/") and base_dir else Path(src)
    if base_dir and not path.is_absolute():
        path = base_dir / path
    return path if path.is_file() else None


def image_size(src: str, base_dir: Path | None = None) -> tuple[int, int] | None:
    """Return (width, height) of a local image, or None if it can't be read."""
    path = resolve_local(src, base_dir)
    if path is None:
        return None
    try:
        with Image.open(path) as img:
            return img.width, img.height
    except (OSError, UnidentifiedImageError) as e:
        logger.warning("Could not read image %s: %s", path, e)
        return None


def compress_to_data_uri(data: bytes, quality: int = 80, max_width: int = 800) -> str:
    """Re-encode image bytes as a JPEG data URI, downscaled to max_width."""
    img = Image.open(BytesIO(data))
    if img.mode in ("RGBA", "P", "LA"):
        img = img.convert("RGB")

    if max_width and img.width > max_width:
        ratio = max_width / img.width
        new_height = int(img.height * ratio)
        img = img.resize((max_width, new_height), Image.Resampling.LANCZOS)

    buffer = BytesIO()
    img.save(buffer, "JPEG", quality=quality, optimize=True)
    b64 = base64.b64encode(buffer.getvalue()).decode("utf-8")
    return f"data:image/jpeg;base64,{b64}"


def embed_image(
    src: str,
    base_dir: Path | None = None,
    quality: int = 80,
    max_width: int = 800,
    timeout: int = 10,
) -> str | None:
    """Return a data URI for a local or remote image, or None on failure."""
    try:
        path = resolve_local(src, base_dir)
        if path is not None:
            data = path.read_bytes()
        elif is_remote(src):
            with httpx.Client(timeout=timeout, follow_redirects=True) as client:
                resp = client.get(src)
                resp.raise_for_status()
                data = resp.content
        else:
            return None
        return compress_to_data_uri(data, quality=quality, max_width=max_width)
    except (OSError, UnidentifiedImageError, httpx.HTTPError) as e:
        logger.warning("Could not embed image %s: %s", src, e)
        return None
