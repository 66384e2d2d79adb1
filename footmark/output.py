"""File writers: HTML, JSON, PDF."""

from __future__ import annotations

from pathlib import Path

import orjson


def save_text(content: str, output_path: Path) -> None:
    """Save text content (HTML, markdown) to file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")


def dump_json(data: dict) -> bytes:
    return orjson.dumps(data, option=orjson.OPT_INDENT_2)


def save_json(data: dict, output_path: Path) -> None:
    """Save a dict as indented JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(dump_json(data))


def save_pdf(pdf_bytes: bytes, output_path: Path) -> None:
    """Save PDF bytes to file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pdf_bytes)


async def render_pdf(html: str, timeout: int = 30) -> bytes:
    """Print an HTML page to an A4 PDF with headless Chromium."""
    from playwright.async_api import async_playwright

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=True)
        try:
            page = await browser.new_page()
            await page.set_content(html, timeout=timeout * 1000, wait_until="load")
            await page.emulate_media(media="print")
            return await page.pdf(format="A4", print_background=True)
        finally:
            await browser.close()
