"""footmark CLI - Click command definitions and main entry point."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from footmark.config import RenderOptions
from footmark.errors import SourceError
from footmark.extract import Dialect
from footmark.fetch import load_source
from footmark.output import dump_json, render_pdf, save_json, save_pdf, save_text
from footmark.render import RenderedDocument, render_markdown
from footmark.utils import source_to_slug

console = Console(stderr=True)

EXTENSIONS = {"html": ".html", "fragment": ".html", "json": ".json", "pdf": ".pdf"}


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.command()
@click.argument("source")
@click.option(
    "-m", "--mode",
    type=click.Choice(["html", "fragment", "json", "pdf"]),
    default="html",
    help="Output mode (default: html page)",
)
@click.option("-o", "--output", "output_path", type=click.Path(), default=None,
              help="Output file or directory. Omit for stdout.")
@click.option("-f", "--filename", default=None, help="Custom filename (no extension)")
@click.option(
    "--dialect",
    type=click.Choice([d.value for d in Dialect]),
    default=Dialect.CARET.value,
    help="Footnote marker dialect: ^[1] (caret) or [1] (bracket)",
)
@click.option("--no-footnotes", is_flag=True, help="Leave footnote markers as literal text")
@click.option("--no-highlight", is_flag=True, help="Disable syntax highlighting")
@click.option("--style", "pygments_style", default="default",
              help="Pygments style for code blocks")
@click.option("--embed-images", is_flag=True, help="Embed images as base64 data URIs")
@click.option("--image-width", default=800, type=int,
              help="Max width for embedded images")
@click.option("--title", default=None, help="Page title (overrides front matter)")
@click.option("--timeout", default=30, help="Fetch / PDF timeout in seconds")
@click.option("-v", "--verbose", is_flag=True, help="Verbose progress output")
def main(
    source: str,
    mode: str,
    output_path: str | None,
    filename: str | None,
    dialect: str,
    no_footnotes: bool,
    no_highlight: bool,
    pygments_style: str,
    embed_images: bool,
    image_width: int,
    title: str | None,
    timeout: int,
    verbose: bool,
):
    """Render a markdown document with footnotes to HTML.

    SOURCE can be a local markdown file or an http(s) URL to raw markdown.

    \b
    Examples:
        footmark article.md                       # HTML page to stdout
        footmark article.md -o out/                # save out/article.html
        footmark article.md --mode json            # footnotes + body as JSON
        footmark cv.md --mode pdf -o cv.pdf        # print to PDF
        footmark notes.md --dialect bracket        # [1] style footnotes
    """
    configure_logging(verbose)

    if mode == "pdf" and not output_path:
        raise click.ClickException("PDF mode requires -o/--output")

    if verbose:
        console.print(Panel(
            f"[bold]footmark - Markdown with footnotes[/bold]\n{source}\nMode: {mode}",
            expand=False,
        ))

    try:
        if verbose:
            with Progress(
                SpinnerColumn(), TextColumn("[progress.description]{task.description}"),
                console=console, transient=True,
            ) as progress:
                progress.add_task(description="Loading...", total=None)
                loaded = asyncio.run(load_source(source, timeout=timeout))
        else:
            loaded = asyncio.run(load_source(source, timeout=timeout))
    except SourceError as e:
        raise click.ClickException(str(e)) from e

    options = RenderOptions(
        dialect=Dialect(dialect),
        auto_footnotes=not no_footnotes,
        highlight=not no_highlight,
        pygments_style=pygments_style,
        embed_images=embed_images,
        image_width=image_width,
        base_dir=loaded.base_dir,
        title=title,
        standalone=mode != "fragment",
    )
    document = render_markdown(loaded.text, options)

    if verbose:
        console.print(
            f"[dim]{len(document.footnotes)} footnotes, "
            f"{len(document.unused_definitions)} unused definitions[/dim]"
        )

    slug = filename or source_to_slug(source)
    _write_output(document, mode, slug, output_path, timeout)


def _resolve_output(output_path: str, slug: str, mode: str) -> Path:
    out = Path(output_path)
    if out.is_dir() or output_path.endswith("/"):
        out.mkdir(parents=True, exist_ok=True)
        out = out / f"{slug}{EXTENSIONS[mode]}"
    return out


def _write_output(
    document: RenderedDocument,
    mode: str,
    slug: str,
    output_path: str | None,
    timeout: int,
) -> None:
    """Write the rendered document in the requested mode."""
    if mode == "pdf":
        out = _resolve_output(output_path, slug, mode)
        pdf_bytes = asyncio.run(render_pdf(document.html, timeout=timeout))
        save_pdf(pdf_bytes, out)
        console.print(f"[green]Saved:[/green] {out}")
        return

    if mode == "json":
        data = document.to_dict()
        if output_path:
            out = _resolve_output(output_path, slug, mode)
            save_json(data, out)
            console.print(f"[green]Saved:[/green] {out}")
        else:
            click.echo(dump_json(data).decode())
        return

    if output_path:
        out = _resolve_output(output_path, slug, mode)
        save_text(document.html, out)
        console.print(f"[green]Saved:[/green] {out}")
    else:
        click.echo(document.html)


if __name__ == "__main__":
    main()
