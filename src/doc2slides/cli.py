"""CLI interface for doc2slides."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from doc2slides import __version__
from doc2slides.builder.deck import THEMES, DeckRenderer, create_environment
from doc2slides.builder.deck import write_default_templates as _write_default_templates
from doc2slides.ingest.json_io import (
    DocumentLoadError,
    atomic_write_text,
    load_document,
    slides_to_json,
)
from doc2slides.model.content import MediaSlide
from doc2slides.model.options import SegmentationOptions
from doc2slides.pipeline import generate_slides

app = typer.Typer(
    name="doc2slides",
    help="Turn rich-text editor documents into presentation slides.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def present(
    document: Annotated[
        Path,
        typer.Argument(
            help="Path to the editor document JSON (block list or {'blocks': [...]})",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    out: Annotated[
        Path | None,
        typer.Option(
            "--out",
            "-o",
            help="Output file (default: <document>.slides.html or .slides.json)",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: 'html' (standalone deck) or 'json'"),
    ] = "html",
    theme: Annotated[
        str,
        typer.Option("--theme", help="Deck theme: white, black, beige or sky"),
    ] = "white",
    title: Annotated[
        str | None,
        typer.Option("--title", help="Deck title (default: document file name)"),
    ] = None,
    max_weight: Annotated[
        float,
        typer.Option("--max-weight", help="Maximum visual weight per slide", min=1.0),
    ] = 20.0,
    max_blocks: Annotated[
        int,
        typer.Option("--max-blocks", help="Maximum blocks per slide in 'blocks' mode", min=1),
    ] = 15,
    overflow: Annotated[
        str,
        typer.Option("--overflow", help="Overflow budget: 'weight' or 'blocks'"),
    ] = "weight",
    templates_dir: Annotated[
        Path | None,
        typer.Option(
            "--templates",
            help="Directory with deck.html/slide.html overriding the built-in templates",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    asset_base: Annotated[
        str | None,
        typer.Option("--asset-base", help="Prefix for relative image/video sources"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log segmentation decisions"),
    ] = False,
) -> None:
    """
    Segment an editor document into slides and write them out.

    Examples:

        # Standalone HTML deck next to the document
        doc2slides present notes.json

        # Slide list as JSON, splitting on block count
        doc2slides present notes.json --format json --overflow blocks --max-blocks 10
    """
    _configure_logging(verbose)

    if output_format not in ("html", "json"):
        typer.echo(f"Error: --format must be 'html' or 'json', got '{output_format}'")
        raise typer.Exit(1)
    if theme not in THEMES:
        typer.echo(f"Error: --theme must be one of {', '.join(THEMES)}, got '{theme}'")
        raise typer.Exit(1)

    try:
        options = SegmentationOptions.from_cli(
            overflow=overflow, max_weight=max_weight, max_blocks=max_blocks
        )
    except ValueError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(1) from exc

    try:
        doc = load_document(document)
    except DocumentLoadError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(1) from exc

    slides = generate_slides(doc, options)

    deck_title = title or document.stem
    if out is None:
        out = document.with_name(f"{document.stem}.slides.{output_format}")

    if output_format == "json":
        atomic_write_text(out, slides_to_json(slides) + "\n")
    else:
        renderer = DeckRenderer(
            create_environment(templates_dir), theme=theme, asset_base=asset_base
        )
        atomic_write_text(out, renderer.render(slides, title=deck_title))

    media = sum(1 for s in slides if isinstance(s, MediaSlide))
    typer.echo(f"✅ Wrote {len(slides)} slides ({media} media) to {out}")


@app.command("templates")
def export_templates(
    target: Annotated[
        Path,
        typer.Argument(help="Directory to write the default deck templates into"),
    ],
) -> None:
    """Write the built-in deck templates so they can be customized."""
    _write_default_templates(target)
    typer.echo(f"✅ Wrote default templates to {target}")


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"doc2slides version {__version__}")


def version_callback(value: bool) -> None:
    """Version callback for --version flag."""
    if value:
        typer.echo(f"doc2slides version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """
    doc2slides - Turn rich-text editor documents into presentation slides.

    Slides are cut at manual separators (---), top-level headings and when a
    slide's estimated visual weight exceeds its budget. Whiteboards,
    spreadsheets and diagrams always get a slide of their own.

    For detailed usage, run: doc2slides present --help
    """
    pass


if __name__ == "__main__":  # pragma: no cover - executed only via `python -m`
    app()
