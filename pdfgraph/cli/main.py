"""
Command-line interface for pdfgraph.
"""

import os
import sys

import click
from rich.console import Console
from rich.table import Table

from pdfgraph import __version__
from pdfgraph.compress.recompressor import DEFAULT_SETTINGS, RecompressionSettings
from pdfgraph.core.exceptions import PdfGraphError
from pdfgraph.core.utils import format_file_size
from pdfgraph.split.utils import parse_page_spec
from pdfgraph.tools.common.interfaces import ConversionContext
from pdfgraph.tools.common.pipeline import registry

console = Console()


def _fail(error):
    console.print(f"\n[bold red]✗ Error:[/bold red] {error}")
    sys.exit(1)


def _run_tool(name, **context_args):
    context = ConversionContext(**context_args)
    return registry.run(name, context)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    pdfgraph - merge, split, rotate and recompress PDF files.
    """
    pass


@cli.command(name="merge")
@click.argument('inputs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', required=True, help='Merged PDF file', type=click.Path(dir_okay=False))
def merge(inputs, output):
    """
    Merge PDF files in the given order.

    Example:

        pdfgraph merge a.pdf b.pdf -o merged.pdf
    """
    try:
        result = _run_tool("merge", output_path=output, config={"inputs": list(inputs)})
    except PdfGraphError as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Merged {len(inputs)} files[/bold green]")
    console.print(f"[dim]Output: {result}[/dim]\n")


@cli.command(name="split")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output-dir', '-o',
    default='.',
    help='Directory that receives the <name>-pages folder',
    type=click.Path(file_okay=False)
)
def split(input_pdf, output_dir):
    """
    Split a PDF into one file per page.

    Example:

        pdfgraph split report.pdf -o out
    """
    try:
        result = _run_tool("split", input_path=input_pdf, output_path=output_dir)
    except PdfGraphError as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Successfully split into {len(result.outputs)} files[/bold green]")
    console.print(f"[dim]Output directory: {result.output_dir}[/dim]")
    for number, message in result.failures.items():
        console.print(f"[yellow]! Page {number} skipped:[/yellow] {message}")
    console.print()
    if result.failures:
        sys.exit(1)


@cli.command(name="rotate")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', required=True, help='Rotated PDF file', type=click.Path(dir_okay=False))
@click.option('--degrees', '-d', default=90, show_default=True, help='Clockwise rotation, a multiple of 90', type=int)
@click.option('--pages', '-p', default=None, help='Pages to rotate, e.g. "1,3-5" (default: all)', type=str)
def rotate(input_pdf, output, degrees, pages):
    """
    Rotate pages of a PDF.

    Examples:

        pdfgraph rotate in.pdf -o out.pdf -d 90

        pdfgraph rotate in.pdf -o out.pdf -d -90 -p 2,4-6
    """
    try:
        page_numbers = parse_page_spec(pages) if pages else None
        result = _run_tool(
            "rotate",
            input_path=input_pdf,
            output_path=output,
            config={"degrees": degrees, "pages": page_numbers},
        )
    except PdfGraphError as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Rotated by {degrees % 360} degrees[/bold green]")
    console.print(f"[dim]Output: {result}[/dim]\n")


@cli.command(name="compress")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', required=True, help='Compressed PDF file', type=click.Path(dir_okay=False))
@click.option('--quality', '-q', default=DEFAULT_SETTINGS.quality, show_default=True, help='JPEG quality (1-100)', type=int)
@click.option('--scale', '-s', default=DEFAULT_SETTINGS.scale, show_default=True, help='Image scale factor (0-1]', type=float)
def compress(input_pdf, output, quality, scale):
    """
    Re-encode embedded images as downscaled JPEG.

    Example:

        pdfgraph compress scan.pdf -o small.pdf -q 60 -s 0.5
    """
    try:
        settings = RecompressionSettings(quality=quality, scale=scale)
        result = _run_tool(
            "compress",
            input_path=input_pdf,
            output_path=output,
            config={"settings": settings},
        )
    except PdfGraphError as e:
        _fail(e)

    table = Table(title="Recompression", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Images recompressed", str(result.recompressed))
    table.add_row("Images skipped", str(result.skipped))
    table.add_row("Original size", format_file_size(result.original_size))
    table.add_row("New size", format_file_size(result.compressed_size))
    table.add_row("Saved", format_file_size(result.bytes_saved))
    console.print()
    console.print(table)
    console.print()


@cli.command(name="extract-text")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', required=True, help='Text file', type=click.Path(dir_okay=False))
def extract_text(input_pdf, output):
    """
    Write the text of every page to a UTF-8 file.
    """
    try:
        result = _run_tool("extract_text", input_path=input_pdf, output_path=output)
    except PdfGraphError as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Text written to {result}[/bold green]\n")


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def show_info(input_pdf):
    """
    Display the structure of a PDF file.

    Example:

        pdfgraph info input.pdf
    """
    try:
        info = _run_tool("info", input_path=input_pdf)
    except PdfGraphError as e:
        _fail(e)

    table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("Version", info.version)
    table.add_row("Pages", str(info.page_count))
    table.add_row("Objects", str(info.object_count))
    table.add_row("Images", str(info.image_count))
    table.add_row("Bookmarks", ", ".join(info.outline_titles) or "-")
    table.add_row("Integrity", "OK" if not info.issues else f"{len(info.issues)} issue(s)")

    console.print()
    console.print(table)
    for issue in info.issues:
        console.print(f"[yellow]! {issue}[/yellow]")
    console.print()


def main():
    cli()


if __name__ == '__main__':
    main()
