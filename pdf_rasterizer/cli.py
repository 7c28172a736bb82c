"""
Command-line interface for PDF rasterizer.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.progress import Progress, TextColumn, BarColumn, TimeRemainingColumn, TaskProgressColumn
from rich.table import Table

from pdf_rasterizer import __version__
from pdf_rasterizer.config import DEFAULT_MAX_WIDTH, DEFAULT_QUALITY, DEFAULT_SCALE, SCALE_PRESETS
from pdf_rasterizer.exceptions import PDFRasterizerException
from pdf_rasterizer.rasterizer import PDFRasterizer
from pdf_rasterizer.types import ConversionSettings
from pdf_rasterizer.utils import configure_logging, format_file_size, get_pdf_info, validate_pdf

console = Console()

SCALE_HELP = "Scale factor, 1x = 72 DPI (presets: {presets})".format(
    presets=", ".join(f"{preset:g}" for preset in SCALE_PRESETS)
)


def _fail(message):
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}")
    sys.exit(1)


def _build_settings(config_file, image_format, quality, scale, max_width):
    """Merge a settings file with command-line overrides."""
    base = ConversionSettings.from_file(config_file) if config_file else ConversionSettings()
    values = base.to_dict()
    if image_format is not None:
        values["format"] = image_format
    if quality is not None:
        values["quality"] = quality
    if scale is not None:
        values["scale"] = scale
    if max_width is not None:
        values["max_width"] = max_width
    return ConversionSettings.from_mapping(values)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    PDF Rasterizer CLI - Convert PDF pages into PNG or JPEG images.
    """
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.command(name="convert")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory for images or the archive',
    type=click.Path()
)
@click.option(
    '--format', '-f', 'image_format',
    default=None,
    help='Image format (default: png)',
    type=click.Choice(['png', 'jpeg', 'jpg'], case_sensitive=False)
)
@click.option(
    '--quality', '-q',
    default=None,
    help=f'JPEG quality between 0.1 and 1.0 (default: {DEFAULT_QUALITY})',
    type=click.FloatRange(0.1, 1.0)
)
@click.option(
    '--scale', '-s',
    default=None,
    help=f'{SCALE_HELP} (default: {DEFAULT_SCALE:g})',
    type=click.FloatRange(min=0, min_open=True)
)
@click.option(
    '--max-width', '-w',
    default=None,
    help=f'Maximum image width in pixels, 0 for none (default: {DEFAULT_MAX_WIDTH})',
    type=click.IntRange(min=0)
)
@click.option('--password', default=None, help='Password for encrypted PDFs', type=str)
@click.option('--separate', is_flag=True, help='Write every page as its own file instead of an archive')
@click.option(
    '--config', 'config_file',
    default=None,
    help='JSON settings file (keys: format, quality, scale, max_width)',
    type=click.Path(exists=True, dir_okay=False)
)
def convert(input_pdf, output_dir, image_format, quality, scale, max_width, password, separate, config_file):
    """
    Convert every page of a PDF into an image.

    A single-page PDF produces page-1.<ext>; longer documents produce
    <name>-images.zip with one images/page-<n>.<ext> entry per page.

    Examples:

        pdf-rasterizer convert input.pdf

        pdf-rasterizer convert input.pdf -f jpeg -q 0.8 -s 3

        pdf-rasterizer convert input.pdf -w 1200 --separate
    """
    try:
        settings = _build_settings(config_file, image_format, quality, scale, max_width)

        # Validate PDF
        console.print("\n[bold cyan]Validating PDF...[/bold cyan]")
        is_valid, error_msg = validate_pdf(input_pdf, password=password)

        if not is_valid:
            console.print(f"[bold red]✗ Error:[/bold red] {error_msg}")
            sys.exit(1)

        with PDFRasterizer(input_pdf, password=password) as rasterizer:
            info_table = Table(title="Conversion Settings", show_header=False)
            info_table.add_column("Property", style="cyan")
            info_table.add_column("Value", style="green")

            info_table.add_row("File", os.path.basename(input_pdf))
            info_table.add_row("Pages", str(rasterizer.num_pages))
            info_table.add_row("Format", settings.output_format.value.upper())
            if settings.output_format.is_lossy:
                info_table.add_row("Quality", f"{settings.quality:g}")
            info_table.add_row("Scale", f"{settings.base_scale:g}x ({settings.dpi:g} DPI)")
            info_table.add_row(
                "Max Width",
                f"{settings.max_width_pixels} px" if settings.max_width_pixels else "Original",
            )

            console.print(info_table)

            console.print(f"\n[bold cyan]Converting {rasterizer.num_pages} pages...[/bold cyan]")

            with Progress(
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                TimeRemainingColumn(),
                console=console
            ) as progress:
                task = progress.add_task("Rendering pages", total=100)

                def update_progress(page_index, page_count, percent):
                    progress.update(task, completed=percent)

                created_files = rasterizer.convert_to_directory(
                    output_dir,
                    settings,
                    separate=separate,
                    progress_callback=update_progress,
                )

        # Display results
        console.print(f"\n[bold green]✓ Successfully converted {rasterizer.num_pages} page(s)[/bold green]")
        console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]")

        console.print("\n[bold]Created files:[/bold]")
        sample_size = min(5, len(created_files))
        for file_path in created_files[:sample_size]:
            size = format_file_size(os.path.getsize(file_path))
            console.print(f"  • {os.path.basename(file_path)} ({size})")

        if len(created_files) > sample_size:
            console.print(f"  ... and {len(created_files) - sample_size} more")

        console.print()

    except PDFRasterizerException as e:
        _fail(e)
    except OSError as e:
        _fail(e)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option('--scale', '-s', default=DEFAULT_SCALE, help=SCALE_HELP, type=click.FloatRange(min=0, min_open=True))
@click.option('--max-width', '-w', default=DEFAULT_MAX_WIDTH, help='Maximum image width in pixels', type=click.IntRange(min=0))
@click.option('--password', default=None, help='Password for encrypted PDFs', type=str)
def show_info(input_pdf, scale, max_width, password):
    """
    Display information about a PDF file and its planned image sizes.

    Example:

        pdf-rasterizer info input.pdf -s 3 -w 1200
    """
    try:
        # Validate PDF
        is_valid, error_msg = validate_pdf(input_pdf, password=password)

        if not is_valid:
            console.print(f"[bold red]✗ Error:[/bold red] {error_msg}")
            sys.exit(1)

        info = get_pdf_info(input_pdf, password=password)
        settings = ConversionSettings(base_scale=scale, max_width_pixels=max_width)

        # Create detailed info table
        table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        table.add_row("File Path", os.path.abspath(input_pdf))
        table.add_row("File Size", format_file_size(info.file_size))
        table.add_row("Number of Pages", str(info.num_pages))
        table.add_row("Encrypted", "Yes" if info.is_encrypted else "No")

        if info.title:
            table.add_row("Title", info.title)
        if info.author:
            table.add_row("Author", info.author)
        if info.subject:
            table.add_row("Subject", info.subject)
        if info.creator:
            table.add_row("Creator", info.creator)
        if info.producer:
            table.add_row("Producer", info.producer)

        console.print()
        console.print(table)

        with PDFRasterizer(input_pdf, password=password) as rasterizer:
            plans = rasterizer.plan_pages(settings)

        pages_table = Table(title=f"Output at {scale:g}x")
        pages_table.add_column("Page", style="cyan", justify="right")
        pages_table.add_column("Size (pt)", style="green")
        pages_table.add_column("Image (px)", style="green")
        pages_table.add_column("Effective Scale", style="green", justify="right")

        for page_index, ((width, height), page_plan) in enumerate(zip(info.page_sizes, plans), start=1):
            pages_table.add_row(
                str(page_index),
                f"{width:g} x {height:g}",
                f"{page_plan.width_pixels} x {page_plan.height_pixels}",
                f"{page_plan.effective_scale:.4f}",
            )

        console.print(pages_table)
        console.print()

    except PDFRasterizerException as e:
        _fail(e)


if __name__ == '__main__':
    cli()
