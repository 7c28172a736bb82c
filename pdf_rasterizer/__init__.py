"""
PDF Rasterizer - Convert PDF pages into PNG or JPEG images.

This library renders every page of a PDF into an image under scale,
maximum-width and quality settings, then delivers the images as separate
files or as one ZIP archive.

Quick Start:
    >>> from pdf_rasterizer import PDFRasterizer, ConversionSettings
    >>> with PDFRasterizer('input.pdf') as rasterizer:
    ...     files = rasterizer.convert_to_directory('output/', ConversionSettings(base_scale=2))

Main Classes:
    - PDFRasterizer: Load a PDF, convert it and package the output
    - ConversionPipeline: Page-by-page conversion with progress and run state
    - PageConverter: Rasterize and encode a single page
    - OutputPackager: Single-file or archive delivery

Data Classes:
    - ConversionSettings: Format, quality, scale and maximum width
    - ViewportPlan: Effective scale and pixel size of a page
    - PageResult: Encoded image of one page
    - ConversionRun: State of a conversion run
    - PDFInfo: PDF metadata and information

Exceptions:
    - PDFRasterizerException: Base exception
    - InvalidInputError: Input rejected before conversion
    - RenderFailure: A page could not be rendered
    - ConversionFailure: A run aborted at a page
    - PackagingFailure: Output could not be packaged

For CLI usage, use the 'pdf-rasterizer' command after installation.
"""

# Core classes
from pdf_rasterizer.converter import PageConverter
from pdf_rasterizer.packager import OutputPackager, archive_name, page_filename
from pdf_rasterizer.pipeline import ConversionPipeline
from pdf_rasterizer.rasterizer import PDFRasterizer, convert_pdf
from pdf_rasterizer.viewport import plan

# Data types
from pdf_rasterizer.types import (
    ConversionRun,
    ConversionSettings,
    DeliveredFile,
    ImageFormat,
    PageResult,
    PDFInfo,
    RunStatus,
    ViewportPlan,
)

# Exceptions
from pdf_rasterizer.exceptions import (
    PDFRasterizerException,
    InvalidInputError,
    InvalidPDFError,
    EncryptedPDFError,
    InvalidSettingsError,
    InvalidStateError,
    RenderFailure,
    ConversionFailure,
    ConversionCancelled,
    PackagingFailure,
    InsufficientDiskSpaceError,
)

# Utility functions
from pdf_rasterizer.utils import get_pdf_info, validate_pdf, format_file_size

__version__ = "1.0.0"
__author__ = "PDF Rasterizer Contributors"
__license__ = "MIT"

__all__ = [
    # Main classes
    "PDFRasterizer",
    "ConversionPipeline",
    "PageConverter",
    "OutputPackager",
    "convert_pdf",
    "plan",
    "archive_name",
    "page_filename",
    # Data types
    "ConversionRun",
    "ConversionSettings",
    "DeliveredFile",
    "ImageFormat",
    "PageResult",
    "PDFInfo",
    "RunStatus",
    "ViewportPlan",
    # Exceptions
    "PDFRasterizerException",
    "InvalidInputError",
    "InvalidPDFError",
    "EncryptedPDFError",
    "InvalidSettingsError",
    "InvalidStateError",
    "RenderFailure",
    "ConversionFailure",
    "ConversionCancelled",
    "PackagingFailure",
    "InsufficientDiskSpaceError",
    # Utility functions
    "get_pdf_info",
    "validate_pdf",
    "format_file_size",
    # Version info
    "__version__",
]
