"""Backend abstractions for PDF Rasterizer."""

from .base import (
    ArchiveBuilder,
    BackendDocument,
    DocumentSource,
    FileDelivery,
    ImageEncoder,
    PageHandle,
    Rasterizer,
    Surface,
)
from .directory_backend import DirectoryDelivery, ensure_directory_writable
from .pdfium_backend import PdfiumRasterizer
from .pillow_backend import PillowEncoder
from .pypdf_backend import PypdfDocument, PypdfSource
from .zip_backend import ZipArchiveBuilder

__all__ = [
    "ArchiveBuilder",
    "BackendDocument",
    "DocumentSource",
    "FileDelivery",
    "ImageEncoder",
    "PageHandle",
    "Rasterizer",
    "Surface",
    "DirectoryDelivery",
    "ensure_directory_writable",
    "PdfiumRasterizer",
    "PillowEncoder",
    "PypdfDocument",
    "PypdfSource",
    "ZipArchiveBuilder",
]
