"""Utility helpers for PDF Rasterizer."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from .config import DEFAULT_DOCUMENT_NAME
from .document import PDFDocumentAdapter
from .exceptions import PDFRasterizerException
from .types import PDFInfo

PathLike = Union[str, os.PathLike[str]]


def configure_logging(level: int = logging.INFO) -> None:
    """Configure package-wide logging."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@contextmanager
def time_block(logger: logging.Logger, message: str) -> Iterator[None]:
    """Context manager that logs the execution time of a code block."""
    start = datetime.now(tz=timezone.utc)
    logger.debug("Starting %s", message)
    try:
        yield
    except BaseException:
        elapsed = (datetime.now(tz=timezone.utc) - start).total_seconds()
        logger.debug("%s stopped after %.2fs", message, elapsed)
        raise
    elapsed = (datetime.now(tz=timezone.utc) - start).total_seconds()
    logger.info("%s completed in %.2fs", message, elapsed)


def strip_extension(name: str) -> str:
    """Return the file name of ``name`` without directory or extension."""
    base = Path(name).stem if name else ""
    return base or DEFAULT_DOCUMENT_NAME


def get_pdf_info(pdf_path: PathLike, password: Optional[str] = None) -> PDFInfo:
    """Return information about a PDF document as :class:`PDFInfo`."""

    adapter = PDFDocumentAdapter(str(pdf_path), password=password)
    return adapter.to_pdf_info()


def validate_pdf(pdf_path: PathLike, password: Optional[str] = None) -> Tuple[bool, str]:
    """Perform lightweight validation of a PDF file."""

    path = str(pdf_path)
    if not os.path.exists(path):
        return False, f"File not found: {path}"

    if not os.path.isfile(path):
        return False, f"Path is not a file: {path}"

    if not path.lower().endswith(".pdf"):
        return False, f"File does not have .pdf extension: {path}"

    if not os.access(path, os.R_OK):
        return False, f"Cannot read file (permission denied): {path}"

    try:
        adapter = PDFDocumentAdapter(path, password=password)
        adapter.validate_access()
        return True, ""
    except PDFRasterizerException as exc:
        return False, str(exc)


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500.0 B")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
