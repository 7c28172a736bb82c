"""
Custom exceptions for PDF Rasterizer.

This module defines all custom exceptions used throughout the library.
"""

from typing import Optional


class PDFRasterizerException(Exception):
    """Base exception for all PDF Rasterizer errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF rasterizer error occurred."


class InvalidInputError(PDFRasterizerException):
    """Raised when input is rejected before conversion starts."""

    @property
    def default_message(self) -> str:
        return "Invalid input supplied."


class InvalidPDFError(InvalidInputError):
    """Raised when PDF file is invalid or corrupted."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class EncryptedPDFError(InvalidInputError):
    """Raised when PDF is encrypted and cannot be processed."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class InvalidSettingsError(InvalidInputError):
    """Raised when conversion settings are out of range."""

    @property
    def default_message(self) -> str:
        return "Invalid conversion settings."


class InsufficientDiskSpaceError(PDFRasterizerException):
    """Raised when the output location cannot receive files."""

    @property
    def default_message(self) -> str:
        return "Insufficient disk space for output files."


class InvalidStateError(PDFRasterizerException):
    """Raised when a conversion run is asked for an illegal transition."""

    @property
    def default_message(self) -> str:
        return "Conversion run is not in a valid state for this operation."


class PageFailure(PDFRasterizerException):
    """Base class for errors tied to a specific page."""

    def __init__(self, page_index: int, cause: Optional[BaseException] = None, message: str = "") -> None:
        self.page_index = page_index
        self.cause = cause
        if not message:
            message = f"Page {page_index}: {cause}" if cause is not None else ""
        super().__init__(message)


class RenderFailure(PageFailure):
    """Raised when rasterization or encoding fails for a page."""

    @property
    def default_message(self) -> str:
        return f"Failed to render page {self.page_index}."


class ConversionFailure(PageFailure):
    """Raised when a conversion run aborts at a page."""

    def __init__(self, page_index: int, cause: Optional[BaseException] = None) -> None:
        detail = cause.cause if isinstance(cause, RenderFailure) and cause.cause is not None else cause
        message = f"Conversion failed on page {page_index}"
        if detail is not None:
            message = f"{message}: {detail}"
        super().__init__(page_index, cause, message)

    @property
    def default_message(self) -> str:
        return f"Conversion failed on page {self.page_index}."


class ConversionCancelled(PDFRasterizerException):
    """Raised when a run stops at a checkpoint because it was cancelled or reset."""

    def __init__(self, pages_completed: int, message: str = "") -> None:
        self.pages_completed = pages_completed
        super().__init__(message or f"Conversion cancelled after {pages_completed} page(s).")

    @property
    def default_message(self) -> str:
        return "Conversion cancelled."


class PackagingFailure(PDFRasterizerException):
    """Raised when output packaging fails."""

    def __init__(self, cause: Optional[BaseException] = None, message: str = "") -> None:
        self.cause = cause
        if not message and cause is not None:
            message = f"Failed to package output: {cause}"
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Failed to package output."
