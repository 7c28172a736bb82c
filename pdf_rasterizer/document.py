"""Adapter utilities for loading PDF files via pluggable document sources."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple, Union

from .backends import BackendDocument, PageHandle, PypdfSource
from .backends.base import DocumentSource
from .exceptions import InvalidPDFError
from .types import PDFInfo


class PDFDocumentAdapter:
    """High level helper around a backend-specific PDF document."""

    def __init__(
        self,
        pdf_path: Union[str, Path],
        password: Optional[str] = None,
        *,
        source: Optional[DocumentSource] = None,
    ) -> None:
        self.path = Path(pdf_path)
        self.source: DocumentSource = source or PypdfSource()
        self._document: BackendDocument = self.source.load(str(pdf_path), password=password)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        name: str,
        password: Optional[str] = None,
        *,
        source: Optional[DocumentSource] = None,
    ) -> "PDFDocumentAdapter":
        adapter = cls.__new__(cls)
        adapter.path = Path(name)
        adapter.source = source or PypdfSource()
        adapter._document = adapter.source.load_bytes(data, name, password=password)
        return adapter

    # ------------------------------------------------------------------
    # Basic document information helpers
    # ------------------------------------------------------------------
    @property
    def document(self) -> BackendDocument:
        return self._document

    @property
    def name(self) -> str:
        return self._document.name

    @property
    def base_name(self) -> str:
        return self._document.base_name

    @property
    def num_pages(self) -> int:
        return self._document.num_pages

    @property
    def file_size(self) -> int:
        return self._document.file_size

    @property
    def metadata(self) -> Any:
        return getattr(self._document, "metadata", None)

    @property
    def is_encrypted(self) -> bool:
        return bool(getattr(self._document, "is_encrypted", False))

    def get_page(self, page_index: int) -> PageHandle:
        return self._document.get_page(page_index)

    def iter_pages(self) -> Iterator[PageHandle]:
        return self._document.iter_pages()

    def page_sizes(self) -> List[Tuple[float, float]]:
        return [(page.width, page.height) for page in self.iter_pages()]

    # ------------------------------------------------------------------
    # Reporting helpers
    # ------------------------------------------------------------------
    def to_pdf_info(self) -> PDFInfo:
        metadata = self.metadata
        return PDFInfo(
            name=self.name,
            num_pages=self.num_pages,
            file_size=self.file_size,
            title=getattr(metadata, "title", None),
            author=getattr(metadata, "author", None),
            subject=getattr(metadata, "subject", None),
            creator=getattr(metadata, "creator", None),
            producer=getattr(metadata, "producer", None),
            is_encrypted=self.is_encrypted,
            page_sizes=self.page_sizes(),
        )

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------
    def validate_access(self) -> None:
        """Ensure every page can be opened and has a usable size."""
        try:
            sizes = self.page_sizes()
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error validating PDF pages: {exc}") from exc

        for page_index, (width, height) in enumerate(sizes, start=1):
            if width <= 0 or height <= 0:
                raise InvalidPDFError(
                    f"Page {page_index} has an invalid size: {width}x{height}"
                )


__all__ = ["PDFDocumentAdapter"]
