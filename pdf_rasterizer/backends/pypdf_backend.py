"""pypdf backend implementation of the document source."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ..exceptions import EncryptedPDFError, InvalidPDFError
from .base import BackendDocument, DocumentSource, PageHandle

LOGGER = logging.getLogger(__name__)


def _page_size(page: object) -> Tuple[float, float]:
    box = page.cropbox  # type: ignore[attr-defined]
    width = float(box.width)
    height = float(box.height)
    rotation = int(getattr(page, "rotation", 0) or 0)
    if rotation % 180 == 90:
        width, height = height, width
    return width, height


@dataclass
class PypdfDocument(BackendDocument):
    reader: PdfReader = field(repr=False)
    raw_bytes: bytes = field(repr=False)
    password: Optional[str] = field(default=None, repr=False)
    _sizes: Dict[int, Tuple[float, float]] = field(default_factory=dict, repr=False)

    def page_size(self, page_index: int) -> Tuple[float, float]:
        if page_index < 1 or page_index > self.num_pages:
            raise IndexError(
                f"Page {page_index} is out of bounds. PDF has {self.num_pages} pages."
            )
        if page_index not in self._sizes:
            self._sizes[page_index] = _page_size(self.reader.pages[page_index - 1])
        return self._sizes[page_index]

    def get_page(self, page_index: int) -> PageHandle:
        width, height = self.page_size(page_index)
        return PageHandle(document=self, page_index=page_index, width=width, height=height)

    @property
    def metadata(self):
        return self.reader.metadata

    @property
    def is_encrypted(self) -> bool:
        return bool(self.reader.is_encrypted)


class PypdfSource(DocumentSource):
    """Document source that uses `pypdf` under the hood."""

    def load(self, pdf_path: str, password: Optional[str] = None) -> PypdfDocument:
        path = Path(pdf_path)
        if not path.exists() or not path.is_file():
            raise InvalidPDFError(f"PDF file not found: {pdf_path}")

        try:
            raw_bytes = path.read_bytes()
        except OSError as exc:
            raise InvalidPDFError(f"Unable to read PDF file: {pdf_path}. Error: {exc}") from exc

        return self.load_bytes(raw_bytes, path.name, password=password)

    def load_bytes(self, data: bytes, name: str, password: Optional[str] = None) -> PypdfDocument:
        if not data:
            raise InvalidPDFError(f"PDF file is empty: {name}")

        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            raise InvalidPDFError(f"Corrupted or invalid PDF file: {name}. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error reading PDF: {name}. Error: {exc}") from exc

        if reader.is_encrypted:
            if password:
                if reader.decrypt(password) == 0:
                    raise EncryptedPDFError("Failed to decrypt PDF with supplied password.")
            else:
                raise EncryptedPDFError("PDF is encrypted. Supply a password to process this file.")

        try:
            num_pages = len(reader.pages)
        except PdfReadError as exc:
            raise InvalidPDFError(f"Unable to read page tree: {name}. Error: {exc}") from exc
        if num_pages == 0:
            raise InvalidPDFError(f"PDF has no pages: {name}")

        LOGGER.debug("Loaded %s (%d pages, %d bytes)", name, num_pages, len(data))
        return PypdfDocument(
            num_pages=num_pages,
            file_size=len(data),
            name=name,
            reader=reader,
            raw_bytes=data,
            password=password,
        )
