"""pypdfium2 backend implementation of the rasterizer."""

from __future__ import annotations

import logging
from typing import Optional

import pypdfium2 as pdfium

from ..exceptions import InvalidPDFError
from .base import BackendDocument, PageHandle, Rasterizer, Surface

LOGGER = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)


class PdfiumRasterizer(Rasterizer):
    """
    Rasterizer that renders pages with PDFium.

    One PDFium document is kept open for the most recently rendered source
    document. Call :meth:`close` (or use the instance as a context manager)
    once the run is finished.
    """

    def __init__(self, *, draw_annotations: bool = True, draw_forms: bool = True) -> None:
        self.draw_annotations = draw_annotations
        self.draw_forms = draw_forms
        self._source: Optional[BackendDocument] = None
        self._pdf: Optional[pdfium.PdfDocument] = None

    def __enter__(self) -> "PdfiumRasterizer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _open(self, document: BackendDocument) -> pdfium.PdfDocument:
        if self._pdf is not None and self._source is document:
            return self._pdf

        self.close()
        raw_bytes = getattr(document, "raw_bytes", None)
        if raw_bytes is None:
            raise InvalidPDFError(
                f"Document {document.name!r} does not expose raw bytes for rendering."
            )
        try:
            self._pdf = pdfium.PdfDocument(raw_bytes, password=getattr(document, "password", None))
        except pdfium.PdfiumError as exc:
            raise InvalidPDFError(f"PDFium could not open {document.name}: {exc}") from exc
        self._source = document
        LOGGER.debug("Opened %s with PDFium", document.name)
        return self._pdf

    def render(self, page: PageHandle, surface: Surface, scale: float) -> None:
        pdf = self._open(page.document)
        pdf_page = pdf[page.page_index - 1]
        try:
            bitmap = pdf_page.render(
                scale=scale,
                fill_color=WHITE,
                draw_annots=self.draw_annotations,
                may_draw_forms=self.draw_forms,
            )
            image = bitmap.to_pil()
            # PDFium rounds the bitmap size up; anything past the planned surface is clipped
            surface.paste(image, (0, 0))  # type: ignore[attr-defined]
            LOGGER.debug(
                "Rendered page %d: bitmap %dx%d into surface %dx%d",
                page.page_index,
                image.width,
                image.height,
                surface.width,
                surface.height,
            )
        finally:
            pdf_page.close()

    def close(self) -> None:
        if self._pdf is not None:
            self._pdf.close()
        self._pdf = None
        self._source = None
