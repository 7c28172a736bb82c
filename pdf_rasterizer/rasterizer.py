"""PDF to image conversion built around :class:`PDFDocumentAdapter`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from .backends import DirectoryDelivery, PdfiumRasterizer, PillowEncoder
from .backends.base import ArchiveBuilder, DocumentSource, FileDelivery, ImageEncoder, Rasterizer
from .converter import PageConverter
from .document import PDFDocumentAdapter
from .packager import OutputPackager
from .pipeline import ConversionPipeline, ProgressCallback
from .types import ConversionSettings, DeliveredFile, PageResult, ViewportPlan

LOGGER = logging.getLogger(__name__)


class PDFRasterizer:
    """High-level PDF to image operations."""

    def __init__(
        self,
        input_path: Union[str, Path],
        *,
        password: Optional[str] = None,
        source: Optional[DocumentSource] = None,
        rasterizer: Optional[Rasterizer] = None,
        encoder: Optional[ImageEncoder] = None,
        archive_builder: Optional[ArchiveBuilder] = None,
    ) -> None:
        self.input_path = str(input_path)
        self._adapter = PDFDocumentAdapter(input_path, password=password, source=source)
        self._init_components(rasterizer, encoder, archive_builder)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        name: str,
        *,
        password: Optional[str] = None,
        source: Optional[DocumentSource] = None,
        rasterizer: Optional[Rasterizer] = None,
        encoder: Optional[ImageEncoder] = None,
        archive_builder: Optional[ArchiveBuilder] = None,
    ) -> "PDFRasterizer":
        instance = cls.__new__(cls)
        instance.input_path = name
        instance._adapter = PDFDocumentAdapter.from_bytes(data, name, password=password, source=source)
        instance._init_components(rasterizer, encoder, archive_builder)
        return instance

    def _init_components(
        self,
        rasterizer: Optional[Rasterizer],
        encoder: Optional[ImageEncoder],
        archive_builder: Optional[ArchiveBuilder],
    ) -> None:
        self.num_pages = self._adapter.num_pages
        self.converter = PageConverter(rasterizer or PdfiumRasterizer(), encoder or PillowEncoder())
        self.pipeline = ConversionPipeline(self.converter)
        self.packager = OutputPackager(archive_builder)

    def __enter__(self) -> "PDFRasterizer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def name(self) -> str:
        return self._adapter.name

    @property
    def document(self) -> PDFDocumentAdapter:
        return self._adapter

    def plan_pages(self, settings: ConversionSettings) -> List[ViewportPlan]:
        """Return the viewport every page would be rendered at."""
        return [self.converter.plan_for(page, settings) for page in self._adapter.iter_pages()]

    def convert(
        self,
        settings: ConversionSettings,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[PageResult]:
        """Convert all pages, starting a fresh run."""
        self.pipeline.reset()
        return self.pipeline.run(self._adapter.document, settings, on_progress=progress_callback)

    async def convert_async(
        self,
        settings: ConversionSettings,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[PageResult]:
        self.pipeline.reset()
        return await self.pipeline.run_async(self._adapter.document, settings, on_progress=progress_callback)

    def package(
        self,
        results: List[PageResult],
        settings: ConversionSettings,
        *,
        separate: bool = False,
    ) -> List[DeliveredFile]:
        """Return the files to deliver: one image, one archive, or every page."""
        if separate:
            return self.packager.deliver_each(results, settings.output_format)
        return [self.packager.deliver(results, settings.output_format, self.name)]

    def convert_to_directory(
        self,
        output_dir: Union[str, Path],
        settings: ConversionSettings,
        *,
        separate: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
        delivery: Optional[FileDelivery] = None,
    ) -> List[str]:
        """Convert, package and write the output files; return their paths."""
        results = self.convert(settings, progress_callback=progress_callback)
        files = self.package(results, settings, separate=separate)
        target = delivery or DirectoryDelivery(output_dir)
        return [str(path) for path in target.deliver_all(files)]

    def get_page_count(self) -> int:
        return self.num_pages

    def close(self) -> None:
        self.converter.close()


def convert_pdf(
    input_path: Union[str, Path],
    settings: Optional[ConversionSettings] = None,
    *,
    password: Optional[str] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> List[PageResult]:
    """Convert every page of ``input_path`` with the default backends."""
    with PDFRasterizer(input_path, password=password) as rasterizer:
        return rasterizer.convert(settings or ConversionSettings(), progress_callback=progress_callback)


__all__ = ["PDFRasterizer", "convert_pdf"]
