"""Packaging of converted pages into deliverable files."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from .backends.base import ArchiveBuilder
from .backends.zip_backend import ZipArchiveBuilder
from .config import ARCHIVE_FOLDER, ARCHIVE_SUFFIX, DEFAULT_DOCUMENT_NAME, PAGE_FILENAME_PREFIX
from .exceptions import PackagingFailure
from .types import DeliveredFile, ImageFormat, PageResult
from .utils import strip_extension

LOGGER = logging.getLogger(__name__)


def page_filename(page_index: int, image_format: Union[str, ImageFormat]) -> str:
    """Return ``page-<n>.<ext>`` for a page."""

    return f"{PAGE_FILENAME_PREFIX}-{page_index}.{ImageFormat.parse(image_format).extension}"


def archive_entry_name(page_index: int, image_format: Union[str, ImageFormat]) -> str:
    return f"{ARCHIVE_FOLDER}/{page_filename(page_index, image_format)}"


def archive_name(base_name: str, extension: str = ZipArchiveBuilder.extension) -> str:
    """Return ``<base_name>-images.<ext>``."""

    return f"{base_name or DEFAULT_DOCUMENT_NAME}{ARCHIVE_SUFFIX}.{extension}"


class OutputPackager:
    """Turn page results into a single image file or one archive."""

    def __init__(self, archive_builder: Optional[ArchiveBuilder] = None) -> None:
        self.archive_builder: ArchiveBuilder = archive_builder or ZipArchiveBuilder()

    def deliver_single(self, result: PageResult, image_format: Union[str, ImageFormat]) -> DeliveredFile:
        image_format = ImageFormat.parse(image_format)
        return DeliveredFile(
            filename=page_filename(result.page_index, image_format),
            data=result.data,
            media_type=image_format.mime_type,
        )

    def deliver_each(
        self,
        results: Sequence[PageResult],
        image_format: Union[str, ImageFormat],
    ) -> List[DeliveredFile]:
        ordered = self._ordered(results)
        return [self.deliver_single(result, image_format) for result in ordered]

    def deliver_bundle(
        self,
        results: Sequence[PageResult],
        image_format: Union[str, ImageFormat],
        base_name: str,
    ) -> DeliveredFile:
        """
        Bundle two or more results into one archive.

        Entries are named ``images/page-<n>.<ext>`` in ascending page order and
        the archive is named ``<base_name>-images.<ext>``.

        Raises:
            PackagingFailure: If fewer than two results are given, page
                indices repeat, or the archive cannot be built
        """
        if len(results) < 2:
            raise PackagingFailure(
                message=f"An archive needs at least two pages, got {len(results)}."
            )
        image_format = ImageFormat.parse(image_format)
        ordered = self._ordered(results)
        entries = [
            (archive_entry_name(result.page_index, image_format), result.data)
            for result in ordered
        ]

        try:
            data = self.archive_builder.build(entries)
        except Exception as exc:
            LOGGER.error("Archive construction failed: %s", exc)
            raise PackagingFailure(exc) from exc

        filename = archive_name(base_name, self.archive_builder.extension)
        LOGGER.info("Packaged %d page(s) into %s (%d bytes)", len(entries), filename, len(data))
        return DeliveredFile(
            filename=filename,
            data=data,
            media_type=self.archive_builder.media_type,
        )

    def deliver(
        self,
        results: Sequence[PageResult],
        image_format: Union[str, ImageFormat],
        document_name: str,
    ) -> DeliveredFile:
        """Deliver one image when there is a single result, otherwise an archive."""

        if not results:
            raise PackagingFailure(message="There are no converted pages to deliver.")
        if len(results) == 1:
            return self.deliver_single(results[0], image_format)
        return self.deliver_bundle(results, image_format, strip_extension(document_name))

    @staticmethod
    def _ordered(results: Sequence[PageResult]) -> List[PageResult]:
        ordered = sorted(results, key=lambda result: result.page_index)
        for current, nxt in zip(ordered, ordered[1:]):
            if current.page_index == nxt.page_index:
                raise PackagingFailure(
                    message=f"Duplicate result for page {current.page_index}."
                )
        return ordered


__all__ = [
    "OutputPackager",
    "archive_entry_name",
    "archive_name",
    "page_filename",
]
