"""ZIP archive builder."""

from __future__ import annotations

import io
from typing import Sequence, Tuple
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile, ZipInfo

from ..config import ARCHIVE_EXTENSION, ARCHIVE_MEDIA_TYPE, ARCHIVE_TIMESTAMP
from .base import ArchiveBuilder


def _zipinfo(name: str, compress_type: int) -> ZipInfo:
    info = ZipInfo(name)
    info.date_time = ARCHIVE_TIMESTAMP
    info.compress_type = compress_type
    info.external_attr = 0o644 << 16
    return info


class ZipArchiveBuilder(ArchiveBuilder):
    """
    Build ZIP archives in memory.

    Entries get a fixed timestamp and permissions so the same input always
    produces the same bytes. Images are already compressed, so entries are
    stored by default.
    """

    extension = ARCHIVE_EXTENSION
    media_type = ARCHIVE_MEDIA_TYPE

    def __init__(self, *, compress: bool = False) -> None:
        self.compress_type = ZIP_DEFLATED if compress else ZIP_STORED

    def build(self, entries: Sequence[Tuple[str, bytes]]) -> bytes:
        buffer = io.BytesIO()
        with ZipFile(buffer, "w", compression=self.compress_type) as archive:
            for name, data in entries:
                archive.writestr(_zipinfo(name, self.compress_type), bytes(data))
        return buffer.getvalue()
