"""Backend protocols for loading, rasterizing, encoding, archiving and delivering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Protocol, Sequence, Tuple, Union

from ..types import DeliveredFile, ImageFormat


class Surface(Protocol):
    """Drawable pixel surface with fixed dimensions."""

    width: int
    height: int


@dataclass(frozen=True)
class PageHandle:
    """Reference to one page of a loaded document."""

    document: "BackendDocument"
    page_index: int
    width: float
    height: float


@dataclass
class BackendDocument:
    """Represents a loaded PDF document with backend-specific helpers."""

    num_pages: int
    file_size: int
    name: str

    def get_page(self, page_index: int) -> PageHandle:
        """Return the handle for the 1-based ``page_index``."""
        raise NotImplementedError

    def iter_pages(self) -> Iterator[PageHandle]:
        for page_index in range(1, self.num_pages + 1):
            yield self.get_page(page_index)

    @property
    def base_name(self) -> str:
        return Path(self.name).stem if self.name else ""


class DocumentSource(Protocol):
    """Protocol for turning raw document bytes into a :class:`BackendDocument`."""

    def load(self, pdf_path: str, password: Optional[str] = None) -> BackendDocument:
        """Load a PDF file and return a backend document wrapper."""

    def load_bytes(self, data: bytes, name: str, password: Optional[str] = None) -> BackendDocument:
        """Load a PDF from memory."""


class Rasterizer(Protocol):
    """Protocol for painting a page into a caller-supplied surface."""

    def render(self, page: PageHandle, surface: Surface, scale: float) -> None:
        """Paint ``page`` into ``surface`` at ``scale``."""

    def close(self) -> None:
        """Release any resources held for open documents."""


class ImageEncoder(Protocol):
    """Protocol for serializing a surface into encoded image bytes."""

    def new_surface(self, width: int, height: int) -> Surface:
        """Allocate a blank surface of exactly ``width`` x ``height`` pixels."""

    def encode(self, surface: Surface, image_format: ImageFormat, quality: Optional[float] = None) -> bytes:
        """Encode ``surface``; ``quality`` is only passed for lossy formats."""


class ArchiveBuilder(Protocol):
    """Protocol for bundling named byte streams into one archive."""

    extension: str
    media_type: str

    def build(self, entries: Sequence[Tuple[str, bytes]]) -> bytes:
        """Return archive bytes containing ``entries`` in the given order."""


class FileDelivery(Protocol):
    """Protocol for handing finished byte streams to storage."""

    def deliver(self, item: DeliveredFile) -> Union[str, Path]:
        """Store ``item`` and return where it went."""

    def deliver_all(self, items: Iterable[DeliveredFile]) -> list:
        """Store every item in order."""
