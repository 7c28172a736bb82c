from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_rasterizer.backends.base import BackendDocument, PageHandle  # noqa: E402
from pdf_rasterizer.converter import PageConverter  # noqa: E402
from pdf_rasterizer.pipeline import ConversionPipeline  # noqa: E402
from pdf_rasterizer.types import ImageFormat  # noqa: E402


@dataclass
class FakeSurface:
    width: int
    height: int
    painted: List[Tuple[int, float]] = field(default_factory=list)


class FakeRasterizer:
    """Records render calls and fails on selected pages."""

    def __init__(self, fail_on: Iterable[int] = (), error: Optional[BaseException] = None) -> None:
        self.fail_on = set(fail_on)
        self.error = error
        self.calls: List[Tuple[int, int, int, float]] = []
        self.closed = False

    def render(self, page: PageHandle, surface: FakeSurface, scale: float) -> None:
        if page.page_index in self.fail_on:
            raise self.error or RuntimeError(f"corrupted content stream on page {page.page_index}")
        self.calls.append((page.page_index, surface.width, surface.height, scale))
        surface.painted.append((page.page_index, scale))

    def close(self) -> None:
        self.closed = True


class FakeEncoder:
    """Allocates fake surfaces and encodes them as readable bytes."""

    def __init__(self) -> None:
        self.calls: List[Tuple[ImageFormat, Optional[float]]] = []
        self.surfaces: List[FakeSurface] = []

    def new_surface(self, width: int, height: int) -> FakeSurface:
        surface = FakeSurface(width, height)
        self.surfaces.append(surface)
        return surface

    def encode(self, surface: FakeSurface, image_format: ImageFormat, quality: Optional[float] = None) -> bytes:
        self.calls.append((image_format, quality))
        page_index, _ = surface.painted[-1]
        return f"{image_format.value}:{page_index}:{surface.width}x{surface.height}".encode()


@dataclass
class FakeDocument(BackendDocument):
    sizes: List[Tuple[float, float]] = field(default_factory=list)
    requested: List[int] = field(default_factory=list)

    def get_page(self, page_index: int) -> PageHandle:
        self.requested.append(page_index)
        width, height = self.sizes[page_index - 1]
        return PageHandle(document=self, page_index=page_index, width=width, height=height)


def make_document(sizes: Sequence[Tuple[float, float]], name: str = "sample.pdf") -> FakeDocument:
    return FakeDocument(num_pages=len(sizes), file_size=0, name=name, sizes=list(sizes))


def write_pdf(path: Path, sizes: Sequence[Tuple[float, float]], title: Optional[str] = None) -> Path:
    writer = PdfWriter()
    for width, height in sizes:
        writer.add_blank_page(width=width, height=height)
    if title is not None:
        writer.add_metadata({"/Title": title, "/Author": "pytest"})
    with path.open("wb") as handle:
        writer.write(handle)
    return path


@pytest.fixture()
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture()
def fake_encoder() -> FakeEncoder:
    return FakeEncoder()


@pytest.fixture()
def converter(fake_rasterizer: FakeRasterizer, fake_encoder: FakeEncoder) -> PageConverter:
    return PageConverter(fake_rasterizer, fake_encoder)


@pytest.fixture()
def pipeline(converter: PageConverter) -> ConversionPipeline:
    return ConversionPipeline(converter)


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    return write_pdf(tmp_path / "sample.pdf", [(200, 100)] * 3, title="Sample")


@pytest.fixture()
def single_page_pdf(tmp_path: Path) -> Path:
    return write_pdf(tmp_path / "single.pdf", [(612, 792)])


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    return write_pdf(tmp_path / "empty.pdf", [])


@pytest.fixture()
def encrypted_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "encrypted.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    writer.add_blank_page(width=200, height=200)
    writer.encrypt("secret")
    with path.open("wb") as handle:
        writer.write(handle)
    return path


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, sizes: Sequence[Tuple[float, float]], title: Optional[str] = None) -> Path:
        return write_pdf(tmp_path / filename, sizes, title=title)

    return _create
