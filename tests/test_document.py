from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfWriter

from pdf_rasterizer.backends.pypdf_backend import PypdfSource
from pdf_rasterizer.document import PDFDocumentAdapter
from pdf_rasterizer.exceptions import EncryptedPDFError, InvalidInputError, InvalidPDFError
from pdf_rasterizer.types import PDFInfo
from pdf_rasterizer.utils import format_file_size, get_pdf_info, strip_extension, validate_pdf


def test_load_reports_pages_and_sizes(sample_pdf: Path) -> None:
    document = PypdfSource().load(str(sample_pdf))

    assert document.num_pages == 3
    assert document.name == "sample.pdf"
    assert document.base_name == "sample"
    assert document.file_size == sample_pdf.stat().st_size
    page = document.get_page(2)
    assert page.page_index == 2
    assert (page.width, page.height) == (200, 100)
    assert [handle.page_index for handle in document.iter_pages()] == [1, 2, 3]


def test_load_bytes(sample_pdf: Path) -> None:
    document = PypdfSource().load_bytes(sample_pdf.read_bytes(), "upload.pdf")

    assert document.num_pages == 3
    assert document.name == "upload.pdf"


def test_rotated_pages_swap_dimensions(tmp_path: Path) -> None:
    path = tmp_path / "rotated.pdf"
    writer = PdfWriter()
    page = writer.add_blank_page(width=200, height=100)
    page.rotate(90)
    with path.open("wb") as handle:
        writer.write(handle)

    page_handle = PypdfSource().load(str(path)).get_page(1)

    assert (page_handle.width, page_handle.height) == (100, 200)


def test_page_index_out_of_bounds(sample_pdf: Path) -> None:
    document = PypdfSource().load(str(sample_pdf))

    with pytest.raises(IndexError):
        document.get_page(0)
    with pytest.raises(IndexError):
        document.get_page(4)


def test_missing_file_is_invalid_input(tmp_path: Path) -> None:
    with pytest.raises(InvalidPDFError):
        PypdfSource().load(str(tmp_path / "missing.pdf"))


def test_corrupted_file_is_invalid_input(tmp_path: Path) -> None:
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is not a pdf")

    with pytest.raises(InvalidInputError):
        PypdfSource().load(str(path))


def test_empty_bytes_are_rejected() -> None:
    with pytest.raises(InvalidPDFError):
        PypdfSource().load_bytes(b"", "empty.pdf")


def test_document_without_pages_is_rejected(empty_pdf: Path) -> None:
    with pytest.raises(InvalidPDFError, match="no pages"):
        PypdfSource().load(str(empty_pdf))


def test_encrypted_document_needs_password(encrypted_pdf: Path) -> None:
    with pytest.raises(EncryptedPDFError):
        PypdfSource().load(str(encrypted_pdf))
    with pytest.raises(EncryptedPDFError):
        PypdfSource().load(str(encrypted_pdf), password="wrong")

    document = PypdfSource().load(str(encrypted_pdf), password="secret")
    assert document.num_pages == 2
    assert document.password == "secret"


def test_adapter_builds_pdf_info(pdf_factory) -> None:
    path = pdf_factory("titled.pdf", [(612, 792), (842, 595)], title="Quarterly Report")

    info = PDFDocumentAdapter(path).to_pdf_info()

    assert isinstance(info, PDFInfo)
    assert info.name == "titled.pdf"
    assert info.num_pages == 2
    assert info.title == "Quarterly Report"
    assert info.author == "pytest"
    assert info.page_sizes == [(612, 792), (842, 595)]
    assert not info.is_encrypted


def test_adapter_from_bytes(sample_pdf: Path) -> None:
    adapter = PDFDocumentAdapter.from_bytes(sample_pdf.read_bytes(), "in-memory.pdf")

    assert adapter.num_pages == 3
    assert adapter.base_name == "in-memory"


def test_get_pdf_info(sample_pdf: Path) -> None:
    info = get_pdf_info(sample_pdf)

    assert info.num_pages == 3
    assert info.file_size > 0
    assert info.title == "Sample"


def test_validate_pdf(sample_pdf: Path, tmp_path: Path, encrypted_pdf: Path) -> None:
    assert validate_pdf(sample_pdf) == (True, "")

    is_valid, message = validate_pdf(tmp_path / "missing.pdf")
    assert not is_valid
    assert "not found" in message.lower()

    text_file = tmp_path / "notes.txt"
    text_file.write_text("hello", encoding="utf-8")
    is_valid, message = validate_pdf(text_file)
    assert not is_valid
    assert "extension" in message.lower()

    is_valid, message = validate_pdf(encrypted_pdf)
    assert not is_valid
    assert "encrypted" in message.lower()
    assert validate_pdf(encrypted_pdf, password="secret") == (True, "")


@pytest.mark.parametrize(
    "name,expected",
    [
        ("report.pdf", "report"),
        ("archive.tar.pdf", "archive.tar"),
        ("/tmp/scans/page.PDF", "page"),
        ("noext", "noext"),
        ("", "document"),
    ],
)
def test_strip_extension(name: str, expected: str) -> None:
    assert strip_extension(name) == expected


def test_format_file_size() -> None:
    assert format_file_size(500) == "500.0 B"
    assert format_file_size(1024) == "1.0 KB"
    assert format_file_size(1536) == "1.5 KB"
    assert format_file_size(1024 * 1024) == "1.0 MB"
