"""
Integration tests for PDF Rasterizer.
Tests complete workflows end-to-end with the real backends.
"""

import io
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from zipfile import ZipFile

from PIL import Image

from conftest import write_pdf
from pdf_rasterizer import (
    ConversionSettings,
    ImageFormat,
    PDFRasterizer,
    RunStatus,
    convert_pdf,
)
from pdf_rasterizer.backends.pdfium_backend import PdfiumRasterizer
from pdf_rasterizer.backends.pypdf_backend import PypdfSource
from pdf_rasterizer.viewport import round_half_up


def _open_image(data):
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


class TestCompleteConversionWorkflow(unittest.TestCase):
    """Test complete conversion workflow end-to-end."""

    @classmethod
    def setUpClass(cls):
        """Create test environment."""
        cls.temp_dir = tempfile.mkdtemp()
        cls.three_pages = os.path.join(cls.temp_dir, 'test_document.pdf')
        write_pdf(Path(cls.three_pages), [(200, 100)] * 3, title='Integration Test')
        cls.letter = os.path.join(cls.temp_dir, 'letter.pdf')
        write_pdf(Path(cls.letter), [(612, 792)])

    @classmethod
    def tearDownClass(cls):
        """Clean up test environment."""
        shutil.rmtree(cls.temp_dir, ignore_errors=True)

    def test_png_pages_have_planned_size(self):
        """Every page renders at 2x into a PNG of the planned size."""
        progress = []
        results = convert_pdf(
            self.three_pages,
            ConversionSettings(base_scale=2),
            progress_callback=lambda page, total, percent: progress.append(percent),
        )

        self.assertEqual([result.page_index for result in results], [1, 2, 3])
        self.assertEqual(progress, [33, 67, 100])
        for result in results:
            self.assertEqual((result.width_pixels, result.height_pixels), (400, 200))
            image = _open_image(result.data)
            self.assertEqual(image.format, 'PNG')
            self.assertEqual(image.size, (400, 200))
            # Blank pages render white
            self.assertEqual(image.convert('RGB').getpixel((10, 10)), (255, 255, 255))

    def test_max_width_reduces_scale(self):
        """A 612pt page at 3x is capped to 1200px wide."""
        results = convert_pdf(
            self.letter,
            ConversionSettings(output_format='jpeg', quality=0.8, base_scale=3, max_width_pixels=1200),
        )

        self.assertEqual(len(results), 1)
        expected_height = round_half_up(792 * 3 * 1200 / 1836)
        self.assertEqual((results[0].width_pixels, results[0].height_pixels), (1200, expected_height))
        image = _open_image(results[0].data)
        self.assertEqual(image.format, 'JPEG')
        self.assertEqual(image.size, (1200, expected_height))
        self.assertIs(results[0].image_format, ImageFormat.JPEG)

    def test_multi_page_document_is_archived(self):
        """Three pages end up in <name>-images.zip under images/."""
        output_dir = os.path.join(self.temp_dir, 'archive_output')

        with PDFRasterizer(self.three_pages) as rasterizer:
            created = rasterizer.convert_to_directory(output_dir, ConversionSettings(base_scale=1))
            self.assertEqual(rasterizer.pipeline.status, RunStatus.DONE)

        self.assertEqual([os.path.basename(path) for path in created], ['test_document-images.zip'])
        with ZipFile(created[0]) as archive:
            self.assertEqual(
                archive.namelist(),
                ['images/page-1.png', 'images/page-2.png', 'images/page-3.png'],
            )
            image = _open_image(archive.read('images/page-3.png'))
            self.assertEqual(image.size, (200, 100))

    def test_single_page_document_is_written_directly(self):
        """A one-page document is delivered as page-1.<ext>."""
        output_dir = os.path.join(self.temp_dir, 'single_output')

        with PDFRasterizer(self.letter) as rasterizer:
            created = rasterizer.convert_to_directory(output_dir, ConversionSettings(base_scale=1))

        self.assertEqual([os.path.basename(path) for path in created], ['page-1.png'])
        with open(created[0], 'rb') as handle:
            self.assertEqual(_open_image(handle.read()).size, (612, 792))

    def test_separate_files(self):
        """--separate style delivery writes every page."""
        output_dir = os.path.join(self.temp_dir, 'separate_output')

        with PDFRasterizer(self.three_pages) as rasterizer:
            created = rasterizer.convert_to_directory(
                output_dir,
                ConversionSettings(output_format='jpeg', base_scale=1),
                separate=True,
            )

        self.assertEqual(
            sorted(os.path.basename(path) for path in created),
            ['page-1.jpeg', 'page-2.jpeg', 'page-3.jpeg'],
        )

    def test_plan_pages(self):
        """plan_pages reports the viewport of each page."""
        with PDFRasterizer(self.three_pages) as rasterizer:
            plans = rasterizer.plan_pages(ConversionSettings(base_scale=4, max_width_pixels=500))

        self.assertEqual([plan.size for plan in plans], [(500, 250)] * 3)

    def test_from_bytes_and_reconvert(self):
        """An in-memory document can be converted twice; each call starts a new run."""
        with open(self.three_pages, 'rb') as handle:
            data = handle.read()

        with PDFRasterizer.from_bytes(data, 'upload.pdf') as rasterizer:
            first = rasterizer.convert(ConversionSettings(base_scale=1))
            second = rasterizer.convert(ConversionSettings(base_scale=1))
            files = rasterizer.package(second, ConversionSettings())

        self.assertEqual(len(first), 3)
        self.assertEqual([result.data for result in first], [result.data for result in second])
        self.assertEqual(files[0].filename, 'upload-images.zip')


class TestPdfiumRasterizer(unittest.TestCase):
    """Test the PDFium rasterizer directly."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, 'pages.pdf')
        write_pdf(Path(self.path), [(100, 100), (50, 80)])

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_render_into_surface_keeps_surface_size(self):
        """The rendered page is clipped to the caller's surface."""
        document = PypdfSource().load(self.path)
        surface = Image.new('RGB', (120, 90), 'white')

        with PdfiumRasterizer() as rasterizer:
            rasterizer.render(document.get_page(1), surface, 1.5)
            rasterizer.render(document.get_page(2), surface, 1.0)

        self.assertEqual(surface.size, (120, 90))

    def test_close_is_idempotent(self):
        """close can be called more than once."""
        rasterizer = PdfiumRasterizer()
        rasterizer.render(PypdfSource().load(self.path).get_page(1), Image.new('RGB', (100, 100)), 1.0)
        rasterizer.close()
        rasterizer.close()


if __name__ == '__main__':
    unittest.main()
