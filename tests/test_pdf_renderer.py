"""Tests for PDF export: target lookup, pagination and the raster PDF."""

from unittest.mock import patch

import fitz
import pytest
from PIL import Image

from resume_builder.config import ExportConfig
from resume_builder.export.dom import ExportError, find_target
from resume_builder.export.pdf_fallback import html_to_blocks, html_to_pdf_fpdf2
from resume_builder.export.pdf_renderer import (
    PDF_MAGIC,
    _html_to_pdf,
    export_pdf,
    image_to_pdf,
    paginate,
    rasterize,
)
from resume_builder.templates.renderer import render_resume

A4_W, A4_H = 210.0, 297.0


class TestPaginate:
    def test_single_page(self):
        # 1000px wide, 1000px tall → 210mm x 210mm fits on one page
        assert paginate(1000, 1000, A4_W, A4_H) == [0]

    def test_exact_fit_is_one_page(self):
        assert paginate(210, 297, A4_W, A4_H) == [0]

    def test_multiple_pages(self):
        # scaled height 700mm → 3 pages
        offsets = paginate(300, 1000, A4_W, A4_H)
        assert offsets == [0, -A4_H, -2 * A4_H]

    def test_scale_only_depends_on_ratio(self):
        assert paginate(600, 2000, A4_W, A4_H) == paginate(300, 1000, A4_W, A4_H)

    def test_empty_image_still_one_page(self):
        assert paginate(100, 0, A4_W, A4_H) == [0]

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            paginate(0, 100, A4_W, A4_H)


class TestFindTarget:
    def test_found(self, classic, seed_resume):
        node = find_target(render_resume(classic, seed_resume))
        assert node["id"] == "resume-preview"

    def test_missing(self):
        with pytest.raises(ExportError, match="Element not found"):
            find_target("<html><body><div id='other'></div></body></html>")


class TestImageToPdf:
    def test_page_count(self):
        tall = Image.new("RGB", (300, 1000), "white")
        pdf = image_to_pdf(tall)
        assert pdf.startswith(PDF_MAGIC)
        doc = fitz.open(stream=pdf, filetype="pdf")
        try:
            assert doc.page_count == 3
            assert round(doc[0].rect.width * 25.4 / 72) == 210
        finally:
            doc.close()

    def test_rasterize_stacks_pages(self):
        pdf = image_to_pdf(Image.new("RGB", (300, 1000), "white"))
        image = rasterize(pdf, scale=1.0)
        # three portrait A4 pages stacked vertically
        assert 590 <= image.width <= 600
        assert image.height > 2 * image.width
        assert image.mode == "RGB"


class TestExportPdf:
    def test_fallback_layout(self, classic, full_resume):
        html = render_resume(classic, full_resume)
        with patch("resume_builder.export.pdf_renderer._html_to_pdf", side_effect=html_to_pdf_fpdf2):
            pdf = export_pdf(html, config=ExportConfig(raster_scale=1.0))
        assert pdf.startswith(PDF_MAGIC)

    def test_weasyprint_unavailable_uses_fpdf2(self):
        with patch.dict("sys.modules", {"weasyprint": None}):
            pdf = _html_to_pdf("<html><body><h1>Jane</h1></body></html>")
        assert pdf.startswith(PDF_MAGIC)

    def test_missing_target_fails_fast(self):
        with patch("resume_builder.export.pdf_renderer._html_to_pdf") as layout:
            with pytest.raises(ExportError):
                export_pdf("<html><body><p>no preview</p></body></html>")
        layout.assert_not_called()

    def test_layout_failure_wrapped(self, classic, seed_resume):
        html = render_resume(classic, seed_resume)
        with patch("resume_builder.export.pdf_renderer._html_to_pdf", side_effect=RuntimeError("boom")):
            with pytest.raises(ExportError, match="boom"):
                export_pdf(html)


class TestFallbackBlocks:
    def test_blocks(self, classic, full_resume):
        blocks = html_to_blocks(render_resume(classic, full_resume))
        kinds = dict(blocks[:1])
        assert kinds == {"h1": "Jane Roe"}
        assert ("h2", "Experience") in blocks
        assert ("li", "Scaled the billing platform") in blocks
        assert not any("font-family" in text for _, text in blocks)

    def test_multi_block_layout(self, classic, full_resume):
        pdf = html_to_pdf_fpdf2(render_resume(classic, full_resume))
        assert pdf.startswith(PDF_MAGIC)
        doc = fitz.open(stream=pdf, filetype="pdf")
        try:
            text = "".join(page.get_text() for page in doc)
        finally:
            doc.close()
        assert "Jane Roe" in text
        assert "Experience" in text
        assert "Scaled the billing platform" in text

    def test_export_without_weasyprint(self, classic, seed_resume):
        with patch.dict("sys.modules", {"weasyprint": None}):
            pdf = export_pdf(render_resume(classic, seed_resume), config=ExportConfig(raster_scale=1.0))
        assert pdf.startswith(PDF_MAGIC)
