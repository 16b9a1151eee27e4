"""PDF export: lay out the preview node, rasterise it, slice it onto pages."""

from __future__ import annotations

import logging
import math
from io import BytesIO

import fitz  # PyMuPDF
from fpdf import FPDF
from PIL import Image

from resume_builder.config import ExportConfig
from resume_builder.export.dom import DEFAULT_ELEMENT_ID, ExportError, document_styles, find_target

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"

_STANDALONE = """<!DOCTYPE html>
<html><head><meta charset="utf-8"><title>Resume</title>
<style>{css}</style></head>
<body>{body}</body></html>"""


def export_pdf(
    html: str,
    element_id: str = DEFAULT_ELEMENT_ID,
    config: ExportConfig | None = None,
) -> bytes:
    """Export the node ``#element_id`` of ``html`` as a paged raster PDF."""
    config = config or ExportConfig()
    target = find_target(html, element_id)
    standalone = _STANDALONE.format(css=document_styles(html), body=str(target))
    try:
        layout = _html_to_pdf(standalone)
        image = rasterize(layout, scale=config.raster_scale)
        return image_to_pdf(image, page_format=config.page_format)
    except Exception as e:
        logger.exception("PDF export failed")
        raise ExportError(f"PDF export failed: {e}") from e


def _html_to_pdf(html: str) -> bytes:
    """Convert HTML string to PDF bytes using WeasyPrint, with fpdf2 fallback."""
    try:
        from weasyprint import HTML
        return HTML(string=html).write_pdf()
    except (ImportError, OSError):
        logger.warning("WeasyPrint not available, using fpdf2 fallback")
        from resume_builder.export.pdf_fallback import html_to_pdf_fpdf2
        return html_to_pdf_fpdf2(html)


def rasterize(pdf_bytes: bytes, scale: float = 2.0) -> Image.Image:
    """Render every page at ``scale`` on white and stack them into one image."""
    doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    pages: list[Image.Image] = []
    try:
        mat = fitz.Matrix(scale, scale)
        for page in doc:
            pix = page.get_pixmap(matrix=mat, alpha=False)
            pages.append(Image.frombytes("RGB", (pix.width, pix.height), pix.samples))
    finally:
        doc.close()
    if not pages:
        raise ExportError("Layout produced no pages")

    width = max(p.width for p in pages)
    height = sum(p.height for p in pages)
    sheet = Image.new("RGB", (width, height), "white")
    y = 0
    for p in pages:
        sheet.paste(p, (0, y))
        y += p.height
    return sheet


def paginate(
    image_width: float,
    image_height: float,
    page_width: float,
    page_height: float,
) -> list[float]:
    """Vertical offsets of a page-width image on each page.

    The image is scaled to ``page_width``; page ``k`` shows it at
    ``y = -k * page_height``. At least one page is always produced.
    """
    if image_width <= 0 or page_width <= 0 or page_height <= 0:
        raise ValueError("Image and page dimensions must be positive")
    scaled_height = image_height * page_width / image_width
    count = max(1, math.ceil(scaled_height / page_height - 1e-9))
    return [-k * page_height for k in range(count)]


def image_to_pdf(image: Image.Image, page_format: str = "A4") -> bytes:
    """Embed ``image`` across as many portrait pages as it needs."""
    pdf = FPDF(orientation="portrait", unit="mm", format=page_format)
    pdf.set_auto_page_break(False)
    page_w, page_h = pdf.w, pdf.h
    scaled_h = image.height * page_w / image.width

    offsets = paginate(image.width, image.height, page_w, page_h)
    for y in offsets:
        pdf.add_page()
        pdf.image(image, x=0, y=y, w=page_w, h=scaled_h)
    logger.debug("Paginated %dx%d raster onto %d page(s)", image.width, image.height, len(offsets))

    buf = BytesIO()
    pdf.output(buf)
    return buf.getvalue()
