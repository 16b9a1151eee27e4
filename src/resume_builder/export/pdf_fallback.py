"""Fallback PDF layout using fpdf2 (pure Python, no system deps).

Only the text structure survives: headings, entry lines and bullets. Used
when WeasyPrint or its native libraries are unavailable.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from bs4 import BeautifulSoup, NavigableString, Tag
from fpdf import FPDF
from fpdf.enums import XPos, YPos

logger = logging.getLogger(__name__)

# Unicode-capable font search paths (macOS, Linux, Windows)
_UNICODE_FONT_PATHS = [
    "/Library/Fonts/Arial Unicode.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "C:/Windows/Fonts/arial.ttf",
]

_BLOCK_TAGS = ("h1", "h2", "h3", "li", "p")


def _find_unicode_font() -> str | None:
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists():
            return path
    return None


def html_to_pdf_fpdf2(html_content: str) -> bytes:
    """Lay out ``html_content`` as plain text blocks with fpdf2."""
    pdf = FPDF(orientation="portrait", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    font_name = "Helvetica"
    font_path = _find_unicode_font()
    if font_path:
        try:
            pdf.add_font("Unicode", "", font_path)
            font_name = "Unicode"
        except (OSError, RuntimeError):
            logger.debug("Failed to load font %s", font_path)
    pdf.set_font(font_name, size=10)

    for kind, text in html_to_blocks(html_content):
        safe = _safe_text(text, pdf)
        if kind == "h1":
            pdf.set_font_size(18)
            pdf.multi_cell(0, 9, safe, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.set_font_size(10)
        elif kind == "h2":
            pdf.ln(3)
            pdf.set_font_size(12)
            pdf.multi_cell(0, 7, safe, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
            pdf.ln(1)
            pdf.set_font_size(10)
        elif kind == "h3":
            pdf.ln(1)
            pdf.set_font_size(11)
            pdf.multi_cell(0, 6, safe, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.set_font_size(10)
        elif kind == "li":
            pdf.multi_cell(0, 5, f"  - {safe}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        else:
            pdf.multi_cell(0, 5, safe, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    buf = BytesIO()
    pdf.output(buf)
    return buf.getvalue()


def html_to_blocks(html_content: str) -> list[tuple[str, str]]:
    """Flatten markup into ``(kind, text)`` blocks in document order.

    ``kind`` is a heading level, ``li``, or ``text`` for any other run of
    text not inside one of those.
    """
    soup = BeautifulSoup(html_content, "html.parser")
    for el in soup.find_all(["style", "script", "title"]):
        el.decompose()
    root = soup.body or soup
    blocks: list[tuple[str, str]] = []
    _walk(root, blocks)
    return blocks


def _walk(node: Tag, blocks: list[tuple[str, str]]) -> None:
    pending: list[str] = []

    def flush():
        text = " ".join(" ".join(pending).split())
        if text:
            blocks.append(("text", text))
        pending.clear()

    for child in node.children:
        if isinstance(child, NavigableString):
            pending.append(str(child))
        elif isinstance(child, Tag):
            if child.name in _BLOCK_TAGS:
                flush()
                text = " ".join(child.get_text(" ").split())
                if text:
                    blocks.append((child.name if child.name != "p" else "text", text))
            elif child.name in ("span", "strong", "em", "small", "a", "b", "i"):
                pending.append(child.get_text(" "))
            else:
                flush()
                _walk(child, blocks)
    flush()


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font."""
    if pdf.is_ttf_font:
        return text
    return text.encode("latin-1", errors="replace").decode("latin-1")
