"""Native .docx generation from résumé data (python-docx)."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, RGBColor

from resume_builder.editor.sections import SectionOrder
from resume_builder.models.resume import ResumeData
from resume_builder.templates.renderer import render_markdown

logger = logging.getLogger(__name__)

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def generate_docx(
    data: ResumeData,
    order: SectionOrder | None,
    output_path: str | Path,
    font_name: str = "Calibri",
) -> Path:
    """Write a clean .docx with one heading per visible section."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = font_name
    style.font.size = Pt(10)

    label = None
    body: list[str] = []
    for line in render_markdown(data, order).splitlines():
        if line.startswith("# "):
            title = doc.add_heading(line[2:], level=0)
            title.alignment = WD_ALIGN_PARAGRAPH.CENTER
        elif line.startswith("## "):
            if label is not None:
                _render_section(doc, label, body)
            label, body = line[3:], []
        elif label is None:
            if line.strip():
                contact = doc.add_paragraph(line)
                contact.alignment = WD_ALIGN_PARAGRAPH.CENTER
        else:
            body.append(line)
    if label is not None:
        _render_section(doc, label, body)

    doc.save(str(output_path))
    logger.debug("Wrote %s", output_path)
    return output_path


def _render_section(doc: Document, label: str, lines: list[str]) -> None:
    heading = doc.add_heading(label, level=2)
    for run in heading.runs:
        run.font.color.rgb = RGBColor(0x1A, 0x1A, 0x1A)

    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        if line.startswith("### "):
            h = doc.add_heading(line[4:], level=3)
            for run in h.runs:
                run.font.size = Pt(11)
        elif line.startswith("- "):
            p = doc.add_paragraph(style="List Bullet")
            _add_rich_text(p, line[2:])
        elif line.startswith("*") and line.endswith("*") and not line.startswith("**"):
            p = doc.add_paragraph()
            run = p.add_run(line.strip("*"))
            run.italic = True
        else:
            p = doc.add_paragraph()
            _add_rich_text(p, line)


def _add_rich_text(paragraph, text: str) -> None:
    """Add text to a paragraph with bold markers rendered as bold runs."""
    text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)
    for part in re.split(r"(\*\*.+?\*\*)", text):
        bold = re.match(r"\*\*(.+?)\*\*", part)
        if bold:
            paragraph.add_run(bold.group(1)).bold = True
        elif part:
            paragraph.add_run(part)
