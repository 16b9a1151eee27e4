"""Tests for the Word (.doc) and native .docx exports."""

import pytest
from bs4 import BeautifulSoup
from docx import Document

from resume_builder.editor.inline import EditSession
from resume_builder.editor.sections import SectionOrder
from resume_builder.export.dom import ExportError, find_target, sanitize
from resume_builder.export.word_export import WORD_CONTENT_TYPE, export_word, word_filename
from resume_builder.templates.docx_renderer import generate_docx
from resume_builder.templates.renderer import render_resume


class TestWordFilename:
    @pytest.mark.parametrize(
        "given, expected",
        [
            ("resume.docx", "resume.doc"),
            ("resume.doc", "resume.doc"),
            ("cv", "cv.doc"),
            ("my.cv.docx", "my.cv.doc"),
        ],
    )
    def test_extension(self, given, expected):
        assert word_filename(given) == expected

    def test_default(self):
        assert word_filename() == "resume.doc"

    def test_content_type(self):
        assert WORD_CONTENT_TYPE == "application/msword"


class TestSanitize:
    def test_strips_editing_chrome(self, classic, full_resume):
        session = EditSession()
        session.activate("personalInfo.name", "Jane Roe")
        session.type("Jane Q. Roe")
        html = render_resume(classic, full_resume, editable=True, session=session)

        clean = sanitize(find_target(html))
        assert clean["id"] == "resume-preview"
        assert not clean.select(".edit-only")
        assert not clean.find_all(["button", "script", "input", "textarea"])
        assert "Jane Q. Roe" in clean.get_text()

    def test_source_untouched(self, classic, full_resume):
        html = render_resume(classic, full_resume, editable=True)
        node = find_target(html)
        sanitize(node)
        assert node.select(".edit-only")


class TestExportWord:
    def test_document(self, classic, full_resume):
        html = render_resume(classic, full_resume, editable=True)
        data = export_word(html)
        text = data.decode("utf-8")
        assert text.startswith("<!DOCTYPE html>")
        assert "font-family: Arial" in text

        soup = BeautifulSoup(text, "html.parser")
        assert soup.find(id="resume-preview") is not None
        assert not soup.select("button")
        assert "Staff Engineer" in soup.get_text()

    def test_missing_target(self):
        with pytest.raises(ExportError):
            export_word("<html><body></body></html>")


class TestGenerateDocx:
    def test_headings_and_bullets(self, tmp_path, full_resume):
        path = generate_docx(full_resume, SectionOrder(), tmp_path / "out" / "resume.docx")
        assert path.exists()

        doc = Document(str(path))
        texts = [p.text for p in doc.paragraphs]
        assert texts[0] == "Jane Roe"
        headings = [p.text for p in doc.paragraphs if p.style.name == "Heading 2"]
        assert headings[:3] == ["Summary", "Experience", "Education"]
        assert "Volunteering" in headings
        bullets = [p.text for p in doc.paragraphs if p.style.name == "List Bullet"]
        assert "Scaled the billing platform" in bullets

    def test_bold_markdown(self, tmp_path, full_resume):
        path = generate_docx(full_resume, None, tmp_path / "resume.docx")
        doc = Document(str(path))
        summary = next(p for p in doc.paragraphs if p.text.startswith("Backend engineer"))
        assert any(run.bold and run.text == "8 years" for run in summary.runs)

    def test_empty_sections_omitted(self, tmp_path, empty_resume):
        path = generate_docx(empty_resume, SectionOrder(), tmp_path / "resume.docx")
        doc = Document(str(path))
        assert not [p for p in doc.paragraphs if p.style.name == "Heading 2"]
