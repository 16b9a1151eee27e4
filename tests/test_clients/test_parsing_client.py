"""Tests for the mock résumé parser."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from resume_builder.clients.parsing_client import (
    ENHANCEMENT_OPTIONS,
    ParsingClient,
    UnsupportedFileError,
    check_upload,
)
from resume_builder.config import UploadConfig


class TestCheckUpload:
    @pytest.mark.parametrize("name", ["cv.pdf", "cv.DOCX", "cv.doc", "notes.txt"])
    def test_supported(self, name):
        assert check_upload(name, 1024) == "." + name.rsplit(".", 1)[1].lower()

    @pytest.mark.parametrize("name", ["cv.png", "cv", "cv.pdf.exe"])
    def test_unsupported(self, name):
        with pytest.raises(UnsupportedFileError, match="supported file format"):
            check_upload(name, 1024)

    def test_too_large(self):
        with pytest.raises(UnsupportedFileError, match="too large"):
            check_upload("cv.pdf", 11 * 1024 * 1024)

    def test_custom_limits(self):
        config = UploadConfig(allowed_extensions=(".txt",), max_bytes=10)
        with pytest.raises(UnsupportedFileError):
            check_upload("cv.pdf", 1, config)
        assert check_upload("cv.txt", 10, config) == ".txt"


class TestParse:
    @pytest.mark.asyncio
    async def test_returns_canned_record(self):
        client = ParsingClient(delay=0)
        parsed = await client.parse("cv.pdf", b"%PDF-1.4 whatever")
        assert parsed.personal_info.name == "John Doe"
        assert [e.company for e in parsed.experience] == ["Tech Corp", "StartupXYZ"]
        assert parsed.skills == ["JavaScript", "React", "Node.js", "Python", "SQL", "Git"]

    @pytest.mark.asyncio
    async def test_content_is_ignored(self):
        client = ParsingClient(delay=0)
        a = await client.parse("a.txt", b"one")
        b = await client.parse("b.txt", b"two")
        assert a == b

    @pytest.mark.asyncio
    async def test_rejects_before_waiting(self):
        with patch("resume_builder.clients.parsing_client.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(UnsupportedFileError):
                await ParsingClient().parse("photo.jpg", b"...")
        sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_waits_configured_delay(self):
        with patch("resume_builder.clients.parsing_client.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await ParsingClient().parse("cv.txt", b"text")
        sleep.assert_awaited_once_with(3.0)

    @pytest.mark.asyncio
    async def test_converts_to_resume(self):
        parsed = await ParsingClient(delay=0).parse("cv.docx", b"")
        data = parsed.to_resume_data()
        current = data.experience[0]
        assert current.current is True
        assert current.bullets == [
            "Led development of web applications.",
            "Managed team of developers.",
            "Improved system performance.",
        ]
        assert data.education[0].graduation_date == "2019"


class TestEnhancementOptions:
    def test_six_options(self):
        assert [o.id for o in ENHANCEMENT_OPTIONS] == [
            "ats-optimize", "quantify", "modernize", "tailor-role", "improve-format", "add-projects"
        ]
