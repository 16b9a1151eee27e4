"""Mock résumé parser for the import flow."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import PurePath

from resume_builder.config import UploadConfig
from resume_builder.models.suggestion import (
    ParsedEducation,
    ParsedExperience,
    ParsedPersonalInfo,
    ParsedResume,
)

logger = logging.getLogger(__name__)


class UnsupportedFileError(ValueError):
    """Raised for uploads with a disallowed extension or size."""


@dataclass(frozen=True)
class EnhancementOption:
    id: str
    label: str
    description: str


ENHANCEMENT_OPTIONS = (
    EnhancementOption("ats-optimize", "Optimize for ATS systems",
                      "Improve formatting and keywords for applicant tracking systems"),
    EnhancementOption("quantify", "Add quantifiable results",
                      "Help add numbers and metrics to achievements"),
    EnhancementOption("modernize", "Modernize language",
                      "Update outdated phrases and improve impact"),
    EnhancementOption("tailor-role", "Tailor to specific role",
                      "Customize content for your target position"),
    EnhancementOption("improve-format", "Improve formatting",
                      "Enhance visual hierarchy and readability"),
    EnhancementOption("add-projects", "Highlight key projects",
                      "Better showcase important work and achievements"),
)


def check_upload(filename: str, size: int, config: UploadConfig | None = None) -> str:
    """Validate an upload and return its lower-cased extension."""
    config = config or UploadConfig()
    ext = PurePath(filename).suffix.lower()
    if ext not in config.allowed_extensions:
        formats = ", ".join(e.lstrip(".").upper() for e in config.allowed_extensions)
        raise UnsupportedFileError(f"Please upload a supported file format: {formats}")
    if size > config.max_bytes:
        raise UnsupportedFileError(
            f"File is too large ({size} bytes, limit {config.max_bytes})"
        )
    return ext


def mock_parsed_resume() -> ParsedResume:
    return ParsedResume(
        personal_info=ParsedPersonalInfo(
            name="John Doe",
            email="johndoe@email.com",
            phone="(555) 123-4567",
            location="San Francisco, CA",
        ),
        summary=(
            "Experienced software engineer with 5 years of experience in web "
            "development and team leadership."
        ),
        experience=[
            ParsedExperience(
                title="Senior Software Engineer",
                company="Tech Corp",
                duration="2021 - Present",
                description="Led development of web applications. Managed team of "
                "developers. Improved system performance.",
            ),
            ParsedExperience(
                title="Software Engineer",
                company="StartupXYZ",
                duration="2019 - 2021",
                description="Developed features for mobile app. Worked with APIs. "
                "Fixed bugs and issues.",
            ),
        ],
        education=[
            ParsedEducation(
                degree="Bachelor of Science in Computer Science",
                school="University of Technology",
                year="2019",
            )
        ],
        skills=["JavaScript", "React", "Node.js", "Python", "SQL", "Git"],
    )


class ParsingClient:
    """Pretends to parse an uploaded résumé; the content is never read."""

    def __init__(self, delay: float = 3.0, upload: UploadConfig | None = None):
        self.delay = delay
        self.upload = upload or UploadConfig()

    async def parse(self, filename: str, data: bytes) -> ParsedResume:
        check_upload(filename, len(data), self.upload)
        logger.debug("Mock parse of %s (%d bytes), sleeping %.1fs", filename, len(data), self.delay)
        await asyncio.sleep(self.delay)
        return mock_parsed_resume()
