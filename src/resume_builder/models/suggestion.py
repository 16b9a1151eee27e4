"""Pydantic models returned by the mock suggestion and parsing clients."""

from __future__ import annotations

import re

from pydantic import BaseModel

from resume_builder.models.resume import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeData,
)


class Suggestion(BaseModel):
    """An assistant reply.

    ``suggestion`` is what gets applied: a string (summary), a list of
    strings (bullets or skills) or None when there is nothing to apply.
    """

    content: str
    suggestion: str | list[str] | None = None


class ParsedPersonalInfo(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""


class ParsedExperience(BaseModel):
    title: str
    company: str
    duration: str  # "2021 - Present"
    description: str


class ParsedEducation(BaseModel):
    degree: str
    school: str
    year: str


class ParsedResume(BaseModel):
    personal_info: ParsedPersonalInfo
    summary: str
    experience: list[ParsedExperience]
    education: list[ParsedEducation]
    skills: list[str]

    def to_resume_data(self) -> ResumeData:
        """Convert the parsed subset into a fully populated ResumeData."""
        return ResumeData(
            personal_info=PersonalInfo(**self.personal_info.model_dump()),
            summary=self.summary,
            experience=[_experience_entry(e) for e in self.experience],
            education=[
                EducationEntry(degree=e.degree, school=e.school, graduation_date=e.year)
                for e in self.education
            ],
            skills=list(self.skills),
        )


def _experience_entry(parsed: ParsedExperience) -> ExperienceEntry:
    start, _, end = (part.strip() for part in parsed.duration.partition("-"))
    current = end.lower() == "present"
    bullets = [s.strip() for s in re.split(r"(?<=\.)\s+", parsed.description) if s.strip()]
    return ExperienceEntry(
        title=parsed.title,
        company=parsed.company,
        start_date=start,
        end_date="" if current else end,
        current=current,
        bullets=bullets,
    )
