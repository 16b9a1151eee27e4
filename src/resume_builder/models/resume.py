"""Pydantic models for the résumé document edited in the builder."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Return a fresh entry id. Ids are for identity only, never ordering."""
    return uuid.uuid4().hex


class ResumeModel(BaseModel):
    """Base for every résumé model: camelCase JSON, snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(ResumeModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""


class ExperienceEntry(ResumeModel):
    id: str = Field(default_factory=new_id)
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False  # end_date kept but displayed as "Present"
    bullets: list[str] = Field(default_factory=list)

    @property
    def display_end_date(self) -> str:
        return "Present" if self.current else self.end_date


class EducationEntry(ResumeModel):
    id: str = Field(default_factory=new_id)
    degree: str = ""
    school: str = ""
    location: str = ""
    graduation_date: str = ""
    gpa: str | None = None


class ProjectEntry(ResumeModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    tag: str | None = None
    tech_stack: str = ""
    date: str = ""
    bullets: list[str] = Field(default_factory=list)
    url: str | None = None


class CertificationEntry(ResumeModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    issuer: str = ""
    date: str = ""
    url: str | None = None


class TrainingEntry(ResumeModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    provider: str = ""
    date: str = ""


class LeadershipEntry(ResumeModel):
    id: str = Field(default_factory=new_id)
    role: str = ""
    organization: str = ""
    date: str = ""
    bullets: list[str] = Field(default_factory=list)


class PublicationEntry(ResumeModel):
    id: str = Field(default_factory=new_id)
    title: str = ""
    venue: str = ""
    date: str = ""
    url: str | None = None


class HackathonEntry(ResumeModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    achievement: str = ""
    date: str = ""


class LanguageEntry(ResumeModel):
    id: str = Field(default_factory=new_id)
    language: str = ""
    proficiency: str = ""


class CustomItem(ResumeModel):
    id: str = Field(default_factory=new_id)
    content: str = ""  # Markdown


class CustomSection(ResumeModel):
    id: str = Field(default_factory=new_id)
    title: str = ""
    items: list[CustomItem] = Field(default_factory=list)


class ResumeData(ResumeModel):
    """The single source of truth for a résumé.

    Always fully populated: missing content is an empty string or list.
    Updates go through ``model_copy(update=...)`` so earlier values are
    never mutated.
    """

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    certifications: list[CertificationEntry] = Field(default_factory=list)
    training: list[TrainingEntry] = Field(default_factory=list)
    leadership: list[LeadershipEntry] = Field(default_factory=list)
    publications: list[PublicationEntry] = Field(default_factory=list)
    hackathons: list[HackathonEntry] = Field(default_factory=list)
    languages: list[LanguageEntry] = Field(default_factory=list)
    custom_sections: list[CustomSection] = Field(default_factory=list)


# Entry model per list section, keyed by the ResumeData attribute name.
ENTRY_MODELS: dict[str, type[ResumeModel]] = {
    "experience": ExperienceEntry,
    "education": EducationEntry,
    "projects": ProjectEntry,
    "certifications": CertificationEntry,
    "training": TrainingEntry,
    "leadership": LeadershipEntry,
    "publications": PublicationEntry,
    "hackathons": HackathonEntry,
    "languages": LanguageEntry,
    "custom_sections": CustomSection,
}

# Values given to a freshly added entry.
ENTRY_DEFAULTS: dict[str, dict] = {
    "experience": {
        "title": "Job Title",
        "company": "Company Name",
        "location": "City, State",
        "start_date": "2023",
        "end_date": "2024",
        "current": False,
        "bullets": ["Achievement or responsibility"],
    },
    "education": {
        "degree": "Degree",
        "school": "School Name",
        "location": "City, State",
        "graduation_date": "2024",
    },
    "projects": {
        "name": "Project Name",
        "tech_stack": "Technologies used",
        "date": "2024",
        "bullets": ["What you built and the impact it had"],
    },
    "certifications": {"name": "Certification Name", "issuer": "Issuer", "date": "2024"},
    "training": {"name": "Course Name", "provider": "Provider", "date": "2024"},
    "leadership": {
        "role": "Role",
        "organization": "Organization",
        "date": "2024",
        "bullets": ["Leadership achievement"],
    },
    "publications": {"title": "Publication Title", "venue": "Venue", "date": "2024"},
    "hackathons": {"name": "Hackathon Name", "achievement": "Achievement", "date": "2024"},
    "languages": {"language": "Language", "proficiency": "Proficiency"},
    "custom_sections": {"title": "Custom Section"},
}

NEW_BULLET = "New achievement or responsibility"


def new_entry(section: str) -> ResumeModel:
    """Build a fresh entry for ``section`` with its defaults and a new id."""
    try:
        model = ENTRY_MODELS[section]
    except KeyError:
        raise ValueError(f"Not a list section: {section}") from None
    return model(**ENTRY_DEFAULTS.get(section, {}))


def default_resume() -> ResumeData:
    """Seed record shown when the editor opens."""
    return ResumeData(
        personal_info=PersonalInfo(
            name="John Doe",
            email="johndoe@gmail.com",
            phone="8989456718",
            location="Amsterdam",
            linkedin="linkedin.com/in/johndoe",
            website="johndoe.com",
        ),
        summary=(
            "Write a brief professional summary highlighting your key "
            "qualifications and career objectives..."
        ),
        experience=[
            ExperienceEntry(
                title="Senior Software Engineer",
                company="Tech Corp",
                location="San Francisco, CA",
                start_date="2021",
                end_date="2024",
                bullets=[
                    "Led development of microservices architecture serving 1M+ users",
                    "Improved system performance by 40% through optimization",
                    "Mentored 5 junior developers and conducted code reviews",
                ],
            )
        ],
        education=[
            EducationEntry(
                degree="Bachelor of Science in Computer Science",
                school="Stanford University",
                location="Stanford, CA",
                graduation_date="2019",
            )
        ],
        skills=["JavaScript", "React", "Node.js", "Python", "AWS", "Docker"],
    )


def sample_resume() -> ResumeData:
    """Record used to draw the template-selection thumbnails."""
    resume = default_resume()
    return resume.model_copy(
        update={
            "personal_info": resume.personal_info.model_copy(
                update={
                    "email": "john.doe@email.com",
                    "phone": "(555) 123-4567",
                    "location": "San Francisco, CA",
                }
            ),
            "summary": (
                "Experienced software engineer with 5+ years developing scalable "
                "web applications and leading cross-functional teams."
            ),
        }
    )
