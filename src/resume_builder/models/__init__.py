"""Data models for the resume builder."""

from resume_builder.models.job import INDUSTRIES, JobDetails, JobDetailsError
from resume_builder.models.resume import (
    CertificationEntry,
    CustomItem,
    CustomSection,
    EducationEntry,
    ExperienceEntry,
    HackathonEntry,
    LanguageEntry,
    LeadershipEntry,
    PersonalInfo,
    ProjectEntry,
    PublicationEntry,
    ResumeData,
    TrainingEntry,
    default_resume,
    new_entry,
    new_id,
    sample_resume,
)
from resume_builder.models.suggestion import ParsedResume, Suggestion
from resume_builder.models.template import Template, TemplateStyle

__all__ = [
    "CertificationEntry",
    "CustomItem",
    "CustomSection",
    "EducationEntry",
    "ExperienceEntry",
    "HackathonEntry",
    "INDUSTRIES",
    "JobDetails",
    "JobDetailsError",
    "LanguageEntry",
    "LeadershipEntry",
    "ParsedResume",
    "PersonalInfo",
    "ProjectEntry",
    "PublicationEntry",
    "ResumeData",
    "Suggestion",
    "Template",
    "TemplateStyle",
    "TrainingEntry",
    "default_resume",
    "new_entry",
    "new_id",
    "sample_resume",
]
