"""Shared test fixtures."""

from __future__ import annotations

import pytest

from resume_builder.editor.sections import SectionOrder
from resume_builder.editor.store import ResumeStore
from resume_builder.models.job import JobDetails
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
)
from resume_builder.templates.catalog import get_template, load_catalog


@pytest.fixture
def seed_resume() -> ResumeData:
    return default_resume()


@pytest.fixture
def empty_resume() -> ResumeData:
    return ResumeData(personal_info=PersonalInfo(name="Jane Roe"))


@pytest.fixture
def full_resume() -> ResumeData:
    """Every section populated."""
    return ResumeData(
        personal_info=PersonalInfo(
            name="Jane Roe",
            email="jane@example.com",
            phone="555-0100",
            location="Berlin",
            linkedin="linkedin.com/in/janeroe",
            website="janeroe.dev",
        ),
        summary="Backend engineer with **8 years** of experience.",
        experience=[
            ExperienceEntry(
                id="exp1",
                title="Staff Engineer",
                company="Acme",
                location="Berlin",
                start_date="2020",
                end_date="2023",
                current=True,
                bullets=["Scaled the billing platform", "Cut p99 latency by half"],
            ),
            ExperienceEntry(
                id="exp2",
                title="Engineer",
                company="Initech",
                start_date="2016",
                end_date="2020",
                bullets=["Built the reporting pipeline"],
            ),
        ],
        education=[
            EducationEntry(id="edu1", degree="MSc Computer Science", school="TU Berlin",
                           graduation_date="2016", gpa="1.3"),
        ],
        skills=["Python", "Go", "PostgreSQL", "Kafka", "Kubernetes"],
        projects=[
            ProjectEntry(id="prj1", name="pgsync", tag="OSS", tech_stack="Python",
                         date="2022", bullets=["Logical replication tool"], url="github.com/jr/pgsync"),
        ],
        certifications=[CertificationEntry(id="cert1", name="CKA", issuer="CNCF", date="2021")],
        training=[TrainingEntry(id="trn1", name="Distributed Systems", provider="MIT OCW", date="2019")],
        leadership=[
            LeadershipEntry(id="lead1", role="Organizer", organization="PyBerlin", date="2018",
                            bullets=["Ran monthly meetups"]),
        ],
        publications=[PublicationEntry(id="pub1", title="Queues at Scale", venue="USENIX", date="2021")],
        hackathons=[HackathonEntry(id="hack1", name="HackZurich", achievement="1st place", date="2017")],
        languages=[LanguageEntry(id="lang1", language="German", proficiency="Native")],
        custom_sections=[
            CustomSection(id="cs1", title="Volunteering",
                          items=[CustomItem(id="it1", content="Code club mentor")]),
        ],
    )


@pytest.fixture
def all_templates():
    return load_catalog()


@pytest.fixture
def classic():
    return get_template("classic-chrono")


@pytest.fixture
def default_order() -> SectionOrder:
    return SectionOrder()


@pytest.fixture
def job() -> JobDetails:
    return JobDetails(title="Data Engineer", industry="Finance", description="Build pipelines")


@pytest.fixture
def store() -> ResumeStore:
    return ResumeStore()
