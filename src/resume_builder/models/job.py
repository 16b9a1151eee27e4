"""Pydantic model for the target job captured before template selection."""

from __future__ import annotations

from pydantic import BaseModel

INDUSTRIES = (
    "Technology",
    "Healthcare",
    "Finance",
    "Education",
    "Marketing",
    "Sales",
    "Engineering",
    "Design",
    "Operations",
    "Human Resources",
    "Legal",
    "Consulting",
    "Other",
)


class JobDetailsError(ValueError):
    """Raised when job details are incomplete."""


class JobDetails(BaseModel):
    title: str = ""
    description: str = ""  # optional, only personalises suggestions
    industry: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.title.strip() and self.industry)

    def validate_required(self) -> JobDetails:
        """Raise JobDetailsError unless title and industry are filled in."""
        if not self.title.strip():
            raise JobDetailsError("Job title is required")
        if not self.industry:
            raise JobDetailsError("Industry is required")
        return self
