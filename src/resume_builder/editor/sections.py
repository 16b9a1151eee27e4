"""Ordered section registry shared by the editing form and the live preview."""

from __future__ import annotations

from collections import Counter
from enum import Enum


class SectionId(str, Enum):
    PERSONAL = "personal"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    TRAINING = "training"
    LEADERSHIP = "leadership"
    PUBLICATIONS = "publications"
    HACKATHONS = "hackathons"
    LANGUAGES = "languages"
    CUSTOM = "custom"


DEFAULT_ORDER: tuple[str, ...] = tuple(s.value for s in SectionId)

SECTION_LABELS: dict[str, str] = {
    "personal": "Personal Information",
    "summary": "Summary",
    "experience": "Experience",
    "education": "Education",
    "skills": "Skills",
    "projects": "Projects",
    "certifications": "Certifications",
    "training": "Training",
    "leadership": "Leadership",
    "publications": "Publications",
    "hackathons": "Hackathons",
    "languages": "Languages",
    "custom": "Additional",
}

# ResumeData attribute backing each list section.
SECTION_FIELDS: dict[str, str] = {
    "experience": "experience",
    "education": "education",
    "skills": "skills",
    "projects": "projects",
    "certifications": "certifications",
    "training": "training",
    "leadership": "leadership",
    "publications": "publications",
    "hackathons": "hackathons",
    "languages": "languages",
    "custom": "custom_sections",
}


class InvalidSectionOrderError(ValueError):
    """Raised when a new order is not a permutation of the current one."""


class SectionOrder:
    """Immutable ordered list of section ids.

    Presentation only: reordering never touches the résumé contents.
    """

    __slots__ = ("_ids",)

    def __init__(self, ids=DEFAULT_ORDER):
        ids = tuple(_as_id(i) for i in ids)
        duplicates = sorted(i for i, n in Counter(ids).items() if n > 1)
        if duplicates:
            raise InvalidSectionOrderError(f"Duplicate sections: {', '.join(duplicates)}")
        self._ids = ids

    @property
    def ids(self) -> tuple[str, ...]:
        return self._ids

    def __iter__(self):
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, section: object) -> bool:
        return section in self._ids

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SectionOrder):
            return self._ids == other._ids
        if isinstance(other, (list, tuple)):
            return self._ids == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._ids)

    def __repr__(self) -> str:
        return f"SectionOrder({list(self._ids)!r})"

    def index(self, section: str) -> int:
        return self._ids.index(_as_id(section))

    def reorder(self, new_order) -> SectionOrder:
        """Replace the order wholesale with a permutation of the current ids."""
        candidate = SectionOrder(new_order)
        missing = set(self._ids) - set(candidate._ids)
        unknown = set(candidate._ids) - set(self._ids)
        if missing or unknown:
            parts = []
            if missing:
                parts.append(f"missing: {', '.join(sorted(missing))}")
            if unknown:
                parts.append(f"unknown: {', '.join(sorted(unknown))}")
            raise InvalidSectionOrderError("Not a permutation (" + "; ".join(parts) + ")")
        return candidate

    def move(self, old_index: int, new_index: int) -> SectionOrder:
        """Move the section at ``old_index`` to ``new_index``."""
        size = len(self._ids)
        for i in (old_index, new_index):
            if not -size <= i < size:
                raise IndexError(f"Section index out of range: {i}")
        ids = list(self._ids)
        ids.insert(new_index % size, ids.pop(old_index))
        return SectionOrder(ids)

    def move_id(self, active: str, over: str | None) -> SectionOrder:
        """Drag-end gesture: drop ``active`` onto the slot held by ``over``."""
        if over is None or _as_id(active) == _as_id(over):
            return self
        return self.move(self.index(active), self.index(over))


def _as_id(section) -> str:
    return section.value if isinstance(section, SectionId) else str(section)
