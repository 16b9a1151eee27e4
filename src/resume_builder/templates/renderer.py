"""Data-driven résumé renderer.

One Jinja2 document draws all six templates; a template only contributes
its ``TemplateStyle``. Which sections appear is decided once, by
``visible_sections``, so section presence never depends on the template.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import markdown
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

from resume_builder.config import PreviewConfig
from resume_builder.editor.inline import EditSession
from resume_builder.editor.sections import SECTION_FIELDS, SECTION_LABELS, SectionOrder
from resume_builder.models.resume import ResumeData
from resume_builder.models.template import Template

logger = logging.getLogger(__name__)

HTML_TEMPLATES_DIR = Path(__file__).parent / "html"

RenderMode = Literal["full", "preview"]

_env = Environment(
    loader=FileSystemLoader(str(HTML_TEMPLATES_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def has_content(data: ResumeData, section: str) -> bool:
    """Whether ``section`` has anything to show."""
    if section == "personal":
        return True
    if section == "summary":
        return bool(data.summary.strip())
    attr = SECTION_FIELDS.get(section)
    if attr is None:
        return False
    return bool(getattr(data, attr))


def visible_sections(data: ResumeData, order: SectionOrder) -> list[str]:
    """Sections of ``order`` that are rendered, in order."""
    return [s for s in order if has_content(data, s)]


def truncate_for_preview(data: ResumeData, limits: PreviewConfig | None = None) -> ResumeData:
    """Copy of ``data`` cut down for thumbnails. ``data`` is left untouched."""
    limits = limits or PreviewConfig()
    experience = [
        e.model_copy(update={"bullets": e.bullets[: limits.max_bullets]})
        for e in data.experience[: limits.max_entries]
    ]
    return data.model_copy(update={"experience": experience, "skills": data.skills[: limits.max_skills]})


def md(text: str) -> Markup:
    """Render Markdown content (summary, custom items) to HTML."""
    return Markup(markdown.markdown(text, extensions=["nl2br"]))


def render_resume(
    template: Template,
    data: ResumeData,
    order: SectionOrder | None = None,
    *,
    mode: RenderMode = "full",
    editable: bool = False,
    session: EditSession | None = None,
    limits: PreviewConfig | None = None,
) -> str:
    """Render ``data`` with ``template`` to a standalone HTML document."""
    order = order or SectionOrder()
    if mode == "preview":
        data = truncate_for_preview(data, limits)
        editable = False
    if editable and session is None:
        session = EditSession()

    def field(path: str, value, placeholder: str = "Enter text...", multiline: bool = False):
        if editable:
            return session.render(path, value, multiline=multiline, placeholder=placeholder)
        return escape(value or "")

    sections = visible_sections(data, order)
    style = template.style
    if style.columns == 2:
        sidebar = [s for s in sections if s in style.sidebar_sections]
        main = [s for s in sections if s not in style.sidebar_sections]
    else:
        sidebar, main = [], sections

    logger.debug("Rendering %s (%s): %s", template.id, mode, ", ".join(sections))
    return _env.get_template("resume.html").render(
        template=template,
        style=style,
        resume=data,
        info=data.personal_info,
        sidebar_sections=sidebar,
        main_sections=main,
        labels=SECTION_LABELS,
        mode=mode,
        editable=editable,
        field=field,
        md=md,
    )


def render_markdown(data: ResumeData, order: SectionOrder | None = None) -> str:
    """Plain Markdown rendition of the visible sections."""
    order = order or SectionOrder()
    lines: list[str] = []
    for section in visible_sections(data, order):
        if section == "personal":
            info = data.personal_info
            lines.append(f"# {info.name}")
            contact = [info.email, info.phone, info.location, info.linkedin, info.website]
            lines.append(" | ".join(c for c in contact if c))
        elif section == "summary":
            lines += [f"## {SECTION_LABELS['summary']}", data.summary]
        elif section == "skills":
            lines += [f"## {SECTION_LABELS['skills']}", ", ".join(data.skills)]
        elif section == "custom":
            for custom in data.custom_sections:
                lines.append(f"## {custom.title}")
                lines += [f"- {item.content}" for item in custom.items]
        else:
            lines.append(f"## {SECTION_LABELS[section]}")
            for entry in getattr(data, SECTION_FIELDS[section]):
                lines += _entry_markdown(section, entry)
        lines.append("")
    return "\n".join(lines).strip() + "\n"


def _entry_markdown(section: str, entry) -> list[str]:
    if section == "experience":
        head = f"### {entry.title}, {entry.company}"
        meta = " | ".join(p for p in (entry.location, f"{entry.start_date} - {entry.display_end_date}") if p)
    elif section == "education":
        head = f"### {entry.degree}, {entry.school}"
        meta = " | ".join(p for p in (entry.location, entry.graduation_date, f"GPA {entry.gpa}" if entry.gpa else "") if p)
    elif section == "projects":
        head = f"### {entry.name}" + (f" ({entry.tag})" if entry.tag else "")
        meta = " | ".join(p for p in (entry.tech_stack, entry.date, entry.url or "") if p)
    elif section == "leadership":
        head = f"### {entry.role}, {entry.organization}"
        meta = entry.date
    elif section == "certifications":
        head = f"- **{entry.name}**, {entry.issuer}"
        meta = entry.date
    elif section == "training":
        head = f"- **{entry.name}**, {entry.provider}"
        meta = entry.date
    elif section == "publications":
        head = f"- **{entry.title}**, {entry.venue}"
        meta = entry.date
    elif section == "hackathons":
        head = f"- **{entry.name}**: {entry.achievement}"
        meta = entry.date
    else:
        return [f"- **{entry.language}**: {entry.proficiency}"]

    if head.startswith("- "):
        return [f"{head} ({meta})" if meta else head]
    lines = [head]
    if meta:
        lines.append(f"*{meta}*")
    lines += [f"- {b}" for b in getattr(entry, "bullets", [])]
    return lines
