"""Streamlit Web UI for resume-builder.

Steps:
  landing → job details → template selection → editor (live preview, exports)
  landing → import (upload → parse → review → editor)
"""

from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

from resume_builder.clients.parsing_client import (
    ENHANCEMENT_OPTIONS,
    ParsingClient,
    UnsupportedFileError,
    check_upload,
)
from resume_builder.clients.suggestion_client import (
    QUICK_PROMPTS,
    SuggestionClient,
    greeting,
    section_tips,
)
from resume_builder.config import load_config
from resume_builder.editor.fields import get_field
from resume_builder.editor.inline import EditSession
from resume_builder.editor.sections import SECTION_LABELS
from resume_builder.editor.store import (
    BULLET_SECTIONS,
    AddBullet,
    AddCustomItem,
    AddCustomSection,
    AddEntry,
    ApplySuggestion,
    LoadResume,
    MoveSection,
    RemoveBullet,
    RemoveCustomItem,
    RemoveEntry,
    ResumeStore,
    SelectTemplate,
    SetActiveSection,
    SetField,
    SetJobDetails,
    SetSkills,
)
from resume_builder.export import WORD_CONTENT_TYPE, export_pdf, export_word, word_filename
from resume_builder.models.job import INDUSTRIES, JobDetails, JobDetailsError
from resume_builder.models.resume import sample_resume
from resume_builder.templates.catalog import get_template, list_templates
from resume_builder.templates.docx_renderer import DOCX_CONTENT_TYPE, generate_docx
from resume_builder.templates.renderer import render_markdown, render_resume
from resume_builder.utils.tasks import ViewScope

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Resume Builder",
    page_icon=":page_facing_up:",
    layout="wide",
)

CONFIG = load_config()

# Editable scalar fields per list section: (json key, label)
ENTRY_FIELDS: dict[str, list[tuple[str, str]]] = {
    "experience": [("title", "Job title"), ("company", "Company"), ("location", "Location"),
                   ("startDate", "Start"), ("endDate", "End")],
    "education": [("degree", "Degree"), ("school", "School"), ("location", "Location"),
                  ("graduationDate", "Graduation"), ("gpa", "GPA")],
    "projects": [("name", "Name"), ("tag", "Tag"), ("techStack", "Tech stack"),
                 ("date", "Date"), ("url", "URL")],
    "certifications": [("name", "Name"), ("issuer", "Issuer"), ("date", "Date")],
    "training": [("name", "Course"), ("provider", "Provider"), ("date", "Date")],
    "leadership": [("role", "Role"), ("organization", "Organization"), ("date", "Date")],
    "publications": [("title", "Title"), ("venue", "Venue"), ("date", "Date")],
    "hackathons": [("name", "Name"), ("achievement", "Achievement"), ("date", "Date")],
    "languages": [("language", "Language"), ("proficiency", "Proficiency")],
}

PERSONAL_FIELDS = [("name", "Full name"), ("email", "Email"), ("phone", "Phone"),
                   ("location", "Location"), ("linkedin", "LinkedIn"), ("website", "Website")]

ERROR_MESSAGE = "Something went wrong. Please try again."


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------


def _store() -> ResumeStore:
    if "store" not in st.session_state:
        st.session_state["store"] = ResumeStore()
    return st.session_state["store"]


def _session() -> EditSession:
    if "edit_session" not in st.session_state:
        st.session_state["edit_session"] = EditSession()
    return st.session_state["edit_session"]


def _go(step: str) -> None:
    st.session_state["step"] = step


def _reset_widgets() -> None:
    """Drop cached widget values so inputs show the store's content again."""
    for key in [k for k in st.session_state if str(k).startswith("f:")]:
        del st.session_state[key]


def _dispatch(action) -> None:
    try:
        _store().dispatch(action)
    except (ValueError, IndexError, KeyError):
        logger.exception("Edit failed: %s", action)
        st.error(ERROR_MESSAGE)


def _commit(path: str) -> None:
    """Route a widget change through the inline editor of ``path``."""
    value = st.session_state[f"f:{path}"]
    session = _session()
    _store().begin_edit(session, path)
    session.type(value)
    session.commit()


def _text(path: str, label: str, multiline: bool = False) -> None:
    current = get_field(_store().resume, path) or ""
    widget = st.text_area if multiline else st.text_input
    widget(label, value=current, key=f"f:{path}", on_change=_commit, args=(path,))


# ---------------------------------------------------------------------------
# Landing
# ---------------------------------------------------------------------------


def _page_landing():
    st.title("Build a resume that gets noticed")
    st.markdown(
        "Pick a professional template, fill in your details with a live preview, "
        "and export to PDF or Word."
    )
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Create new resume", type="primary", use_container_width=True):
            _go("job")
            st.rerun()
    with col2:
        if st.button("Import existing resume", use_container_width=True):
            _go("import")
            st.rerun()


# ---------------------------------------------------------------------------
# Job details
# ---------------------------------------------------------------------------


def _page_job():
    st.header("Tell us about the job")
    job = _store().state.job
    with st.form("job_details"):
        title = st.text_input("Job title *", value=job.title, placeholder="e.g. Software Engineer")
        industry = st.selectbox(
            "Industry *",
            ["", *INDUSTRIES],
            index=([""] + list(INDUSTRIES)).index(job.industry) if job.industry in INDUSTRIES else 0,
        )
        description = st.text_area("Job description (optional)", value=job.description, height=160)
        submitted = st.form_submit_button("Continue to templates", type="primary")

    if st.button("Back"):
        _go("landing")
        st.rerun()

    if submitted:
        try:
            details = JobDetails(title=title, industry=industry, description=description).validate_required()
        except JobDetailsError as e:
            st.error(str(e))
            return
        _dispatch(SetJobDetails(job=details))
        _go("templates")
        st.rerun()


# ---------------------------------------------------------------------------
# Template selection
# ---------------------------------------------------------------------------


def _page_templates():
    st.header("Choose a template")
    category = st.radio("Category", ["all", "minimal", "colorful"], horizontal=True)
    templates = list_templates(None if category == "all" else category)
    sample = sample_resume()

    cols = st.columns(3)
    for i, template in enumerate(templates):
        with cols[i % 3]:
            st.subheader(template.name)
            st.caption(template.description)
            components.html(
                render_resume(template, sample, mode="preview", limits=CONFIG.preview),
                height=280,
                scrolling=False,
            )
            if st.button("Use this template", key=f"tpl:{template.id}", use_container_width=True):
                _dispatch(SelectTemplate(template_id=template.id))
                _go("editor")
                st.rerun()

    if st.button("Back"):
        _go("job")
        st.rerun()


# ---------------------------------------------------------------------------
# Editor
# ---------------------------------------------------------------------------


def _section_form(section: str):
    store = _store()
    resume = store.resume

    if section == "personal":
        for key, label in PERSONAL_FIELDS:
            _text(f"personalInfo.{key}", label)
    elif section == "summary":
        _text("summary", "Professional summary (Markdown)", multiline=True)
    elif section == "skills":
        st.text_input(
            "Skills (comma-separated)",
            value=", ".join(resume.skills),
            key="f:skills",
            on_change=lambda: _dispatch(SetSkills(skills=st.session_state["f:skills"])),
        )
    elif section == "custom":
        _custom_sections_form()
    else:
        _entries_form(section)


def _entries_form(section: str):
    entries = getattr(_store().resume, section)
    for index, entry in enumerate(entries):
        prefix = f"{section}.{entry.id}"
        with st.container(border=True):
            for key, label in ENTRY_FIELDS[section]:
                _text(f"{prefix}.{key}", label)
            if section == "experience":
                st.checkbox(
                    "I currently work here",
                    value=entry.current,
                    key=f"f:{prefix}.current",
                    on_change=lambda p=prefix: _dispatch(
                        SetField(path=f"{p}.current", value=st.session_state[f"f:{p}.current"])
                    ),
                )
            if section in BULLET_SECTIONS:
                for b, _ in enumerate(entry.bullets):
                    c1, c2 = st.columns([8, 1])
                    with c1:
                        _text(f"{prefix}.bullets.{b}", f"Bullet {b + 1}")
                    with c2:
                        if st.button("✕", key=f"rmb:{prefix}:{b}"):
                            _dispatch(RemoveBullet(section=section, index=index, bullet_index=b))
                            _reset_widgets()
                            st.rerun()
                if st.button("+ Add bullet point", key=f"addb:{prefix}"):
                    _dispatch(AddBullet(section=section, index=index))
                    st.rerun()
            if st.button("Remove", key=f"rm:{prefix}"):
                _dispatch(RemoveEntry(section=section, index=index))
                _reset_widgets()
                st.rerun()
    if st.button(f"+ Add {SECTION_LABELS[section].lower()}", key=f"add:{section}"):
        _dispatch(AddEntry(section=section))
        st.rerun()


def _custom_sections_form():
    for custom in _store().resume.custom_sections:
        prefix = f"customSections.{custom.id}"
        with st.container(border=True):
            _text(f"{prefix}.title", "Section title")
            for item in custom.items:
                c1, c2 = st.columns([8, 1])
                with c1:
                    _text(f"{prefix}.items.{item.id}.content", "Item (Markdown)", multiline=True)
                with c2:
                    if st.button("✕", key=f"rmi:{item.id}"):
                        _dispatch(RemoveCustomItem(section_id=custom.id, item_id=item.id))
                        _reset_widgets()
                        st.rerun()
            if st.button("+ Add item", key=f"addi:{custom.id}"):
                _dispatch(AddCustomItem(section_id=custom.id))
                st.rerun()
    title = st.text_input("New section title", key="new_custom_title")
    if st.button("+ Add custom section") and title.strip():
        _dispatch(AddCustomSection(title=title.strip()))
        st.rerun()


def _assistant_panel():
    store = _store()
    section = store.state.active_section
    job = store.state.job
    st.subheader("AI Assistant")
    st.caption(f"Improving: {section}")
    st.info(greeting(section, job))
    for tip in section_tips(section):
        st.markdown(f"- {tip}")

    quick = st.selectbox("Quick suggestions", ["", *QUICK_PROMPTS], key="quick_prompt")
    prompt = st.text_input("Ask for help", value=quick, key="assistant_prompt")
    if st.button("Send", disabled=not prompt.strip()):
        client = SuggestionClient(delay=CONFIG.mock.suggestion_delay)
        replies = []

        async def _ask():
            async with ViewScope() as scope:
                scope.run(client.suggest(section, prompt, job), replies.append)
                await scope.wait()

        with st.spinner("Thinking..."):
            asyncio.run(_ask())
        st.session_state["assistant_reply"] = (section, replies[0] if replies else None)

    pending = st.session_state.get("assistant_reply")
    if pending and pending[1] is not None:
        reply_section, reply = pending
        st.markdown(reply.content)
        if reply.suggestion is not None and st.button("Apply suggestion", type="primary"):
            _dispatch(ApplySuggestion(section=reply_section, suggestion=reply.suggestion))
            st.session_state.pop("assistant_reply", None)
            _reset_widgets()
            st.rerun()


def _export_buttons(html: str):
    store = _store()
    cols = st.columns(4)
    try:
        with cols[0]:
            if st.button("Prepare PDF", use_container_width=True):
                st.session_state["pdf_bytes"] = export_pdf(html, CONFIG.export.element_id, CONFIG.export)
            if "pdf_bytes" in st.session_state:
                st.download_button(
                    "Download PDF",
                    data=st.session_state["pdf_bytes"],
                    file_name=CONFIG.export.pdf_filename,
                    mime="application/pdf",
                )
        with cols[1]:
            st.download_button(
                "Download Word",
                data=export_word(html, CONFIG.export.element_id),
                file_name=word_filename(CONFIG.export.word_filename),
                mime=WORD_CONTENT_TYPE,
                use_container_width=True,
            )
        with cols[2], tempfile.TemporaryDirectory() as tmp:
            path = generate_docx(store.resume, store.section_order, Path(tmp) / "resume.docx")
            st.download_button(
                "Download DOCX",
                data=path.read_bytes(),
                file_name="resume.docx",
                mime=DOCX_CONTENT_TYPE,
                use_container_width=True,
            )
        with cols[3]:
            st.download_button(
                "Download Markdown",
                data=render_markdown(store.resume, store.section_order).encode("utf-8"),
                file_name="resume.md",
                mime="text/markdown",
                use_container_width=True,
            )
    except Exception:
        logger.exception("Export failed")
        st.error("Export failed. Please try again.")


def _page_editor():
    store = _store()
    template = get_template(store.state.template_id)

    with st.sidebar:
        st.title("Resume Builder")
        st.caption(f"{store.state.job.title} · {template.name}")
        if st.button("Change template"):
            _go("templates")
            st.rerun()
        st.divider()
        if st.session_state.pop("open_assistant", False):
            st.session_state["assistant_open"] = True
        if st.toggle("AI Assistant", key="assistant_open"):
            _assistant_panel()

    form_col, preview_col = st.columns([2, 3])
    with form_col:
        order = list(store.section_order)
        for i, section in enumerate(order):
            label = SECTION_LABELS[section]
            with st.expander(label, expanded=section == store.state.active_section):
                up, down, focus = st.columns(3)
                if up.button("↑", key=f"up:{section}", disabled=i == 0):
                    _dispatch(MoveSection(old_index=i, new_index=i - 1))
                    st.rerun()
                if down.button("↓", key=f"down:{section}", disabled=i == len(order) - 1):
                    _dispatch(MoveSection(old_index=i, new_index=i + 1))
                    st.rerun()
                if focus.button("Ask AI", key=f"ai:{section}"):
                    _dispatch(SetActiveSection(section=section))
                    st.session_state["open_assistant"] = True
                    st.rerun()
                _section_form(section)

    with preview_col:
        html = render_resume(template, store.resume, store.section_order)
        _export_buttons(html)
        components.html(html, height=1100, scrolling=True)


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


def _page_import():
    st.header("Import your existing resume")
    uploaded = st.file_uploader(
        "Upload resume",
        type=[ext.lstrip(".") for ext in CONFIG.upload.allowed_extensions],
        help="PDF, DOCX, DOC or TXT",
    )
    if uploaded is not None:
        try:
            check_upload(uploaded.name, uploaded.size, CONFIG.upload)
        except UnsupportedFileError as e:
            st.error(str(e))
            uploaded = None

    if uploaded is not None and st.button("Parse resume", type="primary"):
        client = ParsingClient(delay=CONFIG.mock.parse_delay, upload=CONFIG.upload)
        try:
            with st.spinner("Extracting personal information, work experience, skills and education..."):
                parsed = asyncio.run(client.parse(uploaded.name, uploaded.getvalue()))
        except UnsupportedFileError as e:
            st.error(str(e))
            return
        st.session_state["parsed_resume"] = parsed

    parsed = st.session_state.get("parsed_resume")
    if parsed is not None:
        st.success("Resume parsed")
        info = parsed.personal_info
        st.markdown(f"**{info.name}** · {info.email} · {info.phone} · {info.location}")
        st.markdown(parsed.summary)
        for exp in parsed.experience:
            st.markdown(f"- **{exp.title}**, {exp.company} · {exp.duration}")
        for edu in parsed.education:
            st.markdown(f"- {edu.degree}, {edu.school} ({edu.year})")
        st.markdown("Skills: " + ", ".join(parsed.skills))

        st.multiselect(
            "Enhancement goals",
            [o.id for o in ENHANCEMENT_OPTIONS],
            format_func=lambda oid: next(o.label for o in ENHANCEMENT_OPTIONS if o.id == oid),
            key="enhancement_goals",
        )
        if st.button("Open in editor", type="primary"):
            _dispatch(LoadResume(resume=parsed.to_resume_data()))
            _reset_widgets()
            st.session_state.pop("parsed_resume", None)
            _go("editor")
            st.rerun()

    if st.button("Back"):
        _go("landing")
        st.rerun()


# ---------------------------------------------------------------------------
# Main router
# ---------------------------------------------------------------------------

PAGES = {
    "landing": _page_landing,
    "job": _page_job,
    "templates": _page_templates,
    "editor": _page_editor,
    "import": _page_import,
}

PAGES[st.session_state.get("step", "landing")]()
