"""Single owned editor state with a pure reducer.

All edits flow one way: an action is dispatched, ``reduce`` returns a new
``EditorState`` built by copy-on-write, subscribers re-render.
"""

from __future__ import annotations

import logging
from typing import Annotated, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from resume_builder.editor.fields import get_field, set_field
from resume_builder.editor.inline import EditSession, InlineEditor
from resume_builder.editor.sections import SectionOrder
from resume_builder.models.job import JobDetails
from resume_builder.models.resume import (
    ENTRY_MODELS,
    NEW_BULLET,
    CustomItem,
    CustomSection,
    ResumeData,
    default_resume,
    new_entry,
)

logger = logging.getLogger(__name__)

# Fields edited through a multi-line control.
MULTILINE_FIELDS = ("summary", "content")

BULLET_SECTIONS = ("experience", "projects", "leadership")


class EditorState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    resume: ResumeData = Field(default_factory=default_resume)
    section_order: SectionOrder = Field(default_factory=SectionOrder)
    template_id: str = "classic-chrono"
    job: JobDetails = Field(default_factory=JobDetails)
    active_section: str = "summary"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class SetField(BaseModel):
    type: Literal["set_field"] = "set_field"
    path: str
    value: str | bool


class SetSummary(BaseModel):
    type: Literal["set_summary"] = "set_summary"
    value: str


class SetSkills(BaseModel):
    """Skills typed as one comma-separated string."""

    type: Literal["set_skills"] = "set_skills"
    skills: list[str]

    @field_validator("skills", mode="before")
    @classmethod
    def _split(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        return [s.strip() for s in v if s.strip()]


class AddEntry(BaseModel):
    type: Literal["add_entry"] = "add_entry"
    section: str


class RemoveEntry(BaseModel):
    type: Literal["remove_entry"] = "remove_entry"
    section: str
    index: int


class AddBullet(BaseModel):
    type: Literal["add_bullet"] = "add_bullet"
    section: str = "experience"
    index: int
    text: str = NEW_BULLET


class RemoveBullet(BaseModel):
    type: Literal["remove_bullet"] = "remove_bullet"
    section: str = "experience"
    index: int
    bullet_index: int


class AddCustomSection(BaseModel):
    type: Literal["add_custom_section"] = "add_custom_section"
    title: str = "Custom Section"


class AddCustomItem(BaseModel):
    type: Literal["add_custom_item"] = "add_custom_item"
    section_id: str
    content: str = "New item"


class RemoveCustomItem(BaseModel):
    type: Literal["remove_custom_item"] = "remove_custom_item"
    section_id: str
    item_id: str


class ReorderSections(BaseModel):
    type: Literal["reorder_sections"] = "reorder_sections"
    order: list[str]


class MoveSection(BaseModel):
    type: Literal["move_section"] = "move_section"
    old_index: int
    new_index: int


class SelectTemplate(BaseModel):
    type: Literal["select_template"] = "select_template"
    template_id: str


class SetActiveSection(BaseModel):
    type: Literal["set_active_section"] = "set_active_section"
    section: str


class SetJobDetails(BaseModel):
    type: Literal["set_job_details"] = "set_job_details"
    job: JobDetails


class ApplySuggestion(BaseModel):
    type: Literal["apply_suggestion"] = "apply_suggestion"
    section: str
    suggestion: str | list[str] | None
    index: int = 0


class LoadResume(BaseModel):
    type: Literal["load_resume"] = "load_resume"
    resume: ResumeData


Action = Annotated[
    Union[
        SetField,
        SetSummary,
        SetSkills,
        AddEntry,
        RemoveEntry,
        AddBullet,
        RemoveBullet,
        AddCustomSection,
        AddCustomItem,
        RemoveCustomItem,
        ReorderSections,
        MoveSection,
        SelectTemplate,
        SetActiveSection,
        SetJobDetails,
        ApplySuggestion,
        LoadResume,
    ],
    Field(discriminator="type"),
]

_action_adapter = TypeAdapter(Action)


def parse_action(raw: dict) -> BaseModel:
    """Validate a plain dict (e.g. decoded JSON) into its action model."""
    return _action_adapter.validate_python(raw)


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


def reduce(state: EditorState, action) -> EditorState:
    """Return the state that results from applying ``action``."""
    if isinstance(action, dict):
        action = parse_action(action)
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise ValueError(f"Unknown action: {action!r}")
    return handler(state, action)


def _with_resume(state: EditorState, **update) -> EditorState:
    return state.model_copy(update={"resume": state.resume.model_copy(update=update)})


def _list_attr(section: str) -> str:
    attr = "custom_sections" if section in ("custom", "customSections") else section
    if attr not in ENTRY_MODELS:
        raise ValueError(f"Not a list section: {section}")
    return attr


def _entries(state: EditorState, section: str) -> tuple[str, list]:
    attr = _list_attr(section)
    return attr, list(getattr(state.resume, attr))


def _check_index(items: list, index: int) -> None:
    if not 0 <= index < len(items):
        raise IndexError(f"Entry index out of range: {index}")


def _set_field(state, action: SetField):
    return state.model_copy(update={"resume": set_field(state.resume, action.path, action.value)})


def _set_summary(state, action: SetSummary):
    return _with_resume(state, summary=action.value)


def _set_skills(state, action: SetSkills):
    return _with_resume(state, skills=list(action.skills))


def _add_entry(state, action: AddEntry):
    attr, items = _entries(state, action.section)
    items.append(new_entry(attr))
    return _with_resume(state, **{attr: items})


def _remove_entry(state, action: RemoveEntry):
    attr, items = _entries(state, action.section)
    _check_index(items, action.index)
    del items[action.index]
    return _with_resume(state, **{attr: items})


def _bulleted(state, section: str, index: int) -> tuple[str, list]:
    if section not in BULLET_SECTIONS:
        raise ValueError(f"Section has no bullets: {section}")
    attr, items = _entries(state, section)
    _check_index(items, index)
    return attr, items


def _add_bullet(state, action: AddBullet):
    attr, items = _bulleted(state, action.section, action.index)
    entry = items[action.index]
    items[action.index] = entry.model_copy(update={"bullets": [*entry.bullets, action.text]})
    return _with_resume(state, **{attr: items})


def _remove_bullet(state, action: RemoveBullet):
    attr, items = _bulleted(state, action.section, action.index)
    entry = items[action.index]
    bullets = list(entry.bullets)
    if not 0 <= action.bullet_index < len(bullets):
        raise IndexError(f"Bullet index out of range: {action.bullet_index}")
    del bullets[action.bullet_index]
    items[action.index] = entry.model_copy(update={"bullets": bullets})
    return _with_resume(state, **{attr: items})


def _add_custom_section(state, action: AddCustomSection):
    sections = [*state.resume.custom_sections, CustomSection(title=action.title)]
    return _with_resume(state, custom_sections=sections)


def _custom_section_index(state, section_id: str) -> int:
    for i, section in enumerate(state.resume.custom_sections):
        if section.id == section_id:
            return i
    raise ValueError(f"Unknown custom section: {section_id}")


def _add_custom_item(state, action: AddCustomItem):
    i = _custom_section_index(state, action.section_id)
    sections = list(state.resume.custom_sections)
    section = sections[i]
    items = [*section.items, CustomItem(content=action.content)]
    sections[i] = section.model_copy(update={"items": items})
    return _with_resume(state, custom_sections=sections)


def _remove_custom_item(state, action: RemoveCustomItem):
    i = _custom_section_index(state, action.section_id)
    sections = list(state.resume.custom_sections)
    section = sections[i]
    items = [item for item in section.items if item.id != action.item_id]
    if len(items) == len(section.items):
        raise ValueError(f"Unknown custom item: {action.item_id}")
    sections[i] = section.model_copy(update={"items": items})
    return _with_resume(state, custom_sections=sections)


def _reorder_sections(state, action: ReorderSections):
    return state.model_copy(update={"section_order": state.section_order.reorder(action.order)})


def _move_section(state, action: MoveSection):
    order = state.section_order.move(action.old_index, action.new_index)
    return state.model_copy(update={"section_order": order})


def _select_template(state, action: SelectTemplate):
    return state.model_copy(update={"template_id": action.template_id})


def _set_active_section(state, action: SetActiveSection):
    return state.model_copy(update={"active_section": action.section})


def _set_job_details(state, action: SetJobDetails):
    return state.model_copy(update={"job": action.job})


def _apply_suggestion(state, action: ApplySuggestion):
    suggestion = action.suggestion
    if suggestion is None:
        return state
    if isinstance(suggestion, str):
        if action.section != "summary":
            raise ValueError(f"Text suggestions apply to the summary, not {action.section}")
        return _with_resume(state, summary=suggestion)
    if action.section == "skills":
        return _with_resume(state, skills=list(suggestion))
    if action.section == "experience":
        items = list(state.resume.experience)
        _check_index(items, action.index)
        items[action.index] = items[action.index].model_copy(update={"bullets": list(suggestion)})
        return _with_resume(state, experience=items)
    raise ValueError(f"List suggestions cannot be applied to {action.section}")


def _load_resume(state, action: LoadResume):
    return state.model_copy(update={"resume": action.resume})


_HANDLERS: dict[type, Callable] = {
    SetField: _set_field,
    SetSummary: _set_summary,
    SetSkills: _set_skills,
    AddEntry: _add_entry,
    RemoveEntry: _remove_entry,
    AddBullet: _add_bullet,
    RemoveBullet: _remove_bullet,
    AddCustomSection: _add_custom_section,
    AddCustomItem: _add_custom_item,
    RemoveCustomItem: _remove_custom_item,
    ReorderSections: _reorder_sections,
    MoveSection: _move_section,
    SelectTemplate: _select_template,
    SetActiveSection: _set_active_section,
    SetJobDetails: _set_job_details,
    ApplySuggestion: _apply_suggestion,
    LoadResume: _load_resume,
}


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ResumeStore:
    """Holds the current EditorState and notifies subscribers on change."""

    def __init__(self, state: EditorState | None = None):
        self.state = state or EditorState()
        self._subscribers: list[Callable[[EditorState], None]] = []

    @property
    def resume(self) -> ResumeData:
        return self.state.resume

    @property
    def section_order(self) -> SectionOrder:
        return self.state.section_order

    def subscribe(self, callback: Callable[[EditorState], None]) -> Callable[[], None]:
        self._subscribers.append(callback)
        return lambda: self._subscribers.remove(callback)

    def dispatch(self, action) -> EditorState:
        if isinstance(action, dict):
            action = parse_action(action)
        logger.debug("dispatch %s", action.type)
        new_state = reduce(self.state, action)
        if new_state is not self.state:
            self.state = new_state
            for callback in list(self._subscribers):
                callback(new_state)
        return self.state

    def begin_edit(self, session: EditSession, path: str) -> InlineEditor:
        """Activate ``path`` in ``session``; its commit dispatches SetField."""
        multiline = path.rsplit(".", 1)[-1] in MULTILINE_FIELDS
        return session.activate(
            path,
            get_field(self.resume, path) or "",
            on_change=lambda value: self.dispatch(SetField(path=path, value=value)),
            multiline=multiline,
        )
