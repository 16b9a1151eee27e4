"""Tests for the editor reducer and store."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from resume_builder.editor.inline import EditSession
from resume_builder.editor.sections import DEFAULT_ORDER, InvalidSectionOrderError
from resume_builder.editor.store import (
    AddBullet,
    AddCustomItem,
    AddCustomSection,
    AddEntry,
    ApplySuggestion,
    EditorState,
    LoadResume,
    MoveSection,
    RemoveBullet,
    RemoveCustomItem,
    RemoveEntry,
    ReorderSections,
    ResumeStore,
    SelectTemplate,
    SetActiveSection,
    SetField,
    SetJobDetails,
    SetSkills,
    SetSummary,
    parse_action,
    reduce,
)
from resume_builder.models.resume import NEW_BULLET, ResumeData


@pytest.fixture
def state(full_resume) -> EditorState:
    return EditorState(resume=full_resume)


class TestFieldActions:
    def test_set_field(self, state):
        new = reduce(state, SetField(path="personalInfo.phone", value="555-0199"))
        assert new.resume.personal_info.phone == "555-0199"
        assert state.resume.personal_info.phone == "555-0100"

    def test_set_summary(self, state):
        assert reduce(state, SetSummary(value="New")).resume.summary == "New"

    def test_set_skills_splits_commas(self, state):
        new = reduce(state, SetSkills(skills=" Rust, ,Go ,  SQL,"))
        assert new.resume.skills == ["Rust", "Go", "SQL"]

    def test_set_skills_keeps_duplicates(self, state):
        new = reduce(state, SetSkills(skills="Go, Go"))
        assert new.resume.skills == ["Go", "Go"]


class TestEntryActions:
    def test_add_remove_experience(self, store):
        """Seed has one experience; add one, then remove the first."""
        original = store.resume.experience[0]
        store.dispatch(AddEntry(section="experience"))
        assert len(store.resume.experience) == 2
        added = store.resume.experience[1]
        assert added.title == "Job Title"
        assert added.id != original.id

        store.dispatch(RemoveEntry(section="experience", index=0))
        assert store.resume.experience == [added]

    def test_remove_keeps_others(self, state):
        new = reduce(state, RemoveEntry(section="experience", index=0))
        assert new.resume.experience == [state.resume.experience[1]]

    def test_remove_out_of_range(self, state):
        with pytest.raises(IndexError):
            reduce(state, RemoveEntry(section="education", index=3))

    def test_unknown_section(self, state):
        with pytest.raises(ValueError):
            reduce(state, AddEntry(section="summary"))

    @pytest.mark.parametrize("section", ["projects", "certifications", "languages", "custom"])
    def test_add_other_sections(self, state, section):
        attr = "custom_sections" if section == "custom" else section
        before = len(getattr(state.resume, attr))
        new = reduce(state, AddEntry(section=section))
        assert len(getattr(new.resume, attr)) == before + 1


class TestBulletActions:
    def test_add_bullet(self, state):
        new = reduce(state, AddBullet(section="experience", index=1))
        assert new.resume.experience[1].bullets[-1] == NEW_BULLET
        assert new.resume.experience[0] == state.resume.experience[0]

    def test_remove_bullet(self, state):
        new = reduce(state, RemoveBullet(section="experience", index=0, bullet_index=0))
        assert new.resume.experience[0].bullets == ["Cut p99 latency by half"]

    def test_remove_bullet_out_of_range(self, state):
        with pytest.raises(IndexError):
            reduce(state, RemoveBullet(section="experience", index=0, bullet_index=5))

    def test_section_without_bullets(self, state):
        with pytest.raises(ValueError):
            reduce(state, AddBullet(section="education", index=0))


class TestCustomSections:
    def test_add_section_and_items(self):
        state = EditorState(resume=ResumeData())
        state = reduce(state, AddCustomSection(title="Awards"))
        section = state.resume.custom_sections[0]
        assert section.title == "Awards"

        state = reduce(state, AddCustomItem(section_id=section.id, content="Best paper"))
        item = state.resume.custom_sections[0].items[0]
        assert item.content == "Best paper"

        state = reduce(state, RemoveCustomItem(section_id=section.id, item_id=item.id))
        assert state.resume.custom_sections[0].items == []

    def test_unknown_custom_section(self, state):
        with pytest.raises(ValueError):
            reduce(state, AddCustomItem(section_id="nope"))

    def test_unknown_custom_item(self, state):
        with pytest.raises(ValueError):
            reduce(state, RemoveCustomItem(section_id="cs1", item_id="nope"))


class TestOrderAndSelection:
    def test_reorder(self, state):
        order = list(reversed(DEFAULT_ORDER))
        new = reduce(state, ReorderSections(order=order))
        assert new.section_order == order
        assert new.resume is state.resume

    def test_reorder_rejected(self, state):
        with pytest.raises(InvalidSectionOrderError):
            reduce(state, ReorderSections(order=["summary"]))

    def test_move(self, state):
        new = reduce(state, MoveSection(old_index=4, new_index=1))
        assert new.section_order.ids[1] == "skills"

    def test_select_template(self, state):
        assert reduce(state, SelectTemplate(template_id="side-stripe")).template_id == "side-stripe"

    def test_active_section(self, state):
        assert reduce(state, SetActiveSection(section="skills")).active_section == "skills"

    def test_job_details(self, state, job):
        new = reduce(state, SetJobDetails(job=job))
        assert new.job.title == "Data Engineer"
        assert new.resume is state.resume


class TestApplySuggestion:
    def test_summary(self, state):
        new = reduce(state, ApplySuggestion(section="summary", suggestion="Better summary"))
        assert new.resume.summary == "Better summary"

    def test_skills(self, state):
        new = reduce(state, ApplySuggestion(section="skills", suggestion=["A", "B"]))
        assert new.resume.skills == ["A", "B"]

    def test_experience_bullets(self, state):
        new = reduce(state, ApplySuggestion(section="experience", suggestion=["x", "y", "z"], index=1))
        assert new.resume.experience[1].bullets == ["x", "y", "z"]
        assert new.resume.experience[0] == state.resume.experience[0]

    def test_none_is_noop(self, state):
        assert reduce(state, ApplySuggestion(section="education", suggestion=None)) is state

    def test_text_on_wrong_section(self, state):
        with pytest.raises(ValueError):
            reduce(state, ApplySuggestion(section="skills", suggestion="text"))


class TestResumeStore:
    def test_subscribers_notified(self, store):
        listener = MagicMock()
        unsubscribe = store.subscribe(listener)
        store.dispatch(SetSummary(value="Hi"))
        listener.assert_called_once_with(store.state)

        unsubscribe()
        store.dispatch(SetSummary(value="Again"))
        listener.assert_called_once()

    def test_noop_does_not_notify(self, store):
        listener = MagicMock()
        store.subscribe(listener)
        store.dispatch(ApplySuggestion(section="summary", suggestion=None))
        listener.assert_not_called()

    def test_load_resume(self, store, full_resume):
        store.dispatch(LoadResume(resume=full_resume))
        assert store.resume == full_resume

    def test_inline_edit_commits_single_field(self, store):
        before = store.resume
        entry_id = before.experience[0].id
        session = EditSession()

        store.begin_edit(session, f"experience.{entry_id}.title")
        session.type("Lead Engineer")
        session.key("Enter")

        after = store.resume
        assert after.experience[0].title == "Lead Engineer"
        assert after.experience[0].bullets == before.experience[0].bullets
        assert after.education == before.education
        assert after.summary == before.summary

    def test_inline_cancel_leaves_store_untouched(self, store):
        before = store.state
        session = EditSession()
        store.begin_edit(session, "summary")
        session.type("Discard me")
        session.key("Escape")
        assert store.state is before

    def test_summary_is_multiline(self, store):
        session = EditSession()
        editor = store.begin_edit(session, "summary")
        assert editor.multiline
        session.key("Enter")
        assert session.active_field_id == "summary"


class TestParseAction:
    def test_dict_resolves_by_type(self):
        action = parse_action({"type": "move_section", "old_index": 0, "new_index": 2})
        assert isinstance(action, MoveSection)
        assert (action.old_index, action.new_index) == (0, 2)

    def test_skills_string_split(self):
        action = parse_action({"type": "set_skills", "skills": "Go, , Rust "})
        assert action.skills == ["Go", "Rust"]

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            parse_action({"type": "delete_everything"})

    def test_store_accepts_dicts(self, store):
        store.dispatch({"type": "set_summary", "value": "From JSON"})
        assert store.resume.summary == "From JSON"

    def test_reduce_accepts_dicts(self, state):
        new = reduce(state, {"type": "select_template", "template_id": "side-stripe"})
        assert new.template_id == "side-stripe"
