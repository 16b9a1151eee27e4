"""Inline display/edit toggle for a single text value.

Every template renders scalar fields through the same editor, so the
click-to-edit behaviour is identical regardless of layout::

    DISPLAY --activate--> EDITING --commit (Enter / blur / done)--> DISPLAY
                              \\--cancel (Escape): draft discarded--> DISPLAY

While editing, keystrokes only change a local draft. ``on_change`` fires
once, at commit, and only when the draft differs from the pre-edit value.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from markupsafe import Markup, escape

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "Enter text..."


class FieldState(str, Enum):
    DISPLAY = "display"
    EDITING = "editing"


class InlineEditor:
    """State machine for one field."""

    def __init__(
        self,
        field_id: str,
        value: str,
        on_change: Callable[[str], None] | None = None,
        multiline: bool = False,
    ):
        self.field_id = field_id
        self.value = value
        self.on_change = on_change
        self.multiline = multiline
        self.state = FieldState.DISPLAY
        self.draft = value

    @property
    def is_editing(self) -> bool:
        return self.state is FieldState.EDITING

    def activate(self) -> None:
        if self.is_editing:
            return
        self.draft = self.value
        self.state = FieldState.EDITING

    def type(self, text: str) -> None:
        """Replace the whole draft, as an input's change event does."""
        self._require_editing()
        self.draft = text

    def key(self, key: str) -> None:
        """Feed one key press."""
        self._require_editing()
        if key == "Escape":
            self.cancel()
        elif key == "Enter":
            if self.multiline:
                self.draft += "\n"
            else:
                self.commit()
        elif key == "Backspace":
            self.draft = self.draft[:-1]
        elif len(key) == 1:
            self.draft += key

    def commit(self) -> str:
        """Leave editing, publishing the draft if it changed."""
        if not self.is_editing:
            return self.value
        self.state = FieldState.DISPLAY
        if self.draft != self.value:
            self.value = self.draft
            if self.on_change is not None:
                self.on_change(self.draft)
        return self.value

    # Multi-line fields keep Enter for newlines and commit on an explicit gesture.
    done = commit
    blur = commit

    def cancel(self) -> str:
        self.draft = self.value
        self.state = FieldState.DISPLAY
        return self.value

    def _require_editing(self) -> None:
        if not self.is_editing:
            raise RuntimeError(f"Field {self.field_id} is not being edited")


class EditSession:
    """Owns the single active field of a preview.

    Activating a field while another is being edited commits the other one
    first, so at most one field is ever in EDITING.
    """

    def __init__(self):
        self._editor: InlineEditor | None = None

    @property
    def active_field_id(self) -> str | None:
        if self._editor is not None and self._editor.is_editing:
            return self._editor.field_id
        return None

    @property
    def editor(self) -> InlineEditor | None:
        return self._editor if self.active_field_id else None

    def activate(
        self,
        field_id: str,
        value: str,
        on_change: Callable[[str], None] | None = None,
        multiline: bool = False,
    ) -> InlineEditor:
        current = self.editor
        if current is not None:
            if current.field_id == field_id:
                return current
            logger.debug("Committing %s before editing %s", current.field_id, field_id)
            current.commit()
        self._editor = InlineEditor(field_id, value, on_change, multiline)
        self._editor.activate()
        return self._editor

    def type(self, text: str) -> None:
        self._active().type(text)

    def key(self, key: str) -> None:
        self._active().key(key)

    def commit(self) -> str | None:
        editor = self.editor
        return editor.commit() if editor is not None else None

    done = commit
    blur = commit

    def cancel(self) -> str | None:
        editor = self.editor
        return editor.cancel() if editor is not None else None

    def render(
        self,
        field_id: str,
        current_value: str | None,
        on_change: Callable[[str], None] | None = None,
        multiline: bool = False,
        placeholder: str = DEFAULT_PLACEHOLDER,
        css_class: str = "",
    ) -> Markup:
        """Markup for a field: static text, or a control if it is active."""
        editor = self.editor
        if editor is not None and editor.field_id == field_id:
            if on_change is not None:
                editor.on_change = on_change
            return _control(editor, placeholder, css_class)
        return display(field_id, current_value, placeholder, css_class)

    def _active(self) -> InlineEditor:
        editor = self.editor
        if editor is None:
            raise RuntimeError("No field is being edited")
        return editor


def display(
    field_id: str,
    value: str | None,
    placeholder: str = DEFAULT_PLACEHOLDER,
    css_class: str = "",
) -> Markup:
    classes = " ".join(c for c in ("editable", css_class, "" if value else "empty") if c)
    return Markup('<span class="{}" data-field-id="{}">{}</span>').format(
        classes, field_id, value or placeholder
    )


def _control(editor: InlineEditor, placeholder: str, css_class: str) -> Markup:
    classes = " ".join(c for c in ("editing", css_class) if c)
    if editor.multiline:
        return Markup(
            '<textarea class="{}" data-field-id="{}" placeholder="{}" rows="3">{}</textarea>'
        ).format(classes, editor.field_id, placeholder, editor.draft)
    return Markup(
        '<input type="text" class="{}" data-field-id="{}" placeholder="{}" value="{}">'
    ).format(classes, editor.field_id, placeholder, escape(editor.draft))
