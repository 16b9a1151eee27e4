"""Dotted field paths into ResumeData.

A path names one scalar value, using the JSON (camelCase) names and entry
ids rather than positions, e.g. ``personalInfo.email``,
``experience.<id>.bullets.2`` or ``customSections.<id>.items.<id>.content``.
"""

from __future__ import annotations

from pydantic import BaseModel

from resume_builder.models.resume import ResumeData


class FieldPathError(KeyError):
    """Raised for paths that do not name a scalar field."""


def split_path(path: str) -> list[str]:
    segments = path.split(".")
    if not path or any(not s for s in segments):
        raise FieldPathError(path)
    return segments


def join_path(*segments) -> str:
    return ".".join(str(s) for s in segments)


def get_field(data: ResumeData, path: str):
    """Return the scalar value at ``path``."""
    node = data
    for segment in split_path(path):
        node = _child(node, segment, path)
    if isinstance(node, (BaseModel, list)):
        raise FieldPathError(path)
    return node


def set_field(data: ResumeData, path: str, value) -> ResumeData:
    """Return a copy of ``data`` where only the value at ``path`` differs."""
    return _set(data, split_path(path), value, path)


def _attribute(model: BaseModel, segment: str, path: str) -> str:
    for name, info in type(model).model_fields.items():
        if segment in (name, info.alias):
            return name
    raise FieldPathError(path)


def _list_index(items: list, segment: str, path: str) -> int:
    if items and isinstance(items[0], BaseModel):
        for i, item in enumerate(items):
            if getattr(item, "id", None) == segment:
                return i
        raise FieldPathError(path)
    try:
        index = int(segment)
    except ValueError:
        raise FieldPathError(path) from None
    if not 0 <= index < len(items):
        raise FieldPathError(path)
    return index


def _child(node, segment: str, path: str):
    if isinstance(node, BaseModel):
        return getattr(node, _attribute(node, segment, path))
    if isinstance(node, list):
        return node[_list_index(node, segment, path)]
    raise FieldPathError(path)


def _check_scalar(current, value, path: str) -> None:
    if isinstance(current, (BaseModel, list)):
        raise FieldPathError(path)
    if current is not None and not isinstance(value, type(current)):
        raise TypeError(f"{path} expects {type(current).__name__}, got {type(value).__name__}")


def _set(node, segments: list[str], value, path: str):
    head, rest = segments[0], segments[1:]
    if isinstance(node, BaseModel):
        name = _attribute(node, head, path)
        current = getattr(node, name)
        if rest:
            return node.model_copy(update={name: _set(current, rest, value, path)})
        _check_scalar(current, value, path)
        return node.model_copy(update={name: value})
    if isinstance(node, list):
        index = _list_index(node, head, path)
        current = node[index]
        items = list(node)
        if rest:
            items[index] = _set(current, rest, value, path)
        else:
            _check_scalar(current, value, path)
            items[index] = value
        return items
    raise FieldPathError(path)
