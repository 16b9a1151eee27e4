"""Pydantic models for the template catalog."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TemplateStyle(BaseModel):
    """Visual descriptor consumed by the shared renderer."""

    model_config = ConfigDict(frozen=True)

    columns: Literal[1, 2] = 1
    accent: str = "#111827"
    heading_style: Literal["rule", "caps", "plain", "accent", "banner"] = "caps"
    header_align: Literal["left", "center"] = "left"
    font_family: str = "Arial, sans-serif"
    border_left: bool = False
    sidebar_sections: tuple[str, ...] = ()
    sidebar_background: str | None = None


class Template(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: Literal["minimal", "colorful"]
    preview: str
    style: TemplateStyle = Field(default_factory=TemplateStyle)
