"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

CONFIG_ENV_VAR = "RESUME_BUILDER_CONFIG"


@dataclass(frozen=True)
class ExportConfig:
    page_format: str = "A4"
    raster_scale: float = 2.0
    pdf_filename: str = "resume.pdf"
    word_filename: str = "resume.doc"
    element_id: str = "resume-preview"


@dataclass(frozen=True)
class PreviewConfig:
    max_entries: int = 1
    max_bullets: int = 1
    max_skills: int = 3

    def __post_init__(self) -> None:
        for name in ("max_entries", "max_bullets", "max_skills"):
            if getattr(self, name) < 1:
                raise ValueError(f"preview.{name} must be at least 1")


@dataclass(frozen=True)
class MockConfig:
    suggestion_delay: float = 1.5
    parse_delay: float = 3.0


@dataclass(frozen=True)
class UploadConfig:
    allowed_extensions: tuple[str, ...] = (".pdf", ".docx", ".doc", ".txt")
    max_bytes: int = 10 * 1024 * 1024

    def __post_init__(self) -> None:
        # YAML gives lists; keep the frozen value hashable
        object.__setattr__(
            self,
            "allowed_extensions",
            tuple(ext.lower() for ext in self.allowed_extensions),
        )


@dataclass(frozen=True)
class AppConfig:
    export: ExportConfig = field(default_factory=ExportConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    mock: MockConfig = field(default_factory=MockConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        candidates = [Path(env_path)] if env_path else []
        candidates.append(Path.cwd() / "config.yaml")
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        export=ExportConfig(**raw.get("export", {})),
        preview=PreviewConfig(**raw.get("preview", {})),
        mock=MockConfig(**raw.get("mock", {})),
        upload=UploadConfig(**raw.get("upload", {})),
    )
