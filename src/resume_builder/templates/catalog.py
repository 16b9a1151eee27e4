from functools import lru_cache
from pathlib import Path

import yaml

from resume_builder.models.template import Template

CATALOG_PATH = Path(__file__).parent / "catalog.yaml"


class TemplateNotFoundError(KeyError):
    """Raised for an id that is not in the catalog."""


@lru_cache(maxsize=1)
def load_catalog() -> tuple[Template, ...]:
    """Load the fixed template catalog."""
    with open(CATALOG_PATH, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return tuple(Template(**entry) for entry in data["templates"])


def get_template(template_id: str) -> Template:
    """Look up one template by id."""
    for template in load_catalog():
        if template.id == template_id:
            return template
    raise TemplateNotFoundError(f"Template not found: {template_id}")


def list_templates(category: str | None = None) -> list[Template]:
    """List templates in catalog order, optionally for one category."""
    return [t for t in load_catalog() if category is None or t.category == category]
