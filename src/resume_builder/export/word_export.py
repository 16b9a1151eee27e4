"""Word export: the preview markup wrapped as a ``.doc`` HTML document.

Word opens HTML saved with a ``.doc`` extension and the ``application/msword``
content type. The page styles are replaced by a static stylesheet, since
Word ignores most modern CSS.
"""

from __future__ import annotations

import logging
from pathlib import PurePath

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from resume_builder.export.dom import DEFAULT_ELEMENT_ID, find_target, sanitize
from resume_builder.templates.renderer import HTML_TEMPLATES_DIR

logger = logging.getLogger(__name__)

WORD_CONTENT_TYPE = "application/msword"
WORD_EXTENSION = ".doc"


def word_filename(filename: str = "resume.docx") -> str:
    """Force the ``.doc`` extension the exported bytes actually match."""
    path = PurePath(filename)
    if path.suffix.lower() == WORD_EXTENSION:
        return filename
    return str(path.with_suffix(WORD_EXTENSION))


def export_word(html: str, element_id: str = DEFAULT_ELEMENT_ID, title: str = "Resume") -> bytes:
    """Sanitised copy of ``#element_id`` as Word-openable HTML bytes."""
    target = sanitize(find_target(html, element_id))
    env = Environment(loader=FileSystemLoader(str(HTML_TEMPLATES_DIR)), autoescape=True)
    document = env.get_template("word.html").render(title=title, body=Markup(str(target)))
    logger.debug("Word export: %d bytes of markup", len(document))
    return document.encode("utf-8")
