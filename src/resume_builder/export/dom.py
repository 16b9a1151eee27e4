"""Locate and clean the rendered résumé node before it is exported."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

DEFAULT_ELEMENT_ID = "resume-preview"

# Never part of an exported document.
STRIP_SELECTORS = (".edit-only", "button", "script")


class ExportError(RuntimeError):
    """Raised when an export cannot produce its artifact."""


def find_target(html: str, element_id: str = DEFAULT_ELEMENT_ID) -> Tag:
    """Return the node with ``element_id`` or raise ``ExportError``."""
    soup = BeautifulSoup(html, "html.parser")
    node = soup.find(id=element_id)
    if node is None:
        raise ExportError(f"Element not found: #{element_id}")
    return node


def document_styles(html: str) -> str:
    """Concatenated ``<style>`` blocks of the rendered page."""
    soup = BeautifulSoup(html, "html.parser")
    return "\n".join(style.get_text() for style in soup.find_all("style"))


def sanitize(node: Tag) -> Tag:
    """Copy of ``node`` without editing chrome.

    Inputs and textareas left over from an active field are replaced by their
    current text so the exported copy shows the value, not a control.
    """
    clean = BeautifulSoup(str(node), "html.parser")
    for selector in STRIP_SELECTORS:
        for el in clean.select(selector):
            el.decompose()
    for el in clean.find_all(["input", "textarea"]):
        value = el.get("value", "") if el.name == "input" else el.get_text()
        el.replace_with(value)
    root = clean.find(id=node.get("id")) if node.get("id") else None
    return root or clean
