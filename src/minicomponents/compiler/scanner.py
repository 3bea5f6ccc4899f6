"""Locate component tags and their bodies in template text."""

import re
from typing import Optional, Tuple

from minicomponents.compiler.components import SLOT_PREFIX

TAG_START_RE = re.compile(r"<(c-[a-z0-9-]+)", re.IGNORECASE)


def find_tag_start(text: str, pos: int = 0) -> Optional["re.Match[str]"]:
    """Find the next ``<c-...`` tag start at or after ``pos``."""
    return TAG_START_RE.search(text, pos)


def contains_tag(text: str) -> bool:
    return TAG_START_RE.search(text) is not None


def closing_tag(name: str) -> str:
    return f"</{name}>"


def extract_body(text: str, pos: int, name: str) -> Optional[Tuple[str, int]]:
    """
    Return the raw body starting at ``pos`` and the position after its closing tag.

    The search is literal: the first ``</name>`` closes the tag, even when a
    tag of the same name is nested inside the body.
    """
    closing = closing_tag(name)
    idx = text.find(closing, pos)
    if idx < 0:
        return None
    return text[pos:idx], idx + len(closing)


def slot_name(name: str) -> Optional[str]:
    """Slot name of a ``<c-slot-NAME>`` tag, None for other tags."""
    if name.startswith(SLOT_PREFIX):
        return name[len(SLOT_PREFIX) :]
    return None
