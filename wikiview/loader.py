"""Loading pages stored as JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from .document import Document, Language, Page, Section

logger = logging.getLogger(__name__)


class PageLoadError(Exception):
    """The page file is missing or malformed."""


def page_from_dict(data: dict) -> Page:
    """Build a Page from the decoded JSON structure.

    Expected layout::

        {"title": "...", "language": {"code": "en", "name": "English"},
         "available_languages": 3,
         "sections": [{"number": "1", "text": "Intro", "anchor": "Intro"}],
         "content": {"kind": "section", "children": [...]}}
    """
    try:
        title = str(data["title"])
        language_data = data.get("language") or {}
        language = Language(
            code=str(language_data.get("code", "en")),
            name=str(language_data.get("name", "English")),
        )
        sections = None
        if data.get("sections") is not None:
            sections = [
                Section(number=str(s["number"]), text=str(s["text"]), anchor=str(s["anchor"]))
                for s in data["sections"]
            ]
        content = Document.from_dict(data.get("content"))
        available = int(data.get("available_languages", 0))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise PageLoadError(f"Malformed page data: {e}") from e

    return Page(
        title=title,
        content=content,
        language=language,
        sections=sections,
        available_languages=available,
    )


def load_page(path: Union[str, Path]) -> Page:
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PageLoadError(f"Could not read page {path}: {e}") from e

    if not isinstance(data, dict):
        raise PageLoadError(f"Page file {path} does not contain an object")

    page = page_from_dict(data)
    logger.info(f"loaded page '{page.title}' with {len(page.content)} nodes")
    return page


def resolve_page_path(current_path: Union[str, Path], page_id: str) -> Optional[Path]:
    """Sibling file holding the page an internal link points to, if present."""
    name = page_id.strip().replace(" ", "_").replace("/", "_")
    if not name:
        return None
    candidate = Path(current_path).parent / f"{name}.json"
    if candidate.is_file():
        return candidate
    logger.info(f"no local file for page '{page_id}'")
    return None
