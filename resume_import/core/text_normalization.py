"""
Text normalization for decoded résumé pages.

Decoders hand over one string per page. The pipeline works on a single
document string in which every line is trimmed, runs of spaces/tabs are
collapsed, and paragraph breaks survive as exactly one blank line, so the
line-anchored heuristics downstream still see the original line structure.
"""

import logging
import re
from typing import List

from resume_import.core.errors import EmptyDocumentError
from resume_import.core.schemas import RawDocument

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"

HORIZONTAL_WS_RE = re.compile(r"[ \t\f\v\u00a0\u2000-\u200b\u3000]+")
BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize_page(text: str) -> str:
    """
    Normalize one page of text.

    Examples:
        "  John   Smith \\r\\n" -> "John Smith"
        "Skills\\n\\n\\n\\nPython" -> "Skills\\n\\nPython"
    """
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [HORIZONTAL_WS_RE.sub(" ", line).strip() for line in text.split("\n")]
    joined = "\n".join(lines)
    return BLANK_RUN_RE.sub("\n\n", joined).strip()


def normalize_pages(pages: List[str]) -> str:
    """
    Join per-page text into one normalized document.

    Raises:
        EmptyDocumentError: every page is blank after normalization
    """
    normalized = [normalize_page(p) for p in pages]
    text = PAGE_SEPARATOR.join(p for p in normalized if p)
    if not text.strip():
        raise EmptyDocumentError()
    logger.debug("Normalized %d page(s) into %d characters", len(pages), len(text))
    return text


def normalize_document(document: RawDocument) -> str:
    pages = document.pages or [document.text]
    return normalize_pages(pages)
