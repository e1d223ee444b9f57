"""
Name and email extraction.

Both fields are essential: a profile needs at least one of them to be stored.
Each is an ordered cascade of small strategies (see `strategies.run_cascade`).
"""

import logging
import re
from functools import partial
from typing import List, Optional, Tuple

from resume_import.core.section_segmenter import SegmentedDocument, is_heading
from resume_import.core.strategies import FieldResult, Strategy, run_cascade

logger = logging.getLogger(__name__)


EMAIL_RE = re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE)

# "Name: Jane Doe" / "Full Name: Jane Doe", anchored at line start
NAME_LABEL_RE = re.compile(r"^[ \t]*(?:Full[ \t]+)?Name[ \t]*:[ \t]*(?P<value>[^\n]*)", re.IGNORECASE)

# Two or three words, each starting uppercase: "Jane Doe", "Mary Ann Smith", "JOHN DOE"
HEADER_NAME_RE = re.compile(r"^[A-Z][A-Za-z'’.\-]*(?: [A-Z][A-Za-z'’.\-]*){1,2}$")
HEADER_NAME_MIN_LEN = 5
HEADER_NAME_MAX_LEN = 50

TWO_WORD_NAME_RE = re.compile(r"\b[A-Z][a-z]+[ \t]+[A-Z][a-z]+\b")
LINE_START_NAME_RE = re.compile(r"^[A-Z][a-z]+[ \t]+[A-Z][a-z]+\b")


# ===== NAME STRATEGIES =====

def name_from_label(document: SegmentedDocument) -> Optional[str]:
    for line in document.lines:
        m = NAME_LABEL_RE.match(line)
        if m and m.group("value").strip():
            return m.group("value").strip()
    return None


def name_from_header(document: SegmentedDocument, scan_lines: int = 5) -> Optional[str]:
    """Look for a bare 2-3 word capitalized line near the top of the résumé."""
    header = [ln for ln in document.lines if ln.strip()][:scan_lines]
    for line in header:
        candidate = line.strip()
        if not (HEADER_NAME_MIN_LEN <= len(candidate) <= HEADER_NAME_MAX_LEN):
            continue
        if is_heading(candidate):
            logger.debug("Header line %r is a section heading, skipped", candidate)
            continue
        if HEADER_NAME_RE.match(candidate):
            return candidate
    return None


def name_from_contact_section(document: SegmentedDocument) -> Optional[str]:
    contact = document.section_text("contact")
    if not contact:
        return None
    m = TWO_WORD_NAME_RE.search(contact)
    return m.group(0) if m else None


def name_from_line_start(document: SegmentedDocument) -> Optional[str]:
    for line in document.lines:
        if is_heading(line):
            continue
        m = LINE_START_NAME_RE.match(line)
        if m:
            return m.group(0)
    return None


def name_strategies(header_scan_lines: int = 5) -> List[Tuple[str, Strategy]]:
    return [
        ("explicit_label", name_from_label),
        ("header_line", partial(name_from_header, scan_lines=header_scan_lines)),
        ("contact_section", name_from_contact_section),
        ("line_start", name_from_line_start),
    ]


def extract_name(document: SegmentedDocument, header_scan_lines: int = 5) -> FieldResult:
    return run_cascade("name", name_strategies(header_scan_lines), document)


# ===== EMAIL STRATEGIES =====

def email_from_document(document: SegmentedDocument) -> Optional[str]:
    m = EMAIL_RE.search(document.text)
    return m.group(0) if m else None


def email_from_contact_section(document: SegmentedDocument) -> Optional[str]:
    contact = document.section_text("contact")
    if not contact:
        return None
    m = EMAIL_RE.search(contact)
    return m.group(0) if m else None


EMAIL_STRATEGIES: List[Tuple[str, Strategy]] = [
    ("global_scan", email_from_document),
    ("contact_section", email_from_contact_section),
]


def extract_email(document: SegmentedDocument) -> FieldResult:
    return run_cascade("email", EMAIL_STRATEGIES, document)
