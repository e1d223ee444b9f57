"""
Work-experience extraction.

The experience span (or the whole document when no experience heading was
found) is cut into candidate job chunks at blank lines and before lines that
open with a year or a month name. Each chunk is matched independently for a
job title, a company and a duration. Only chunks with both a title and a
company become entries.
"""

import logging
import re
from typing import List, Optional, Tuple

from resume_import.core.schemas import DURATION_NOT_SPECIFIED, ExperienceEntry
from resume_import.core.section_segmenter import SegmentedDocument
from resume_import.core.strategies import FieldResult, Strategy, run_cascade

logger = logging.getLogger(__name__)


MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
YEAR = r"(?:19|20)\d{2}"

ROLE_NOUNS = [
    "Engineer", "Developer", "Manager", "Analyst", "Specialist", "Consultant",
    "Designer", "Architect", "Director", "Scientist", "Administrator",
    "Coordinator", "Intern", "Lead",
]

CHUNK_SPLIT_RE = re.compile(rf"\n[ \t]*\n|\n(?=[ \t]*(?:{YEAR}|{MONTHS})\b)")

# Up to four capitalized words in front of a role noun: "Senior Software Engineer"
TITLE_RE = re.compile(
    r"\b(?:[A-Z][A-Za-z&/\-]*[ \t]+){0,4}(?:" + "|".join(ROLE_NOUNS) + r")s?\b"
)

# "at Acme Corp" / "@ Acme Corp", ending at a newline, comma, separator or date
COMPANY_RE = re.compile(
    r"(?:\bat|(?<!\S)@)[ \t]+(?P<company>[^\n,]+?)"
    rf"(?=[ \t]*(?:\n|,|\(|\||[-–—][ \t]|\b{MONTHS}\.?[ \t]+{YEAR}\b|\b{YEAR}\b|$))"
)

DURATION_RE = re.compile(
    rf"(?:\b{MONTHS}\.?[ \t]+)?\b{YEAR}\b"
    rf"(?:[ \t]*(?:-|–|—|to)[ \t]*(?:(?i:present|current)\b|(?:{MONTHS}\.?[ \t]+)?{YEAR}\b))?"
)


def split_chunks(text: str) -> List[str]:
    return [c.strip() for c in CHUNK_SPLIT_RE.split(text) if c and c.strip()]


def _find_company(chunk: str, after: int) -> Optional[re.Match]:
    """Prefer an "at <Company>" that follows the title, then anywhere in the chunk."""
    for m in COMPANY_RE.finditer(chunk, after):
        if re.search(r"[A-Za-z]", m.group("company")):
            return m
    if after:
        return _find_company(chunk, 0)
    return None


def _strip_spans(text: str, spans: List[Tuple[int, int]]) -> str:
    for start, end in sorted(spans, reverse=True):
        text = text[:start] + " " + text[end:]
    lines = [" ".join(ln.split()) for ln in text.split("\n")]
    return "\n".join(ln for ln in lines if ln).strip()


def parse_experience_chunk(chunk: str) -> Optional[ExperienceEntry]:
    """
    Turn one chunk into an entry, or None when title or company is absent.

    Example:
        "Senior Engineer at Acme Corp 2019-present"
        -> title="Senior Engineer", company="Acme Corp", duration="2019-present"
    """
    title_m = TITLE_RE.search(chunk)
    if not title_m:
        return None
    company_m = _find_company(chunk, title_m.end())
    if not company_m:
        return None

    company = company_m.group("company").strip(" \t-–—|")
    duration_m = DURATION_RE.search(chunk)
    duration = duration_m.group(0).strip() if duration_m else DURATION_NOT_SPECIFIED

    description = _strip_spans(chunk, [title_m.span(), company_m.span()])
    return ExperienceEntry(
        title=title_m.group(0).strip(),
        company=company,
        duration=duration,
        description=description,
    )


def parse_experience(text: str) -> List[ExperienceEntry]:
    entries = []
    for chunk in split_chunks(text):
        entry = parse_experience_chunk(chunk)
        if entry is None:
            logger.debug("Experience chunk skipped (no title/company): %d chars", len(chunk))
            continue
        entries.append(entry)
    return entries


# ===== STRATEGIES =====

def experience_from_section(document: SegmentedDocument) -> List[ExperienceEntry]:
    section = document.section_text("experience")
    return parse_experience(section) if section else []


def experience_from_document(document: SegmentedDocument) -> List[ExperienceEntry]:
    """Whole-document scan, only when segmentation found no experience heading."""
    if document.section("experience") is not None:
        return []
    return parse_experience(document.text)


EXPERIENCE_STRATEGIES: List[Tuple[str, Strategy]] = [
    ("experience_section", experience_from_section),
    ("whole_document", experience_from_document),
]


def extract_experience(document: SegmentedDocument) -> FieldResult:
    return run_cascade("experience", EXPERIENCE_STRATEGIES, document, empty=[])
