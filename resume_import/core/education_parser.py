"""
Education extraction.

Works only inside the education span. Each degree phrase
("Bachelor of Science in Computer Science", "Master's in Data Science",
"PhD in Physics") becomes one entry; the institution and graduation year are
matched to it by line and fall back to "not specified" placeholders.
"""

import logging
import re
from typing import List, Optional, Tuple

from resume_import.core.schemas import INSTITUTION_NOT_SPECIFIED, YEAR_NOT_SPECIFIED, EducationEntry
from resume_import.core.section_segmenter import SegmentedDocument
from resume_import.core.strategies import FieldResult, Strategy, run_cascade

logger = logging.getLogger(__name__)


# ===== DEGREE PATTERN =====

DEGREE_PREFIXES = r"(?:Bachelor|Master|PhD|Ph\.D\.?|Associate)(?:['’]?s)?"

# Capitalized words, allowing lowercase connectors: "Computer Science", "Science in Computer Science"
FIELD_OF_STUDY = r"[A-Z][A-Za-z&.\-]*(?:[ \t]+(?:(?:and|of|in|&)[ \t]+)?[A-Z][A-Za-z&.\-]*)*"

DEGREE_RE = re.compile(
    r"\b" + DEGREE_PREFIXES + r"(?:[ \t]+[A-Za-z.'’]+){0,3}?[ \t]+(?:in|of)[ \t]+" + FIELD_OF_STUDY
)

# ===== INSTITUTION / YEAR =====

CAP_WORDS = r"[A-Z][A-Za-z&'’.\-]*(?:[ \t]+[A-Z][A-Za-z&'’.\-]*)*"
INSTITUTION_RE = re.compile(
    r"\b(?:" + CAP_WORDS + r"[ \t]+)?(?:University|College|Institute)\b(?:[ \t]+of[ \t]+" + CAP_WORDS + r")?"
)
YEAR_RE = re.compile(r"(?<!\d)(?:19|20)\d{2}(?!\d)")


def _line_of(text: str, pos: int) -> int:
    return text.count("\n", 0, pos)


def _degree_windows(text: str, matches: List[re.Match]) -> List[Tuple[int, int]]:
    """
    Where to look for a degree's year when it is not on the degree's line.

    A single degree owns the whole section; otherwise each degree owns the
    text from its own start up to the next degree.
    """
    if len(matches) == 1:
        return [(0, len(text))]
    windows = []
    for i, m in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        windows.append((m.start(), end))
    return windows


def _assign_institutions(text: str, degrees: List[re.Match]) -> List[Optional[Tuple[int, str]]]:
    """
    Pair each degree with at most one (line, institution) found in the section.

    An institution on the degree's own line belongs to that degree. The
    remaining institutions are paired in order when there is exactly one per
    remaining degree, so "school above degree" and "school below degree"
    layouts both line up. Otherwise each degree takes the nearest remaining
    institution, the line above winning a tie.
    """
    degree_lines = [_line_of(text, d.start()) for d in degrees]
    assigned: List[Optional[Tuple[int, str]]] = [None] * len(degrees)
    free: List[Tuple[int, str]] = []

    for m in INSTITUTION_RE.finditer(text):
        found = (_line_of(text, m.start()), m.group(0).strip())
        if found[0] in degree_lines:
            i = degree_lines.index(found[0])
            if assigned[i] is None:
                assigned[i] = found
                continue
        free.append(found)

    pending = [i for i, a in enumerate(assigned) if a is None]
    if not free or not pending:
        return assigned
    if len(pending) == len(free):
        for i, found in zip(pending, free):
            assigned[i] = found
        return assigned
    for i in pending:
        line = degree_lines[i]
        assigned[i] = min(free, key=lambda f: (abs(f[0] - line), f[0] > line))
    return assigned


def _year_for(text: str, degree: re.Match, institution: Optional[Tuple[int, str]], window: Tuple[int, int]) -> Optional[str]:
    """Year on the degree's line, then on its institution's line, then in its window."""
    lines = text.split("\n")
    candidates = [lines[_line_of(text, degree.start())]]
    if institution is not None:
        candidates.append(lines[institution[0]])
    candidates.append(text[window[0]:window[1]])
    for candidate in candidates:
        year = _search(YEAR_RE, candidate)
        if year:
            return year
    return None


def _search(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    return m.group(0).strip() if m else None


def parse_education(text: str) -> List[EducationEntry]:
    matches = list(DEGREE_RE.finditer(text))
    institutions = _assign_institutions(text, matches)
    entries = []
    for m, institution, window in zip(matches, institutions, _degree_windows(text, matches)):
        entries.append(
            EducationEntry(
                degree=m.group(0).strip().rstrip(".,;"),
                institution=institution[1] if institution else INSTITUTION_NOT_SPECIFIED,
                year=_year_for(text, m, institution, window) or YEAR_NOT_SPECIFIED,
            )
        )
    logger.debug("Found %d degree phrase(s) in education section", len(entries))
    return entries


def education_from_section(document: SegmentedDocument) -> List[EducationEntry]:
    section = document.section_text("education")
    return parse_education(section) if section else []


EDUCATION_STRATEGIES: List[Tuple[str, Strategy]] = [
    ("education_section", education_from_section),
]


def extract_education(document: SegmentedDocument) -> FieldResult:
    return run_cascade("education", EDUCATION_STRATEGIES, document, empty=[])
