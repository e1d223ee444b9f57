"""
Section segmentation for normalized résumé text.

Headings are found with a single forward regex scan: a heading is a known
keyword at the start of a line, optionally followed by ':', '-' or '|'. Each
section's span runs from the end of its heading keyword to the start of the
next heading (or the end of the document). Spans are not layout-aware: a
line inside the experience block that starts with "Skills" ends the
experience span there.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from resume_import.core.schemas import Section, SectionName

logger = logging.getLogger(__name__)


# ===== HEADING KEYWORDS =====
# Order matters: sections are tried top to bottom and the first match wins,
# and within a section the longer phrase must come first.

SECTION_HEADINGS: List[Tuple[SectionName, List[str]]] = [
    ("contact", [
        "contact information",
        "contact details",
        "contact info",
        "contact",
        "personal information",
        "personal details",
    ]),
    ("experience", [
        "professional experience",
        "work experience",
        "employment history",
        "work history",
        "experience",
        "employment",
    ]),
    ("education", [
        "academic background",
        "education",
        "academics",
        "academic",
    ]),
    ("skills", [
        "technical skills",
        "core competencies",
        "competencies",
        "skills",
    ]),
]


def _build_heading_re() -> re.Pattern:
    groups = []
    for name, phrases in SECTION_HEADINGS:
        alternatives = "|".join(r"[ \t]+".join(re.escape(w) for w in p.split()) for p in phrases)
        groups.append(f"(?P<{name}>{alternatives})")
    return re.compile(
        r"^[ \t]*(?:" + "|".join(groups) + r")(?![A-Za-z0-9])[ \t]*[:\-|–—]?[ \t]*",
        re.IGNORECASE | re.MULTILINE,
    )


HEADING_RE = _build_heading_re()


@dataclass(frozen=True)
class SegmentedDocument:
    """Normalized text plus the heading-delimited spans found in it."""
    text: str
    sections: Tuple[Section, ...] = field(default_factory=tuple)

    @property
    def lines(self) -> List[str]:
        return self.text.split("\n")

    def section(self, name: SectionName) -> Optional[Section]:
        """First section with this name that has any text in its span."""
        for s in self.sections:
            if s.name == name and s.text:
                return s
        return None

    def section_text(self, name: SectionName) -> Optional[str]:
        s = self.section(name)
        return s.text if s else None

    def section_names(self) -> List[SectionName]:
        return [s.name for s in self.sections]


def is_heading(line: str) -> bool:
    """True when the line starts with a known section keyword."""
    return HEADING_RE.match(line) is not None


def find_headings(text: str) -> List[Tuple[SectionName, str, int, int]]:
    """
    Locate every heading in document order.

    Returns:
        (section name, heading as written, heading start, span start) tuples
    """
    found = []
    for m in HEADING_RE.finditer(text):
        name = next(k for k, v in m.groupdict().items() if v is not None)
        found.append((name, m.group(name), m.start(), m.end()))
    return found


def segment(text: str) -> SegmentedDocument:
    """
    Split normalized text into labelled spans.

    Text before the first heading becomes an "unknown" section so nothing is
    lost; a document without headings is a single unknown section.
    """
    headings = find_headings(text)
    sections: List[Section] = []

    preamble_end = headings[0][2] if headings else len(text)
    preamble = text[:preamble_end].strip()
    if preamble:
        sections.append(Section(name="unknown", start=0, end=preamble_end, text=preamble))

    for i, (name, heading, _heading_start, span_start) in enumerate(headings):
        span_end = headings[i + 1][2] if i + 1 < len(headings) else len(text)
        sections.append(
            Section(
                name=name,
                heading=heading,
                start=span_start,
                end=span_end,
                text=text[span_start:span_end].strip(),
            )
        )

    counts: Dict[str, int] = {}
    for s in sections:
        counts[s.name] = counts.get(s.name, 0) + 1
    logger.debug("Segmented document into %d section(s): %s", len(sections), counts)
    return SegmentedDocument(text=text, sections=tuple(sections))
