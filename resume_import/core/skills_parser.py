"""Skills extraction from the skills/competencies span."""

import logging
import re
from functools import partial
from typing import List, Tuple

from resume_import.core.schemas import MAX_SKILLS, SKILL_MAX_LENGTH, SKILL_MIN_LENGTH
from resume_import.core.section_segmenter import SegmentedDocument
from resume_import.core.strategies import FieldResult, Strategy, run_cascade

logger = logging.getLogger(__name__)


# Contiguous runs of letters, digits and + # . ("C++", "C#", "Node.js")
SKILL_TOKEN_RE = re.compile(r"[A-Za-z0-9+#.]+")


def tokenize_skills(
    text: str,
    limit: int = MAX_SKILLS,
    min_length: int = SKILL_MIN_LENGTH,
    max_length: int = SKILL_MAX_LENGTH,
) -> List[str]:
    """
    First `limit` tokens, in document order, whose length is within bounds.

    Dots at either end are sentence punctuation, not part of the skill:
    "SQL." -> "SQL", ".NET" is kept as "NET".
    """
    skills: List[str] = []
    for m in SKILL_TOKEN_RE.finditer(text):
        if len(skills) >= limit:
            break
        token = m.group(0).strip(".")
        if min_length <= len(token) <= max_length:
            skills.append(token)
    return skills


def skills_from_section(document: SegmentedDocument, **bounds) -> List[str]:
    section = document.section_text("skills")
    if not section:
        return []
    skills = tokenize_skills(section, **bounds)
    logger.debug("Kept %d skill token(s) from a %d-char skills section", len(skills), len(section))
    return skills


def skills_strategies(
    limit: int = MAX_SKILLS,
    min_length: int = SKILL_MIN_LENGTH,
    max_length: int = SKILL_MAX_LENGTH,
) -> List[Tuple[str, Strategy]]:
    return [
        ("skills_section", partial(skills_from_section, limit=limit, min_length=min_length, max_length=max_length)),
    ]


def extract_skills(document: SegmentedDocument, **bounds) -> FieldResult:
    return run_cascade("skills", skills_strategies(**bounds), document, empty=[])
