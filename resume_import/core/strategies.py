"""
Ordered strategy cascades for field extraction.

Every field extractor is a list of `(name, function)` pairs. Each function
takes the segmented document and returns a value or None; the first
non-empty value wins and the remaining strategies are never called.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from resume_import.core.section_segmenter import SegmentedDocument

logger = logging.getLogger(__name__)

Strategy = Callable[[SegmentedDocument], Any]


@dataclass(frozen=True)
class FieldResult:
    """Outcome of one extractor: a value, or a miss. Never an exception."""
    field: str
    value: Any = None
    strategy: Optional[str] = None

    @property
    def found(self) -> bool:
        return _is_present(self.value)


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple)):
        return len(value) > 0
    return True


def run_cascade(
    field: str,
    strategies: Sequence[Tuple[str, Strategy]],
    document: SegmentedDocument,
    empty: Any = None,
) -> FieldResult:
    for name, strategy in strategies:
        value = strategy(document)
        if _is_present(value):
            logger.debug("%s: matched by %s strategy", field, name)
            return FieldResult(field=field, value=value, strategy=name)
    logger.debug("%s: no strategy matched", field)
    return FieldResult(field=field, value=empty)
