"""
Audit log of import attempts.

Every attempt is recorded, including those rejected before a profile could
be stored (decode failures, blank documents, missing name and email).
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional

from resume_import.core.errors import ImportLogNotFoundError
from resume_import.core.schemas import ExtractedFieldsSummary, ExtractedProfile, ExtractionReport, ImportLogEntry

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryImportLog:
    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._entries: List[ImportLogEntry] = []
        self._lock = threading.Lock()
        self._clock = clock

    def create(
        self,
        report: ExtractionReport,
        profile: Optional[ExtractedProfile] = None,
        errors: Optional[List[str]] = None,
    ) -> ImportLogEntry:
        """
        Append a report. When `errors` is not given, the messages of the
        report's missing diagnostics are used.
        """
        if errors is None:
            errors = [d.message or f"{d.field} missing" for d in report.diagnostics if d.status == "missing"]
        with self._lock:
            entry = ImportLogEntry(
                id=max((e.id for e in self._entries), default=0) + 1,
                timestamp=self._clock(),
                status=report.overall_status,
                report=report,
                errors=errors,
                extracted_fields=ExtractedFieldsSummary.from_profile(profile) if profile is not None else None,
            )
            self._entries.append(entry)
        logger.info("Import log %d recorded with status %s", entry.id, entry.status)
        return entry.model_copy(deep=True)

    def list_all(self) -> List[ImportLogEntry]:
        """Newest first."""
        with self._lock:
            entries = sorted(self._entries, key=lambda e: (e.timestamp, e.id), reverse=True)
            return [e.model_copy(deep=True) for e in entries]

    def get(self, log_id: int) -> ImportLogEntry:
        with self._lock:
            for e in self._entries:
                if e.id == log_id:
                    return e.model_copy(deep=True)
        raise ImportLogNotFoundError(log_id)

    def delete(self, log_id: int) -> ImportLogEntry:
        with self._lock:
            for i, e in enumerate(self._entries):
                if e.id == log_id:
                    return self._entries.pop(i).model_copy(deep=True)
        raise ImportLogNotFoundError(log_id)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
