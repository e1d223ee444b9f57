"""
Import orchestration: decode -> extract -> store -> audit.

The profile store is written only after the pipeline reached Validated.
The audit log gets a report for every attempt, successful or not.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from resume_import.core.assembler import document_error_report
from resume_import.core.decoders import decode_upload
from resume_import.core.errors import (
    DecodeError,
    EmptyDocumentError,
    ExtractionDisabledError,
    ProfileValidationError,
)
from resume_import.core.import_log import InMemoryImportLog
from resume_import.core.pipeline import ResumeExtractionPipeline
from resume_import.core.profile_store import InMemoryProfileStore
from resume_import.core.schemas import ExtractedProfile, ExtractionReport, ImportLogEntry
from resume_import.core.settings import ExtractionConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    profile: ExtractedProfile
    report: ExtractionReport
    log_entry: ImportLogEntry


class ResumeImportService:
    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        store: Optional[InMemoryProfileStore] = None,
        audit_log: Optional[InMemoryImportLog] = None,
    ):
        self.config = config or ExtractionConfig()
        self.pipeline = ResumeExtractionPipeline(self.config)
        self.store = store or InMemoryProfileStore()
        self.audit_log = audit_log or InMemoryImportLog()

    def import_resume(
        self,
        user_id: str,
        raw: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        imported_at: Optional[datetime] = None,
    ) -> ImportResult:
        """
        Import one uploaded résumé for `user_id`, replacing any stored profile.

        Raises:
            ExtractionDisabledError: extraction config is inactive
            DecodeError: the file could not be turned into text
            EmptyDocumentError: decoded text is blank
            ProfileValidationError: neither name nor email was found
        """
        if not self.config.active:
            raise ExtractionDisabledError(f"Resume extraction is disabled (config {self.config.version})")

        try:
            document = decode_upload(raw, filename=filename, content_type=content_type)
        except DecodeError as exc:
            logger.warning("Decode failed for %s: %s", filename or "<upload>", exc)
            self.audit_log.create(document_error_report(str(exc), 0, self.config), errors=[str(exc)])
            raise

        try:
            result = self.pipeline.extract(document, imported_at=imported_at)
        except EmptyDocumentError as exc:
            report = exc.report or document_error_report(str(exc), document.page_count, self.config)
            self.audit_log.create(report, errors=[str(exc)])
            raise
        except ProfileValidationError as exc:
            report = exc.report or document_error_report(str(exc), document.page_count, self.config)
            self.audit_log.create(report)
            raise

        stored = self.store.upsert(user_id, result.profile)
        entry = self.audit_log.create(result.report, profile=stored)
        return ImportResult(profile=stored, report=result.report, log_entry=entry)
