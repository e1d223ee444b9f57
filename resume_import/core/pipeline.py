"""
Résumé extraction pipeline.

    RawDocument -> normalize -> segment -> 5 field extractors -> assemble -> validate

State machine:
    NotStarted -> Normalized -> Segmented -> FieldsExtracted -> Validated
    any step   -> Failed   (blank document, or neither name nor email found)

The pipeline is a pure function of the document text, the config and the
import timestamp. It does no I/O and stores nothing; persistence happens in
the caller, and only for a result whose state is Validated.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional

from resume_import.core.assembler import (
    ESSENTIAL_FIELDS,
    assemble_profile,
    build_diagnostics,
    build_report,
    document_error_report,
)
from resume_import.core.contact_extractor import extract_email, extract_name
from resume_import.core.education_parser import extract_education
from resume_import.core.errors import EmptyDocumentError, ProfileValidationError
from resume_import.core.experience_parser import extract_experience
from resume_import.core.schemas import ExtractedProfile, ExtractionReport, RawDocument
from resume_import.core.section_segmenter import SegmentedDocument, segment
from resume_import.core.settings import ExtractionConfig
from resume_import.core.skills_parser import extract_skills
from resume_import.core.strategies import FieldResult
from resume_import.core.text_normalization import normalize_document

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    NOT_STARTED = "not_started"
    NORMALIZED = "normalized"
    SEGMENTED = "segmented"
    FIELDS_EXTRACTED = "fields_extracted"
    VALIDATED = "validated"
    FAILED = "failed"


@dataclass(frozen=True)
class ExtractionResult:
    profile: ExtractedProfile
    report: ExtractionReport
    state: PipelineState = PipelineState.VALIDATED


Extractor = Callable[[SegmentedDocument], FieldResult]


class ResumeExtractionPipeline:
    """Turns one decoded résumé into a validated (profile, report) pair."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()

    def extractors(self) -> Dict[str, Extractor]:
        cfg = self.config
        return {
            "name": lambda doc: extract_name(doc, header_scan_lines=cfg.header_scan_lines),
            "email": extract_email,
            "experience": extract_experience,
            "education": extract_education,
            "skills": lambda doc: extract_skills(
                doc,
                limit=cfg.max_skills,
                min_length=cfg.skill_min_length,
                max_length=cfg.skill_max_length,
            ),
        }

    def run_extractors(self, document: SegmentedDocument) -> Dict[str, FieldResult]:
        """
        Run every field extractor against the same immutable document,
        in order or on a thread pool. Results are keyed by field.
        """
        extractors = self.extractors()
        if not self.config.parallel:
            return {field: fn(document) for field, fn in extractors.items()}

        with ThreadPoolExecutor(max_workers=len(extractors), thread_name_prefix="extract") as pool:
            futures = {field: pool.submit(fn, document) for field, fn in extractors.items()}
            return {field: fut.result() for field, fut in futures.items()}

    def _transition(self, state: PipelineState) -> PipelineState:
        logger.debug("Pipeline state -> %s", state.value)
        return state

    def extract(self, document: RawDocument, imported_at: Optional[datetime] = None) -> ExtractionResult:
        """
        Extract a profile from a decoded document.

        Raises:
            EmptyDocumentError: the document has no text; its report carries a
                single document-level diagnostic
            ProfileValidationError: neither name nor email was found; its report
                carries every field diagnostic gathered
        """
        state = self._transition(PipelineState.NOT_STARTED)

        try:
            text = normalize_document(document)
        except EmptyDocumentError as exc:
            self._transition(PipelineState.FAILED)
            report = document_error_report(str(exc), document.page_count, self.config)
            logger.warning("Rejected empty document (%d page(s))", document.page_count)
            raise EmptyDocumentError(str(exc), report=report) from exc
        state = self._transition(PipelineState.NORMALIZED)

        segmented = segment(text)
        state = self._transition(PipelineState.SEGMENTED)

        results = self.run_extractors(segmented)
        state = self._transition(PipelineState.FIELDS_EXTRACTED)

        profile = assemble_profile(
            results,
            imported_at=imported_at or datetime.now(timezone.utc),
            config=self.config,
        )
        diagnostics = build_diagnostics(results)
        report = build_report(diagnostics, document.page_count, self.config)

        for d in diagnostics:
            if d.status == "missing":
                logger.warning("Field missing: %s", d.field)

        if not profile.is_valid:
            self._transition(PipelineState.FAILED)
            missing: List[str] = [f for f in ESSENTIAL_FIELDS if not getattr(profile, f)]
            raise ProfileValidationError(missing, report=report)

        state = self._transition(PipelineState.VALIDATED)
        logger.info(
            "Extracted profile: status=%s experience=%d education=%d skills=%d",
            report.overall_status,
            len(profile.experience),
            len(profile.education),
            len(profile.skills),
        )
        return ExtractionResult(profile=profile, report=report, state=state)


def extract_profile(
    document: RawDocument,
    config: Optional[ExtractionConfig] = None,
    imported_at: Optional[datetime] = None,
) -> ExtractionResult:
    return ResumeExtractionPipeline(config).extract(document, imported_at=imported_at)
