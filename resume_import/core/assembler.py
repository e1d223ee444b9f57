"""
Profile assembly and extraction diagnostics.

Extractor results are merged into one `ExtractedProfile` here, and each
result is turned into a found/missing diagnostic. Nothing in this module
raises for a missing field; deciding whether the profile is storable is the
pipeline's job.
"""

from datetime import datetime
from typing import Dict, List, Optional, Sequence, TypeVar

from resume_import.core.schemas import (
    EducationEntry,
    ExperienceEntry,
    ExtractedProfile,
    ExtractionDiagnosticEntry,
    ExtractionReport,
    OverallStatus,
)
from resume_import.core.settings import ExtractionConfig
from resume_import.core.strategies import FieldResult

FIELD_ORDER = ["name", "email", "experience", "education", "skills"]
ESSENTIAL_FIELDS = ["name", "email"]

FIELD_LABELS = {
    "name": "Name",
    "email": "Email address",
    "experience": "Work experience",
    "education": "Education",
    "skills": "Skills",
}

T = TypeVar("T")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = " ".join(value.split())
    return value or None


def _dedupe(items: Sequence[T]) -> List[T]:
    out: List[T] = []
    for item in items:
        if item not in out:
            out.append(item)
    return out


def _clean_experience(entry: ExperienceEntry) -> ExperienceEntry:
    return entry.model_copy(update={
        "title": entry.title.strip(),
        "company": entry.company.strip(),
        "duration": entry.duration.strip(),
        "description": entry.description.strip(),
    })


def _clean_education(entry: EducationEntry) -> EducationEntry:
    return entry.model_copy(update={
        "degree": entry.degree.strip(),
        "institution": entry.institution.strip(),
        "year": entry.year.strip(),
    })


def _bounded_skills(skills: Sequence[str], config: ExtractionConfig) -> List[str]:
    kept = []
    for skill in skills:
        s = skill.strip()
        if config.skill_min_length <= len(s) <= config.skill_max_length:
            kept.append(s)
    return kept[:config.max_skills]


def assemble_profile(
    results: Dict[str, FieldResult],
    imported_at: datetime,
    config: Optional[ExtractionConfig] = None,
) -> ExtractedProfile:
    """Merge per-field results, applying trim / dedupe / skill bounds."""
    config = config or ExtractionConfig()

    def value(field: str, default=None):
        r = results.get(field)
        return r.value if r is not None and r.found else default

    return ExtractedProfile(
        name=_clean(value("name")),
        email=_clean(value("email")),
        experience=_dedupe([_clean_experience(e) for e in value("experience", [])]),
        education=_dedupe([_clean_education(e) for e in value("education", [])]),
        skills=_bounded_skills(value("skills", []), config),
        imported_at=imported_at,
    )


def _diagnostic(field: str, result: Optional[FieldResult]) -> ExtractionDiagnosticEntry:
    label = FIELD_LABELS.get(field, field)
    if result is not None and result.found:
        return ExtractionDiagnosticEntry(
            field=field,
            status="found",
            message=f"{label} extracted ({result.strategy})",
        )
    return ExtractionDiagnosticEntry(
        field=field,
        status="missing",
        message=f"{label} not clearly identified in resume",
    )


def build_diagnostics(results: Dict[str, FieldResult]) -> List[ExtractionDiagnosticEntry]:
    return [_diagnostic(field, results.get(field)) for field in FIELD_ORDER]


def overall_status(diagnostics: Sequence[ExtractionDiagnosticEntry]) -> OverallStatus:
    """
    success: every field found
    warning: something missing, but at least one essential field present
    error:   both essential fields missing (the profile will be rejected)
    """
    missing = {d.field for d in diagnostics if d.status == "missing"}
    if not missing:
        return "success"
    if all(f in missing for f in ESSENTIAL_FIELDS):
        return "error"
    return "warning"


def build_report(
    diagnostics: List[ExtractionDiagnosticEntry],
    page_count: int,
    config: ExtractionConfig,
) -> ExtractionReport:
    return ExtractionReport(
        overall_status=overall_status(diagnostics),
        diagnostics=diagnostics,
        page_count=page_count,
        config_version=config.version,
    )


def document_error_report(message: str, page_count: int, config: ExtractionConfig) -> ExtractionReport:
    """Report for a document that failed before any field was attempted."""
    return ExtractionReport(
        overall_status="error",
        diagnostics=[ExtractionDiagnosticEntry(field="document", status="missing", message=message)],
        page_count=page_count,
        config_version=config.version,
    )
