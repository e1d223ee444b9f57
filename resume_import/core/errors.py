"""
Exceptions raised by the résumé import pipeline and its collaborators.

Only document-level failures are raised. A field that could not be found is
recorded as a `missing` diagnostic and never reaches this module.
"""

from typing import List, Optional

from resume_import.core.schemas import ExtractionReport


class ResumeImportError(Exception):
    """Base class for everything the import service raises on purpose."""


class DecodeError(ResumeImportError):
    """The uploaded file could not be turned into text (encrypted, corrupt, no text layer)."""


class UnsupportedFormatError(DecodeError):
    def __init__(self, content_type: Optional[str]):
        self.content_type = content_type
        super().__init__(f"Unsupported content type: {content_type}")


class EmptyDocumentError(ResumeImportError):
    """Normalized text is blank. Fatal: no field extraction is attempted."""

    def __init__(self, message: str = "Document contains no extractable text", report: Optional[ExtractionReport] = None):
        self.report = report
        super().__init__(message)


class ProfileValidationError(ResumeImportError):
    """Neither name nor email could be extracted, so the profile cannot be stored."""

    def __init__(self, missing_fields: List[str], report: Optional[ExtractionReport] = None):
        self.missing_fields = list(missing_fields)
        self.report = report
        super().__init__(f"Required fields missing: {', '.join(self.missing_fields)}")


class ExtractionDisabledError(ResumeImportError):
    pass


class ProfileNotFoundError(ResumeImportError):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"No profile found for user {user_id!r}")


class ImportLogNotFoundError(ResumeImportError):
    def __init__(self, log_id: int):
        self.log_id = log_id
        super().__init__(f"Import log {log_id} not found")
