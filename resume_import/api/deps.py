from functools import lru_cache

from fastapi import Header

from resume_import.core.import_service import ResumeImportService
from resume_import.core.settings import get_settings


@lru_cache(maxsize=1)
def get_import_service() -> ResumeImportService:
    """Process-wide service; tests swap it out through app.dependency_overrides."""
    return ResumeImportService(config=get_settings().extraction_config())


def get_user_id(x_user_id: str = Header(default="default", description="Profile owner (single profile per user)")) -> str:
    return x_user_id
