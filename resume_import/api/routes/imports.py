from typing import List

from fastapi import APIRouter, Depends, HTTPException

from resume_import.api.deps import get_import_service
from resume_import.core.errors import ImportLogNotFoundError
from resume_import.core.import_service import ResumeImportService
from resume_import.core.schemas import ImportLogEntry

router = APIRouter(prefix="/imports", tags=["imports"])


@router.get("", response_model=List[ImportLogEntry], summary="List Import Attempts")
def list_imports(service: ResumeImportService = Depends(get_import_service)):
    """Every import attempt, newest first, including rejected ones."""
    return service.audit_log.list_all()


@router.get("/{log_id}", response_model=ImportLogEntry, summary="Get Import Attempt")
def get_import(log_id: int, service: ResumeImportService = Depends(get_import_service)):
    try:
        return service.audit_log.get(log_id)
    except ImportLogNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.delete("/{log_id}", response_model=ImportLogEntry, summary="Delete Import Attempt")
def delete_import(log_id: int, service: ResumeImportService = Depends(get_import_service)):
    try:
        return service.audit_log.delete(log_id)
    except ImportLogNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.delete("", summary="Clear Import History")
def clear_imports(service: ResumeImportService = Depends(get_import_service)):
    service.audit_log.clear()
    return {"success": True}
