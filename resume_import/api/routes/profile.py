from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from resume_import.api.deps import get_import_service, get_user_id
from resume_import.core.errors import (
    DecodeError,
    EmptyDocumentError,
    ExtractionDisabledError,
    ProfileNotFoundError,
    ProfileValidationError,
    UnsupportedFormatError,
)
from resume_import.core.import_service import ResumeImportService
from resume_import.core.schemas import ExtractedProfile, ImportResponse, ProfileUpdate
from resume_import.core.settings import get_settings

router = APIRouter(prefix="/profile", tags=["profile"])


@router.post(
    "/import",
    response_model=ImportResponse,
    summary="Import Resume",
    description="Extract a structured profile (name, email, experience, education, skills) from a resume and store it, replacing the current profile.",
    responses={
        400: {"description": "Empty file uploaded"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "No extractable text, or neither name nor email found"},
        503: {"description": "Resume extraction is disabled"},
    },
)
async def import_resume(
    file: UploadFile = File(..., description="Resume file (PDF, DOCX or TXT format)"),
    user_id: str = Depends(get_user_id),
    service: ResumeImportService = Depends(get_import_service),
):
    """
    Import a resume for the current user.

    **Returns:**
    - **profile**: The stored profile
    - **report**: Per-field found/missing diagnostics and the overall status (success/warning)
    - **log_id**: Id of the audit log entry for this import
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    if len(raw) > get_settings().max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large.")

    try:
        result = service.import_resume(user_id, raw, filename=file.filename, content_type=file.content_type)
    except ExtractionDisabledError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=415, detail=str(exc))
    except DecodeError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except EmptyDocumentError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "report": exc.report.model_dump(mode="json") if exc.report else None},
        )
    except ProfileValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(exc),
                "missing_fields": exc.missing_fields,
                "report": exc.report.model_dump(mode="json") if exc.report else None,
            },
        )

    return ImportResponse(profile=result.profile, report=result.report, log_id=result.log_entry.id)


@router.get("", response_model=ExtractedProfile, summary="Get Profile")
def get_profile(
    user_id: str = Depends(get_user_id),
    service: ResumeImportService = Depends(get_import_service),
):
    profile = service.store.get(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="No profile found")
    return profile


@router.patch("", response_model=ExtractedProfile, summary="Update Profile")
def update_profile(
    changes: ProfileUpdate,
    user_id: str = Depends(get_user_id),
    service: ResumeImportService = Depends(get_import_service),
):
    try:
        return service.store.update(user_id, changes)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ProfileValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "missing_fields": exc.missing_fields},
        )


@router.delete("", summary="Delete Profile")
def delete_profile(
    user_id: str = Depends(get_user_id),
    service: ResumeImportService = Depends(get_import_service),
):
    if not service.store.delete(user_id):
        raise HTTPException(status_code=404, detail="No profile found")
    return {"success": True}
