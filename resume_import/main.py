import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from resume_import.api.routes.imports import router as imports_router
from resume_import.api.routes.profile import router as profile_router
from resume_import.core.settings import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)

app = FastAPI(
    title="Resume Import (Profile Extraction Service)",
    description="Heuristic resume import service that turns PDF/DOCX/TXT resumes into a structured profile with per-field diagnostics",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(profile_router)
app.include_router(imports_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "resume-import", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok", "config_version": get_settings().config_version}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Resume Import API",
        version="0.1.0",
        description="Resume import API with per-field extraction diagnostics",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
