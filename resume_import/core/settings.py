"""
Configuration for the import service.

`ExtractionConfig` is what the pipeline sees; it is always passed in
explicitly. `Settings` is the service-level view loaded from the environment
(and an optional `.env` file) once per process.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from resume_import.core.schemas import MAX_SKILLS, SKILL_MAX_LENGTH, SKILL_MIN_LENGTH


class ExtractionConfig(BaseModel):
    version: str = "1.0"
    active: bool = True
    header_scan_lines: int = Field(default=5, ge=1, description="How many leading lines the header name heuristic inspects")
    max_skills: int = Field(default=MAX_SKILLS, ge=0, le=MAX_SKILLS)
    skill_min_length: int = Field(default=SKILL_MIN_LENGTH, ge=SKILL_MIN_LENGTH, le=SKILL_MAX_LENGTH)
    skill_max_length: int = Field(default=SKILL_MAX_LENGTH, ge=SKILL_MIN_LENGTH, le=SKILL_MAX_LENGTH)
    parallel: bool = Field(default=False, description="Run the five field extractors on a thread pool")

    @model_validator(mode="after")
    def _check_skill_bounds(self) -> "ExtractionConfig":
        if self.skill_min_length > self.skill_max_length:
            raise ValueError(
                f"skill_min_length ({self.skill_min_length}) exceeds skill_max_length ({self.skill_max_length})"
            )
        return self


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    config_version: str = "1.0"
    active: bool = True
    parallel: bool = False
    max_upload_bytes: int = 10 * 1024 * 1024
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            config_version=os.getenv("RESUME_IMPORT_CONFIG_VERSION", "1.0"),
            active=_env_bool("RESUME_IMPORT_ACTIVE", True),
            parallel=_env_bool("RESUME_IMPORT_PARALLEL", False),
            max_upload_bytes=int(os.getenv("RESUME_IMPORT_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
            log_level=os.getenv("RESUME_IMPORT_LOG_LEVEL", "INFO").upper(),
        )

    def extraction_config(self) -> ExtractionConfig:
        return ExtractionConfig(version=self.config_version, active=self.active, parallel=self.parallel)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
