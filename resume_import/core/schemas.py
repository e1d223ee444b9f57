from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints
from typing import Annotated, Any, Dict, List, Literal, Optional


SectionName = Literal["contact", "experience", "education", "skills", "unknown"]
DiagnosticStatus = Literal["found", "missing"]
OverallStatus = Literal["success", "warning", "error"]

DURATION_NOT_SPECIFIED = "Duration not specified"
INSTITUTION_NOT_SPECIFIED = "Institution not specified"
YEAR_NOT_SPECIFIED = "Year not specified"

SKILL_MIN_LENGTH = 3
SKILL_MAX_LENGTH = 29
MAX_SKILLS = 20

Skill = Annotated[str, StringConstraints(min_length=SKILL_MIN_LENGTH, max_length=SKILL_MAX_LENGTH)]


class RawDocument(BaseModel):
    """Decoded upload handed to the extraction pipeline."""
    text: str = ""
    page_count: int = Field(default=1, ge=0)
    pages: List[str] = Field(default_factory=list, description="Per-page text; empty means `text` is a single page")

    @classmethod
    def from_pages(cls, pages: List[str]) -> "RawDocument":
        return cls(text="\n\n".join(pages), page_count=len(pages), pages=list(pages))


class Section(BaseModel):
    name: SectionName
    heading: Optional[str] = None  # Heading keyword as written, None for the preamble
    start: int = Field(..., description="Offset of the span in the normalized text")
    end: int
    text: str


class ExperienceEntry(BaseModel):
    title: str
    company: str
    duration: str = DURATION_NOT_SPECIFIED
    description: str = ""


class EducationEntry(BaseModel):
    degree: str
    institution: str = INSTITUTION_NOT_SPECIFIED
    year: str = YEAR_NOT_SPECIFIED


class ExtractedProfile(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list, max_length=MAX_SKILLS)
    imported_at: datetime

    @property
    def is_valid(self) -> bool:
        """A profile is only storable when at least one essential field is present."""
        return bool(self.name or self.email)


class ExtractionDiagnosticEntry(BaseModel):
    field: str
    status: DiagnosticStatus
    message: Optional[str] = None


class ExtractionReport(BaseModel):
    overall_status: OverallStatus
    diagnostics: List[ExtractionDiagnosticEntry] = Field(default_factory=list)
    page_count: int = 0
    config_version: str = Field(..., description="Version tag of the extraction config that produced this report")

    def missing_fields(self) -> List[str]:
        return [d.field for d in self.diagnostics if d.status == "missing"]


class PersonalInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class ExtractedFieldsSummary(BaseModel):
    """What an import pulled out of the résumé, as kept in the audit log."""
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)

    @classmethod
    def from_profile(cls, profile: ExtractedProfile) -> "ExtractedFieldsSummary":
        return cls(
            personal_info=PersonalInfo(name=profile.name, email=profile.email),
            experience=list(profile.experience),
            education=list(profile.education),
            skills=list(profile.skills),
        )


class ImportLogEntry(BaseModel):
    id: int
    timestamp: datetime
    status: OverallStatus
    report: ExtractionReport
    errors: List[str] = Field(default_factory=list)
    extracted_fields: Optional[ExtractedFieldsSummary] = None


class ProfileUpdate(BaseModel):
    """Partial edit of a stored profile. Unset fields are left untouched."""
    name: Optional[str] = None
    email: Optional[str] = None
    experience: Optional[List[ExperienceEntry]] = None
    education: Optional[List[EducationEntry]] = None
    skills: Optional[List[Skill]] = Field(default=None, max_length=MAX_SKILLS)

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ImportResponse(BaseModel):
    profile: ExtractedProfile
    report: ExtractionReport
    log_id: int
