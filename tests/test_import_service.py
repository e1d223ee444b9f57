"""Tests for import orchestration, the profile store and the audit log."""

from datetime import datetime, timedelta, timezone

import pytest

from resume_import.core.errors import (
    EmptyDocumentError,
    ExtractionDisabledError,
    ImportLogNotFoundError,
    ProfileNotFoundError,
    ProfileValidationError,
    UnsupportedFormatError,
)
from resume_import.core.import_log import InMemoryImportLog
from resume_import.core.import_service import ResumeImportService
from resume_import.core.profile_store import InMemoryProfileStore
from resume_import.core.schemas import ExtractionReport, ProfileUpdate
from resume_import.core.settings import ExtractionConfig


def _import(service, text, user_id="u1", filename="resume.txt"):
    return service.import_resume(user_id, text.encode("utf-8"), filename=filename, content_type="text/plain")


class TestImportResume:

    def test_success_stores_profile_and_logs(self, sample_resume):
        service = ResumeImportService()
        result = _import(service, sample_resume)

        assert service.store.get("u1") == result.profile
        assert result.report.overall_status == "success"

        logs = service.audit_log.list_all()
        assert len(logs) == 1
        assert logs[0].id == result.log_entry.id
        assert logs[0].status == "success"
        assert logs[0].errors == []
        assert logs[0].extracted_fields.personal_info.name == "John Smith"
        assert logs[0].extracted_fields.skills == ["Python", "SQL"]

    def test_second_import_replaces_profile(self, sample_resume):
        service = ResumeImportService()
        _import(service, sample_resume)
        _import(service, "Jane Doe\njane@example.com")

        assert service.store.get("u1").name == "Jane Doe"
        logs = service.audit_log.list_all()
        assert [e.id for e in logs] == [2, 1]
        assert logs[0].status == "warning"
        assert "Skills not clearly identified in resume" in logs[0].errors

    def test_users_are_isolated(self, sample_resume):
        service = ResumeImportService()
        _import(service, sample_resume, user_id="a")
        assert service.store.get("b") is None

    def test_validation_failure_is_logged_but_not_stored(self):
        service = ResumeImportService()
        with pytest.raises(ProfileValidationError):
            _import(service, "lorem ipsum\ndolor sit amet")

        assert service.store.get("u1") is None
        (entry,) = service.audit_log.list_all()
        assert entry.status == "error"
        assert len(entry.report.diagnostics) == 5
        assert entry.extracted_fields is None
        assert entry.errors

    def test_decode_failure_is_logged(self):
        service = ResumeImportService()
        with pytest.raises(UnsupportedFormatError) as exc_info:
            service.import_resume("u1", b"MZ\x90\x00", filename="resume.exe", content_type="application/octet-stream")

        (entry,) = service.audit_log.list_all()
        assert entry.status == "error"
        assert entry.report.page_count == 0
        assert entry.errors == [str(exc_info.value)]

    def test_blank_document_is_logged(self):
        service = ResumeImportService()
        with pytest.raises(EmptyDocumentError):
            _import(service, "\u200b \u200b")

        (entry,) = service.audit_log.list_all()
        assert entry.status == "error"
        assert entry.report.missing_fields() == ["document"]
        assert service.store.get("u1") is None

    def test_disabled_config_refuses(self, sample_resume):
        service = ResumeImportService(config=ExtractionConfig(active=False))
        with pytest.raises(ExtractionDisabledError):
            _import(service, sample_resume)
        assert service.audit_log.list_all() == []

    def test_fixed_import_time(self, sample_resume):
        service = ResumeImportService()
        when = datetime(2023, 3, 3, tzinfo=timezone.utc)
        result = service.import_resume("u1", sample_resume.encode(), filename="cv.txt", imported_at=when)
        assert result.profile.imported_at == when


class TestProfileStore:

    def test_upsert_returns_copy(self, sample_resume):
        service = ResumeImportService()
        profile = _import(service, sample_resume).profile
        profile.skills.append("Mutated")
        assert "Mutated" not in service.store.get("u1").skills

    def test_update_merges_set_fields_only(self, sample_resume):
        service = ResumeImportService()
        _import(service, sample_resume)

        updated = service.store.update("u1", ProfileUpdate(skills=["Rust", "Kotlin"]))
        assert updated.skills == ["Rust", "Kotlin"]
        assert updated.name == "John Smith"
        assert len(updated.experience) == 1

    def test_update_cannot_clear_both_essential_fields(self, sample_resume):
        service = ResumeImportService()
        _import(service, sample_resume)

        with pytest.raises(ProfileValidationError) as exc_info:
            service.store.update("u1", ProfileUpdate(name=None, email=None))
        assert exc_info.value.missing_fields == ["name", "email"]
        assert service.store.get("u1").name == "John Smith"

    def test_update_without_profile(self):
        with pytest.raises(ProfileNotFoundError):
            InMemoryProfileStore().update("nobody", ProfileUpdate(name="X Y"))

    def test_delete(self, sample_resume):
        service = ResumeImportService()
        _import(service, sample_resume)
        assert service.store.delete("u1") is True
        assert service.store.get("u1") is None
        assert service.store.delete("u1") is False


class TestImportLog:

    def _report(self, status="success"):
        return ExtractionReport(overall_status=status, diagnostics=[], page_count=1, config_version="1.0")

    def test_newest_first(self):
        ticks = iter(datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(days=d) for d in (5, 1, 3))
        log = InMemoryImportLog(clock=lambda: next(ticks))
        for _ in range(3):
            log.create(self._report())
        assert [e.id for e in log.list_all()] == [1, 3, 2]

    def test_ids_continue_after_delete(self):
        log = InMemoryImportLog()
        log.create(self._report())
        log.create(self._report())
        before = log.get(1)
        deleted = log.delete(1)
        assert deleted == before
        assert log.create(self._report()).id == 3

    def test_get_and_delete_unknown(self):
        log = InMemoryImportLog()
        with pytest.raises(ImportLogNotFoundError):
            log.get(42)
        with pytest.raises(ImportLogNotFoundError):
            log.delete(42)

    def test_clear(self):
        log = InMemoryImportLog()
        log.create(self._report("warning"))
        log.clear()
        assert log.list_all() == []
