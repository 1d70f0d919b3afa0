"""Tests for document metadata, stored analyses and optimization history."""
from datetime import datetime, timedelta, timezone

import pytest

from careertrail.errors import NotFoundError
from careertrail.schemas import DocumentCreate, DocumentUpdate, JobCreate
from careertrail.services import documents as document_service
from careertrail.services.jobs import create_job

PDF = "application/pdf"


def _document(session, user, name="cv.pdf", **extra):
    fields = dict(name=name, file_path=f"{user.id}/{name}", file_size=2048, file_type=PDF, category="resume")
    fields.update(extra)
    return document_service.create_document(session, user.id, DocumentCreate(**fields))


@pytest.mark.parametrize("size, expected", [
    (0, "0 Bytes"),
    (512, "512 Bytes"),
    (1536, "1.5 KB"),
    (2 * 1024 * 1024, "2 MB"),
])
def test_format_file_size(size, expected):
    assert document_service.format_file_size(size) == expected


class TestDocuments:

    def test_too_large_is_rejected(self, session, user):
        with pytest.raises(ValueError, match="less than 10MB"):
            _document(session, user, file_size=document_service.MAX_FILE_SIZE + 1)

    def test_unsupported_type_is_rejected(self, session, user):
        with pytest.raises(ValueError, match="not supported"):
            _document(session, user, file_type="application/zip")

    def test_filters(self, session, user):
        job = create_job(session, user.id, JobCreate(company="Acme", role="SRE"))
        _document(session, user, "cv.pdf", job_id=job.id)
        _document(session, user, "letter.pdf", category="cover_letter")

        assert len(document_service.list_documents(session, user.id)) == 2
        assert [d.name for d in document_service.list_documents(session, user.id, job_id=job.id)] == ["cv.pdf"]
        letters = document_service.list_documents(session, user.id, category="cover_letter")
        assert [d.name for d in letters] == ["letter.pdf"]

    def test_foreign_job_is_rejected(self, session, user, other_user):
        theirs = create_job(session, other_user.id, JobCreate(company="Globex", role="SRE"))
        with pytest.raises(NotFoundError):
            _document(session, user, job_id=theirs.id)

    def test_update(self, session, user):
        document = _document(session, user)
        updated = document_service.update_document(
            session, user.id, document.id, DocumentUpdate(name="cv-2026.pdf", description="Latest"),
        )
        assert (updated.name, updated.description, updated.version) == ("cv-2026.pdf", "Latest", 1)

    def test_delete_is_soft(self, session, user):
        document = _document(session, user)
        removed = document_service.delete_document(session, user.id, document.id)

        assert removed.is_active is False
        assert removed.file_path == f"{user.id}/cv.pdf"
        assert document_service.list_documents(session, user.id) == []
        with pytest.raises(NotFoundError):
            document_service.get_document(session, user.id, document.id)

    def test_other_users_document_is_not_found(self, session, user, other_user):
        document = _document(session, user)
        with pytest.raises(NotFoundError):
            document_service.get_document(session, other_user.id, document.id)


class TestAnalyses:

    def test_last_analysis(self, session, user):
        document = _document(session, user)
        assert document_service.get_last_analysis(session, user.id, document.id) is None

        older = document_service.save_analysis(session, user.id, document.id, {"overallScore": 60})
        older.created_at = datetime.now(timezone.utc) - timedelta(days=1)
        session.commit()
        document_service.save_analysis(session, user.id, document.id, {"overallScore": 80})

        last = document_service.get_last_analysis(session, user.id, document.id)
        assert last.result == {"overallScore": 80}


class TestOptimizationHistory:

    def test_history_latest_and_count(self, session, user, other_user):
        document = _document(session, user)
        first = document_service.save_optimization(session, user.id, document.id, "SRE at Acme", {"matchScore": 55})
        first.created_at = datetime.now(timezone.utc) - timedelta(hours=2)
        session.commit()
        document_service.save_optimization(session, user.id, document.id, "SRE at Globex", {"matchScore": 70})

        history = document_service.list_optimizations(session, user.id, document.id)
        assert [o.job_description for o in history] == ["SRE at Globex", "SRE at Acme"]
        latest = document_service.get_latest_optimization(session, user.id, document.id)
        assert latest.optimization_result == {"matchScore": 70}
        assert document_service.count_optimizations(session, user.id) == 2
        assert document_service.count_optimizations(session, other_user.id) == 0

    def test_latest_of_empty_history(self, session, user):
        document = _document(session, user)
        assert document_service.get_latest_optimization(session, user.id, document.id) is None

    def test_delete(self, session, user, other_user):
        document = _document(session, user)
        saved = document_service.save_optimization(session, user.id, document.id, "SRE", {"matchScore": 1})

        with pytest.raises(NotFoundError):
            document_service.delete_optimization(session, other_user.id, saved.id)
        document_service.delete_optimization(session, user.id, saved.id)
        assert document_service.count_optimizations(session, user.id) == 0
