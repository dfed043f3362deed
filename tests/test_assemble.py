"""
Unit tests for building the analysis submission.
"""
import json

import pytest

from jobcv_engine.assemble import RecordAssembler, assemble
from jobcv_engine.errors import ValidationFailure
from jobcv_engine.models import JobDetails, JobRecord
from jobcv_engine.settings import get_settings

from conftest import FIXED_NOW


PDF = b"%PDF-1.4\n" + b"0" * 2000


@pytest.fixture
def job():
    return JobRecord(
        title="Backend Engineer",
        company="Acme Logistics Ltd",
        responsibilities=["Develop APIs"],
        requirements=["3+ years of experience with SQL"],
        details=JobDetails(url="https://hk.jobsdb.com/job/1", extracted_at=FIXED_NOW, job_type="Full time"),
    )


def test_empty_file_is_rejected(job):
    with pytest.raises(ValidationFailure) as excinfo:
        assemble(job, b"", "cv.pdf", "application/pdf")
    assert excinfo.value.remedy == "fix-input"


def test_inadequate_job_is_rejected():
    empty = JobRecord(details=JobDetails(extracted_at=FIXED_NOW))
    assert not empty.is_adequate()
    with pytest.raises(ValidationFailure):
        assemble(empty, PDF, "cv.pdf", "application/pdf")


@pytest.mark.parametrize("name", ["", "   ", "x" * 256 + ".pdf"])
def test_bad_file_names_are_rejected(job, name):
    with pytest.raises(ValidationFailure):
        assemble(job, PDF, name, "application/pdf")


def test_oversized_file_is_rejected(job):
    with pytest.raises(ValidationFailure):
        RecordAssembler(max_file_bytes=1000).assemble(job, PDF, "cv.pdf", "application/pdf")


def test_submission_metadata(job, fixed_clock):
    assembler = RecordAssembler(source_tag="unit-test", version="9.9.9", clock=fixed_clock)
    submission = assembler.assemble(job, PDF, "cv.pdf", "application/pdf")
    assert submission.job == job
    assert submission.file.data == PDF
    assert submission.metadata.extracted_at == FIXED_NOW
    assert submission.metadata.source == "unit-test"
    assert submission.metadata.version == "9.9.9"


def test_multipart_rendering(job, fixed_clock):
    submission = RecordAssembler(clock=fixed_clock).assemble(job, PDF, "cv.pdf", "application/pdf")
    data, files = submission.multipart()

    assert data["source"] == "jobsdb-extension"
    assert data["timestamp"] == "2026-01-02T03:04:05.000Z"
    details = json.loads(data["jobDetails"])
    assert details["title"] == "Backend Engineer"
    assert details["details"]["jobType"] == "Full time"
    assert details["details"]["salary"] is None
    assert "extractedAt" in details["details"]
    assert details["metadata"]["source"] == "jobsdb-extension"
    assert details["metadata"]["version"] == "1.0.0"

    assert files == {"cvFile": ("cv.pdf", PDF, "application/pdf")}


def test_non_pdf_is_accepted_with_warning(job, caplog):
    submission = assemble(job, b"PK\x03\x04docx-bytes", "cv.docx", "application/octet-stream")
    assert submission.file.mime_type == "application/octet-stream"
    assert "expected application/pdf" in caplog.text


def test_defaults_follow_settings(job, monkeypatch):
    monkeypatch.setenv("JOBCV_SOURCE_TAG", "batch-import")
    monkeypatch.setenv("JOBCV_SUBMISSION_VERSION", "2.0.0")
    monkeypatch.setenv("JOBCV_MAX_CV_BYTES", "100")
    get_settings.cache_clear()
    try:
        assembler = RecordAssembler()
        assert assembler.source_tag == "batch-import"
        assert assembler.version == "2.0.0"
        with pytest.raises(ValidationFailure):
            assemble(job, PDF, "cv.pdf", "application/pdf")
        assert RecordAssembler(source_tag="explicit").source_tag == "explicit"
    finally:
        get_settings.cache_clear()
