import asyncio
import os

import pytest

from talent_scout import config, cv, llm
from talent_scout.errors import InvalidCVFile, LLMError

from tests.test_scoring import CV_RESPONSE

PDF_BYTES = b"%PDF-1.4 fake pdf body"


@pytest.mark.parametrize("content_type, data", [
    (cv.PDF, PDF_BYTES),
    (cv.DOCX, b"PK\x03\x04docx"),
    (cv.DOC, bytes.fromhex("D0CF11E0A1B11AE1") + b"doc"),
    (cv.TXT, b"Plain resume"),
])
def test_valid_uploads(content_type, data):
    cv.validate_cv_upload(content_type, data)


@pytest.mark.parametrize("content_type, data", [
    ("image/png", b"\x89PNG"),
    (cv.PDF, b"not a pdf"),
    (cv.DOCX, b"%PDF-1.4"),
    (cv.TXT, b""),
])
def test_invalid_uploads(content_type, data):
    with pytest.raises(InvalidCVFile):
        cv.validate_cv_upload(content_type, data)


def test_upload_size_limit():
    with pytest.raises(InvalidCVFile, match="too large"):
        cv.validate_cv_upload(cv.PDF, b"%PDF" + b"0" * (config.MAX_CV_SIZE_MB * 1024 * 1024))


def test_store_cv(db):
    path = cv.store_cv("Jane O'Doe", "My CV.PDF", PDF_BYTES)

    assert path.startswith("cvs/Jane_O_Doe-")
    assert path.endswith(".pdf")
    with open(os.path.join(config.UPLOAD_DIR, path), "rb") as f:
        assert f.read() == PDF_BYTES


def test_store_cv_without_extension_uses_content_type(db):
    assert cv.store_cv("Jane", "resume", b"text", cv.TXT).endswith(".txt")


def test_fetch_active_jobs(db, job):
    from talent_scout.db import get_db
    conn = get_db()
    conn.execute(
        "INSERT INTO job_postings (title, department, location, description, requirements, "
        "interview_guidelines, is_active) VALUES ('Old', 'X', 'Y', 'd', 'r', 'g', 0)"
    )
    conn.commit()
    conn.close()

    assert [j["title"] for j in cv.fetch_active_jobs()] == ["Sales Agent"]


def test_no_active_jobs_gives_neutral_evaluation():
    result = asyncio.run(cv.evaluate_cv_document(PDF_BYTES, cv.PDF, "Jane", "", []))
    assert result.fit_score == 50
    assert result.match_percentages == {}


def test_pdf_is_sent_as_document_block(monkeypatch, job):
    calls = []

    async def fake_chat(messages, **kwargs):
        calls.append((messages, kwargs))
        return CV_RESPONSE

    monkeypatch.setattr(llm, "chat", fake_chat)

    result = asyncio.run(cv.evaluate_cv_document(PDF_BYTES, cv.PDF, "Jane Doe", "Hi", [job]))

    assert result.fit_score == 82
    assert result.best_match == "Sales Agent"
    assert result.resume_summary.startswith("Jane Doe, 6 years")
    messages, kwargs = calls[0]
    document, text = messages[0]["content"]
    assert document["type"] == "document"
    assert document["source"]["media_type"] == "application/pdf"
    assert "RESUME_SUMMARY:" in text["text"]
    assert kwargs["temperature"] == 0.3


def test_txt_is_sent_inline(monkeypatch, job):
    prompts = []

    async def fake_chat(messages, **kwargs):
        prompts.append(messages[0]["content"])
        return "FIT_SCORE: 64\nBEST_MATCH: Sales Agent\n"

    monkeypatch.setattr(llm, "chat", fake_chat)

    result = asyncio.run(cv.evaluate_cv_document(b"Jane sold SaaS", cv.TXT, "Jane", "", [job]))

    assert "Jane sold SaaS" in prompts[0]
    assert result.fit_score == 64
    assert result.resume_summary == "Jane sold SaaS"


def test_word_documents_are_left_for_manual_review(monkeypatch, job):
    async def fail(*args, **kwargs):
        raise AssertionError("model should not be called")

    monkeypatch.setattr(llm, "chat", fail)
    result = asyncio.run(cv.evaluate_cv_document(b"PK..", cv.DOCX, "Jane", "", [job]))
    assert result.fit_score == 50


def test_model_errors_fall_back_to_neutral_evaluation(monkeypatch, job):
    async def broken(*args, **kwargs):
        raise LLMError("Model API returned 500", status_code=500)

    monkeypatch.setattr(llm, "chat", broken)

    result = asyncio.run(cv.evaluate_cv_text("Jane sold SaaS", "Jane", "", [job]))

    assert result.fit_score == 50
    assert result.best_match == "Evaluation error"
    assert "HR will review manually" in result.evaluation
    assert result.resume_summary == "Jane sold SaaS"
