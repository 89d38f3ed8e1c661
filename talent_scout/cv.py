"""
Talent Scout - CV intake
Upload validation, storage and AI fit scoring against the active job postings.
"""
import base64
import logging
import os
import re
import secrets
import time
from typing import List, Optional

from talent_scout import config, llm
from talent_scout.db import get_db
from talent_scout.errors import InvalidCVFile, LLMError, ServiceNotConfigured
from talent_scout.prompts import build_cv_prompt
from talent_scout.scoring import CVEvaluation, parse_cv_evaluation

logger = logging.getLogger(__name__)

PDF = "application/pdf"
DOC = "application/msword"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TXT = "text/plain"

ALLOWED_TYPES = {
    PDF: "pdf",
    DOC: "doc",
    DOCX: "docx",
    TXT: "txt",
}

CV_SYSTEM_PROMPT = "You are a senior recruiter. Evaluate candidates strictly against the open positions you are given."


# ============================================================================
# VALIDATION / STORAGE
# ============================================================================

def _has_valid_signature(content_type: str, data: bytes) -> bool:
    if content_type == PDF:
        return data.startswith(b"%PDF")
    if content_type == DOCX:
        # DOCX is a zip container
        return data.startswith(b"PK")
    if content_type == DOC:
        return data.startswith(bytes.fromhex("D0CF11E0"))
    if content_type == TXT:
        return len(data) > 0
    return False


def validate_cv_upload(content_type: str, data: bytes) -> None:
    """Raise InvalidCVFile unless the upload is an allowed, well-formed CV"""
    if content_type not in ALLOWED_TYPES:
        raise InvalidCVFile("File type not allowed. Only PDF, DOC, DOCX, TXT")
    if len(data) > config.MAX_CV_SIZE_MB * 1024 * 1024:
        raise InvalidCVFile(f"File too large (max {config.MAX_CV_SIZE_MB}MB)")
    if not _has_valid_signature(content_type, data):
        raise InvalidCVFile("The file is invalid or corrupted")


def store_cv(full_name: str, filename: str, data: bytes, content_type: Optional[str] = None) -> str:
    """Write the CV under UPLOAD_DIR and return its path relative to it"""
    extension = ""
    if filename and "." in filename:
        extension = filename.rsplit(".", 1)[1].lower()
    if not extension.isalnum():
        extension = ALLOWED_TYPES.get(content_type, "pdf")

    safe_name = re.sub(r"[^a-zA-Z0-9]", "_", full_name)
    millis = int(time.time() * 1000)
    relative_path = f"cvs/{safe_name}-{millis}-{secrets.randbelow(10**9)}.{extension}"

    full_path = os.path.join(config.UPLOAD_DIR, relative_path)
    os.makedirs(os.path.dirname(full_path), exist_ok=True)
    with open(full_path, "wb") as f:
        f.write(data)

    logger.info("[APPLY] ✅ CV stored: %s", relative_path)
    return relative_path


# ============================================================================
# AI EVALUATION
# ============================================================================

def fetch_active_jobs(limit: Optional[int] = None) -> List[dict]:
    conn = get_db()
    cursor = conn.cursor()
    query = """
        SELECT id, title, department, location, employment_type, salary_range,
               description, requirements, responsibilities, interview_guidelines
        FROM job_postings WHERE is_active = 1
        ORDER BY created_at DESC, id DESC
    """
    if limit:
        cursor.execute(query + " LIMIT ?", (limit,))
    else:
        cursor.execute(query)
    jobs = [dict(row) for row in cursor.fetchall()]
    conn.close()
    return jobs


def neutral_evaluation(message: str, resume_summary: str = "", best_match: str = "Undetermined") -> CVEvaluation:
    return CVEvaluation(evaluation=message, best_match=best_match, resume_summary=resume_summary)


async def _evaluate(content, fallback_summary: str) -> CVEvaluation:
    try:
        response = await llm.chat(
            [{"role": "user", "content": content}],
            system_prompt=CV_SYSTEM_PROMPT,
            temperature=0.3,
            max_tokens=5000,
        )
    except ServiceNotConfigured:
        logger.error("[AI] ❌ Model API key not configured, CV left for manual review")
        return neutral_evaluation(
            "❌ Configuration error: model API key not configured. HR will review manually.",
            resume_summary=fallback_summary,
            best_match="N/A",
        )
    except LLMError as e:
        logger.error("[AI] ❌ CV evaluation failed: %s", e)
        if e.status_code == 400:
            message = f"❌ Error: the CV could not be processed. {e}"
        else:
            message = f"⚠️ AI evaluation error: {e}. HR will review manually."
        return neutral_evaluation(message, resume_summary=fallback_summary, best_match="Evaluation error")

    result = parse_cv_evaluation(response)
    if not result.resume_summary:
        result.resume_summary = fallback_summary
    logger.info("[AI] Evaluation complete. Score: %d, Best Match: %s", result.fit_score, result.best_match)
    return result


async def evaluate_cv_document(
    data: bytes,
    content_type: str,
    candidate_name: str,
    cover_letter: str,
    jobs: List[dict],
) -> CVEvaluation:
    """Score an uploaded CV against ``jobs``.

    PDFs go to the model as a document block and the model writes the resume
    summary; plain text is sent inline. Word files are kept for manual review.
    """
    if not jobs:
        return neutral_evaluation(
            "📋 Application received. There are no active positions right now.",
            resume_summary="CV received (no active positions to evaluate against)",
            best_match="No active positions",
        )

    if content_type == PDF:
        content = [
            {
                "type": "document",
                "source": {
                    "type": "base64",
                    "media_type": PDF,
                    "data": base64.b64encode(data).decode("ascii"),
                },
            },
            {"type": "text", "text": build_cv_prompt(jobs, candidate_name, cover_letter)},
        ]
        logger.info("[AI] Sending PDF CV for %s against %d job(s)", candidate_name, len(jobs))
        return await _evaluate(content, fallback_summary="CV summary not available")

    if content_type == TXT:
        resume_text = data.decode("utf-8", errors="replace").strip()
        return await evaluate_cv_text(resume_text, candidate_name, cover_letter, jobs)

    return neutral_evaluation(
        "📄 Word document received. Automatic evaluation only supports PDF and TXT; HR will review manually.",
        resume_summary="CV received as a Word document",
    )


async def evaluate_cv_text(
    resume_text: str,
    candidate_name: str,
    cover_letter: str,
    jobs: List[dict],
) -> CVEvaluation:
    if not jobs:
        return neutral_evaluation(
            "📋 There are no active positions.",
            resume_summary=resume_text,
            best_match="No active positions",
        )

    prompt = build_cv_prompt(jobs, candidate_name, cover_letter, resume_text=resume_text)
    logger.info("[AI] Sending CV text for %s against %d job(s)", candidate_name, len(jobs))
    return await _evaluate(prompt, fallback_summary=resume_text)
