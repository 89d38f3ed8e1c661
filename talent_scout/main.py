"""
Talent Scout - recruiting and agent training portal
Backend with session auth, SQLite database, hosted chat model and Google speech services
"""
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel
from starlette.middleware.sessions import SessionMiddleware

from talent_scout import __version__, config, cv, exam, llm, speech
from talent_scout.auth import authenticate, get_user_by_id, public_user, require_admin, require_user
from talent_scout.db import get_db, init_db, seed_admin
from talent_scout.errors import (
    AudioTooLarge,
    EmptyAudio,
    ExamScoringError,
    InvalidCVFile,
    LLMError,
    NoSpeechDetected,
    ServiceNotConfigured,
    SpeechSynthesisError,
    TranscriptionError,
    TranscriptionTimeout,
)
from talent_scout.knowledge import build_prompt_with_context
from talent_scout.prompts import (
    TRAINING_ASSISTANT_SYSTEM_PROMPT,
    VOICE_EXAM_SYSTEM_PROMPT,
    exam_greeting,
    format_exam_feedback,
)
from talent_scout.scenarios import SCENARIOS, get_scenario, scenarios_by_difficulty
from talent_scout.scoring import strip_resume_tag, tag_resume
from talent_scout.security import generate_temp_password, hash_password, strip_prompt_injection

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    seed_admin()
    os.makedirs(config.UPLOAD_DIR, exist_ok=True)
    yield


app = FastAPI(title="Talent Scout API", version=__version__, lifespan=lifespan)

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SECRET_KEY,
    max_age=config.SESSION_MAX_AGE,
)


def service_error(e: Exception) -> HTTPException:
    """Map a service-layer exception onto an HTTP error"""
    if isinstance(e, ServiceNotConfigured):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, (EmptyAudio, AudioTooLarge, NoSpeechDetected)):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, TranscriptionTimeout):
        return HTTPException(status_code=408, detail=str(e))
    if isinstance(e, LLMError) and e.status_code:
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


# ============================================================================
# REQUEST MODELS
# ============================================================================

class ChatTurn(BaseModel):
    role: str
    content: str


class JobPostingCreate(BaseModel):
    title: str = ""
    department: str = ""
    location: str = ""
    employment_type: str = "Full-time"
    salary_range: str = ""
    description: str = ""
    requirements: str = ""
    responsibilities: str = ""
    interview_guidelines: str = ""
    is_active: bool = True


class AgentCreate(BaseModel):
    email: str = ""
    password: str = ""
    full_name: str = ""


class ChatRequest(BaseModel):
    message: str = ""
    conversation_history: List[ChatTurn] = []
    scenario_id: Optional[str] = None
    mode: Optional[str] = None
    phase: Optional[int] = None


class TTSRequest(BaseModel):
    text: str = ""


class ExamTurnRequest(BaseModel):
    message: str = ""
    history: List[ChatTurn] = []
    exchange: int = 1


class ExamEvaluateRequest(BaseModel):
    job_id: Optional[int] = None
    history: List[ChatTurn] = []


# ============================================================================
# API ROUTES - AUTH
# ============================================================================

@app.post("/api/auth/login")
async def login(request: Request, email: str = Form(...), password: str = Form(...)):
    user = authenticate(email, password)

    request.session["user_id"] = user["id"]
    request.session["role"] = user["role"]
    logger.info("[LOGIN] ✅ %s logged in (%s)", user["email"], user["role"])

    return {"success": True, "user": public_user(user)}


@app.post("/api/auth/logout")
async def logout(request: Request):
    request.session.clear()
    return {"success": True, "message": "Logged out"}


@app.get("/api/auth/me")
async def get_me(request: Request):
    user = require_user(request)
    return {"success": True, "user": public_user(user)}


# ============================================================================
# API ROUTES - PUBLIC
# ============================================================================

PUBLIC_JOB_FIELDS = ("id", "title", "department", "location", "employment_type", "salary_range", "description")


@app.get("/api/public/active-jobs")
async def public_active_jobs():
    jobs = cv.fetch_active_jobs(limit=10)
    return {"jobs": [{field: job[field] for field in PUBLIC_JOB_FIELDS} for job in jobs]}


@app.post("/api/candidates/apply")
async def apply(
    full_name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    cover_letter: str = Form(""),
    cv_file: Optional[UploadFile] = File(None),
):
    if not full_name.strip() or not email.strip() or cv_file is None:
        raise HTTPException(status_code=400, detail="Missing required fields")

    email = email.lower().strip()
    full_name = full_name.strip()
    content_type = cv_file.content_type or ""
    data = await cv_file.read()
    logger.info("[APPLY] Processing application for %s (%s, %d bytes)", email, content_type, len(data))

    try:
        cv.validate_cv_upload(content_type, data)
    except InvalidCVFile as e:
        raise HTTPException(status_code=400, detail=str(e))

    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("SELECT id FROM candidates WHERE email = ?", (email,))
    if cursor.fetchone():
        conn.close()
        raise HTTPException(status_code=409, detail="An application with this email already exists")
    conn.close()

    cv_path = cv.store_cv(full_name, cv_file.filename or "", data, content_type)

    letter_clean = strip_prompt_injection(cover_letter.strip())
    jobs = cv.fetch_active_jobs()
    result = await cv.evaluate_cv_document(data, content_type, full_name, letter_clean, jobs)

    matched = next((j for j in jobs if j["title"].lower() == result.best_match.lower()), None)

    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        INSERT INTO candidates
            (job_id, full_name, email, phone, cv_file_path, resume_text, cover_letter,
             ai_evaluation, fit_score, status, evaluated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, 'pending', CURRENT_TIMESTAMP)
    """, (
        matched["id"] if matched else None,
        full_name,
        email,
        phone.strip(),
        cv_path,
        tag_resume(result.best_match, result.match_percentages, result.resume_summary),
        letter_clean,
        result.evaluation,
        result.fit_score,
    ))
    conn.commit()
    candidate_id = cursor.lastrowid
    conn.close()

    logger.info("[APPLY] ✅ Candidate %d saved. Fit: %d, Best match: %s",
                candidate_id, result.fit_score, result.best_match)

    return {
        "success": True,
        "message": "Application received successfully",
        "candidate_id": candidate_id,
        "fit_score": result.fit_score,
        "best_match": result.best_match,
        "match_percentages": result.match_percentages,
    }


# ============================================================================
# API ROUTES - ADMIN
# ============================================================================

@app.get("/api/admin/job-postings")
async def list_job_postings(request: Request):
    require_admin(request)

    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        SELECT jp.*,
               (SELECT COUNT(*) FROM candidates WHERE job_id = jp.id) as candidate_count
        FROM job_postings jp
        ORDER BY jp.created_at DESC, jp.id DESC
    """)
    postings = [dict(row) for row in cursor.fetchall()]
    conn.close()

    return {"postings": postings}


@app.post("/api/admin/job-postings")
async def create_job_posting(request: Request, body: JobPostingCreate):
    require_admin(request)

    required = (body.title, body.department, body.location, body.description,
                body.requirements, body.interview_guidelines)
    if not all(value.strip() for value in required):
        raise HTTPException(status_code=400, detail="Missing required fields")

    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        INSERT INTO job_postings
            (title, department, location, employment_type, salary_range, description,
             requirements, responsibilities, interview_guidelines, is_active)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    """, (
        body.title.strip(),
        body.department.strip(),
        body.location.strip(),
        body.employment_type or "Full-time",
        body.salary_range,
        body.description,
        body.requirements,
        body.responsibilities,
        body.interview_guidelines,
        1 if body.is_active else 0,
    ))
    conn.commit()
    posting_id = cursor.lastrowid
    conn.close()

    logger.info("[ADMIN] Job posting %d created: %s", posting_id, body.title)
    return {"success": True, "posting_id": posting_id, "message": "Job posting created"}


def _get_posting(cursor, posting_id: int) -> dict:
    cursor.execute("SELECT * FROM job_postings WHERE id = ?", (posting_id,))
    posting = cursor.fetchone()
    if not posting:
        raise HTTPException(status_code=404, detail="Job posting not found")
    return dict(posting)


@app.get("/api/admin/job-postings/{posting_id}")
async def get_job_posting(posting_id: int, request: Request):
    require_admin(request)

    conn = get_db()
    try:
        posting = _get_posting(conn.cursor(), posting_id)
    finally:
        conn.close()

    return {"posting": posting}


@app.put("/api/admin/job-postings/{posting_id}")
async def update_job_posting(posting_id: int, request: Request, body: JobPostingCreate):
    require_admin(request)

    if not body.title.strip() or not body.department.strip():
        raise HTTPException(status_code=400, detail="Title and department are required")

    conn = get_db()
    cursor = conn.cursor()
    try:
        _get_posting(cursor, posting_id)
        cursor.execute("""
            UPDATE job_postings
            SET title = ?, department = ?, location = ?, employment_type = ?, salary_range = ?,
                description = ?, requirements = ?, responsibilities = ?, interview_guidelines = ?,
                is_active = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        """, (
            body.title.strip(),
            body.department.strip(),
            body.location.strip(),
            body.employment_type or "Full-time",
            body.salary_range,
            body.description,
            body.requirements,
            body.responsibilities,
            body.interview_guidelines,
            1 if body.is_active else 0,
            posting_id,
        ))
        conn.commit()
    finally:
        conn.close()

    logger.info("[ADMIN] ✅ Job posting %d updated: %s (active: %s)", posting_id, body.title, body.is_active)
    return {"success": True, "message": "Job posting updated"}


@app.delete("/api/admin/job-postings/{posting_id}")
async def delete_job_posting(posting_id: int, request: Request):
    require_admin(request)

    conn = get_db()
    cursor = conn.cursor()
    try:
        _get_posting(cursor, posting_id)
        # Candidates keep their application; job_id is set to NULL by the foreign key
        cursor.execute("DELETE FROM job_postings WHERE id = ?", (posting_id,))
        conn.commit()
    finally:
        conn.close()

    logger.info("[ADMIN] ✅ Job posting %d deleted", posting_id)
    return {"success": True, "message": "Job posting deleted"}


@app.get("/api/admin/candidates")
async def list_candidates(request: Request):
    require_admin(request)

    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        SELECT c.id, c.full_name, c.email, c.phone, c.resume_text, c.cover_letter,
               c.ai_evaluation, c.fit_score, c.status, c.applied_at, c.evaluated_at,
               c.job_id, jp.title as job_title, jp.department as job_department
        FROM candidates c
        LEFT JOIN job_postings jp ON c.job_id = jp.id
        ORDER BY c.fit_score DESC, c.applied_at DESC
    """)
    candidates = [dict(row) for row in cursor.fetchall()]
    conn.close()

    return {"candidates": candidates}


def _get_candidate(cursor, candidate_id: int) -> dict:
    cursor.execute("SELECT * FROM candidates WHERE id = ?", (candidate_id,))
    candidate = cursor.fetchone()
    if not candidate:
        raise HTTPException(status_code=404, detail="Candidate not found")
    return dict(candidate)


@app.post("/api/admin/candidates/{candidate_id}/approve")
async def approve_candidate(candidate_id: int, request: Request):
    require_admin(request)

    conn = get_db()
    cursor = conn.cursor()
    try:
        candidate = _get_candidate(cursor, candidate_id)

        if candidate["status"] != "pending":
            raise HTTPException(status_code=400, detail="Candidate is not pending")

        cursor.execute("SELECT id FROM users WHERE email = ?", (candidate["email"],))
        if cursor.fetchone():
            raise HTTPException(status_code=409, detail="Email already in use")

        temp_password = generate_temp_password()
        cursor.execute("""
            INSERT INTO users (email, password_hash, full_name, role, onboarding_completed, is_active)
            VALUES (?, ?, ?, 'agent', 1, 1)
        """, (candidate["email"], hash_password(temp_password), candidate["full_name"]))
        user_id = cursor.lastrowid
        cursor.execute("UPDATE candidates SET status = 'approved' WHERE id = ?", (candidate_id,))
        conn.commit()
    finally:
        conn.close()

    logger.info("[APPROVE] ✅ Candidate %d approved, agent user %d created", candidate_id, user_id)
    return {
        "success": True,
        "message": "Candidate approved and user created",
        "user_id": user_id,
        "temp_password": temp_password,
    }


@app.post("/api/admin/candidates/{candidate_id}/reject")
async def reject_candidate(candidate_id: int, request: Request):
    require_admin(request)

    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("UPDATE candidates SET status = 'rejected' WHERE id = ?", (candidate_id,))
    updated = cursor.rowcount
    conn.commit()
    conn.close()

    if not updated:
        raise HTTPException(status_code=404, detail="Candidate not found")

    return {"success": True, "message": "Candidate rejected"}


@app.post("/api/admin/candidates/{candidate_id}/re-evaluate")
async def re_evaluate_candidate(candidate_id: int, request: Request):
    require_admin(request)

    conn = get_db()
    cursor = conn.cursor()
    try:
        candidate = _get_candidate(cursor, candidate_id)
    finally:
        conn.close()

    jobs = cv.fetch_active_jobs()
    if not jobs:
        raise HTTPException(status_code=400, detail="No active job postings available")

    resume_text = strip_resume_tag(candidate["resume_text"] or "")
    logger.info("[RE-EVALUATE] Re-evaluating %s", candidate["email"])
    result = await cv.evaluate_cv_text(resume_text, candidate["full_name"], candidate["cover_letter"] or "", jobs)

    matched = next((j for j in jobs if j["title"].lower() == result.best_match.lower()), None)

    conn = get_db()
    conn.execute("""
        UPDATE candidates
        SET ai_evaluation = ?, fit_score = ?, resume_text = ?, job_id = COALESCE(?, job_id),
            evaluated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    """, (
        result.evaluation,
        result.fit_score,
        tag_resume(result.best_match, result.match_percentages, resume_text),
        matched["id"] if matched else None,
        candidate_id,
    ))
    conn.commit()
    conn.close()

    logger.info("[RE-EVALUATE] ✅ Candidate %d: fit %d, best match %s", candidate_id, result.fit_score, result.best_match)
    return {
        "success": True,
        "fit_score": result.fit_score,
        "best_match": result.best_match,
        "match_percentages": result.match_percentages,
        "evaluation": result.evaluation,
    }


@app.post("/api/admin/create-agent")
async def create_agent(request: Request, body: AgentCreate):
    require_admin(request)

    email = body.email.lower().strip()
    if not email or not body.password or not body.full_name.strip():
        raise HTTPException(status_code=400, detail="Email, password, and full name are required")
    if len(body.password) < 6:
        raise HTTPException(status_code=400, detail="Password must be at least 6 characters")

    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("SELECT id FROM users WHERE email = ?", (email,))
    if cursor.fetchone():
        conn.close()
        raise HTTPException(status_code=400, detail="Email already exists")

    cursor.execute("""
        INSERT INTO users (email, password_hash, full_name, role, is_active, onboarding_completed)
        VALUES (?, ?, ?, 'agent', 1, 0)
    """, (email, hash_password(body.password), body.full_name.strip()))
    conn.commit()
    user_id = cursor.lastrowid
    conn.close()

    return {"success": True, "user": public_user(get_user_by_id(user_id))}


@app.get("/api/admin/approved-agents")
async def approved_agents(request: Request):
    require_admin(request)

    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        SELECT u.id, u.email, u.full_name, u.role, u.is_active, u.onboarding_completed,
               u.created_at, u.last_login,
               CASE WHEN EXISTS (
                   SELECT 1 FROM voice_exam_sessions WHERE user_id = u.id AND passed = 1
               ) THEN 1 ELSE 0 END as voice_exam_passed,
               (SELECT exam_date FROM voice_exam_sessions
                WHERE user_id = u.id AND passed = 1
                ORDER BY exam_date DESC, id DESC LIMIT 1) as voice_exam_date,
               (SELECT overall_score FROM voice_exam_sessions
                WHERE user_id = u.id AND passed = 1
                ORDER BY exam_date DESC, id DESC LIMIT 1) as voice_exam_score
        FROM users u
        WHERE u.role = 'agent'
        ORDER BY u.created_at DESC, u.id DESC
    """)
    agents = [dict(row) for row in cursor.fetchall()]
    conn.close()

    return {"agents": agents}


# ============================================================================
# API ROUTES - TRAINING
# ============================================================================

@app.get("/api/jobs/active")
async def training_active_jobs(request: Request):
    require_user(request)
    return {"jobs": cv.fetch_active_jobs()}


def _active_job(job_id: int) -> dict:
    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        SELECT id, title, department, location, employment_type, salary_range, description,
               requirements, responsibilities, interview_guidelines
        FROM job_postings WHERE id = ? AND is_active = 1
    """, (job_id,))
    job = cursor.fetchone()
    conn.close()
    if not job:
        raise HTTPException(status_code=404, detail="Job posting not found or inactive")
    return dict(job)


def _candidate_context(user: dict) -> dict:
    """The agent's own application, or a bare profile when they never applied"""
    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        SELECT full_name, email, resume_text, cover_letter, fit_score
        FROM candidates WHERE email = ? AND status = 'approved'
        ORDER BY applied_at DESC LIMIT 1
    """, (user["email"],))
    candidate = cursor.fetchone()
    conn.close()

    if candidate:
        return {
            "full_name": candidate["full_name"],
            "email": candidate["email"],
            "resume_text": strip_resume_tag(candidate["resume_text"] or ""),
            "cover_letter": candidate["cover_letter"] or "",
            "fit_score": candidate["fit_score"],
        }

    return {
        "full_name": user["full_name"],
        "email": user["email"],
        "resume_text": "No CV information available. Please upload your resume.",
        "cover_letter": "",
        "fit_score": 0,
    }


@app.get("/api/training/job-context/{job_id}")
async def job_context(job_id: int, request: Request):
    user = require_user(request)
    job = _active_job(job_id)
    candidate = _candidate_context(user)

    return {
        "success": True,
        "job": job,
        "candidate": candidate,
        "greeting": exam_greeting(job, candidate),
    }


@app.get("/api/training/scenarios")
async def list_scenarios(request: Request, difficulty: Optional[str] = None):
    require_user(request)
    scenarios = scenarios_by_difficulty(difficulty) if difficulty else SCENARIOS
    return {"scenarios": scenarios}


@app.post("/api/training/ai/chat")
async def training_chat(request: Request, body: ChatRequest):
    require_user(request)

    if not body.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    # Prompt priority: practice scenario, standalone voice exam, then the training assistant with knowledge context
    system_prompt = TRAINING_ASSISTANT_SYSTEM_PROMPT
    message = body.message
    scenario = get_scenario(body.scenario_id) if body.scenario_id else None
    if scenario:
        system_prompt = scenario["system_prompt"]
    elif body.mode == "voice_exam":
        system_prompt = VOICE_EXAM_SYSTEM_PROMPT
    else:
        message = build_prompt_with_context(message, phase=body.phase)

    history = [turn.model_dump() for turn in body.conversation_history]
    try:
        response = await llm.chat(llm.build_messages(history, message), system_prompt=system_prompt)
    except (ServiceNotConfigured, LLMError) as e:
        logger.error("[CHAT] ❌ %s", e)
        raise service_error(e)

    return {"success": True, "response": response, "timestamp": datetime.now(timezone.utc).isoformat()}


@app.post("/api/training/ai/transcribe")
async def transcribe_audio(request: Request, audio: Optional[UploadFile] = File(None)):
    require_user(request)

    if audio is None:
        raise HTTPException(status_code=400, detail="No audio file provided")

    data = await audio.read()
    try:
        transcript = await speech.transcribe(data)
    except (TranscriptionError, ServiceNotConfigured) as e:
        raise service_error(e)

    return {"success": True, "transcript": transcript}


@app.post("/api/training/ai/tts")
async def text_to_speech(request: Request, body: TTSRequest):
    require_user(request)

    if not body.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        audio = await speech.synthesize(body.text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (SpeechSynthesisError, ServiceNotConfigured) as e:
        raise service_error(e)

    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Content-Length": str(len(audio)), "Cache-Control": "no-cache"},
    )


@app.post("/api/training/exam/{job_id}/turn")
async def exam_turn(job_id: int, request: Request, body: ExamTurnRequest):
    user = require_user(request)

    if not body.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    if not 1 <= body.exchange <= config.EXAM_EXCHANGES:
        raise HTTPException(status_code=400, detail=f"Exchange must be between 1 and {config.EXAM_EXCHANGES}")

    job = _active_job(job_id)
    candidate = _candidate_context(user)
    history = [turn.model_dump() for turn in body.history]

    try:
        turn = await exam.run_exam_turn(job, candidate, history, body.message, body.exchange)
    except (ServiceNotConfigured, LLMError) as e:
        logger.error("[EXAM] ❌ Turn failed: %s", e)
        raise service_error(e)

    if not turn["is_final"]:
        return {"success": True, **turn}

    transcript = exam.build_transcript(history, body.message)
    try:
        result = exam.evaluate_and_store(user["id"], transcript, turn["reply"], job_id=job["id"])
    except ExamScoringError as e:
        # The reply is still returned so the client can retry via /exam/evaluate
        return {"success": True, **turn, "evaluation": None, "evaluation_error": str(e)}

    return {"success": True, **turn, "evaluation": result, "summary": format_exam_feedback(result)}


@app.post("/api/training/exam/evaluate")
async def evaluate_exam(request: Request, body: ExamEvaluateRequest):
    """Ask the interviewer again for the evaluation of a finished conversation.

    The feedback is always produced by the model here; clients never submit scores.
    """
    user = require_user(request)

    history = [turn.model_dump() for turn in body.history]
    if body.job_id is None or not any(turn["role"] == "user" and turn["content"].strip() for turn in history):
        raise HTTPException(status_code=400, detail="Missing required fields")

    job = _active_job(body.job_id)
    candidate = _candidate_context(user)

    try:
        feedback = await exam.request_evaluation(job, candidate, history)
    except (ServiceNotConfigured, LLMError) as e:
        logger.error("[EXAM] ❌ Evaluation request failed: %s", e)
        raise service_error(e)

    try:
        result = exam.evaluate_and_store(user["id"], exam.build_transcript(history), feedback, job_id=job["id"])
    except ExamScoringError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"success": True, **result, "summary": format_exam_feedback(result)}


@app.get("/api/training/exam/status")
async def exam_status(request: Request):
    user = require_user(request)

    latest = exam.latest_passed_exam(user["id"])
    if not latest:
        return {"has_passed": False, "exam_date": None, "overall_score": None, "scores": None}

    return {
        "has_passed": True,
        "exam_date": latest["exam_date"],
        "overall_score": latest["overall_score"],
        "job_id": latest["job_id"],
        "scores": {
            "confidence": latest["confidence_score"],
            "clarity": latest["clarity_score"],
            "professionalism": latest["professionalism_score"],
            "trust_building": latest["trust_building_score"],
        },
    }


@app.get("/api/training/test")
async def system_check(request: Request):
    user = require_user(request)

    return {
        "success": True,
        "checks": {
            "anthropic_configured": bool(config.ANTHROPIC_API_KEY),
            "google_speech_configured": bool(config.GOOGLE_CLOUD_CREDENTIALS_BASE64),
            "ai_model": config.AI_MODEL,
            "speech_language": config.SPEECH_LANGUAGE,
            "user": {"id": user["id"], "email": user["email"], "role": user["role"]},
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ============================================================================
# API ROUTES - SETUP
# ============================================================================

@app.post("/api/db/setup")
async def setup_database(key: str = ""):
    if not config.SETUP_KEY or key != config.SETUP_KEY:
        raise HTTPException(status_code=403, detail="Unauthorized. Invalid setup key.")

    init_db()
    admin_created = seed_admin()
    logger.info("[SETUP] ✅ Database setup completed")

    return {
        "success": True,
        "message": "Database setup completed successfully",
        "admin_created": admin_created,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("talent_scout.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
