"""
Talent Scout - voice exam pipeline
Each turn is stateless: the browser keeps the conversation and sends it back
with the exchange number. The final exchange returns the model's evaluation,
which is scored and stored as a voice_exam_sessions row.
"""
import logging
from typing import List, Optional

from talent_scout import config, llm
from talent_scout.db import get_db
from talent_scout.errors import ExamScoringError
from talent_scout.prompts import build_exam_prompt
from talent_scout.scoring import extract_exam_scores, is_passing, overall_score

logger = logging.getLogger(__name__)

ROLE_LABELS = {"user": "Candidate", "assistant": "Interviewer"}


async def run_exam_turn(job: dict, candidate: dict, history: List[dict], message: str, exchange: int) -> dict:
    """Send the candidate's answer and return the interviewer's reply"""
    is_final = exchange >= config.EXAM_EXCHANGES
    system_prompt = build_exam_prompt(job, candidate, is_final)

    logger.info("[EXAM] Exchange %d/%d for job %s", exchange, config.EXAM_EXCHANGES, job.get("id"))
    reply = await llm.chat(
        llm.build_messages(history, message, opening="I'm ready to start the exam."),
        system_prompt=system_prompt,
        temperature=0.7,
        max_tokens=1500 if is_final else 500,
    )
    return {"reply": reply, "exchange": exchange, "is_final": is_final}


EVALUATION_REQUEST = "The interview is over. Please give me your final evaluation now."


async def request_evaluation(job: dict, candidate: dict, history: List[dict]) -> str:
    """Ask the interviewer for the final evaluation of a finished conversation"""
    logger.info("[EXAM] Requesting evaluation for job %s", job.get("id"))
    return await llm.chat(
        llm.build_messages(history, EVALUATION_REQUEST, opening="I'm ready to start the exam."),
        system_prompt=build_exam_prompt(job, candidate, is_final=True),
        temperature=0.7,
        max_tokens=1500,
    )


def build_transcript(history: List[dict], message: Optional[str] = None) -> str:
    lines = []
    for turn in history:
        label = ROLE_LABELS.get(turn.get("role"))
        content = (turn.get("content") or "").strip()
        if label and content:
            lines.append(f"{label}: {content}")
    if message and message.strip():
        lines.append(f"{ROLE_LABELS['user']}: {message.strip()}")
    return "\n".join(lines)


def evaluate_and_store(user_id: int, transcript: str, ai_feedback: str, job_id: Optional[int] = None) -> dict:
    """Score the model's evaluation and record the attempt.

    Raises ExamScoringError when any of the four scores is missing.
    """
    scores = extract_exam_scores(ai_feedback)
    if not scores:
        logger.warning("[EXAM] ⚠️ Could not extract scores for user %s", user_id)
        raise ExamScoringError("Could not extract scores from AI feedback")

    overall = overall_score(scores)
    passed = is_passing(overall)

    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        INSERT INTO voice_exam_sessions
            (user_id, job_id, confidence_score, clarity_score, professionalism_score,
             trust_building_score, overall_score, transcript, ai_feedback, passed)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    """, (
        user_id,
        job_id,
        scores.confidence,
        scores.clarity,
        scores.professionalism,
        scores.trust_building,
        overall,
        transcript,
        scores.feedback,
        1 if passed else 0,
    ))
    conn.commit()
    session_id = cursor.lastrowid
    conn.close()

    logger.info("[EXAM] ✅ Evaluation saved for user %s, score %d (%s)",
                user_id, overall, "passed" if passed else "failed")

    return {
        "session_id": session_id,
        "scores": {**scores.as_dict(), "overall": overall},
        "passed": passed,
        "feedback": scores.feedback,
    }


def latest_passed_exam(user_id: int) -> Optional[dict]:
    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        SELECT id, job_id, exam_date, confidence_score, clarity_score, professionalism_score,
               trust_building_score, overall_score, passed
        FROM voice_exam_sessions
        WHERE user_id = ? AND passed = 1
        ORDER BY exam_date DESC, id DESC
        LIMIT 1
    """, (user_id,))
    row = cursor.fetchone()
    conn.close()
    return dict(row) if row else None
