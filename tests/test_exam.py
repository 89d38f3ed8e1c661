import asyncio

import pytest

from talent_scout import exam, llm
from talent_scout.db import get_db
from talent_scout.errors import ExamScoringError

from tests.conftest import EVALUATION_TEXT

CANDIDATE = {"full_name": "Alex Agent", "resume_text": "Sold SaaS for 3 years."}


def test_build_transcript():
    history = [
        {"role": "assistant", "content": "Tell me about yourself."},
        {"role": "user", "content": "I sell software."},
        {"role": "system", "content": "dropped"},
    ]
    assert exam.build_transcript(history, "I closed 40 deals.") == (
        "Interviewer: Tell me about yourself.\n"
        "Candidate: I sell software.\n"
        "Candidate: I closed 40 deals."
    )


def test_evaluate_and_store(agent, job):
    result = exam.evaluate_and_store(agent["id"], "Candidate: hi", EVALUATION_TEXT, job_id=job["id"])

    # (80 + 75 + 90 + 71) / 4 = 79
    assert result["scores"]["overall"] == 79
    assert result["passed"] is True

    conn = get_db()
    row = conn.execute("SELECT * FROM voice_exam_sessions WHERE id = ?", (result["session_id"],)).fetchone()
    conn.close()
    assert row["overall_score"] == 79
    assert row["passed"] == 1
    assert row["job_id"] == job["id"]
    assert row["transcript"] == "Candidate: hi"
    assert row["ai_feedback"].startswith("Solid grasp")


def test_pass_mark_boundary(agent):
    feedback = "Confidence: 60\nClarity: 70\nProfessionalism: 70\nTrust Building: 79"
    result = exam.evaluate_and_store(agent["id"], "t", feedback)

    assert result["scores"]["overall"] == 70  # 69.75 rounds up
    assert result["passed"] is True

    feedback = "Confidence: 60\nClarity: 70\nProfessionalism: 70\nTrust Building: 77"
    assert exam.evaluate_and_store(agent["id"], "t", feedback)["passed"] is False


def test_unparseable_feedback(agent):
    with pytest.raises(ExamScoringError):
        exam.evaluate_and_store(agent["id"], "t", "Great interview!")


def test_latest_passed_exam(agent):
    assert exam.latest_passed_exam(agent["id"]) is None

    exam.evaluate_and_store(agent["id"], "t", "Confidence: 50 Clarity: 50 Professionalism: 50 Trust Building: 50")
    assert exam.latest_passed_exam(agent["id"]) is None

    exam.evaluate_and_store(agent["id"], "t", EVALUATION_TEXT)
    latest = exam.latest_passed_exam(agent["id"])
    assert latest["overall_score"] == 79
    assert latest["confidence_score"] == 80


def test_run_exam_turn_uses_final_prompt_on_last_exchange(monkeypatch, job):
    calls = []

    async def fake_chat(messages, system_prompt, **kwargs):
        calls.append((messages, system_prompt))
        return "Next question."

    monkeypatch.setattr(llm, "chat", fake_chat)
    history = [{"role": "assistant", "content": "Welcome."}]

    turn = asyncio.run(exam.run_exam_turn(job, CANDIDATE, history, "My answer", exchange=2))
    assert turn == {"reply": "Next question.", "exchange": 2, "is_final": False}
    assert "Detailed Feedback:" not in calls[0][1]
    assert calls[0][0][0]["role"] == "user"

    turn = asyncio.run(exam.run_exam_turn(job, CANDIDATE, history, "Last answer", exchange=6))
    assert turn["is_final"] is True
    assert "Detailed Feedback:" in calls[1][1]


def test_request_evaluation_asks_for_final_format(monkeypatch, job):
    calls = []

    async def fake_chat(messages, system_prompt, **kwargs):
        calls.append((messages, system_prompt, kwargs))
        return EVALUATION_TEXT

    monkeypatch.setattr(llm, "chat", fake_chat)
    history = [
        {"role": "assistant", "content": "Welcome."},
        {"role": "user", "content": "I closed 40 deals."},
    ]

    assert asyncio.run(exam.request_evaluation(job, CANDIDATE, history)) == EVALUATION_TEXT

    messages, system_prompt, kwargs = calls[0]
    assert "Detailed Feedback:" in system_prompt
    assert messages[-1] == {"role": "user", "content": exam.EVALUATION_REQUEST}
    assert kwargs["max_tokens"] == 1500
