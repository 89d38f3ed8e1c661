import pytest
from fastapi.testclient import TestClient

from talent_scout import config
from talent_scout.db import get_db, init_db, seed_admin
from talent_scout.security import hash_password

AGENT_EMAIL = "agent@example.com"
AGENT_PASSWORD = "agentpass"


@pytest.fixture
def db(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DB_PATH", str(tmp_path / "test.db"))
    monkeypatch.setattr(config, "UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(config, "ANTHROPIC_API_KEY", "test-key")
    init_db()
    seed_admin()
    return tmp_path


@pytest.fixture
def client(db):
    from talent_scout.main import app
    with TestClient(app) as c:
        yield c


def login(client, email, password):
    response = client.post("/api/auth/login", data={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["user"]


@pytest.fixture
def admin_client(client):
    login(client, config.ADMIN_EMAIL, config.ADMIN_PASSWORD)
    return client


@pytest.fixture
def agent(db):
    conn = get_db()
    cursor = conn.cursor()
    cursor.execute(
        "INSERT INTO users (email, password_hash, full_name, role, is_active, onboarding_completed) "
        "VALUES (?, ?, ?, 'agent', 1, 1)",
        (AGENT_EMAIL, hash_password(AGENT_PASSWORD), "Alex Agent")
    )
    conn.commit()
    user_id = cursor.lastrowid
    conn.close()
    return {"id": user_id, "email": AGENT_EMAIL, "password": AGENT_PASSWORD}


@pytest.fixture
def agent_client(client, agent):
    login(client, agent["email"], agent["password"])
    return client


@pytest.fixture
def job(db):
    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("""
        INSERT INTO job_postings
            (title, department, location, description, requirements, responsibilities, interview_guidelines)
        VALUES (?, ?, ?, ?, ?, ?, ?)
    """, (
        "Sales Agent",
        "Sales",
        "Remote",
        "Sell recruiting services",
        "2 years of B2B sales",
        "Prospect and close deals",
        "Probe for concrete numbers",
    ))
    conn.commit()
    job_id = cursor.lastrowid
    cursor.execute("SELECT * FROM job_postings WHERE id = ?", (job_id,))
    row = dict(cursor.fetchone())
    conn.close()
    return row


EVALUATION_TEXT = """Thank you, Alex. We have other candidates to interview. We'll be in touch.

EVALUATION:
Confidence: 80 - Answered under pressure
Clarity: 75 - Mostly coherent
Professionalism: 90 - Appropriate tone
Trust Building: 71 - Some convincing examples

Detailed Feedback:
Solid grasp of the sales cycle, but the pipeline numbers were vague."""
