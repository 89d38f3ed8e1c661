"""
Talent Scout - session auth
Users log in with email/password; the session cookie carries the user id.
"""
import logging
from typing import Optional

from fastapi import HTTPException, Request

from talent_scout.db import get_db
from talent_scout.security import verify_password

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, full_name, role, is_active, onboarding_completed, created_at, last_login"


def get_user_by_email(email: str) -> Optional[dict]:
    conn = get_db()
    cursor = conn.cursor()
    cursor.execute(
        f"SELECT {_USER_COLUMNS}, password_hash FROM users WHERE email = ?",
        (email.lower().strip(),)
    )
    user = cursor.fetchone()
    conn.close()
    return dict(user) if user else None


def get_user_by_id(user_id: int) -> Optional[dict]:
    conn = get_db()
    cursor = conn.cursor()
    cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,))
    user = cursor.fetchone()
    conn.close()
    return dict(user) if user else None


def authenticate(email: str, password: str) -> dict:
    """Check credentials and stamp last_login. Raises HTTPException on failure."""
    user = get_user_by_email(email)
    if not user or not verify_password(password, user["password_hash"]):
        logger.info("[LOGIN] Invalid credentials for %s", email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user["is_active"]:
        logger.info("[LOGIN] Inactive user: %s", email)
        raise HTTPException(status_code=403, detail="Account is inactive. Contact administrator.")

    conn = get_db()
    conn.execute("UPDATE users SET last_login = CURRENT_TIMESTAMP WHERE id = ?", (user["id"],))
    conn.commit()
    conn.close()

    user.pop("password_hash")
    return user


def get_current_user(request: Request) -> Optional[dict]:
    user_id = request.session.get("user_id")
    if not user_id:
        return None

    user = get_user_by_id(user_id)
    if not user or not user["is_active"]:
        return None
    return user


def require_user(request: Request) -> dict:
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not logged in")
    return user


def require_admin(request: Request) -> dict:
    user = require_user(request)
    if user["role"] != "admin":
        raise HTTPException(status_code=403, detail="Unauthorized. Admin access required.")
    return user


def public_user(user: dict) -> dict:
    """Fields safe to return to the browser"""
    return {
        "id": user["id"],
        "email": user["email"],
        "full_name": user["full_name"],
        "role": user["role"],
        "onboarding_completed": bool(user.get("onboarding_completed")),
    }
