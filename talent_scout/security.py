"""
Talent Scout - security helpers
Password hashing, temporary passwords and prompt-injection stripping.
"""
import re
import secrets
import string

import bcrypt

_INJECTION_PATTERNS = [
    r'ignore\s+(previous|above|all)\s+instructions?',
    r'(system|assistant|user)\s*:\s*',
    r'<\s*(system|assistant|user)\s*>',
    r'\[\s*(INST|SYS|END)\s*\]',
    r'###\s*(instruction|system|prompt)',
    r'act\s+as\s+(if|though)',
    r'new\s+role',
    r'forget\s+(your|all|previous)',
]

MAX_USER_TEXT = 10000


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode(), hashed.encode())


def generate_temp_password() -> str:
    """Temporary password handed to a newly approved agent"""
    alphabet = string.ascii_lowercase + string.digits
    return "Scout" + "".join(secrets.choice(alphabet) for _ in range(8))


def strip_prompt_injection(text: str) -> str:
    """Strip common prompt injection patterns from user input"""
    if not text:
        return text
    cleaned = text
    for pattern in _INJECTION_PATTERNS:
        cleaned = re.sub(pattern, '[REMOVED]', cleaned, flags=re.IGNORECASE)
    return cleaned[:MAX_USER_TEXT]
