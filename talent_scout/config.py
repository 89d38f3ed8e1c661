"""
Talent Scout - configuration
All settings come from the environment (or a .env file next to the process).
"""
import os

from dotenv import load_dotenv

load_dotenv()

# ============================================================================
# APP
# ============================================================================
SECRET_KEY = os.getenv("SECRET_KEY", "change-this-secret-key-in-production")
SESSION_MAX_AGE = 3600 * 24 * 7  # 7 days
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SETUP_KEY = os.getenv("SETUP_KEY", "")

# ============================================================================
# DATABASE / STORAGE
# ============================================================================
DB_PATH = os.getenv("DB_PATH", "talent_scout.db")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@talentscout.ai")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminScout2025!")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin Talent Scout")

# ============================================================================
# HOSTED AI SERVICES
# ============================================================================
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
ANTHROPIC_URL = os.getenv("ANTHROPIC_URL", "https://api.anthropic.com")
ANTHROPIC_VERSION = "2023-06-01"
AI_MODEL = os.getenv("AI_MODEL", "claude-sonnet-4-20250514")
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "120"))

GOOGLE_CLOUD_CREDENTIALS_BASE64 = os.getenv("GOOGLE_CLOUD_CREDENTIALS_BASE64", "")
SPEECH_LANGUAGE = os.getenv("SPEECH_LANGUAGE", "en-US")
TTS_VOICE = os.getenv("TTS_VOICE", "en-US-Neural2-F")

# ============================================================================
# LIMITS
# ============================================================================
MAX_CV_SIZE_MB = 5
MAX_AUDIO_BYTES = 2 * 1024 * 1024
TRANSCRIBE_TIMEOUT_SECONDS = 60
MAX_TTS_CHARS = 5000

EXAM_PASSING_SCORE = 70
EXAM_EXCHANGES = 6
