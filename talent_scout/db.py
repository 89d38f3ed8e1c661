"""
Talent Scout - database
SQLite schema, additive migrations and the admin seed.
"""
import logging
import sqlite3

from talent_scout import config
from talent_scout.security import hash_password

logger = logging.getLogger(__name__)


def get_db():
    """Get database connection"""
    conn = sqlite3.connect(config.DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db():
    """Initialize database tables"""
    conn = get_db()
    cursor = conn.cursor()

    # Users: admins and agents (approved candidates)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            full_name TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'agent',
            is_active INTEGER DEFAULT 1,
            onboarding_completed INTEGER DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            last_login TIMESTAMP,
            CHECK (role IN ('admin', 'agent'))
        )
    """)
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_users_email ON users(email)")

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS job_postings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            department TEXT NOT NULL,
            location TEXT NOT NULL,
            employment_type TEXT DEFAULT 'Full-time',
            salary_range TEXT DEFAULT '',
            description TEXT NOT NULL,
            requirements TEXT NOT NULL,
            responsibilities TEXT DEFAULT '',
            interview_guidelines TEXT NOT NULL,
            is_active INTEGER DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_job_postings_active ON job_postings(is_active)")

    # Candidates: one application per email, scored against all active postings
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS candidates (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            job_id INTEGER,
            full_name TEXT NOT NULL,
            email TEXT UNIQUE NOT NULL,
            phone TEXT DEFAULT '',
            cv_file_path TEXT,
            resume_text TEXT DEFAULT '',
            cover_letter TEXT DEFAULT '',
            ai_evaluation TEXT,
            fit_score INTEGER DEFAULT 50,
            status TEXT DEFAULT 'pending',
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            evaluated_at TIMESTAMP,
            CHECK (status IN ('pending', 'approved', 'rejected')),
            CHECK (fit_score BETWEEN 0 AND 100),
            FOREIGN KEY (job_id) REFERENCES job_postings(id) ON DELETE SET NULL
        )
    """)
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_candidates_status ON candidates(status)")

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS voice_exam_sessions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            job_id INTEGER,
            exam_date TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            confidence_score INTEGER,
            clarity_score INTEGER,
            professionalism_score INTEGER,
            trust_building_score INTEGER,
            overall_score INTEGER,
            transcript TEXT,
            ai_feedback TEXT,
            passed INTEGER DEFAULT 0,
            CHECK (confidence_score IS NULL OR (confidence_score BETWEEN 0 AND 100)),
            CHECK (clarity_score IS NULL OR (clarity_score BETWEEN 0 AND 100)),
            CHECK (professionalism_score IS NULL OR (professionalism_score BETWEEN 0 AND 100)),
            CHECK (trust_building_score IS NULL OR (trust_building_score BETWEEN 0 AND 100)),
            FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
        )
    """)
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_voice_exam_user ON voice_exam_sessions(user_id)")

    conn.commit()

    # ── Schema migrations ────────────────────────────────────────────────────
    # SQLite has no ADD COLUMN IF NOT EXISTS, so check the table first.
    def existing_columns(table):
        cursor.execute(f"PRAGMA table_info({table})")
        return {row["name"] for row in cursor.fetchall()}

    migrations = {
        "candidates": [
            ("job_id",        "INTEGER"),
            ("evaluated_at",  "TIMESTAMP"),
            ("cv_file_path",  "TEXT"),
        ],
        "voice_exam_sessions": [
            ("job_id",        "INTEGER"),
        ],
        "users": [
            ("last_login",    "TIMESTAMP"),
        ],
    }
    for table, columns in migrations.items():
        present = existing_columns(table)
        for col, col_def in columns:
            if col not in present:
                cursor.execute(f"ALTER TABLE {table} ADD COLUMN {col} {col_def}")
                logger.info("  ↳ Migration: added %s.%s", table, col)

    conn.commit()
    conn.close()
    logger.info("✅ Database initialized!")


def seed_admin() -> bool:
    """Create the admin account unless one already exists. Returns True if created."""
    conn = get_db()
    cursor = conn.cursor()
    cursor.execute("SELECT id FROM users WHERE role = 'admin' LIMIT 1")
    if cursor.fetchone():
        conn.close()
        logger.info("⚠️  Admin user already exists, skipping seed")
        return False

    cursor.execute(
        "INSERT INTO users (email, password_hash, full_name, role, is_active, onboarding_completed) "
        "VALUES (?, ?, ?, 'admin', 1, 1)",
        (config.ADMIN_EMAIL.lower().strip(), hash_password(config.ADMIN_PASSWORD), config.ADMIN_NAME)
    )
    conn.commit()
    conn.close()
    logger.info("✅ Admin user created: %s (change the password after first login)", config.ADMIN_EMAIL)
    return True
