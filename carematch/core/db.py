"""SQLite database layer for family, professional, and care recipient profiles."""

import json
import sqlite3
from pathlib import Path
from typing import Any

from carematch.core.schemas import (
    ROLE_FAMILY,
    ROLE_PROFESSIONAL,
    CareRecipient,
    Family,
    Professional,
)

_PROFILES_TABLE = """
CREATE TABLE IF NOT EXISTS profiles (
    id                              TEXT PRIMARY KEY,
    role                            TEXT NOT NULL,
    full_name                       TEXT NOT NULL DEFAULT '',
    care_types                      TEXT NOT NULL DEFAULT '[]',
    special_needs                   TEXT NOT NULL DEFAULT '[]',
    location                        TEXT,
    care_schedule                   TEXT,
    caregiving_areas                TEXT NOT NULL DEFAULT '[]',
    medical_conditions_experience   TEXT NOT NULL DEFAULT '[]',
    availability                    TEXT NOT NULL DEFAULT '[]',
    bio                             TEXT,
    years_of_experience             TEXT,
    languages                       TEXT NOT NULL DEFAULT '[]',
    certifications                  TEXT NOT NULL DEFAULT '[]',
    hourly_rate                     TEXT,
    has_training                    INTEGER NOT NULL DEFAULT 0
);
"""

_CARE_RECIPIENTS_TABLE = """
CREATE TABLE IF NOT EXISTS care_recipient_profiles (
    id                      TEXT NOT NULL DEFAULT '',
    user_id                 TEXT PRIMARY KEY,
    full_name               TEXT NOT NULL DEFAULT '',
    birth_year              TEXT NOT NULL DEFAULT '',
    personality_traits      TEXT NOT NULL DEFAULT '[]',
    hobbies_interests       TEXT NOT NULL DEFAULT '[]',
    career_fields           TEXT NOT NULL DEFAULT '[]',
    caregiver_personality   TEXT NOT NULL DEFAULT '[]',
    cultural_preferences    TEXT,
    challenges              TEXT NOT NULL DEFAULT '[]',
    life_story              TEXT,
    unique_facts            TEXT,
    joyful_things           TEXT,
    daily_routines          TEXT
);
"""

_ROLE_INDEX = "CREATE INDEX IF NOT EXISTS idx_profiles_role ON profiles(role);"

# Columns holding JSON-encoded string lists.
_LIST_COLUMNS = frozenset({
    "care_types",
    "special_needs",
    "caregiving_areas",
    "medical_conditions_experience",
    "availability",
    "languages",
    "certifications",
    "personality_traits",
    "hobbies_interests",
    "career_fields",
    "caregiver_personality",
    "challenges",
})


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_PROFILES_TABLE)
    conn.execute(_CARE_RECIPIENTS_TABLE)
    conn.execute(_ROLE_INDEX)
    conn.commit()
    return conn


def upsert_family(conn: sqlite3.Connection, family: Family) -> None:
    """Insert or replace a family profile. The attached care recipient is not stored."""
    _upsert(
        conn,
        "profiles",
        {
            "id": family.id,
            "role": ROLE_FAMILY,
            "full_name": family.full_name,
            "care_types": family.care_types,
            "special_needs": family.special_needs,
            "location": family.location,
            "care_schedule": family.care_schedule,
        },
    )


def upsert_professional(conn: sqlite3.Connection, professional: Professional) -> None:
    """Insert or replace a professional profile."""
    data = professional.model_dump()
    data["role"] = ROLE_PROFESSIONAL
    data["has_training"] = int(professional.has_training)
    _upsert(conn, "profiles", data)


def upsert_care_recipient(conn: sqlite3.Connection, recipient: CareRecipient) -> None:
    """Insert or replace the care recipient owned by ``recipient.user_id``."""
    _upsert(conn, "care_recipient_profiles", recipient.model_dump())


def get_family(conn: sqlite3.Connection, family_id: str) -> Family | None:
    """Return the family profile with this id, or None."""
    row = _get_profile_row(conn, family_id, ROLE_FAMILY)
    return Family.model_validate(row) if row is not None else None


def get_professional(conn: sqlite3.Connection, professional_id: str) -> Professional | None:
    """Return the professional profile with this id, or None."""
    row = _get_profile_row(conn, professional_id, ROLE_PROFESSIONAL)
    return Professional.model_validate(row) if row is not None else None


def list_families(conn: sqlite3.Connection) -> list[Family]:
    """Return every family profile in insertion order."""
    return [Family.model_validate(row) for row in _list_profile_rows(conn, ROLE_FAMILY)]


def list_professionals(conn: sqlite3.Connection) -> list[Professional]:
    """Return every professional profile in insertion order."""
    return [
        Professional.model_validate(row)
        for row in _list_profile_rows(conn, ROLE_PROFESSIONAL)
    ]


def get_care_recipient(conn: sqlite3.Connection, user_id: str) -> CareRecipient | None:
    """Return the care recipient owned by ``user_id``, or None."""
    row = conn.execute(
        "SELECT * FROM care_recipient_profiles WHERE user_id = ?",
        (user_id,),
    ).fetchone()
    return CareRecipient.model_validate(_decode(row)) if row is not None else None


def list_care_recipients(conn: sqlite3.Connection) -> list[CareRecipient]:
    """Return every care recipient profile."""
    rows = conn.execute("SELECT * FROM care_recipient_profiles ORDER BY rowid").fetchall()
    return [CareRecipient.model_validate(_decode(row)) for row in rows]


def _get_profile_row(
    conn: sqlite3.Connection,
    profile_id: str,
    role: str,
) -> dict[str, Any] | None:
    row = conn.execute(
        "SELECT * FROM profiles WHERE id = ? AND role = ?",
        (profile_id, role),
    ).fetchone()
    return _decode(row) if row is not None else None


def _list_profile_rows(conn: sqlite3.Connection, role: str) -> list[dict[str, Any]]:
    rows = conn.execute(
        "SELECT * FROM profiles WHERE role = ? ORDER BY rowid",
        (role,),
    ).fetchall()
    return [_decode(row) for row in rows]


def _upsert(conn: sqlite3.Connection, table: str, data: dict[str, Any]) -> None:
    columns = list(data)
    values = [json.dumps(data[c]) if c in _LIST_COLUMNS else data[c] for c in columns]
    placeholders = ", ".join("?" for _ in columns)
    conn.execute(
        f"INSERT OR REPLACE INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
        values,
    )
    conn.commit()


def _decode(row: sqlite3.Row) -> dict[str, Any]:
    data = dict(row)
    for column in _LIST_COLUMNS & data.keys():
        raw = data[column]
        data[column] = json.loads(raw) if raw else []
    if "has_training" in data:
        data["has_training"] = bool(data["has_training"])
    return data
